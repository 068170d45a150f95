"""Canvas, occupancy and zone value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ._geometry import Footprint, Point2D, Rect


class BoundsSource(str, Enum):
    """Where a canvas's printable rectangle came from.

    Attributes:
        FRAME: Border frame shrunk by the edge margin.
        GUIDE: Guide/reference grid shrunk by a fixed safety margin.
        FRAME_CONTENT: Undersized frame re-offered because content exists.
        INFERRED: Union of existing content expanded by 20% per axis.
        DEFAULT: Hardcoded standard page minus the edge margin.
    """

    FRAME = "frame"
    GUIDE = "guide"
    FRAME_CONTENT = "frame+content"
    INFERRED = "inferred"
    DEFAULT = "default"


class RegionKind(str, Enum):
    """Category of something already occupying a canvas."""

    PLACEMENT = "placement"
    ANNOTATION = "annotation"


class ContentKind(str, Enum):
    """Host content categories the core can reason about.

    The host reports one of these per content id, so the placement
    logic switches on the enum instead of on host-native types.
    """

    PLAN = "plan"
    ELEVATION = "elevation"
    SECTION = "section"
    DETAIL = "detail"
    DRAFTING = "drafting"
    LEGEND = "legend"
    SCHEDULE = "schedule"
    UNSUPPORTED = "unsupported"


class SearchPreset(str, Enum):
    """Named search regions for empty-space queries."""

    ANY = "any"
    NOTES = "notes"
    LEGEND = "legend"


class AnnotationCorner(str, Enum):
    """Target corners for annotation-in-zone placement."""

    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"


@dataclass(frozen=True)
class CanvasBounds:
    """Raw bounds a host reports for a canvas.

    Either rectangle may be missing; the area resolver decides which one
    to trust.

    Attributes:
        canvas_id: Host identifier of the canvas.
        frame: Border-frame (titleblock) rectangle, if any.
        guide: Guide/reference-grid rectangle, if any.
    """

    canvas_id: str
    frame: Rect | None = None
    guide: Rect | None = None


@dataclass(frozen=True)
class PrintableArea:
    """Resolved usable rectangle of a canvas.

    Attributes:
        bounds: The printable rectangle.
        source: Which priority step produced the bounds.
        applied_margin: Edge margin in inches that was requested.
    """

    bounds: Rect
    source: BoundsSource
    applied_margin: float

    @property
    def min_x(self) -> float:
        return self.bounds.min_x

    @property
    def min_y(self) -> float:
        return self.bounds.min_y

    @property
    def max_x(self) -> float:
        return self.bounds.max_x

    @property
    def max_y(self) -> float:
        return self.bounds.max_y

    @property
    def width(self) -> float:
        return self.bounds.width

    @property
    def height(self) -> float:
        return self.bounds.height

    @property
    def center(self) -> Point2D:
        return self.bounds.center


@dataclass(frozen=True)
class OccupiedRegion:
    """Something already on a canvas that new placements must avoid.

    Attributes:
        rect: Bounds of the occupying element.
        owner_id: Host id of the element that owns the rectangle.
        kind: Whether the owner is a placement or an annotation.
        buffer: Extra clearance applied around the rectangle when testing.
    """

    rect: Rect
    owner_id: str
    kind: RegionKind = RegionKind.PLACEMENT
    buffer: float = 0.0

    def __post_init__(self) -> None:
        if self.buffer < 0:
            raise ValueError("buffer must be non-negative")

    def with_buffer(self, buffer: float) -> "OccupiedRegion":
        """Return a copy carrying a different buffer."""
        return OccupiedRegion(
            rect=self.rect, owner_id=self.owner_id, kind=self.kind, buffer=buffer
        )

    def with_rect(self, rect: Rect) -> "OccupiedRegion":
        """Return a copy covering a different rectangle."""
        return OccupiedRegion(
            rect=rect, owner_id=self.owner_id, kind=self.kind, buffer=self.buffer
        )


@dataclass(frozen=True)
class ContentExtent:
    """Intrinsic extent of a content item as reported by the host.

    Attributes:
        crop: Width/height of the dedicated crop/extent box at native
            scale, if the content has one.
        scale: Display scale factor (native units per canvas unit).
        outline: Generic outline width/height already in canvas units,
            used when no crop box is available.
    """

    crop: tuple[float, float] | None = None
    scale: float = 1.0
    outline: tuple[float, float] | None = None


@dataclass(frozen=True)
class Zone:
    """One cell of a grid decomposition of the printable area.

    Attributes:
        name: Zone label, e.g. "5-MC" or "r0c2".
        row: Row index from the bottom.
        col: Column index from the left.
        bounds: Zone rectangle.
        description: Human-readable name, e.g. "Middle-Center".
    """

    name: str
    row: int
    col: int
    bounds: Rect
    description: str = ""

    @property
    def center(self) -> Point2D:
        """Center point of the zone."""
        return self.bounds.center

    @property
    def number(self) -> int | None:
        """Keypad number for 3x3 zone names, else None."""
        head = self.name.split("-", 1)[0]
        return int(head) if head.isdigit() else None


@dataclass(frozen=True)
class EmptySpaceCandidate:
    """An unoccupied rectangle found by the empty-space search."""

    rect: Rect

    @property
    def x(self) -> float:
        return self.rect.min_x

    @property
    def y(self) -> float:
        return self.rect.min_y

    @property
    def footprint(self) -> Footprint:
        return Footprint(self.rect.width, self.rect.height)

    @property
    def center(self) -> Point2D:
        return self.rect.center
