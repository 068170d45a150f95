"""Domain entities for sheet layout."""

from dataclasses import dataclass, field
from enum import Enum

from .value_objects import (
    CanvasBounds,
    ContentExtent,
    ContentKind,
    Footprint,
    OccupiedRegion,
)


class PlacementState(str, Enum):
    """Whether a content item has been committed to a canvas."""

    UNPLACED = "unplaced"
    PLACED = "placed"


@dataclass
class Canvas:
    """A sheet snapshot taken at the start of a request.

    The printable area is derived by the area resolver and is never
    stored here, since host content may change between requests.

    Attributes:
        canvas_id: Host identifier.
        bounds: Frame and guide rectangles reported by the host.
        occupied: Everything already on the canvas.
    """

    canvas_id: str
    bounds: CanvasBounds
    occupied: list[OccupiedRegion] = field(default_factory=list)


@dataclass
class ContentItem:
    """A rectangular content block to be placed on a canvas.

    Attributes:
        item_id: Host content id.
        extent: Intrinsic extent as reported by the host.
        kind: Host content category.
        footprint: Computed on-canvas footprint, set by the size estimator.
        state: Placement state.
    """

    item_id: str
    extent: ContentExtent = field(default_factory=ContentExtent)
    kind: ContentKind = ContentKind.DETAIL
    footprint: Footprint | None = None
    state: PlacementState = PlacementState.UNPLACED

    @property
    def is_placed(self) -> bool:
        return self.state == PlacementState.PLACED
