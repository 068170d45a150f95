"""Layout planning value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ._geometry import Footprint, Point2D, Rect


class LayoutStrategy(str, Enum):
    """Multi-item arrangement strategies.

    Fixed grid presets are named ``grid-{columns}x{rows}``.
    """

    AUTO = "auto"
    ROW = "row"
    COLUMN = "column"
    GRID_2X2 = "grid-2x2"
    GRID_2X3 = "grid-2x3"
    GRID_3X2 = "grid-3x2"
    GRID_3X3 = "grid-3x3"
    GRID_4X3 = "grid-4x3"
    GRID_4X4 = "grid-4x4"
    LEFT_COLUMN = "left-column"
    RIGHT_COLUMN = "right-column"
    TOP_ROW = "top-row"
    BOTTOM_ROW = "bottom-row"

    @property
    def grid_shape(self) -> tuple[int, int] | None:
        """(columns, rows) for fixed grid presets, else None."""
        if not self.value.startswith("grid-"):
            return None
        cols, rows = self.value[len("grid-"):].split("x")
        return int(cols), int(rows)


class StartCorner(str, Enum):
    """Corner the first cell is assigned from.

    TOP_LEFT fills left to right, then downward. BOTTOM_LEFT fills left
    to right, then upward.
    """

    TOP_LEFT = "top-left"
    BOTTOM_LEFT = "bottom-left"


class OverflowPolicy(str, Enum):
    """What to do when item footprints exceed their cells.

    PLACE_ALL keeps every requested item and annotates the plan with an
    overlap-risk warning. REJECT refuses the plan instead.
    """

    PLACE_ALL = "place-all"
    REJECT = "reject"


@dataclass(frozen=True)
class LayoutWarning:
    """Non-fatal note attached to a layout plan."""

    code: str
    message: str


@dataclass(frozen=True)
class CellAssignment:
    """An item's cell and target center within a plan."""

    item_id: str
    index: int
    row: int
    col: int
    center: Point2D


@dataclass(frozen=True)
class LayoutPlan:
    """Computed multi-item layout.

    Attributes:
        strategy: Label of the strategy actually used (e.g. "row-3",
            "grid-2x3-sizeaware", "custom-4x2").
        requested_strategy: Strategy name the caller asked for.
        columns: Number of grid columns.
        rows: Number of grid rows.
        cell_width: Width of each cell.
        cell_height: Height of each cell.
        margin: Gap between cells and around the grid.
        region: Region the grid was laid out in.
        start_corner: Corner the assignment started from.
        assignments: Ordered cell assignments, one per item.
        max_footprint: Largest item footprint per axis.
        avg_footprint: Average item footprint per axis.
        capacity: Size-aware estimate of how many cells fit the region.
        warnings: Non-fatal notes (overlap risk, unknown strategy, ...).
    """

    strategy: str
    requested_strategy: str
    columns: int
    rows: int
    cell_width: float
    cell_height: float
    margin: float
    region: Rect
    start_corner: StartCorner
    assignments: tuple[CellAssignment, ...]
    max_footprint: Footprint
    avg_footprint: Footprint
    capacity: int
    warnings: tuple[LayoutWarning, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.columns < 1 or self.rows < 1:
            raise ValueError("Layout must have at least one column and one row")
        if self.columns * self.rows < len(self.assignments):
            raise ValueError("Layout grid cannot hold all assignments")

    @property
    def item_count(self) -> int:
        """Number of items assigned by the plan."""
        return len(self.assignments)

    @property
    def has_overlap_risk(self) -> bool:
        """True if footprints are likely to spill out of their cells."""
        return any(w.code == "overlap-risk" for w in self.warnings)

    def assignment_for(self, item_id: str) -> CellAssignment | None:
        """Look up the assignment for an item id."""
        for assignment in self.assignments:
            if assignment.item_id == item_id:
                return assignment
        return None

    def cell_rect(self, row: int, col: int) -> Rect | None:
        """Rectangle of a cell, or None when cells have collapsed."""
        if self.cell_width <= 0 or self.cell_height <= 0:
            return None
        min_x = self.region.min_x + self.margin + col * (self.cell_width + self.margin)
        if self.start_corner == StartCorner.BOTTOM_LEFT:
            min_y = self.region.min_y + self.margin + row * (self.cell_height + self.margin)
        else:
            max_y = self.region.max_y - self.margin - row * (self.cell_height + self.margin)
            min_y = max_y - self.cell_height
        return Rect.from_origin(min_x, min_y, self.cell_width, self.cell_height)
