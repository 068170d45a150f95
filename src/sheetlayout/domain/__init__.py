"""Domain layer - geometric core of sheet layout."""

from .entities import Canvas, ContentItem, PlacementState
from .errors import (
    DegenerateInputError,
    LayoutError,
    NotFoundError,
    OverflowRejectedError,
)
from .services import (
    CanvasAreaResolver,
    EmptySpaceFinder,
    LayoutEngine,
    OverlapDetector,
    SizeEstimator,
    ZoneGrid,
)
from .value_objects import (
    CanvasBounds,
    ContentExtent,
    ContentKind,
    Footprint,
    LayoutPlan,
    LayoutStrategy,
    OccupiedRegion,
    Point2D,
    PrintableArea,
    Rect,
    Zone,
)

__all__ = [
    "Canvas",
    "CanvasAreaResolver",
    "CanvasBounds",
    "ContentExtent",
    "ContentItem",
    "ContentKind",
    "DegenerateInputError",
    "EmptySpaceFinder",
    "Footprint",
    "LayoutEngine",
    "LayoutError",
    "LayoutPlan",
    "LayoutStrategy",
    "NotFoundError",
    "OccupiedRegion",
    "OverflowRejectedError",
    "OverlapDetector",
    "PlacementState",
    "Point2D",
    "PrintableArea",
    "Rect",
    "SizeEstimator",
    "Zone",
    "ZoneGrid",
]
