"""Value objects for the sheet layout domain.

This module provides immutable data types used throughout the layout
system. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Core geometry
from ._geometry import EdgeOverflow, Footprint, Point2D, Rect

# Canvas, occupancy and zones
from ._canvas import (
    AnnotationCorner,
    BoundsSource,
    CanvasBounds,
    ContentExtent,
    ContentKind,
    EmptySpaceCandidate,
    OccupiedRegion,
    PrintableArea,
    RegionKind,
    SearchPreset,
    Zone,
)

# Layout planning
from ._layout import (
    CellAssignment,
    LayoutPlan,
    LayoutStrategy,
    LayoutWarning,
    OverflowPolicy,
    StartCorner,
)

# Placement commits and overlap reports
from ._placement import (
    BatchPlacementResult,
    CommitResult,
    LayoutAudit,
    OverlapReport,
    PlacementConflict,
    PlacementRejection,
    PlacementSuccess,
    RegionOverlap,
    RejectReason,
)

__all__ = [
    "AnnotationCorner",
    "BatchPlacementResult",
    "BoundsSource",
    "CanvasBounds",
    "CellAssignment",
    "CommitResult",
    "ContentExtent",
    "ContentKind",
    "EdgeOverflow",
    "EmptySpaceCandidate",
    "Footprint",
    "LayoutAudit",
    "LayoutPlan",
    "LayoutStrategy",
    "LayoutWarning",
    "OccupiedRegion",
    "OverflowPolicy",
    "OverlapReport",
    "PlacementConflict",
    "PlacementRejection",
    "PlacementSuccess",
    "Point2D",
    "PrintableArea",
    "Rect",
    "RegionKind",
    "RegionOverlap",
    "RejectReason",
    "SearchPreset",
    "StartCorner",
    "Zone",
]
