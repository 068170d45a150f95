"""Domain services for sheet layout.

This package provides the geometric reasoning of the layout core:
- Rectangle overlap tests
- Footprint estimation for content items
- Printable-area resolution with fallbacks
- Zone grids and empty-space search
- Multi-item layout planning
"""

from .canvas_area import AreaResolverConfig, CanvasAreaResolver
from .empty_space import EmptySpaceFinder
from .layout_engine import BASELINE_FOOTPRINT, OVERLAP_RISK_RATIO, LayoutEngine
from .overlap import OverlapDetector
from .size_estimator import FootprintLimits, SizeEstimator
from .zone_grid import EDGE_REGIONS, KEYPAD_NAMES, ZoneGrid

__all__ = [
    "AreaResolverConfig",
    "BASELINE_FOOTPRINT",
    "CanvasAreaResolver",
    "EDGE_REGIONS",
    "EmptySpaceFinder",
    "FootprintLimits",
    "KEYPAD_NAMES",
    "LayoutEngine",
    "OVERLAP_RISK_RATIO",
    "OverlapDetector",
    "SizeEstimator",
    "ZoneGrid",
]
