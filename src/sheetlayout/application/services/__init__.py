"""Application services for sheet layout."""

from .placement_committer import PlacementCommitter
from .sheet_layout_service import SheetLayoutService

__all__ = [
    "PlacementCommitter",
    "SheetLayoutService",
]
