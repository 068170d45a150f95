"""Application layer - use cases and orchestration."""

from .commands import AutoLayoutCommand, PlaceInZoneCommand
from .context import RequestContext
from .dtos import (
    AutoLayoutInput,
    PlaceInZoneInput,
    PlacementBatchOutput,
    ZonePlacementOutput,
)
from .services import PlacementCommitter, SheetLayoutService

__all__ = [
    "AutoLayoutCommand",
    "AutoLayoutInput",
    "PlaceInZoneCommand",
    "PlaceInZoneInput",
    "PlacementBatchOutput",
    "PlacementCommitter",
    "RequestContext",
    "SheetLayoutService",
    "ZonePlacementOutput",
]
