"""Adapter to convert configuration models to domain objects.

Settings become the constants objects of the domain services, and
snapshot entries become the bounds, occupancy and extent value objects
the in-memory host reports.
"""

from sheetlayout.application.config.schema import (
    CanvasConfig,
    ContentConfig,
    FootprintConfig,
    LayoutSettings,
    OccupiedConfig,
    RectConfig,
)
from sheetlayout.domain.services import FootprintLimits
from sheetlayout.domain.value_objects import (
    CanvasBounds,
    ContentExtent,
    OccupiedRegion,
    Rect,
    RegionKind,
)


def config_to_rect(config: RectConfig) -> Rect:
    return Rect(config.min_x, config.min_y, config.max_x, config.max_y)


def config_to_footprint_limits(config: FootprintConfig) -> FootprintLimits:
    """Convert footprint settings to the size estimator's limits."""
    return FootprintLimits(
        max_width=config.max_width,
        max_height=config.max_height,
        default_width=config.default_width,
        default_height=config.default_height,
        min_valid=config.min_valid,
    )


def config_to_canvas_bounds(config: CanvasConfig) -> CanvasBounds:
    return CanvasBounds(
        canvas_id=config.id,
        frame=config_to_rect(config.frame) if config.frame else None,
        guide=config_to_rect(config.guide) if config.guide else None,
    )


def config_to_occupied(
    config: OccupiedConfig, settings: LayoutSettings | None = None
) -> OccupiedRegion:
    """Convert an occupied entry, filling in the default buffer for its kind.

    Placements default to the search placement buffer and annotations to
    the annotation buffer.
    """
    buffer = config.buffer
    if buffer is None:
        search = (settings or LayoutSettings()).search
        buffer = (
            search.annotation_buffer
            if config.kind == RegionKind.ANNOTATION
            else search.placement_buffer
        )
    return OccupiedRegion(
        rect=config_to_rect(config.rect),
        owner_id=config.owner,
        kind=config.kind,
        buffer=buffer,
    )


def config_to_extent(config: ContentConfig) -> ContentExtent:
    return ContentExtent(crop=config.crop, scale=config.scale, outline=config.outline)
