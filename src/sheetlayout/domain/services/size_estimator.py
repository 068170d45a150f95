"""Footprint estimation for content items.

Converts a content item's intrinsic extent and display scale into the
width and height it will occupy on a canvas. Results are capped so a
single oversized item cannot collapse a whole grid, and floored to a
small default whenever the extent is missing or nonsensical.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..entities import ContentItem
from ..value_objects import ContentExtent, Footprint

logger = logging.getLogger(__name__)

__all__ = ["FootprintLimits", "SizeEstimator"]


@dataclass(frozen=True)
class FootprintLimits:
    """Clamping limits for estimated footprints, in canvas units.

    Defaults mirror a typical detail sheet: details are capped at
    12" x 10" and default to 4" x 3".

    Attributes:
        max_width: Largest footprint width.
        max_height: Largest footprint height.
        default_width: Width used when the extent is unusable.
        default_height: Height used when the extent is unusable.
        min_valid: Values below this are treated as unusable.
    """

    max_width: float = 12.0 / 12.0
    max_height: float = 10.0 / 12.0
    default_width: float = 4.0 / 12.0
    default_height: float = 3.0 / 12.0
    min_valid: float = 0.01

    def __post_init__(self) -> None:
        if self.default_width <= 0 or self.default_height <= 0:
            raise ValueError("Default footprint must be positive")
        if self.max_width < self.default_width or self.max_height < self.default_height:
            raise ValueError("Maximum footprint must not be below the default")
        if self.min_valid < 0:
            raise ValueError("min_valid must be non-negative")

    @property
    def default(self) -> Footprint:
        return Footprint(self.default_width, self.default_height)


class SizeEstimator:
    """Estimates on-canvas footprints. Never fails."""

    def __init__(self, limits: FootprintLimits | None = None) -> None:
        self.limits = limits or FootprintLimits()

    def estimate(
        self,
        extent: tuple[float, float] | None,
        scale: float = 1.0,
        outline: tuple[float, float] | None = None,
    ) -> Footprint:
        """Estimate the footprint for an extent at a display scale.

        The crop/extent box is preferred and divided by the scale. The
        outline is used only when no crop box is given; it is already in
        canvas units and is not scaled.

        Args:
            extent: Crop box (width, height) at native scale, if any.
            scale: Display scale factor. Non-positive values count as 1.
            outline: Outline (width, height) in canvas units, if any.

        Returns:
            A footprint clamped to the configured limits.
        """
        if extent is not None:
            factor = scale if _usable(scale) and scale > 0 else 1.0
            width, height = extent[0] / factor, extent[1] / factor
        elif outline is not None:
            width, height = outline
        else:
            logger.debug("No extent or outline available, using default footprint")
            return self.limits.default

        return self._clamp(width, height)

    def estimate_extent(self, extent: ContentExtent) -> Footprint:
        """Estimate from a host-reported ``ContentExtent``."""
        return self.estimate(extent.crop, extent.scale, extent.outline)

    def estimate_item(self, item: ContentItem) -> Footprint:
        """Estimate an item's footprint and record it on the item."""
        footprint = self.estimate_extent(item.extent)
        item.footprint = footprint
        return footprint

    def is_degenerate(self, extent: ContentExtent) -> bool:
        """True if the extent carries no usable size at all.

        Used to reject empty content before a commit; estimation itself
        still falls back to the default footprint.
        """
        for size in (extent.crop, extent.outline):
            if size is None:
                continue
            if all(_usable(v) and v > self.limits.min_valid for v in size):
                return False
        return True

    def _clamp(self, width: float, height: float) -> Footprint:
        limits = self.limits
        if not (_usable(width) and _usable(height)):
            logger.debug(f"Unusable extent {width}x{height}, using default footprint")
            return limits.default

        width = min(width, limits.max_width)
        height = min(height, limits.max_height)

        if width < limits.min_valid or height < limits.min_valid:
            logger.debug(f"Extent {width:.4f}x{height:.4f} below threshold, using default")
            return limits.default

        return Footprint(width, height)


def _usable(value: float | None) -> bool:
    return value is not None and math.isfinite(value)
