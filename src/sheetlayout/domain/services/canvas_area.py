"""Printable-area resolution for canvases.

The printable rectangle is resolved through a priority chain, first
acceptable result wins:

1. Border frame shrunk by the edge margin.
2. Guide grid shrunk by a small fixed safety margin.
3. Content already on the canvas (re-offering an undersized frame, or
   expanding the content union by 20% per axis).
4. A hardcoded standard page minus the edge margin.

Resolution never raises; step 4 always produces a usable rectangle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..value_objects import (
    BoundsSource,
    CanvasBounds,
    OccupiedRegion,
    PrintableArea,
    Rect,
)

logger = logging.getLogger(__name__)

__all__ = ["AreaResolverConfig", "CanvasAreaResolver"]

INCHES_PER_UNIT = 12.0


@dataclass(frozen=True)
class AreaResolverConfig:
    """Constants used by the printable-area priority chain.

    Attributes:
        min_usable: Width and height must both exceed this (6").
        guide_margin: Fixed safety margin applied inside guide grids (~0.5").
        inferred_expansion: Fraction of the content union added per side.
        default_page: Standard page used as the last resort (36" x 24").
    """

    min_usable: float = 0.5
    guide_margin: float = 0.04
    inferred_expansion: float = 0.2
    default_page: Rect = Rect(0.0, 0.0, 3.0, 2.0)

    def __post_init__(self) -> None:
        if self.min_usable < 0:
            raise ValueError("min_usable must be non-negative")
        if self.guide_margin < 0:
            raise ValueError("guide_margin must be non-negative")
        if self.inferred_expansion < 0:
            raise ValueError("inferred_expansion must be non-negative")


class CanvasAreaResolver:
    """Resolves the usable drawing rectangle of a canvas.

    The resolver is stateless. Callers pass a fresh bounds/occupancy
    snapshot on every call, so repeated calls against an unchanged
    snapshot return identical results.
    """

    def __init__(self, config: AreaResolverConfig | None = None) -> None:
        self.config = config or AreaResolverConfig()

    def resolve(
        self,
        bounds: CanvasBounds,
        occupied: Sequence[OccupiedRegion] = (),
        margin_inches: float = 1.0,
    ) -> PrintableArea:
        """Resolve the printable area of a canvas.

        Args:
            bounds: Frame and guide rectangles reported by the host.
            occupied: Regions currently occupied on the canvas.
            margin_inches: Edge margin applied inside the frame, in inches.

        Returns:
            PrintableArea with bounds and the source that produced them.
        """
        margin_inches = max(0.0, margin_inches)
        margin = margin_inches / INCHES_PER_UNIT

        for step in (self._from_frame, self._from_guide):
            area = step(bounds, margin, margin_inches)
            if area is not None:
                return area

        area = self._from_content(bounds, occupied, margin, margin_inches)
        if area is not None:
            return area

        return self._default(margin, margin_inches)

    def sheet_rect(self, bounds: CanvasBounds) -> Rect:
        """Full sheet rectangle: the frame, else the guide, else the default page."""
        return bounds.frame or bounds.guide or self.config.default_page

    def _from_frame(
        self, bounds: CanvasBounds, margin: float, margin_inches: float
    ) -> PrintableArea | None:
        if bounds.frame is None:
            return None
        rect = _inset(bounds.frame, margin)
        if rect is not None and self._acceptable(rect):
            return PrintableArea(rect, BoundsSource.FRAME, margin_inches)
        logger.debug(f"Frame bounds for {bounds.canvas_id} undersized after margin, falling through")
        return None

    def _from_guide(
        self, bounds: CanvasBounds, margin: float, margin_inches: float
    ) -> PrintableArea | None:
        if bounds.guide is None:
            return None
        rect = _inset(bounds.guide, self.config.guide_margin)
        if rect is not None and self._acceptable(rect):
            return PrintableArea(rect, BoundsSource.GUIDE, margin_inches)
        logger.debug(f"Guide grid for {bounds.canvas_id} undersized, falling through")
        return None

    def _from_content(
        self,
        bounds: CanvasBounds,
        occupied: Sequence[OccupiedRegion],
        margin: float,
        margin_inches: float,
    ) -> PrintableArea | None:
        if not occupied:
            return None

        if bounds.frame is not None:
            # An undersized frame still beats a guess from content; shrink it
            # as far as it allows without collapsing.
            rect = _inset(bounds.frame, margin) or _inset_clamped(bounds.frame, margin)
            return PrintableArea(rect, BoundsSource.FRAME_CONTENT, margin_inches)

        union = occupied[0].rect
        for region in occupied[1:]:
            union = union.union(region.rect)

        expansion = self.config.inferred_expansion
        rect = Rect(
            union.min_x - union.width * expansion,
            union.min_y - union.height * expansion,
            union.max_x + union.width * expansion,
            union.max_y + union.height * expansion,
        )
        if self._acceptable(rect):
            return PrintableArea(rect, BoundsSource.INFERRED, margin_inches)
        logger.debug(f"Inferred bounds {rect.width:.3f}x{rect.height:.3f} undersized, using default")
        return None

    def _default(self, margin: float, margin_inches: float) -> PrintableArea:
        page = self.config.default_page
        rect = _inset(page, margin)
        if rect is None:
            logger.debug(f"Margin {margin_inches}\" exceeds default page, ignoring margin")
            return PrintableArea(page, BoundsSource.DEFAULT, 0.0)
        return PrintableArea(rect, BoundsSource.DEFAULT, margin_inches)

    def _acceptable(self, rect: Rect) -> bool:
        return rect.width > self.config.min_usable and rect.height > self.config.min_usable


def _inset(rect: Rect, margin: float) -> Rect | None:
    """Shrink ``rect`` by ``margin`` per side, or None if it collapses."""
    edges = (
        rect.min_x + margin,
        rect.min_y + margin,
        rect.max_x - margin,
        rect.max_y - margin,
    )
    if not Rect.is_valid(*edges):
        return None
    return Rect(*edges)


def _inset_clamped(rect: Rect, margin: float) -> Rect:
    """Shrink ``rect`` by at most a quarter of each dimension."""
    dx = min(margin, rect.width / 4)
    dy = min(margin, rect.height / 4)
    return Rect(rect.min_x + dx, rect.min_y + dy, rect.max_x - dx, rect.max_y - dy)
