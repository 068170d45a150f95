"""Grid-stepped search for unoccupied space on a canvas.

The search walks candidate positions on a fixed step grid, top row first
and left to right within a row, and keeps every footprint-sized rectangle
that overlaps none of the occupied regions. It is bounded by the step
count and a candidate cap, so every call terminates in time proportional
to region area / step^2 regardless of how busy the canvas is.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ..errors import DegenerateInputError
from ..value_objects import (
    AnnotationCorner,
    EmptySpaceCandidate,
    OccupiedRegion,
    Rect,
    SearchPreset,
)
from .overlap import OverlapDetector

logger = logging.getLogger(__name__)

__all__ = ["EmptySpaceFinder"]

# Guards against float drift dropping the last row/column of the grid
_EPSILON = 1e-9


class EmptySpaceFinder:
    """Finds unoccupied footprint-sized rectangles.

    Attributes:
        detector: Overlap detector used to test candidates.
        default_step: Step used when callers do not pass one.
        default_max_candidates: Cap used when callers do not pass one.
    """

    def __init__(
        self,
        detector: OverlapDetector | None = None,
        default_step: float = 0.1,
        default_max_candidates: int = 20,
    ) -> None:
        self.detector = detector or OverlapDetector()
        self.default_step = default_step
        self.default_max_candidates = default_max_candidates

    def find_empty(
        self,
        search: Rect,
        required_width: float,
        required_height: float,
        occupied: Sequence[OccupiedRegion],
        step: float | None = None,
        max_candidates: int | None = None,
    ) -> list[EmptySpaceCandidate]:
        """Scan ``search`` for rectangles clear of every occupied region.

        Args:
            search: Region to search in.
            required_width: Width of the rectangle to fit.
            required_height: Height of the rectangle to fit.
            occupied: Occupied regions, each tested with its own buffer.
            step: Grid step between candidate positions.
            max_candidates: Stop after collecting this many candidates.

        Returns:
            Candidates in scan order. Empty when nothing fits, which is not
            an error; callers decide whether to widen, shrink or overlap.

        Raises:
            DegenerateInputError: For non-positive sizes, step or cap.
        """
        step = self.default_step if step is None else step
        max_candidates = (
            self.default_max_candidates if max_candidates is None else max_candidates
        )
        _validate(required_width, required_height, step, max_candidates)

        span_x = search.width - required_width
        span_y = search.height - required_height
        if span_x < -_EPSILON or span_y < -_EPSILON:
            logger.debug(
                f"Requirement {required_width:.3f}x{required_height:.3f} exceeds "
                f"search region {search.width:.3f}x{search.height:.3f}"
            )
            return []

        columns = int(math.floor(max(span_x, 0.0) / step + _EPSILON)) + 1
        rows = int(math.floor(max(span_y, 0.0) / step + _EPSILON)) + 1
        top = search.max_y - required_height

        candidates: list[EmptySpaceCandidate] = []
        for row in range(rows):
            y = top - row * step
            for col in range(columns):
                x = search.min_x + col * step
                rect = Rect.from_origin(x, y, required_width, required_height)
                if self.detector.is_clear(rect, occupied):
                    candidates.append(EmptySpaceCandidate(rect))
                    if len(candidates) >= max_candidates:
                        logger.debug(f"Candidate cap {max_candidates} reached")
                        return candidates

        logger.debug(f"Empty-space search found {len(candidates)} candidates in {rows}x{columns} grid")
        return candidates

    def search_region(
        self, canvas: Rect, preset: SearchPreset = SearchPreset.ANY, inset: float = 0.1
    ) -> Rect:
        """Search rectangle for a named preset.

        ``any`` is the canvas inset by ``inset`` on all sides. ``notes`` is
        the right-hand 0.8 units above the lower 30% of the canvas.
        ``legend`` is the left-hand 0.8 units below the canvas midline.
        A preset that would collapse falls back to ``any``, and ``any``
        falls back to the canvas itself.
        """
        base = (
            canvas.min_x + inset,
            canvas.min_y + inset,
            canvas.max_x - inset,
            canvas.max_y - inset,
        )
        if not Rect.is_valid(*base):
            return canvas

        min_x, min_y, max_x, max_y = base
        if preset == SearchPreset.NOTES:
            min_x = canvas.max_x - 0.8
            min_y = canvas.min_y + canvas.height * 0.3
        elif preset == SearchPreset.LEGEND:
            max_x = canvas.min_x + 0.8
            max_y = canvas.min_y + canvas.height * 0.5

        if not Rect.is_valid(min_x, min_y, max_x, max_y):
            return Rect(*base)
        return Rect(min_x, min_y, max_x, max_y)

    def corner_region(self, area: Rect, corner: AnnotationCorner) -> Rect:
        """Sub-rectangle of ``area`` used for annotation-in-zone placement.

        Corner regions cover 30% of each axis; the center region is the
        area inset by 35% on every side.
        """
        w = area.width
        h = area.height
        if corner == AnnotationCorner.TOP_LEFT:
            return Rect(area.min_x, area.max_y - h * 0.3, area.min_x + w * 0.3, area.max_y)
        if corner == AnnotationCorner.TOP_RIGHT:
            return Rect(area.max_x - w * 0.3, area.max_y - h * 0.3, area.max_x, area.max_y)
        if corner == AnnotationCorner.BOTTOM_LEFT:
            return Rect(area.min_x, area.min_y, area.min_x + w * 0.3, area.min_y + h * 0.3)
        if corner == AnnotationCorner.BOTTOM_RIGHT:
            return Rect(area.max_x - w * 0.3, area.min_y, area.max_x, area.min_y + h * 0.3)
        return Rect(
            area.min_x + w * 0.35,
            area.min_y + h * 0.35,
            area.max_x - w * 0.35,
            area.max_y - h * 0.35,
        )

    def first_fit_in_corner(
        self,
        area: Rect,
        corner: AnnotationCorner,
        required_width: float,
        required_height: float,
        occupied: Sequence[OccupiedRegion],
        spacing: float = 0.08,
        buffer: float = 0.02,
    ) -> EmptySpaceCandidate | None:
        """First clear spot for a small annotation in a corner region.

        Uses a finer step than the general search and pads every occupied
        region by ``buffer``. The region is inset by ``spacing`` from its
        top and left edges before scanning.

        Returns:
            The first clear candidate, or None if the corner is full.
        """
        region = self.corner_region(area, corner)
        inner = (region.min_x + spacing, region.min_y, region.max_x, region.max_y - spacing)
        if not Rect.is_valid(*inner):
            return None

        padded = [r.with_buffer(max(r.buffer, buffer)) for r in occupied]
        found = self.find_empty(
            Rect(*inner),
            required_width,
            required_height,
            padded,
            step=spacing,
            max_candidates=1,
        )
        return found[0] if found else None


def _validate(width: float, height: float, step: float, max_candidates: int) -> None:
    errors: list[str] = []
    if width <= 0:
        errors.append("required width must be positive")
    if height <= 0:
        errors.append("required height must be positive")
    if step <= 0:
        errors.append("step must be positive")
    if max_candidates < 1:
        errors.append("max_candidates must be at least 1")
    if errors:
        raise DegenerateInputError("; ".join(errors), errors=errors)
