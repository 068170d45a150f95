"""Axis-aligned rectangle overlap detection."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..value_objects import OccupiedRegion, Rect, RegionOverlap

__all__ = ["OverlapDetector"]


class OverlapDetector:
    """Stateless rectangle intersection tests.

    Rectangles are treated as inclusive boxes, so rectangles that only
    touch along an edge or corner are reported as overlapping. Buffers
    grow each rectangle uniformly on all four sides before testing.
    """

    def overlaps(
        self,
        a: Rect,
        b: Rect,
        buffer_a: float = 0.0,
        buffer_b: float = 0.0,
    ) -> bool:
        """Check whether two rectangles overlap.

        Args:
            a: First rectangle.
            b: Second rectangle.
            buffer_a: Clearance added around ``a``.
            buffer_b: Clearance added around ``b``.

        Returns:
            True unless the rectangles are disjoint on either axis.
        """
        return not (
            a.max_x + buffer_a < b.min_x - buffer_b
            or a.min_x - buffer_a > b.max_x + buffer_b
            or a.max_y + buffer_a < b.min_y - buffer_b
            or a.min_y - buffer_a > b.max_y + buffer_b
        )

    def overlap_area(self, a: Rect, b: Rect) -> float:
        """Area of the intersection of two rectangles (0 if disjoint)."""
        x_overlap = max(0.0, min(a.max_x, b.max_x) - max(a.min_x, b.min_x))
        y_overlap = max(0.0, min(a.max_y, b.max_y) - max(a.min_y, b.min_y))
        return x_overlap * y_overlap

    def find_overlapping(
        self,
        rect: Rect,
        regions: Iterable[OccupiedRegion],
        buffer: float = 0.0,
    ) -> list[OccupiedRegion]:
        """Return every occupied region that ``rect`` overlaps.

        Args:
            rect: Proposed rectangle.
            regions: Occupied regions, each tested with its own buffer.
            buffer: Clearance added around ``rect``.
        """
        return [
            region
            for region in regions
            if self.overlaps(rect, region.rect, buffer, region.buffer)
        ]

    def is_clear(
        self,
        rect: Rect,
        regions: Iterable[OccupiedRegion],
        buffer: float = 0.0,
    ) -> bool:
        """True if ``rect`` overlaps none of the regions."""
        for region in regions:
            if self.overlaps(rect, region.rect, buffer, region.buffer):
                return False
        return True

    def overlapping_pairs(self, regions: Sequence[OccupiedRegion]) -> list[RegionOverlap]:
        """Every pair of regions that intersect, in input order.

        Region buffers are ignored; only the rectangles themselves count.
        """
        pairs: list[RegionOverlap] = []
        for i, first in enumerate(regions):
            for second in regions[i + 1:]:
                if self.overlaps(first.rect, second.rect):
                    pairs.append(
                        RegionOverlap(
                            first_id=first.owner_id,
                            second_id=second.owner_id,
                            area=self.overlap_area(first.rect, second.rect),
                        )
                    )
        return pairs
