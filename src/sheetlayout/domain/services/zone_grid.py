"""Zone grid decomposition of a printable area.

A 3x3 grid is named like a phone keypad: zones 1-3 are the bottom row,
4-6 the middle row and 7-9 the top row, each read left to right. Other
grid shapes use "r{row}c{col}" names.
"""

from __future__ import annotations

from ..errors import DegenerateInputError, NotFoundError
from ..value_objects import Rect, Zone
from .overlap import OverlapDetector

__all__ = ["ZoneGrid", "KEYPAD_NAMES", "EDGE_REGIONS"]

KEYPAD_NAMES: tuple[tuple[str, str], ...] = (
    ("1-BL", "Bottom-Left"),
    ("2-BC", "Bottom-Center"),
    ("3-BR", "Bottom-Right"),
    ("4-ML", "Middle-Left"),
    ("5-MC", "Middle-Center"),
    ("6-MR", "Middle-Right"),
    ("7-TL", "Top-Left"),
    ("8-TC", "Top-Center"),
    ("9-TR", "Top-Right"),
)

# Outer-third sub-regions used by edge-hugging strategies
EDGE_REGIONS = ("left-third", "right-third", "top-third", "bottom-third")

_ALIASES = {"CENTER": "5-MC", "CENTRE": "5-MC", "MIDDLE": "5-MC"}


class ZoneGrid:
    """Partitions a printable rectangle into named zones.

    Attributes:
        detector: Overlap detector used for zone hit tests.
    """

    def __init__(self, detector: OverlapDetector | None = None) -> None:
        self.detector = detector or OverlapDetector()

    def partition(self, printable: Rect, rows: int = 3, cols: int = 3) -> list[Zone]:
        """Split ``printable`` into ``rows`` x ``cols`` equal zones.

        Zones are returned row-major starting from the bottom row. The last
        row and column snap to the printable edges so the zones tile the
        rectangle exactly.

        Raises:
            DegenerateInputError: If rows or cols is below one.
        """
        if rows < 1:
            raise DegenerateInputError("rows must be at least 1", field="rows")
        if cols < 1:
            raise DegenerateInputError("cols must be at least 1", field="cols")

        cell_w = printable.width / cols
        cell_h = printable.height / rows
        keypad = rows == 3 and cols == 3

        zones: list[Zone] = []
        for row in range(rows):
            min_y = printable.min_y + row * cell_h
            max_y = printable.max_y if row == rows - 1 else printable.min_y + (row + 1) * cell_h
            for col in range(cols):
                min_x = printable.min_x + col * cell_w
                max_x = printable.max_x if col == cols - 1 else printable.min_x + (col + 1) * cell_w
                if keypad:
                    name, description = KEYPAD_NAMES[row * 3 + col]
                else:
                    name, description = f"r{row}c{col}", f"Row {row}, Column {col}"
                zones.append(
                    Zone(
                        name=name,
                        row=row,
                        col=col,
                        bounds=Rect(min_x, min_y, max_x, max_y),
                        description=description,
                    )
                )
        return zones

    def zone(self, printable: Rect, name: str, rows: int = 3, cols: int = 3) -> Zone:
        """Look up a zone by name or alias.

        Accepts full names ("5-MC"), keypad numbers ("5"), short codes
        ("MC") and "center", case-insensitively.

        Raises:
            NotFoundError: If no zone matches.
        """
        key = name.strip().upper()
        key = _ALIASES.get(key, key)
        for zone in self.partition(printable, rows, cols):
            upper = zone.name.upper()
            if key == upper:
                return zone
            if "-" in upper:
                number, code = upper.split("-", 1)
                if key in (number, code):
                    return zone
        raise NotFoundError("zone", name)

    def zones_overlapping(
        self, rect: Rect, zones: list[Zone], buffer: float = 0.0
    ) -> list[Zone]:
        """Return the zones a rectangle touches."""
        return [z for z in zones if self.detector.overlaps(rect, z.bounds, buffer)]

    def sub_region(self, printable: Rect, edge: str) -> Rect:
        """Narrow ``printable`` to one of its outer thirds.

        Args:
            printable: Full printable rectangle.
            edge: One of ``EDGE_REGIONS``.

        Raises:
            NotFoundError: If ``edge`` is not a known sub-region.
        """
        third_w = printable.width / 3
        third_h = printable.height / 3
        if edge == "left-third":
            return Rect(printable.min_x, printable.min_y, printable.min_x + third_w, printable.max_y)
        if edge == "right-third":
            return Rect(printable.max_x - third_w, printable.min_y, printable.max_x, printable.max_y)
        if edge == "top-third":
            return Rect(printable.min_x, printable.max_y - third_h, printable.max_x, printable.max_y)
        if edge == "bottom-third":
            return Rect(printable.min_x, printable.min_y, printable.max_x, printable.min_y + third_h)
        raise NotFoundError("sub-region", edge)
