"""Multi-item layout planning.

Given N content items and a region, the engine picks a column/row count
for the requested strategy, computes uniform cell geometry and assigns
each item a cell and target center. Every requested item is always
assigned; oversized items are flagged with an overlap-risk warning
rather than dropped, unless the caller opts into the reject policy.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ..entities import ContentItem
from ..errors import DegenerateInputError, OverflowRejectedError
from ..value_objects import (
    CellAssignment,
    Footprint,
    LayoutPlan,
    LayoutStrategy,
    LayoutWarning,
    OverflowPolicy,
    Point2D,
    Rect,
    StartCorner,
)
from .zone_grid import ZoneGrid

logger = logging.getLogger(__name__)

__all__ = ["LayoutEngine", "BASELINE_FOOTPRINT", "OVERLAP_RISK_RATIO"]

# Typical 8" x 6" view, used for auto sizing when no item has a footprint
BASELINE_FOOTPRINT = Footprint(8.0 / 12.0, 6.0 / 12.0)

OVERLAP_RISK_RATIO = 1.5

_EDGE_SUB_REGIONS = {
    LayoutStrategy.LEFT_COLUMN: "left-third",
    LayoutStrategy.RIGHT_COLUMN: "right-third",
    LayoutStrategy.TOP_ROW: "top-third",
    LayoutStrategy.BOTTOM_ROW: "bottom-third",
}


class LayoutEngine:
    """Plans grid layouts for sets of content items.

    Attributes:
        zone_grid: Used to narrow the region for edge strategies.
        baseline: Footprint assumed for auto sizing when none is known.
    """

    def __init__(
        self,
        zone_grid: ZoneGrid | None = None,
        baseline: Footprint = BASELINE_FOOTPRINT,
    ) -> None:
        self.zone_grid = zone_grid or ZoneGrid()
        self.baseline = baseline

    @staticmethod
    def available_strategies() -> list[str]:
        """Names of every supported strategy."""
        return [strategy.value for strategy in LayoutStrategy]

    def plan(
        self,
        items: Sequence[ContentItem],
        region: Rect,
        strategy: LayoutStrategy | str = LayoutStrategy.AUTO,
        margin: float = 0.08,
        columns_override: int | None = None,
        start_corner: StartCorner = StartCorner.TOP_LEFT,
        overflow_policy: OverflowPolicy = OverflowPolicy.PLACE_ALL,
    ) -> LayoutPlan:
        """Compute a layout plan for ``items`` inside ``region``.

        Args:
            items: Items to lay out, in assignment order. Footprints should
                already be estimated; items without one count as the
                baseline footprint for auto sizing.
            region: Region to lay the grid out in.
            strategy: Strategy name or enum member. Unknown names fall back
                to auto with an "unknown-strategy" warning.
            margin: Gap between cells and around the grid.
            columns_override: Fixed column count; wins over the strategy.
            start_corner: Corner the first cell is assigned from.
            overflow_policy: Whether oversized items are allowed.

        Returns:
            LayoutPlan with one assignment per item.

        Raises:
            DegenerateInputError: For zero items, a negative margin, or a
                column override below one.
            OverflowRejectedError: Under OverflowPolicy.REJECT when items
                exceed their cells.
        """
        count = len(items)
        if count == 0:
            raise DegenerateInputError("At least one item is required", field="items")
        if margin < 0:
            raise DegenerateInputError("Margin must be non-negative", field="margin")
        if columns_override is not None and columns_override < 1:
            raise DegenerateInputError(
                "Column override must be at least 1", field="columns_override"
            )

        warnings: list[LayoutWarning] = []
        requested = strategy.value if isinstance(strategy, LayoutStrategy) else str(strategy)
        resolved = _resolve_strategy(strategy)
        if resolved is None:
            logger.debug(f"Unknown strategy '{requested}', using auto")
            warnings.append(
                LayoutWarning("unknown-strategy", f"Unknown strategy '{requested}', used auto")
            )
            resolved = LayoutStrategy.AUTO

        max_fp, avg_fp = self._footprint_stats(items)
        max_cols = max(1, math.floor(region.width / (max_fp.width + margin)))
        max_rows = max(1, math.floor(region.height / (max_fp.height + margin)))

        if resolved in _EDGE_SUB_REGIONS:
            region = self.zone_grid.sub_region(region, _EDGE_SUB_REGIONS[resolved])

        if columns_override is not None:
            columns = columns_override
            rows = math.ceil(count / columns)
            label = f"custom-{columns}x{rows}"
        else:
            columns, rows, label = self._grid_for(resolved, count, max_cols, max_rows)

        cell_w = (region.width - margin * (columns + 1)) / columns
        cell_h = (region.height - margin * (rows + 1)) / rows

        if cell_w <= 0 or cell_h <= 0:
            warnings.append(
                LayoutWarning(
                    "cells-collapsed",
                    f"Margin {margin} leaves no room for {columns}x{rows} cells",
                )
            )
        elif (
            max_fp.width > OVERLAP_RISK_RATIO * cell_w
            or max_fp.height > OVERLAP_RISK_RATIO * cell_h
        ):
            warnings.append(
                LayoutWarning(
                    "overlap-risk",
                    f"Largest item {max_fp.width:.3f}x{max_fp.height:.3f} exceeds "
                    f"cell {cell_w:.3f}x{cell_h:.3f}; items may overlap",
                )
            )

        assignments = tuple(
            self._assign(index, item.item_id, columns, region, margin, cell_w, cell_h, start_corner)
            for index, item in enumerate(items)
        )

        plan = LayoutPlan(
            strategy=label,
            requested_strategy=requested,
            columns=columns,
            rows=rows,
            cell_width=cell_w,
            cell_height=cell_h,
            margin=margin,
            region=region,
            start_corner=start_corner,
            assignments=assignments,
            max_footprint=max_fp,
            avg_footprint=avg_fp,
            capacity=max_cols * max_rows,
            warnings=tuple(warnings),
        )

        logger.debug(
            f"Planned {count} items as {label}: {columns}x{rows}, "
            f"cell {cell_w:.3f}x{cell_h:.3f}"
        )
        if any(w.code in ("overlap-risk", "cells-collapsed") for w in warnings):
            if overflow_policy == OverflowPolicy.REJECT:
                raise OverflowRejectedError(plan)
            logger.warning(f"Layout {label} has overlap risk for {count} items")
        return plan

    def _footprint_stats(self, items: Sequence[ContentItem]) -> tuple[Footprint, Footprint]:
        footprints = [item.footprint for item in items if item.footprint is not None]
        if not footprints:
            return self.baseline, self.baseline
        max_fp = Footprint(
            max(fp.width for fp in footprints),
            max(fp.height for fp in footprints),
        )
        avg_fp = Footprint(
            sum(fp.width for fp in footprints) / len(footprints),
            sum(fp.height for fp in footprints) / len(footprints),
        )
        return max_fp, avg_fp

    def _grid_for(
        self, strategy: LayoutStrategy, count: int, max_cols: int, max_rows: int
    ) -> tuple[int, int, str]:
        """Columns, rows and label for a non-overridden strategy."""
        if strategy in (LayoutStrategy.ROW, LayoutStrategy.TOP_ROW, LayoutStrategy.BOTTOM_ROW):
            return count, 1, strategy.value
        if strategy in (
            LayoutStrategy.COLUMN,
            LayoutStrategy.LEFT_COLUMN,
            LayoutStrategy.RIGHT_COLUMN,
        ):
            return 1, count, strategy.value

        shape = strategy.grid_shape
        if shape is not None:
            columns, rows = shape
            if columns * rows < count:
                rows = math.ceil(count / columns)
                logger.debug(f"{strategy.value} too small for {count} items, growing to {rows} rows")
            return columns, rows, strategy.value

        columns = min(max_cols, count)
        rows = math.ceil(count / columns)
        while columns > 1 and rows > max_rows:
            columns -= 1
            rows = math.ceil(count / columns)
        return columns, rows, _auto_label(count, columns, rows)

    @staticmethod
    def _assign(
        index: int,
        item_id: str,
        columns: int,
        region: Rect,
        margin: float,
        cell_w: float,
        cell_h: float,
        start_corner: StartCorner,
    ) -> CellAssignment:
        row, col = divmod(index, columns)
        x = region.min_x + margin + cell_w / 2 + col * (cell_w + margin)
        if start_corner == StartCorner.BOTTOM_LEFT:
            y = region.min_y + margin + cell_h / 2 + row * (cell_h + margin)
        else:
            y = region.max_y - margin - cell_h / 2 - row * (cell_h + margin)
        return CellAssignment(item_id=item_id, index=index, row=row, col=col, center=Point2D(x, y))


def _resolve_strategy(strategy: LayoutStrategy | str) -> LayoutStrategy | None:
    if isinstance(strategy, LayoutStrategy):
        return strategy
    try:
        return LayoutStrategy(str(strategy).strip().lower())
    except ValueError:
        return None


def _auto_label(count: int, columns: int, rows: int) -> str:
    if count == 1:
        return "single"
    if rows == 1:
        return f"row-{columns}"
    if columns == 1:
        return f"column-{rows}"
    return f"grid-{columns}x{rows}-sizeaware"
