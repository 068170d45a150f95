"""Output formatters for printable areas, zones, plans and placements."""

from __future__ import annotations

import json
from typing import Any

from sheetlayout.application.dtos import PlacementBatchOutput, ZonePlacementOutput
from sheetlayout.domain.value_objects import (
    EmptySpaceCandidate,
    LayoutAudit,
    LayoutPlan,
    OverlapReport,
    PlacementConflict,
    PlacementRejection,
    PlacementSuccess,
    Point2D,
    PrintableArea,
    Rect,
    Zone,
)


def _point(point: Point2D) -> dict[str, float]:
    return {"x": round(point.x, 6), "y": round(point.y, 6)}


def _rect(rect: Rect) -> dict[str, float]:
    return {key: round(value, 6) for key, value in rect.to_dict().items()}


class JsonFormatter:
    """Serializes layout results to JSON-compatible dictionaries.

    The ``*_to_dict`` methods are shared by the CLI's JSON output and the
    web API's response schemas.
    """

    def area_to_dict(self, area: PrintableArea) -> dict[str, Any]:
        return {
            "bounds": _rect(area.bounds),
            "width": round(area.width, 6),
            "height": round(area.height, 6),
            "center": _point(area.center),
            "source": area.source.value,
            "applied_margin": area.applied_margin,
        }

    def zone_to_dict(self, zone: Zone) -> dict[str, Any]:
        return {
            "name": zone.name,
            "row": zone.row,
            "col": zone.col,
            "description": zone.description,
            "bounds": _rect(zone.bounds),
            "center": _point(zone.center),
        }

    def plan_to_dict(self, plan: LayoutPlan) -> dict[str, Any]:
        return {
            "strategy": plan.strategy,
            "requested_strategy": plan.requested_strategy,
            "columns": plan.columns,
            "rows": plan.rows,
            "cell_width": round(plan.cell_width, 6),
            "cell_height": round(plan.cell_height, 6),
            "margin": plan.margin,
            "region": _rect(plan.region),
            "start_corner": plan.start_corner.value,
            "capacity": plan.capacity,
            "max_footprint": {
                "width": round(plan.max_footprint.width, 6),
                "height": round(plan.max_footprint.height, 6),
            },
            "avg_footprint": {
                "width": round(plan.avg_footprint.width, 6),
                "height": round(plan.avg_footprint.height, 6),
            },
            "assignments": [
                {
                    "item_id": a.item_id,
                    "index": a.index,
                    "row": a.row,
                    "col": a.col,
                    "center": _point(a.center),
                }
                for a in plan.assignments
            ],
            "warnings": [{"code": w.code, "message": w.message} for w in plan.warnings],
        }

    def candidate_to_dict(self, candidate: EmptySpaceCandidate) -> dict[str, Any]:
        return {
            "x": round(candidate.x, 6),
            "y": round(candidate.y, 6),
            "width": round(candidate.rect.width, 6),
            "height": round(candidate.rect.height, 6),
            "center": _point(candidate.center),
        }

    def overlap_to_dict(self, report: OverlapReport) -> dict[str, Any]:
        return {
            "proposed": _rect(report.proposed),
            "buffer": report.buffer,
            "has_overlap": report.has_overlap,
            "overlapping_ids": list(report.overlapping_ids),
            "recommendation": report.recommendation,
        }

    def outcome_to_dict(self, outcome: PlacementSuccess | PlacementRejection) -> dict[str, Any]:
        if isinstance(outcome, PlacementSuccess):
            return {
                "item_id": outcome.item_id,
                "status": "placed",
                "placement_id": outcome.placement_id,
                "point": _point(outcome.point),
                "requested_point": _point(outcome.requested_point),
                "attempts": outcome.attempts,
                "warnings": list(outcome.warnings),
            }
        return {
            "item_id": outcome.item_id,
            "status": "rejected",
            "reason": outcome.reason.value,
            "message": outcome.message,
            "attempts": outcome.attempts,
        }

    def batch_to_dict(self, output: PlacementBatchOutput) -> dict[str, Any]:
        return {
            "canvas_id": output.canvas_id,
            "area": self.area_to_dict(output.area),
            "plan": self.plan_to_dict(output.plan) if output.plan else None,
            "placed": [self.outcome_to_dict(p) for p in output.result.placed],
            "rejected": [self.outcome_to_dict(r) for r in output.result.rejected],
            "conflicts": [self.conflict_to_dict(c) for c in output.conflicts],
            "success": output.result.success,
        }

    def zone_placement_to_dict(self, output: ZonePlacementOutput) -> dict[str, Any]:
        return {
            "canvas_id": output.canvas_id,
            "zone": self.zone_to_dict(output.zone),
            "footprint": {
                "width": round(output.footprint.width, 6),
                "height": round(output.footprint.height, 6),
            },
            "predicted_bounds": _rect(output.predicted_bounds),
            "fits_zone": output.fits_zone,
            "fits_printable": output.fits_printable,
            "fits_sheet": output.fits_sheet,
            "overflow": {key: round(value, 6) for key, value in output.overflow.to_dict().items()},
            "overlapping_ids": list(output.overlapping_ids),
            "validated_only": output.validated_only,
            "outcome": self.outcome_to_dict(output.outcome) if output.outcome else None,
        }

    def conflict_to_dict(self, conflict: PlacementConflict) -> dict[str, Any]:
        return {
            "item_id": conflict.item_id,
            "rect": _rect(conflict.rect),
            "overlapping_ids": list(conflict.overlapping_ids),
            "alternative": _rect(conflict.alternative) if conflict.alternative else None,
        }

    def audit_to_dict(self, audit: LayoutAudit) -> dict[str, Any]:
        return {
            "canvas_id": audit.canvas_id,
            "sheet": _rect(audit.sheet),
            "printable": _rect(audit.printable),
            "region_count": audit.region_count,
            "issue_count": audit.issue_count,
            "overlaps": [
                {"first_id": o.first_id, "second_id": o.second_id, "area": round(o.area, 6)}
                for o in audit.overlaps
            ],
            "off_sheet": list(audit.off_sheet),
            "outside_printable": list(audit.outside_printable),
            "has_overlaps": audit.has_overlaps,
            "has_off_sheet": audit.has_off_sheet,
        }

    def dumps(self, data: Any) -> str:
        return json.dumps(data, indent=2)


class TextFormatter:
    """Formats layout results as plain-text reports."""

    def format_area(self, canvas_id: str, area: PrintableArea) -> str:
        b = area.bounds
        return "\n".join(
            [
                f"PRINTABLE AREA: {canvas_id}",
                "=" * 60,
                f"Source: {area.source.value}",
                f"Bounds: ({b.min_x:.3f}, {b.min_y:.3f}) - ({b.max_x:.3f}, {b.max_y:.3f})",
                f"Size:   {area.width:.3f} x {area.height:.3f}",
                f'Margin: {area.applied_margin}"',
            ]
        )

    def format_zones(
        self, zones: list[Zone], occupancy: dict[str, list[str]] | None = None
    ) -> str:
        lines = ["ZONES", "=" * 60]
        for zone in zones:
            c = zone.center
            lines.append(
                f"{zone.name:<8} {zone.description:<16} center ({c.x:.3f}, {c.y:.3f}) "
                f"size {zone.bounds.width:.3f} x {zone.bounds.height:.3f}"
            )
        if occupancy:
            lines.append("")
            lines.append("OCCUPANCY")
            lines.append("-" * 60)
            for owner, names in occupancy.items():
                lines.append(f"{owner:<16} {', '.join(names) or '-'}")
        return "\n".join(lines)

    def format_plan(self, plan: LayoutPlan) -> str:
        lines = [
            f"LAYOUT PLAN: {plan.strategy}",
            "=" * 60,
            f"Grid:     {plan.columns} columns x {plan.rows} rows",
            f"Cell:     {plan.cell_width:.3f} x {plan.cell_height:.3f} (margin {plan.margin})",
            f"Capacity: {plan.capacity}",
            "",
        ]
        for a in plan.assignments:
            lines.append(
                f"  {a.item_id:<16} row {a.row} col {a.col} -> ({a.center.x:.3f}, {a.center.y:.3f})"
            )
        if plan.warnings:
            lines.append("")
            lines.extend(f"WARNING [{w.code}]: {w.message}" for w in plan.warnings)
        return "\n".join(lines)

    def format_diagram(self, plan: LayoutPlan, width: int = 60, height: int = 20) -> str:
        """ASCII diagram of a plan's cells within its region."""
        grid = [[" " for _ in range(width)] for _ in range(height)]
        self._draw_box(grid, 0, 0, width - 1, height - 1)

        region = plan.region
        sx = (width - 1) / region.width
        sy = (height - 1) / region.height
        for a in plan.assignments:
            cell = plan.cell_rect(a.row, a.col)
            if cell is None:
                continue
            x1 = int(round((cell.min_x - region.min_x) * sx))
            x2 = int(round((cell.max_x - region.min_x) * sx))
            y1 = int(round((region.max_y - cell.max_y) * sy))
            y2 = int(round((region.max_y - cell.min_y) * sy))
            if x2 - x1 < 2 or y2 - y1 < 2:
                continue
            self._draw_box(grid, x1, y1, x2, y2)
            label = str(a.index + 1)[: x2 - x1 - 1]
            mid_y = (y1 + y2) // 2
            for offset, char in enumerate(label):
                grid[mid_y][x1 + 1 + offset] = char

        lines = ["LAYOUT DIAGRAM", "=" * width, ""]
        lines.extend("".join(row) for row in grid)
        return "\n".join(lines)

    def _draw_box(self, grid: list[list[str]], x1: int, y1: int, x2: int, y2: int) -> None:
        for x, y in ((x1, y1), (x2, y1), (x1, y2), (x2, y2)):
            grid[y][x] = "+"
        for x in range(x1 + 1, x2):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1 + 1, y2):
            grid[y][x1] = "|"
            grid[y][x2] = "|"

    def format_candidates(self, candidates: list[EmptySpaceCandidate]) -> str:
        if not candidates:
            return "No empty space found."
        lines = [f"EMPTY SPACE ({len(candidates)} candidates)", "=" * 60]
        for i, c in enumerate(candidates, start=1):
            lines.append(
                f"{i:>3}. origin ({c.x:.3f}, {c.y:.3f}) center ({c.center.x:.3f}, {c.center.y:.3f})"
            )
        return "\n".join(lines)

    def format_overlap(self, report: OverlapReport) -> str:
        if not report.has_overlap:
            return f"No overlap (buffer {report.buffer}). {report.recommendation}."
        return (
            f"Overlaps {len(report.overlapping_ids)} region(s): "
            f"{', '.join(report.overlapping_ids)}. {report.recommendation}."
        )

    def format_batch(self, output: PlacementBatchOutput) -> str:
        lines: list[str] = []
        if output.plan is not None:
            lines.append(self.format_plan(output.plan))
            lines.append("")
        result = output.result
        lines.append(f"PLACED {len(result.placed)} of {result.total_requested}")
        lines.append("-" * 60)
        for placed in result.placed:
            note = " (fallback)" if placed.used_fallback else ""
            lines.append(
                f"  {placed.item_id:<16} {placed.placement_id:<8} "
                f"({placed.point.x:.3f}, {placed.point.y:.3f}){note}"
            )
            lines.extend(f"    warning: {w}" for w in placed.warnings)
        for rejected in result.rejected:
            lines.append(f"  {rejected.item_id:<16} REJECTED [{rejected.reason.value}] {rejected.message}")
        for conflict in output.conflicts:
            lines.append(f"CONFLICT: {conflict.message}")
            if conflict.alternative is not None:
                a = conflict.alternative
                lines.append(
                    f"    clear spot at ({a.min_x:.3f}, {a.min_y:.3f}) - ({a.max_x:.3f}, {a.max_y:.3f})"
                )
        return "\n".join(lines)

    def format_zone_placement(self, output: ZonePlacementOutput) -> str:
        b = output.predicted_bounds
        lines = [
            f"ZONE {output.zone.name} ({output.zone.description})",
            f"Predicted bounds: ({b.min_x:.3f}, {b.min_y:.3f}) - ({b.max_x:.3f}, {b.max_y:.3f})",
            f"Fits zone: {'yes' if output.fits_zone else 'no'}",
            f"Fits printable area: {'yes' if output.fits_printable else 'no'}",
            f"Fits sheet: {'yes' if output.fits_sheet else 'no'}",
        ]
        if output.overflow.has_overflow:
            o = output.overflow
            lines.append(
                f"Sheet overflow: left {o.left:.3f} right {o.right:.3f} "
                f"bottom {o.bottom:.3f} top {o.top:.3f}"
            )
        if output.overlapping_ids:
            lines.append(f"Overlaps: {', '.join(output.overlapping_ids)}")
        if isinstance(output.outcome, PlacementSuccess):
            p = output.outcome.point
            lines.append(f"Placed as {output.outcome.placement_id} at ({p.x:.3f}, {p.y:.3f})")
        elif isinstance(output.outcome, PlacementRejection):
            lines.append(f"Rejected [{output.outcome.reason.value}]: {output.outcome.message}")
        return "\n".join(lines)

    def format_audit(self, audit: LayoutAudit) -> str:
        lines = [
            f"LAYOUT AUDIT: {audit.canvas_id}",
            "=" * 60,
            f"Regions: {audit.region_count}",
            f"Issues:  {audit.issue_count}",
        ]
        for overlap in audit.overlaps:
            lines.append(
                f"  OVERLAP      {overlap.first_id} and {overlap.second_id} (area {overlap.area:.4f})"
            )
        lines.extend(f"  OFF SHEET    {owner}" for owner in audit.off_sheet)
        lines.extend(f"  OUTSIDE AREA {owner}" for owner in audit.outside_printable)
        if not audit.issue_count:
            lines.append("No layout issues found.")
        return "\n".join(lines)
