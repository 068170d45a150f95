"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from sheetlayout.domain.value_objects import (
    BatchPlacementResult,
    EdgeOverflow,
    Footprint,
    LayoutPlan,
    OverflowPolicy,
    PlacementConflict,
    PlacementRejection,
    PlacementSuccess,
    PrintableArea,
    Rect,
    StartCorner,
    Zone,
)


@dataclass
class AutoLayoutInput:
    """Input DTO for placing several content items with a layout strategy.

    Fields left as None take their value from the layout settings.
    """

    canvas_id: str
    content_ids: list[str]
    strategy: str | None = None
    columns_override: int | None = None
    margin: float | None = None
    spacing: str | None = None
    start_corner: StartCorner | None = None
    overflow_policy: OverflowPolicy | None = None
    margin_inches: float | None = None

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if not self.canvas_id:
            errors.append("Canvas id is required")
        if not self.content_ids:
            errors.append("At least one content id is required")
        elif len(set(self.content_ids)) != len(self.content_ids):
            errors.append("Content ids must be unique")
        if self.columns_override is not None and self.columns_override < 1:
            errors.append("Column override must be at least 1")
        if self.margin is not None and self.margin < 0:
            errors.append("Margin cannot be negative")
        if self.margin_inches is not None and self.margin_inches < 0:
            errors.append("Edge margin cannot be negative")
        return errors


@dataclass
class PlaceInZoneInput:
    """Input DTO for placing one content item at a zone center."""

    canvas_id: str
    content_id: str
    zone: str
    rows: int = 3
    cols: int = 3
    margin_inches: float | None = None
    validate_only: bool = False

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if not self.canvas_id:
            errors.append("Canvas id is required")
        if not self.content_id:
            errors.append("Content id is required")
        if not self.zone.strip():
            errors.append("Zone name is required")
        if self.rows < 1:
            errors.append("Zone grid must have at least 1 row")
        if self.cols < 1:
            errors.append("Zone grid must have at least 1 column")
        if self.margin_inches is not None and self.margin_inches < 0:
            errors.append("Edge margin cannot be negative")
        return errors


@dataclass
class PlacementBatchOutput:
    """Output DTO for an auto-layout placement.

    Attributes:
        canvas_id: Canvas the items were placed on.
        area: Printable area the layout was computed in.
        plan: Layout plan, or None when no item was eligible.
        result: Committed and rejected items.
        conflicts: Planned cells that land on content already on the canvas.
    """

    canvas_id: str
    area: PrintableArea
    plan: LayoutPlan | None
    result: BatchPlacementResult
    conflicts: list[PlacementConflict] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.result.success

    @property
    def warnings(self) -> list[str]:
        messages = [w.message for w in self.plan.warnings] if self.plan else []
        for placed in self.result.placed:
            messages.extend(f"{placed.item_id}: {w}" for w in placed.warnings)
        messages.extend(c.message for c in self.conflicts)
        return messages


@dataclass
class ZonePlacementOutput:
    """Output DTO for a zone placement or its validate-only preview.

    Attributes:
        canvas_id: Target canvas.
        zone: Resolved zone.
        footprint: Estimated footprint of the item.
        predicted_bounds: Rectangle the item would occupy at the zone center.
        fits_zone: True if the predicted rectangle lies inside the zone.
        fits_printable: True if it lies inside the printable area.
        fits_sheet: True if it lies inside the sheet.
        overflow: How far it extends past the sheet on each side.
        overlapping_ids: Occupied regions the predicted rectangle touches.
        outcome: Commit outcome, None in validate-only mode.
    """

    canvas_id: str
    zone: Zone
    footprint: Footprint
    predicted_bounds: Rect
    fits_zone: bool
    fits_printable: bool
    fits_sheet: bool
    overflow: EdgeOverflow = field(default_factory=EdgeOverflow)
    overlapping_ids: list[str] = field(default_factory=list)
    outcome: PlacementSuccess | PlacementRejection | None = None

    @property
    def validated_only(self) -> bool:
        return self.outcome is None

    @property
    def placed(self) -> bool:
        return isinstance(self.outcome, PlacementSuccess)
