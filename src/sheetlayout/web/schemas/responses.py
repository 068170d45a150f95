"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from sheetlayout.web.schemas.common import PointSchema, RectSchema, SizeSchema


class PrintableAreaSchema(BaseModel):
    """Resolved printable area."""

    bounds: RectSchema
    width: float
    height: float
    center: PointSchema
    source: str = Field(..., description="frame, guide, frame+content, inferred or default")
    applied_margin: float = Field(..., description="Edge margin in inches")


class ZoneSchema(BaseModel):
    """One zone of a zone grid."""

    name: str
    row: int
    col: int
    description: str
    bounds: RectSchema
    center: PointSchema


class ZonesResponse(BaseModel):
    """Response for zone listing."""

    zones: list[ZoneSchema]
    occupancy: dict[str, list[str]] = Field(
        default_factory=dict, description="Zones touched by each occupied region"
    )


class AssignmentSchema(BaseModel):
    """An item's cell in a layout plan."""

    item_id: str
    index: int
    row: int
    col: int
    center: PointSchema


class WarningSchema(BaseModel):
    code: str
    message: str


class LayoutPlanSchema(BaseModel):
    """Computed layout plan."""

    strategy: str
    requested_strategy: str
    columns: int
    rows: int
    cell_width: float
    cell_height: float
    margin: float
    region: RectSchema
    start_corner: str
    capacity: int
    max_footprint: SizeSchema
    avg_footprint: SizeSchema
    assignments: list[AssignmentSchema]
    warnings: list[WarningSchema] = Field(default_factory=list)


class CandidateSchema(BaseModel):
    """An empty-space candidate."""

    x: float
    y: float
    width: float
    height: float
    center: PointSchema


class CandidatesResponse(BaseModel):
    candidates: list[CandidateSchema]


class OverlapReportSchema(BaseModel):
    """Result of an overlap check."""

    proposed: RectSchema
    buffer: float
    has_overlap: bool
    overlapping_ids: list[str]
    recommendation: str


class OutcomeSchema(BaseModel):
    """Outcome of placing one item."""

    item_id: str
    status: str = Field(..., description="placed or rejected")
    placement_id: str | None = None
    point: PointSchema | None = None
    requested_point: PointSchema | None = None
    reason: str | None = None
    message: str | None = None
    attempts: int = 0
    warnings: list[str] = Field(default_factory=list)


class ConflictSchema(BaseModel):
    """A planned cell that lands on existing content."""

    item_id: str
    rect: RectSchema
    overlapping_ids: list[str]
    alternative: RectSchema | None = Field(
        default=None, description="First clear spot of the same size, if any"
    )


class BatchPlacementResponse(BaseModel):
    """Response for an auto-layout placement."""

    canvas_id: str
    area: PrintableAreaSchema
    plan: LayoutPlanSchema | None = None
    placed: list[OutcomeSchema] = Field(default_factory=list)
    rejected: list[OutcomeSchema] = Field(default_factory=list)
    conflicts: list[ConflictSchema] = Field(default_factory=list)
    success: bool


class EdgeOverflowSchema(BaseModel):
    """Distance past the sheet edge on each side."""

    left: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    top: float = 0.0


class ZonePlacementResponse(BaseModel):
    """Response for a zone placement or preview."""

    canvas_id: str
    zone: ZoneSchema
    footprint: SizeSchema
    predicted_bounds: RectSchema
    fits_zone: bool
    fits_printable: bool
    fits_sheet: bool
    overflow: EdgeOverflowSchema = Field(default_factory=EdgeOverflowSchema)
    overlapping_ids: list[str] = Field(default_factory=list)
    validated_only: bool
    outcome: OutcomeSchema | None = None


class RegionOverlapSchema(BaseModel):
    first_id: str
    second_id: str
    area: float


class LayoutAuditResponse(BaseModel):
    """Issues found in the content already on a canvas."""

    canvas_id: str
    sheet: RectSchema
    printable: RectSchema
    region_count: int
    issue_count: int
    overlaps: list[RegionOverlapSchema] = Field(default_factory=list)
    off_sheet: list[str] = Field(default_factory=list)
    outside_printable: list[str] = Field(
        default_factory=list, description="On the sheet but past the printable area"
    )
    has_overlaps: bool
    has_off_sheet: bool


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )


# OpenAPI documentation for the error handlers in web.exceptions
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponseSchema, "description": "Unknown canvas, content or zone"},
    422: {"model": ErrorResponseSchema, "description": "Invalid snapshot, settings or layout input"},
}
