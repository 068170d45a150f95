"""Pydantic schemas for the REST API."""

from sheetlayout.web.schemas.common import (
    PointSchema,
    RectSchema,
    SizeSchema,
    SnapshotRequestBase,
)
from sheetlayout.web.schemas.requests import (
    CanvasAreaRequest,
    CheckOverlapRequest,
    FindSpaceRequest,
    PlacementRequest,
    PlanRequest,
    ZonesRequest,
)
from sheetlayout.web.schemas.responses import (
    BatchPlacementResponse,
    CandidatesResponse,
    ErrorResponseSchema,
    LayoutAuditResponse,
    LayoutPlanSchema,
    OverlapReportSchema,
    PrintableAreaSchema,
    ZonePlacementResponse,
    ZonesResponse,
)

__all__ = [
    # Common
    "PointSchema",
    "RectSchema",
    "SizeSchema",
    "SnapshotRequestBase",
    # Requests
    "CanvasAreaRequest",
    "CheckOverlapRequest",
    "FindSpaceRequest",
    "PlacementRequest",
    "PlanRequest",
    "ZonesRequest",
    # Responses
    "BatchPlacementResponse",
    "CandidatesResponse",
    "ErrorResponseSchema",
    "LayoutAuditResponse",
    "LayoutPlanSchema",
    "OverlapReportSchema",
    "PrintableAreaSchema",
    "ZonePlacementResponse",
    "ZonesResponse",
]
