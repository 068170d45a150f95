"""Printable-area and zone endpoints."""

from fastapi import APIRouter

from sheetlayout.web.dependencies import JsonFormatterDep, ServiceFactoryDep, open_session
from sheetlayout.web.schemas.requests import CanvasAreaRequest, ZonesRequest
from sheetlayout.web.schemas.responses import (
    ERROR_RESPONSES,
    LayoutAuditResponse,
    PrintableAreaSchema,
    ZonesResponse,
)

router = APIRouter(prefix="/canvas", tags=["canvas"], responses=ERROR_RESPONSES)


@router.post("/area", response_model=PrintableAreaSchema)
async def resolve_area(
    request: CanvasAreaRequest,
    factory: ServiceFactoryDep,
    formatter: JsonFormatterDep,
) -> PrintableAreaSchema:
    """Resolve the printable area of a canvas.

    Args:
        request: Snapshot, optional settings, canvas id and edge margin.

    Returns:
        The printable rectangle and which fallback step produced it.
    """
    session = open_session(request, factory)
    area = session.service.resolve_printable_area(session.canvas_id, request.margin_inches)
    return PrintableAreaSchema.model_validate(formatter.area_to_dict(area))


@router.post("/zones", response_model=ZonesResponse)
async def list_zones(
    request: ZonesRequest,
    factory: ServiceFactoryDep,
    formatter: JsonFormatterDep,
) -> ZonesResponse:
    """Partition a canvas into zones and report which zones are occupied."""
    session = open_session(request, factory)
    service = session.service
    zones = service.zones(session.canvas_id, request.rows, request.cols, request.margin_inches)
    occupancy = service.zone_occupancy(
        session.canvas_id, request.rows, request.cols, request.margin_inches
    )
    return ZonesResponse.model_validate(
        {"zones": [formatter.zone_to_dict(z) for z in zones], "occupancy": occupancy}
    )


@router.post("/audit", response_model=LayoutAuditResponse)
async def audit_layout(
    request: CanvasAreaRequest,
    factory: ServiceFactoryDep,
    formatter: JsonFormatterDep,
) -> LayoutAuditResponse:
    """Report overlapping content and content past the sheet or printable area."""
    session = open_session(request, factory)
    audit = session.service.analyze_layout(session.canvas_id, request.margin_inches)
    return LayoutAuditResponse.model_validate(formatter.audit_to_dict(audit))
