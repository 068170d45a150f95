"""Placement endpoints.

The snapshot in the request is never modified; responses describe what
was placed on the request's in-memory copy.
"""

from fastapi import APIRouter, HTTPException

from sheetlayout.web.dependencies import JsonFormatterDep, ServiceFactoryDep, open_session
from sheetlayout.web.schemas.requests import PlacementRequest
from sheetlayout.web.schemas.responses import (
    ERROR_RESPONSES,
    BatchPlacementResponse,
    ZonePlacementResponse,
)

router = APIRouter(prefix="/placements", tags=["placements"], responses=ERROR_RESPONSES)


@router.post("", response_model=BatchPlacementResponse | ZonePlacementResponse)
async def place_items(
    request: PlacementRequest,
    factory: ServiceFactoryDep,
    formatter: JsonFormatterDep,
) -> BatchPlacementResponse | ZonePlacementResponse:
    """Lay out and place items, or place a single item at a zone center.

    Raises:
        HTTPException: If ``zone`` is given with more than one item.
    """
    if request.zone is not None and len(request.items) != 1:
        raise HTTPException(
            status_code=422,
            detail={"error": "Zone placement takes exactly one item", "error_type": "invalid_request"},
        )

    session = open_session(request, factory)
    service = session.service

    if request.zone is not None:
        zone_output = service.place_in_zone(
            session.canvas_id,
            request.items[0],
            request.zone,
            validate_only=request.validate_only,
            margin_inches=request.margin_inches,
        )
        return ZonePlacementResponse.model_validate(
            formatter.zone_placement_to_dict(zone_output)
        )

    output = service.place_items(
        session.canvas_id,
        request.items,
        strategy=request.strategy,
        columns_override=request.columns,
        spacing=request.spacing,
        margin=request.margin,
        start_corner=request.start_corner,
        overflow_policy=request.overflow_policy,
        margin_inches=request.margin_inches,
    )
    return BatchPlacementResponse.model_validate(formatter.batch_to_dict(output))
