"""Empty-space search and overlap check endpoints."""

from fastapi import APIRouter

from sheetlayout.domain.value_objects import Rect
from sheetlayout.web.dependencies import JsonFormatterDep, ServiceFactoryDep, open_session
from sheetlayout.web.schemas.common import RectSchema
from sheetlayout.web.schemas.requests import CheckOverlapRequest, FindSpaceRequest
from sheetlayout.web.schemas.responses import (
    ERROR_RESPONSES,
    CandidatesResponse,
    OverlapReportSchema,
)

router = APIRouter(prefix="/space", tags=["space"], responses=ERROR_RESPONSES)


def _to_rect(schema: RectSchema) -> Rect:
    return Rect(schema.min_x, schema.min_y, schema.max_x, schema.max_y)


@router.post("/find", response_model=CandidatesResponse)
async def find_space(
    request: FindSpaceRequest,
    factory: ServiceFactoryDep,
    formatter: JsonFormatterDep,
) -> CandidatesResponse:
    """Find clear spots large enough for the requested size.

    An explicit ``region`` overrides the ``preset``.
    """
    session = open_session(request, factory)
    candidates = session.service.find_empty_space(
        session.canvas_id,
        request.width,
        request.height,
        region_hint=_to_rect(request.region) if request.region else None,
        preset=request.preset,
        max_candidates=request.max_candidates,
    )
    return CandidatesResponse.model_validate(
        {"candidates": [formatter.candidate_to_dict(c) for c in candidates]}
    )


@router.post("/check-overlap", response_model=OverlapReportSchema)
async def check_overlap(
    request: CheckOverlapRequest,
    factory: ServiceFactoryDep,
    formatter: JsonFormatterDep,
) -> OverlapReportSchema:
    """Report which occupied regions a proposed rectangle would collide with."""
    session = open_session(request, factory)
    report = session.service.check_overlap(
        session.canvas_id, _to_rect(request.rect), request.buffer
    )
    return OverlapReportSchema.model_validate(formatter.overlap_to_dict(report))
