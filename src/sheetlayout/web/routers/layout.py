"""Layout planning endpoints."""

from fastapi import APIRouter

from sheetlayout.web.dependencies import JsonFormatterDep, ServiceFactoryDep, open_session
from sheetlayout.web.schemas.requests import PlanRequest
from sheetlayout.web.schemas.responses import ERROR_RESPONSES, LayoutPlanSchema

router = APIRouter(prefix="/layout", tags=["layout"], responses=ERROR_RESPONSES)


@router.post("/plan", response_model=LayoutPlanSchema)
async def plan_layout(
    request: PlanRequest,
    factory: ServiceFactoryDep,
    formatter: JsonFormatterDep,
) -> LayoutPlanSchema:
    """Compute a layout plan for content items without placing them.

    An explicit ``margin`` wins over the ``spacing`` preset.

    Returns:
        Grid shape, cell size and the center assigned to every item.
    """
    session = open_session(request, factory)
    service = session.service
    area = service.resolve_printable_area(session.canvas_id, request.margin_inches)
    items = service.estimate_footprints(request.items)
    margin = request.margin
    if margin is None:
        margin = service.settings.margin_for(request.spacing)
    plan = service.plan_layout(
        items,
        area.bounds,
        strategy=request.strategy,
        columns_override=request.columns,
        margin=margin,
        start_corner=request.start_corner,
        overflow_policy=request.overflow_policy,
    )
    return LayoutPlanSchema.model_validate(formatter.plan_to_dict(plan))
