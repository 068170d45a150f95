"""Application commands (use cases) for placing content on canvases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sheetlayout.application.context import RequestContext
from sheetlayout.domain.entities import ContentItem
from sheetlayout.domain.errors import DegenerateInputError
from sheetlayout.domain.value_objects import (
    BatchPlacementResult,
    CellAssignment,
    OccupiedRegion,
    PlacementConflict,
    PlacementRejection,
    PrintableArea,
    Rect,
)

from .dtos import (
    AutoLayoutInput,
    PlaceInZoneInput,
    PlacementBatchOutput,
    ZonePlacementOutput,
)

if TYPE_CHECKING:
    from sheetlayout.application.services import SheetLayoutService

logger = logging.getLogger(__name__)


def _raise_for(errors: list[str]) -> None:
    if errors:
        raise DegenerateInputError(errors[0], errors=errors)


class AutoLayoutCommand:
    """Resolve, estimate, plan and commit a set of content items.

    Items the host cannot place (unknown, already placed, unsupported
    kind, no extent) are reported as rejections and left out of the grid,
    so they do not leave holes in the layout. Planned cells that land on
    content already on the canvas are still committed, and reported as
    conflicts with the first clear spot of the same size, if any.
    """

    def __init__(self, service: "SheetLayoutService") -> None:
        self.service = service

    def execute(self, request: AutoLayoutInput) -> PlacementBatchOutput:
        """Execute the auto-layout command.

        Raises:
            DegenerateInputError: If the input fails validation.
            NotFoundError: If the canvas does not exist.
        """
        _raise_for(request.validate())

        service = self.service
        settings = service.settings
        ctx = RequestContext.open(service.host, request.canvas_id)
        area = service.resolve_in_context(ctx, request.margin_inches)

        items: list[ContentItem] = []
        rejected: list[PlacementRejection] = []
        for content_id in request.content_ids:
            rejection = service.committer.check_eligible(content_id)
            if rejection is not None:
                rejected.append(rejection)
                continue
            item = ctx.content_item(content_id)
            service.estimator.estimate_item(item)
            items.append(item)

        if not items:
            logger.warning(f"No eligible items to place on {request.canvas_id}")
            return PlacementBatchOutput(
                canvas_id=request.canvas_id,
                area=area,
                plan=None,
                result=BatchPlacementResult(rejected=tuple(rejected)),
            )

        margin = request.margin if request.margin is not None else settings.margin_for(request.spacing)
        plan = service.engine.plan(
            items,
            area.bounds,
            strategy=request.strategy or settings.strategy,
            margin=margin,
            columns_override=request.columns_override,
            start_corner=request.start_corner or settings.start_corner,
            overflow_policy=request.overflow_policy or settings.overflow_policy,
        )

        conflicts = self._find_conflicts(plan.assignments, items, area, ctx.occupied)

        result = service.committer.commit_batch(
            request.canvas_id, plan.assignments, plan.region, name=f"Auto layout ({plan.strategy})"
        )
        return PlacementBatchOutput(
            canvas_id=request.canvas_id,
            area=area,
            plan=plan,
            result=BatchPlacementResult(
                placed=result.placed,
                rejected=tuple(rejected) + result.rejected,
            ),
            conflicts=conflicts,
        )

    def _find_conflicts(
        self,
        assignments: tuple[CellAssignment, ...],
        items: list[ContentItem],
        area: PrintableArea,
        occupied: list[OccupiedRegion],
    ) -> list[PlacementConflict]:
        service = self.service
        footprints = {item.item_id: item.footprint for item in items}
        conflicts: list[PlacementConflict] = []
        for assignment in assignments:
            footprint = footprints[assignment.item_id]
            if footprint is None:
                continue
            rect = Rect.from_center(assignment.center, footprint.width, footprint.height)
            hits = service.detector.find_overlapping(rect, occupied)
            if not hits:
                continue
            spots = service.finder.find_empty(
                area.bounds,
                footprint.width,
                footprint.height,
                occupied,
                step=service.settings.search.step,
                max_candidates=1,
            )
            conflict = PlacementConflict(
                item_id=assignment.item_id,
                rect=rect,
                overlapping_ids=tuple(region.owner_id for region in hits),
                alternative=spots[0].rect if spots else None,
            )
            logger.info(f"Planned cell conflict: {conflict.message}")
            conflicts.append(conflict)
        return conflicts


class PlaceInZoneCommand:
    """Place one content item at the center of a named zone.

    In validate-only mode nothing is committed; the output reports the
    predicted bounds, its fit checks, how far it spills past the sheet
    and what it overlaps.
    """

    def __init__(self, service: "SheetLayoutService") -> None:
        self.service = service

    def execute(self, request: PlaceInZoneInput) -> ZonePlacementOutput:
        """Execute the zone placement command.

        Raises:
            DegenerateInputError: If the input fails validation.
            NotFoundError: If the canvas, content or zone does not exist.
        """
        _raise_for(request.validate())

        service = self.service
        ctx = RequestContext.open(service.host, request.canvas_id)
        area = service.resolve_in_context(ctx, request.margin_inches)
        zone = service.zone_grid.zone(area.bounds, request.zone, request.rows, request.cols)

        item = ctx.content_item(request.content_id)
        footprint = service.estimator.estimate_item(item)
        predicted = Rect.from_center(zone.center, footprint.width, footprint.height)
        overlapping = service.detector.find_overlapping(predicted, ctx.occupied)
        sheet = service.resolver.sheet_rect(ctx.canvas.bounds)

        output = ZonePlacementOutput(
            canvas_id=request.canvas_id,
            zone=zone,
            footprint=footprint,
            predicted_bounds=predicted,
            fits_zone=zone.bounds.contains(predicted),
            fits_printable=area.bounds.contains(predicted),
            fits_sheet=sheet.contains(predicted),
            overflow=predicted.overflow_beyond(sheet),
            overlapping_ids=[region.owner_id for region in overlapping],
        )
        if request.validate_only:
            return output

        with service.host.transaction(request.canvas_id, f"Place {request.content_id} in {zone.name}"):
            output.outcome = service.committer.commit(
                request.canvas_id, request.content_id, zone.center, zone.bounds
            )
        return output
