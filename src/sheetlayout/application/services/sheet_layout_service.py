"""Orchestration surface of the layout core.

SheetLayoutService is what outer layers (CLI, web API, a host add-in)
call. Every method opens a fresh RequestContext, so the host is queried
at the start of each call and nothing is cached between calls.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sheetlayout.application.config import LayoutSettings
from sheetlayout.application.config.adapter import config_to_footprint_limits
from sheetlayout.application.context import RequestContext
from sheetlayout.contracts import HostDocumentProtocol
from sheetlayout.domain.entities import ContentItem
from sheetlayout.domain.services import (
    CanvasAreaResolver,
    EmptySpaceFinder,
    LayoutEngine,
    OverlapDetector,
    SizeEstimator,
    ZoneGrid,
)
from sheetlayout.domain.value_objects import (
    AnnotationCorner,
    EmptySpaceCandidate,
    LayoutAudit,
    LayoutPlan,
    LayoutStrategy,
    OverflowPolicy,
    OverlapReport,
    PrintableArea,
    Rect,
    SearchPreset,
    StartCorner,
    Zone,
)

from ..commands import AutoLayoutCommand, PlaceInZoneCommand
from ..dtos import (
    AutoLayoutInput,
    PlaceInZoneInput,
    PlacementBatchOutput,
    ZonePlacementOutput,
)
from .placement_committer import PlacementCommitter

logger = logging.getLogger(__name__)

# Rough size of a text note, used when callers do not give one
ANNOTATION_ESTIMATE = (0.2, 0.08)


class SheetLayoutService:
    """Resolve, search, plan and place content on host canvases.

    Example:
        ```python
        host = InMemoryHost.from_snapshot(load_snapshot(Path("sheet.json")))
        service = SheetLayoutService(host)
        output = service.place_items("A101", ["detail-1", "detail-2"], strategy="auto")
        ```
    """

    def __init__(
        self,
        host: HostDocumentProtocol,
        settings: LayoutSettings | None = None,
        detector: OverlapDetector | None = None,
        estimator: SizeEstimator | None = None,
        resolver: CanvasAreaResolver | None = None,
        zone_grid: ZoneGrid | None = None,
        finder: EmptySpaceFinder | None = None,
        engine: LayoutEngine | None = None,
        committer: PlacementCommitter | None = None,
    ) -> None:
        self.host = host
        self.settings = settings or LayoutSettings()
        search = self.settings.search
        self.detector = detector or OverlapDetector()
        self.estimator = estimator or SizeEstimator(
            config_to_footprint_limits(self.settings.footprint)
        )
        self.resolver = resolver or CanvasAreaResolver()
        self.zone_grid = zone_grid or ZoneGrid(self.detector)
        self.finder = finder or EmptySpaceFinder(
            self.detector, search.step, search.max_candidates
        )
        self.engine = engine or LayoutEngine(self.zone_grid)
        self.committer = committer or PlacementCommitter(
            host,
            self.estimator,
            retry_offset=self.settings.commit.retry_offset,
            position_tolerance=self.settings.commit.position_tolerance,
        )

    def resolve_in_context(
        self, ctx: RequestContext, margin_inches: float | None = None
    ) -> PrintableArea:
        """Resolve the printable area from an already-open context."""
        canvas = ctx.canvas
        margin = self.settings.edge_margin_inches if margin_inches is None else margin_inches
        area = self.resolver.resolve(canvas.bounds, canvas.occupied, margin)
        logger.debug(
            f"Printable area of {canvas.canvas_id}: {area.width:.3f}x{area.height:.3f} "
            f"from {area.source.value}"
        )
        return area

    def resolve_printable_area(
        self, canvas_id: str, margin_inches: float | None = None
    ) -> PrintableArea:
        """Resolve the usable drawing rectangle of a canvas.

        Raises:
            NotFoundError: If the canvas does not exist.
        """
        ctx = RequestContext.open(self.host, canvas_id)
        return self.resolve_in_context(ctx, margin_inches)

    def plan_layout(
        self,
        items: Sequence[ContentItem],
        region: Rect,
        strategy: LayoutStrategy | str | None = None,
        columns_override: int | None = None,
        margin: float | None = None,
        start_corner: StartCorner | None = None,
        overflow_policy: OverflowPolicy | None = None,
    ) -> LayoutPlan:
        """Plan a layout without committing anything.

        Items without a footprint are estimated first.
        """
        for item in items:
            if item.footprint is None:
                self.estimator.estimate_item(item)
        return self.engine.plan(
            items,
            region,
            strategy=strategy or self.settings.strategy,
            margin=self.settings.margin_between if margin is None else margin,
            columns_override=columns_override,
            start_corner=start_corner or self.settings.start_corner,
            overflow_policy=overflow_policy or self.settings.overflow_policy,
        )

    def find_empty_space(
        self,
        canvas_id: str,
        required_width: float,
        required_height: float,
        region_hint: Rect | None = None,
        preset: SearchPreset | str = SearchPreset.ANY,
        max_candidates: int | None = None,
    ) -> list[EmptySpaceCandidate]:
        """Find up to ``max_candidates`` clear spots on a canvas.

        Args:
            canvas_id: Canvas to search.
            required_width: Width of the space needed.
            required_height: Height of the space needed.
            region_hint: Explicit search rectangle; overrides ``preset``.
            preset: Named search region within the printable area.
            max_candidates: Candidate cap, defaults to the settings value.

        Raises:
            NotFoundError: If the canvas does not exist.
            DegenerateInputError: For non-positive sizes or a cap below 1.
        """
        ctx = RequestContext.open(self.host, canvas_id)
        if region_hint is not None:
            search = region_hint
        else:
            area = self.resolve_in_context(ctx)
            search = self.finder.search_region(
                area.bounds, SearchPreset(preset), self.settings.search.edge_inset
            )
        return self.finder.find_empty(
            search,
            required_width,
            required_height,
            ctx.occupied,
            step=self.settings.search.step,
            max_candidates=(
                self.settings.search.max_candidates if max_candidates is None else max_candidates
            ),
        )

    def check_overlap(
        self, canvas_id: str, proposed: Rect, buffer: float | None = None
    ) -> OverlapReport:
        """Report which occupied regions a proposed rectangle would hit.

        Only ``buffer`` is applied, around the proposed rectangle; the
        regions' own search buffers are ignored here.
        """
        ctx = RequestContext.open(self.host, canvas_id)
        buffer = self.settings.search.overlap_buffer if buffer is None else buffer
        regions = [region.with_buffer(0.0) for region in ctx.occupied]
        hits = self.detector.find_overlapping(proposed, regions, buffer)
        return OverlapReport(
            proposed=proposed,
            buffer=buffer,
            overlapping_ids=tuple(region.owner_id for region in hits),
        )

    def analyze_layout(self, canvas_id: str, margin_inches: float | None = None) -> LayoutAudit:
        """Audit the content already on a canvas.

        Reports pairs of occupied regions that intersect. Regions that
        extend past the sheet are listed apart from regions that only leave
        the printable area. Region buffers are not applied.

        Raises:
            NotFoundError: If the canvas does not exist.
        """
        ctx = RequestContext.open(self.host, canvas_id)
        area = self.resolve_in_context(ctx, margin_inches)
        sheet = self.resolver.sheet_rect(ctx.canvas.bounds)

        off_sheet: list[str] = []
        outside_printable: list[str] = []
        for region in ctx.occupied:
            if not sheet.contains(region.rect):
                off_sheet.append(region.owner_id)
            elif not area.bounds.contains(region.rect):
                outside_printable.append(region.owner_id)

        audit = LayoutAudit(
            canvas_id=canvas_id,
            sheet=sheet,
            printable=area.bounds,
            region_count=len(ctx.occupied),
            overlaps=tuple(self.detector.overlapping_pairs(ctx.occupied)),
            off_sheet=tuple(off_sheet),
            outside_printable=tuple(outside_printable),
        )
        logger.info(f"Layout audit of {canvas_id}: {audit.issue_count} issue(s)")
        return audit

    def zones(
        self,
        canvas_id: str,
        rows: int = 3,
        cols: int = 3,
        margin_inches: float | None = None,
    ) -> list[Zone]:
        """Partition a canvas's printable area into named zones."""
        area = self.resolve_printable_area(canvas_id, margin_inches)
        return self.zone_grid.partition(area.bounds, rows, cols)

    def zone_occupancy(
        self,
        canvas_id: str,
        rows: int = 3,
        cols: int = 3,
        margin_inches: float | None = None,
    ) -> dict[str, list[str]]:
        """Map each occupied region's owner id to the zones it touches."""
        ctx = RequestContext.open(self.host, canvas_id)
        area = self.resolve_in_context(ctx, margin_inches)
        zones = self.zone_grid.partition(area.bounds, rows, cols)
        return {
            region.owner_id: [z.name for z in self.zone_grid.zones_overlapping(region.rect, zones)]
            for region in ctx.occupied
        }

    def estimate_footprints(self, content_ids: Sequence[str]) -> list[ContentItem]:
        """Build content items with estimated footprints.

        Raises:
            NotFoundError: If any content id does not exist.
        """
        ctx = RequestContext(self.host)
        items = [ctx.content_item(content_id) for content_id in content_ids]
        for item in items:
            self.estimator.estimate_item(item)
        return items

    def find_annotation_spot(
        self,
        canvas_id: str,
        zone_name: str,
        corner: AnnotationCorner | str = AnnotationCorner.TOP_LEFT,
        width: float = ANNOTATION_ESTIMATE[0],
        height: float = ANNOTATION_ESTIMATE[1],
    ) -> EmptySpaceCandidate | None:
        """First clear spot for a small note in a corner of a zone.

        Raises:
            NotFoundError: If the canvas or zone does not exist.
        """
        ctx = RequestContext.open(self.host, canvas_id)
        area = self.resolve_in_context(ctx)
        zone = self.zone_grid.zone(area.bounds, zone_name)
        search = self.settings.search
        return self.finder.first_fit_in_corner(
            zone.bounds,
            AnnotationCorner(corner),
            width,
            height,
            ctx.occupied,
            spacing=search.annotation_step,
            buffer=search.annotation_buffer,
        )

    def place_items(
        self,
        canvas_id: str,
        content_ids: Sequence[str],
        strategy: str | None = None,
        columns_override: int | None = None,
        spacing: str | None = None,
        margin: float | None = None,
        start_corner: StartCorner | None = None,
        overflow_policy: OverflowPolicy | None = None,
        margin_inches: float | None = None,
    ) -> PlacementBatchOutput:
        """Resolve, estimate, plan and commit several items."""
        request = AutoLayoutInput(
            canvas_id=canvas_id,
            content_ids=list(content_ids),
            strategy=strategy,
            columns_override=columns_override,
            margin=margin,
            spacing=spacing,
            start_corner=start_corner,
            overflow_policy=overflow_policy,
            margin_inches=margin_inches,
        )
        return AutoLayoutCommand(self).execute(request)

    def place_in_zone(
        self,
        canvas_id: str,
        content_id: str,
        zone_name: str,
        rows: int = 3,
        cols: int = 3,
        validate_only: bool = False,
        margin_inches: float | None = None,
    ) -> ZonePlacementOutput:
        """Place one item at a zone center, or preview it with ``validate_only``."""
        request = PlaceInZoneInput(
            canvas_id=canvas_id,
            content_id=content_id,
            zone=zone_name,
            rows=rows,
            cols=cols,
            margin_inches=margin_inches,
            validate_only=validate_only,
        )
        return PlaceInZoneCommand(self).execute(request)
