"""Snapshot-backed host document.

InMemoryHost implements HostDocumentProtocol over a CanvasSnapshot. It is
the host used by the CLI and the web API, where each request carries a
serialized document, and by the test suite. Commits add occupied regions
to the canvas so later queries see them; transactions restore the
previous state on rollback.
"""

from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

from sheetlayout.application.config import CanvasSnapshot, FailPointConfig, LayoutSettings
from sheetlayout.application.config.adapter import (
    config_to_canvas_bounds,
    config_to_extent,
    config_to_footprint_limits,
    config_to_occupied,
)
from sheetlayout.domain.errors import NotFoundError
from sheetlayout.domain.services import SizeEstimator
from sheetlayout.domain.value_objects import (
    CanvasBounds,
    CommitResult,
    ContentExtent,
    ContentKind,
    OccupiedRegion,
    Point2D,
    Rect,
    RejectReason,
)

logger = logging.getLogger(__name__)


@dataclass
class HostContent:
    """A content item as the host tracks it."""

    content_id: str
    extent: ContentExtent
    kind: ContentKind = ContentKind.DETAIL
    placed: bool = False
    drift: tuple[float, float] | None = None
    pinned: bool = False


@dataclass
class HostPlacement:
    """A committed placement record."""

    placement_id: str
    canvas_id: str
    content_id: str
    center: Point2D
    width: float
    height: float

    @property
    def rect(self) -> Rect:
        return Rect.from_center(self.center, self.width, self.height)


@dataclass
class HostCanvas:
    """A canvas as the host tracks it."""

    bounds: CanvasBounds
    occupied: list[OccupiedRegion] = field(default_factory=list)


@dataclass
class MemoryTransaction:
    """Transaction handle yielded by ``InMemoryHost.transaction``."""

    name: str
    canvas_id: str
    rolled_back: bool = False

    def rollback(self) -> None:
        self.rolled_back = True


class InMemoryHost:
    """HostDocumentProtocol implementation over in-memory state.

    Attributes:
        canvases: Canvas state keyed by canvas id.
        contents: Content state keyed by content id.
        placements: Committed placements keyed by placement id.
        fail_points: Points at which commits are refused.
        transactions: Log of (name, outcome) for every closed transaction.
    """

    def __init__(
        self,
        canvases: dict[str, HostCanvas],
        contents: dict[str, HostContent] | None = None,
        fail_points: list[FailPointConfig] | None = None,
        estimator: SizeEstimator | None = None,
        placement_buffer: float = 0.05,
    ) -> None:
        self.canvases = canvases
        self.contents = contents or {}
        self.fail_points = fail_points or []
        self.placements: dict[str, HostPlacement] = {}
        self.transactions: list[tuple[str, str]] = []
        self.commit_calls: list[tuple[str, str, Point2D]] = []
        self._estimator = estimator or SizeEstimator()
        self._placement_buffer = placement_buffer
        self._next_id = 1

    @classmethod
    def from_snapshot(
        cls, snapshot: CanvasSnapshot, settings: LayoutSettings | None = None
    ) -> "InMemoryHost":
        """Build a host from a validated snapshot.

        Occupied regions without an explicit buffer take the settings
        default for their kind.
        """
        settings = settings or LayoutSettings()
        canvases = {
            c.id: HostCanvas(
                bounds=config_to_canvas_bounds(c),
                occupied=[config_to_occupied(o, settings) for o in c.occupied],
            )
            for c in snapshot.canvases
        }
        contents = {
            c.id: HostContent(
                content_id=c.id,
                extent=config_to_extent(c),
                kind=c.kind,
                placed=c.placed,
                drift=c.drift,
                pinned=c.pinned,
            )
            for c in snapshot.contents
        }
        return cls(
            canvases,
            contents,
            list(snapshot.fail_points),
            estimator=SizeEstimator(config_to_footprint_limits(settings.footprint)),
            placement_buffer=settings.search.placement_buffer,
        )

    def _canvas(self, canvas_id: str) -> HostCanvas:
        try:
            return self.canvases[canvas_id]
        except KeyError:
            raise NotFoundError("canvas", canvas_id) from None

    def _content(self, content_id: str) -> HostContent:
        try:
            return self.contents[content_id]
        except KeyError:
            raise NotFoundError("content", content_id) from None

    def query_canvas_bounds(self, canvas_id: str) -> CanvasBounds:
        return self._canvas(canvas_id).bounds

    def query_occupied_regions(self, canvas_id: str) -> list[OccupiedRegion]:
        return list(self._canvas(canvas_id).occupied)

    def query_content_extent(self, content_id: str) -> ContentExtent:
        return self._content(content_id).extent

    def query_content_kind(self, content_id: str) -> ContentKind:
        return self._content(content_id).kind

    def is_placed(self, content_id: str) -> bool:
        return self._content(content_id).placed

    def commit_placement(self, canvas_id: str, content_id: str, point: Point2D) -> CommitResult:
        canvas = self._canvas(canvas_id)
        content = self._content(content_id)
        self.commit_calls.append((canvas_id, content_id, point))

        if content.placed:
            return CommitResult.rejected(RejectReason.ALREADY_PLACED, f"{content_id} is already placed")
        if content.kind == ContentKind.UNSUPPORTED:
            return CommitResult.rejected(
                RejectReason.INCOMPATIBLE_KIND, f"{content_id} cannot be placed on a canvas"
            )
        if self._is_fail_point(content_id, point):
            return CommitResult.failed(f"Host refused placement at ({point.x:.3f}, {point.y:.3f})")

        center = point
        if content.drift is not None:
            center = point.offset(*content.drift)

        footprint = self._estimator.estimate_extent(content.extent)
        placement_id = f"P{self._next_id}"
        self._next_id += 1
        placement = HostPlacement(
            placement_id=placement_id,
            canvas_id=canvas_id,
            content_id=content_id,
            center=center,
            width=footprint.width,
            height=footprint.height,
        )
        self.placements[placement_id] = placement
        canvas.occupied.append(
            OccupiedRegion(rect=placement.rect, owner_id=placement_id, buffer=self._placement_buffer)
        )
        content.placed = True
        logger.debug(f"Committed {content_id} on {canvas_id} as {placement_id}")
        return CommitResult.success(placement_id, center)

    def move_placement(self, placement_id: str, new_center: Point2D) -> bool:
        placement = self.placements.get(placement_id)
        if placement is None:
            return False
        if self._content(placement.content_id).pinned:
            logger.debug(f"Placement {placement_id} is pinned, refusing move")
            return False

        canvas = self._canvas(placement.canvas_id)
        placement.center = new_center
        canvas.occupied = [
            region.with_rect(placement.rect) if region.owner_id == placement_id else region
            for region in canvas.occupied
        ]
        return True

    @contextmanager
    def transaction(self, canvas_id: str, name: str) -> Iterator[MemoryTransaction]:
        """Group commits; state is restored if the block raises or rolls back."""
        self._canvas(canvas_id)
        saved = (
            copy.deepcopy(self.canvases),
            copy.deepcopy(self.contents),
            copy.deepcopy(self.placements),
        )
        tx = MemoryTransaction(name=name, canvas_id=canvas_id)
        try:
            yield tx
        except Exception:
            self._restore(saved)
            self.transactions.append((name, "rolled-back"))
            raise
        if tx.rolled_back:
            self._restore(saved)
            self.transactions.append((name, "rolled-back"))
        else:
            self.transactions.append((name, "committed"))

    def _restore(
        self,
        saved: tuple[dict[str, HostCanvas], dict[str, HostContent], dict[str, HostPlacement]],
    ) -> None:
        self.canvases, self.contents, self.placements = saved

    def _is_fail_point(self, content_id: str, point: Point2D) -> bool:
        for fp in self.fail_points:
            if fp.content is not None and fp.content != content_id:
                continue
            if abs(fp.x - point.x) <= fp.tolerance and abs(fp.y - point.y) <= fp.tolerance:
                return True
        return False
