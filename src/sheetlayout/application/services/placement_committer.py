"""Commits planned placements to the host with bounded retry.

Each item is tried at a short, ordered list of candidate points: the
planned target, the target nudged right and down, and finally the center
of the layout region. The first point the host accepts wins. Host
refusals that no other point can fix (wrong kind, already placed) end the
attempt immediately.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from sheetlayout.contracts import HostDocumentProtocol
from sheetlayout.domain.errors import NotFoundError
from sheetlayout.domain.services import SizeEstimator
from sheetlayout.domain.value_objects import (
    BatchPlacementResult,
    CellAssignment,
    CommitResult,
    ContentKind,
    PlacementRejection,
    PlacementSuccess,
    Point2D,
    Rect,
    RejectReason,
)

logger = logging.getLogger(__name__)

__all__ = ["PlacementCommitter"]

PlacementOutcome = PlacementSuccess | PlacementRejection


class PlacementCommitter:
    """Turns target points into host commit calls.

    Attributes:
        host: Host document receiving the commits.
        estimator: Used to detect content with no usable extent.
        retry_offset: Offset of the second candidate point.
        position_tolerance: Largest drift accepted without a correction move.
    """

    def __init__(
        self,
        host: HostDocumentProtocol,
        estimator: SizeEstimator | None = None,
        retry_offset: float = 0.1,
        position_tolerance: float = 0.001,
    ) -> None:
        self.host = host
        self.estimator = estimator or SizeEstimator()
        self.retry_offset = retry_offset
        self.position_tolerance = position_tolerance

    def candidate_points(self, target: Point2D, region: Rect) -> list[Point2D]:
        """Ordered, de-duplicated candidate centers for one item."""
        points: list[Point2D] = []
        for point in (
            target,
            target.offset(self.retry_offset, -self.retry_offset),
            region.center,
        ):
            if all(point.distance_to(p) > self.position_tolerance for p in points):
                points.append(point)
        return points

    def check_eligible(self, item_id: str) -> PlacementRejection | None:
        """Pre-commit capability checks.

        Returns:
            A rejection if the item cannot be placed, otherwise None.
        """
        try:
            kind = self.host.query_content_kind(item_id)
            if kind == ContentKind.UNSUPPORTED:
                return PlacementRejection(
                    item_id, RejectReason.INCOMPATIBLE_KIND, f"{item_id} cannot be placed on a canvas"
                )
            if self.host.is_placed(item_id):
                return PlacementRejection(
                    item_id, RejectReason.ALREADY_PLACED, f"{item_id} is already placed"
                )
            if self.estimator.is_degenerate(self.host.query_content_extent(item_id)):
                return PlacementRejection(
                    item_id, RejectReason.EMPTY_CONTENT, f"{item_id} has no visible extent"
                )
        except NotFoundError as e:
            return PlacementRejection(item_id, RejectReason.NOT_FOUND, str(e))
        return None

    def commit(
        self, canvas_id: str, item_id: str, target: Point2D, region: Rect
    ) -> PlacementOutcome:
        """Place one item, retrying over the candidate points.

        Args:
            canvas_id: Canvas to place on.
            item_id: Content to place.
            target: Planned center.
            region: Layout region; its center is the last candidate.

        Returns:
            PlacementSuccess or PlacementRejection.

        Raises:
            NotFoundError: If the canvas does not exist.
        """
        rejection = self.check_eligible(item_id)
        if rejection is not None:
            logger.warning(f"Skipping {item_id}: {rejection.message}")
            return rejection

        candidates = self.candidate_points(target, region)
        failures: list[str] = []
        for attempt, point in enumerate(candidates, start=1):
            result = self.host.commit_placement(canvas_id, item_id, point)
            if result.ok:
                return self._success(item_id, target, point, result, attempt)
            if result.reject_reason is not None:
                logger.warning(f"Host rejected {item_id}: {result.error}")
                return PlacementRejection(
                    item_id, result.reject_reason, result.error or result.reject_reason.value, attempt
                )
            failures.append(f"({point.x:.3f}, {point.y:.3f}): {result.error}")
            logger.debug(f"Commit of {item_id} at attempt {attempt} failed: {result.error}")

        logger.warning(f"All {len(candidates)} candidate points failed for {item_id}")
        return PlacementRejection(
            item_id,
            RejectReason.COMMIT_FAILED,
            "; ".join(failures) or "host refused every candidate point",
            len(candidates),
        )

    def commit_batch(
        self,
        canvas_id: str,
        assignments: Sequence[CellAssignment],
        region: Rect,
        name: str = "Auto layout",
        should_continue: Callable[[], bool] | None = None,
    ) -> BatchPlacementResult:
        """Commit a sequence of assignments inside one host transaction.

        Rejections do not stop the batch. ``should_continue`` is consulted
        before each item; returning False stops the batch early and leaves
        the remaining items unattempted.
        """
        placed: list[PlacementSuccess] = []
        rejected: list[PlacementRejection] = []
        with self.host.transaction(canvas_id, name):
            for assignment in assignments:
                if should_continue is not None and not should_continue():
                    logger.info(f"Batch on {canvas_id} stopped before {assignment.item_id}")
                    break
                outcome = self.commit(canvas_id, assignment.item_id, assignment.center, region)
                if isinstance(outcome, PlacementSuccess):
                    placed.append(outcome)
                else:
                    rejected.append(outcome)

        logger.info(f"Placed {len(placed)} of {len(assignments)} items on {canvas_id}")
        return BatchPlacementResult(placed=tuple(placed), rejected=tuple(rejected))

    def _success(
        self,
        item_id: str,
        requested: Point2D,
        point: Point2D,
        result: CommitResult,
        attempt: int,
    ) -> PlacementSuccess:
        assert result.placement_id is not None
        actual = result.actual_center or point
        warnings: list[str] = []
        if actual.distance_to(point) > self.position_tolerance:
            if self.host.move_placement(result.placement_id, point):
                logger.debug(f"Corrected {item_id} from ({actual.x:.4f}, {actual.y:.4f})")
                actual = point
            else:
                warnings.append(
                    f"Position correction failed; placed at ({actual.x:.3f}, {actual.y:.3f})"
                )
        return PlacementSuccess(
            item_id=item_id,
            placement_id=result.placement_id,
            point=actual,
            requested_point=requested,
            attempts=attempt,
            warnings=tuple(warnings),
        )
