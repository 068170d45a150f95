"""Placement commit and overlap report value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ._geometry import Point2D, Rect


class RejectReason(str, Enum):
    """Why a content item was not placed.

    Attributes:
        ALREADY_PLACED: Item is already placed on some canvas.
        INCOMPATIBLE_KIND: Host content kind cannot go on a canvas.
        EMPTY_CONTENT: Item has no usable extent.
        NOT_FOUND: Host does not know the content id.
        COMMIT_FAILED: Every candidate point was refused by the host.
    """

    ALREADY_PLACED = "already-placed"
    INCOMPATIBLE_KIND = "incompatible-kind"
    EMPTY_CONTENT = "empty-content"
    NOT_FOUND = "not-found"
    COMMIT_FAILED = "commit-failed"


@dataclass(frozen=True)
class CommitResult:
    """Outcome of a single host-side commit call.

    Attributes:
        placement_id: Host id of the created placement, None on failure.
        reject_reason: Set when the host refuses for a non-retryable reason.
        error: Host error message for a failed attempt.
        actual_center: Center the host actually placed the content at.
    """

    placement_id: str | None = None
    reject_reason: RejectReason | None = None
    error: str | None = None
    actual_center: Point2D | None = None

    @property
    def ok(self) -> bool:
        return self.placement_id is not None

    @classmethod
    def success(
        cls, placement_id: str, actual_center: Point2D | None = None
    ) -> "CommitResult":
        return cls(placement_id=placement_id, actual_center=actual_center)

    @classmethod
    def failed(cls, error: str) -> "CommitResult":
        return cls(error=error)

    @classmethod
    def rejected(cls, reason: RejectReason, error: str = "") -> "CommitResult":
        return cls(reject_reason=reason, error=error or reason.value)


@dataclass(frozen=True)
class PlacementSuccess:
    """A content item that was committed to a canvas.

    Attributes:
        item_id: Content id that was placed.
        placement_id: Host id of the new placement record.
        point: Center the placement was committed at.
        requested_point: Center the layout asked for.
        attempts: Number of candidate points tried.
        warnings: Non-fatal notes such as a failed position correction.
    """

    item_id: str
    placement_id: str
    point: Point2D
    requested_point: Point2D
    attempts: int = 1
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def used_fallback(self) -> bool:
        """True if the item landed somewhere other than the requested point."""
        return self.point != self.requested_point


@dataclass(frozen=True)
class PlacementRejection:
    """A content item the host declined to place."""

    item_id: str
    reason: RejectReason
    message: str
    attempts: int = 0


@dataclass(frozen=True)
class BatchPlacementResult:
    """Aggregated outcome of placing several items."""

    placed: tuple[PlacementSuccess, ...] = field(default_factory=tuple)
    rejected: tuple[PlacementRejection, ...] = field(default_factory=tuple)

    @property
    def total_requested(self) -> int:
        return len(self.placed) + len(self.rejected)

    @property
    def success(self) -> bool:
        """True if at least one item was placed."""
        return len(self.placed) > 0


@dataclass(frozen=True)
class OverlapReport:
    """Result of checking a proposed rectangle against a canvas.

    Attributes:
        proposed: The rectangle that was checked (before buffering).
        buffer: Clearance applied around the proposed rectangle.
        overlapping_ids: Owner ids of the regions it overlaps.
    """

    proposed: Rect
    buffer: float
    overlapping_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_overlap(self) -> bool:
        return len(self.overlapping_ids) > 0

    @property
    def recommendation(self) -> str:
        if self.has_overlap:
            return "Choose a different location"
        return "Location is clear for placement"


@dataclass(frozen=True)
class PlacementConflict:
    """A planned cell whose footprint lands on existing content.

    Attributes:
        item_id: Content id assigned to the cell.
        rect: Footprint rectangle at the cell center.
        overlapping_ids: Owner ids of the occupied regions it hits.
        alternative: First clear spot of the same size in the printable
            area, or None if there is none.
    """

    item_id: str
    rect: Rect
    overlapping_ids: tuple[str, ...]
    alternative: Rect | None = None

    @property
    def message(self) -> str:
        return f"{self.item_id} overlaps existing content {', '.join(self.overlapping_ids)}"


@dataclass(frozen=True)
class RegionOverlap:
    """Two occupied regions on the same canvas that intersect."""

    first_id: str
    second_id: str
    area: float


@dataclass(frozen=True)
class LayoutAudit:
    """Issues found in what is already on a canvas.

    Attributes:
        canvas_id: Audited canvas.
        sheet: Full sheet rectangle (frame, guide or default page).
        printable: Printable rectangle the content is checked against.
        region_count: Number of occupied regions audited.
        overlaps: Pairs of regions that intersect.
        off_sheet: Regions extending beyond the sheet.
        outside_printable: Regions on the sheet but past the printable area.
    """

    canvas_id: str
    sheet: Rect
    printable: Rect
    region_count: int
    overlaps: tuple[RegionOverlap, ...] = field(default_factory=tuple)
    off_sheet: tuple[str, ...] = field(default_factory=tuple)
    outside_printable: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_overlaps(self) -> bool:
        return len(self.overlaps) > 0

    @property
    def has_off_sheet(self) -> bool:
        return len(self.off_sheet) > 0

    @property
    def issue_count(self) -> int:
        return len(self.overlaps) + len(self.off_sheet) + len(self.outside_printable)
