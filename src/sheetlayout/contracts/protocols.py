"""Host collaborator protocols.

The layout core never touches a drafting document directly. Everything it
needs from the host application (bounds, occupancy, content extents and
the commit primitive) goes through the protocols defined here, so the
core can be driven by a real add-in, the in-memory snapshot host, or a
test double.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ContextManager, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sheetlayout.domain.value_objects import (
        CanvasBounds,
        CommitResult,
        ContentExtent,
        ContentKind,
        OccupiedRegion,
        Point2D,
    )


@runtime_checkable
class PlacementTransaction(Protocol):
    """An open host transaction grouping several placement commits.

    The host commits the transaction when its context exits normally and
    rolls it back when the block raises.
    """

    name: str

    def rollback(self) -> None:
        """Discard every commit made inside the transaction."""
        ...


@runtime_checkable
class HostDocumentProtocol(Protocol):
    """Geometry queries and commit primitive offered by a host document.

    Every query reflects the document at call time; the core re-queries at
    the start of each request instead of caching. Unknown canvas or
    content ids raise ``NotFoundError``.

    Example:
        ```python
        host: HostDocumentProtocol = InMemoryHost.from_snapshot(snapshot)
        with host.transaction("A101", "Auto layout") as tx:
            result = host.commit_placement("A101", "detail-1", Point2D(1.0, 1.0))
        ```
    """

    def query_canvas_bounds(self, canvas_id: str) -> "CanvasBounds":
        """Frame and guide rectangles of a canvas; either may be None."""
        ...

    def query_occupied_regions(self, canvas_id: str) -> "list[OccupiedRegion]":
        """Everything currently placed or annotated on a canvas."""
        ...

    def query_content_extent(self, content_id: str) -> "ContentExtent":
        """Crop extent, display scale and outline of a content item."""
        ...

    def query_content_kind(self, content_id: str) -> "ContentKind":
        """Category of a content item."""
        ...

    def is_placed(self, content_id: str) -> bool:
        """True if the content item already sits on some canvas."""
        ...

    def commit_placement(
        self, canvas_id: str, content_id: str, point: "Point2D"
    ) -> "CommitResult":
        """Place a content item centered on ``point``.

        Returns:
            CommitResult carrying the placement id and the center the host
            actually used, or a failure reason. Host refusals are reported
            in the result rather than raised.
        """
        ...

    def move_placement(self, placement_id: str, new_center: "Point2D") -> bool:
        """Move an existing placement so it is centered on ``new_center``.

        Returns:
            True if the host applied the move.
        """
        ...

    def transaction(
        self, canvas_id: str, name: str
    ) -> ContextManager[PlacementTransaction]:
        """Open a transaction that groups commits on one canvas."""
        ...
