"""Per-request snapshot of host state."""

from __future__ import annotations

from dataclasses import dataclass, field

from sheetlayout.contracts import HostDocumentProtocol
from sheetlayout.domain.entities import Canvas, ContentItem, PlacementState
from sheetlayout.domain.value_objects import CanvasBounds, ContentExtent, OccupiedRegion


@dataclass
class RequestContext:
    """Host state captured at the start of one request.

    A context is created for every service call and dropped when the call
    returns, so nothing observed here outlives the request. Content
    extents are memoized for the lifetime of the context only.

    Attributes:
        host: Host the snapshot was taken from.
        canvas_id: Canvas the request targets, if any.
        bounds: Canvas frame/guide bounds at request start.
        occupied: Occupied regions at request start.
    """

    host: HostDocumentProtocol
    canvas_id: str | None = None
    bounds: CanvasBounds | None = None
    occupied: list[OccupiedRegion] = field(default_factory=list)
    _extents: dict[str, ContentExtent] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def open(cls, host: HostDocumentProtocol, canvas_id: str) -> "RequestContext":
        """Query the host for a fresh canvas snapshot.

        Raises:
            NotFoundError: If the canvas does not exist.
        """
        bounds = host.query_canvas_bounds(canvas_id)
        occupied = list(host.query_occupied_regions(canvas_id))
        return cls(host=host, canvas_id=canvas_id, bounds=bounds, occupied=occupied)

    @property
    def canvas(self) -> Canvas:
        if self.canvas_id is None or self.bounds is None:
            raise ValueError("Context was not opened for a canvas")
        return Canvas(canvas_id=self.canvas_id, bounds=self.bounds, occupied=list(self.occupied))

    def extent(self, content_id: str) -> ContentExtent:
        if content_id not in self._extents:
            self._extents[content_id] = self.host.query_content_extent(content_id)
        return self._extents[content_id]

    def content_item(self, content_id: str) -> ContentItem:
        """Build a ContentItem from host queries.

        Raises:
            NotFoundError: If the content does not exist.
        """
        extent = self.extent(content_id)
        state = (
            PlacementState.PLACED if self.host.is_placed(content_id) else PlacementState.UNPLACED
        )
        return ContentItem(
            item_id=content_id,
            extent=extent,
            kind=self.host.query_content_kind(content_id),
            state=state,
        )
