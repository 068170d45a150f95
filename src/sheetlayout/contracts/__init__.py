"""Contracts module - protocols for the host document boundary.

By depending on these protocols rather than a concrete host, the
application layer stays testable against the in-memory snapshot host.

Example:
    ```python
    from sheetlayout.contracts import HostDocumentProtocol

    def occupied_count(host: HostDocumentProtocol, canvas_id: str) -> int:
        return len(host.query_occupied_regions(canvas_id))
    ```
"""

from .protocols import (
    HostDocumentProtocol as HostDocumentProtocol,
    PlacementTransaction as PlacementTransaction,
)

__all__ = [
    "HostDocumentProtocol",
    "PlacementTransaction",
]
