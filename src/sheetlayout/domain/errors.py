"""Domain exceptions for sheet layout.

Only host-boundary failures and invalid caller input are errors. Geometry
that cannot be resolved falls back to documented defaults instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .value_objects import LayoutPlan


class LayoutError(Exception):
    """Base class for sheet layout errors."""


class NotFoundError(LayoutError):
    """Raised when a canvas, content item or zone id is unknown.

    Attributes:
        kind: What was looked up ("canvas", "content", "zone", ...).
        identifier: The id that could not be found.
    """

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind.capitalize()} not found: {identifier}")


class DegenerateInputError(LayoutError):
    """Raised for requests that cannot describe any layout.

    Examples are zero items, non-positive sizes, or a column override
    below one.

    Attributes:
        message: Human-readable description.
        field: Name of the offending input, if known.
        errors: All validation messages collected for the request.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[str] | None = None,
    ) -> None:
        self.message = message
        self.field = field
        self.errors = errors or [message]
        super().__init__(message)


class OverflowRejectedError(LayoutError):
    """Raised under the reject overflow policy when items exceed their cells."""

    def __init__(self, plan: "LayoutPlan") -> None:
        self.plan = plan
        super().__init__(
            f"Items do not fit a {plan.columns}x{plan.rows} grid "
            f"(cell {plan.cell_width:.3f}x{plan.cell_height:.3f}, "
            f"largest item {plan.max_footprint.width:.3f}x{plan.max_footprint.height:.3f})"
        )
