"""Core 2D geometry value objects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    """2D point in canvas coordinates (origin at bottom-left)."""

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> "Point2D":
        """Return a new point shifted by (dx, dy)."""
        return Point2D(self.x + dx, self.y + dy)

    def distance_to(self, other: "Point2D") -> float:
        """Euclidean distance to another point."""
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas units.

    Attributes:
        min_x: Left edge.
        min_y: Bottom edge.
        max_x: Right edge.
        max_y: Top edge.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        if self.max_x <= self.min_x:
            raise ValueError("max_x must be greater than min_x")
        if self.max_y <= self.min_y:
            raise ValueError("max_y must be greater than min_y")

    @classmethod
    def from_center(cls, center: Point2D, width: float, height: float) -> "Rect":
        """Build a rectangle of the given size centered on a point."""
        return cls(
            min_x=center.x - width / 2,
            min_y=center.y - height / 2,
            max_x=center.x + width / 2,
            max_y=center.y + height / 2,
        )

    @classmethod
    def from_origin(cls, x: float, y: float, width: float, height: float) -> "Rect":
        """Build a rectangle from its bottom-left corner and size."""
        return cls(min_x=x, min_y=y, max_x=x + width, max_y=y + height)

    @staticmethod
    def is_valid(min_x: float, min_y: float, max_x: float, max_y: float) -> bool:
        """Check whether the given edges describe a non-degenerate rectangle."""
        return max_x > min_x and max_y > min_y

    @property
    def width(self) -> float:
        """Width of the rectangle."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Height of the rectangle."""
        return self.max_y - self.min_y

    @property
    def area(self) -> float:
        """Area of the rectangle."""
        return self.width * self.height

    @property
    def center(self) -> Point2D:
        """Midpoint of the rectangle."""
        return Point2D((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    def expand(self, amount: float) -> "Rect":
        """Grow the rectangle by ``amount`` on all four sides."""
        return Rect(
            self.min_x - amount,
            self.min_y - amount,
            self.max_x + amount,
            self.max_y + amount,
        )

    def shrink(self, amount: float) -> "Rect":
        """Shrink the rectangle by ``amount`` on all four sides.

        Raises:
            ValueError: If the result would be degenerate.
        """
        return self.expand(-amount)

    def union(self, other: "Rect") -> "Rect":
        """Smallest rectangle containing both rectangles."""
        return Rect(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def contains(self, other: "Rect") -> bool:
        """Check if ``other`` lies entirely inside this rectangle."""
        return (
            other.min_x >= self.min_x
            and other.min_y >= self.min_y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )

    def overflow_beyond(self, container: "Rect") -> "EdgeOverflow":
        """How far this rectangle sticks out of ``container`` on each side."""
        return EdgeOverflow(
            left=max(0.0, container.min_x - self.min_x),
            right=max(0.0, self.max_x - container.max_x),
            bottom=max(0.0, container.min_y - self.min_y),
            top=max(0.0, self.max_y - container.max_y),
        )

    def contains_point(self, point: Point2D) -> bool:
        """Check if a point lies inside or on the edge of this rectangle."""
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def to_dict(self) -> dict[str, float]:
        """Serialize edges to a plain dictionary."""
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
        }


@dataclass(frozen=True)
class Footprint:
    """On-canvas width and height a content item occupies."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Footprint dimensions must be positive")

    @property
    def area(self) -> float:
        """Footprint area in square canvas units."""
        return self.width * self.height


@dataclass(frozen=True)
class EdgeOverflow:
    """Distance a rectangle extends past a container, per side.

    All values are zero or positive; zero means that side is inside.
    """

    left: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    top: float = 0.0

    @property
    def has_overflow(self) -> bool:
        return max(self.left, self.right, self.bottom, self.top) > 0

    def to_dict(self) -> dict[str, float]:
        return {"left": self.left, "right": self.right, "bottom": self.bottom, "top": self.top}
