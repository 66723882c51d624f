"""Core geometric types for flattened glyph outlines.

This module defines the fundamental ring types produced by the outline parser:
- Ring: A closed sequence of 2D points approximating one sub-path
- WindingDirection: Enum for ring winding direction
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

Coordinate = tuple[float, float]


class WindingDirection(Enum):
    """Ring winding direction.

    Glyph rings are evaluated with Y growing upward (font convention after
    the display flip is undone):
    - Outer boundaries wind clockwise
    - Holes wind counter-clockwise
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass
class Ring:
    """A closed ring of flattened outline points.

    Attributes:
        points: Ordered (x, y) coordinates; the first point is repeated at the
            end when the ring is closed
    """

    points: list[Coordinate]
    _cached_area: float | None = field(default=None, repr=False, init=False)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        The sign of the area indicates winding direction:
        - Positive area: counter-clockwise winding
        - Negative area: clockwise winding

        Result is cached for efficiency.

        Returns:
            Signed area of the ring
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.points)
        if n < 3:
            self._cached_area = 0.0
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i][0] * self.points[j][1]
            area -= self.points[j][0] * self.points[i][1]

        self._cached_area = area / 2.0
        return self._cached_area

    @property
    def direction(self) -> WindingDirection:
        """Winding direction derived from the signed area.

        Zero-area rings report counter-clockwise.
        """
        if self.signed_area() < 0:
            return WindingDirection.CLOCKWISE
        return WindingDirection.COUNTER_CLOCKWISE

    def is_clockwise(self) -> bool:
        """Check if the ring winds clockwise (outer boundary)."""
        return self.direction == WindingDirection.CLOCKWISE

    def distinct_point_count(self) -> int:
        """Number of distinct coordinates in the ring."""
        return len(set(self.points))

    def is_degenerate(self) -> bool:
        """Check if the ring cannot bound an area (fewer than 3 distinct points)."""
        return self.distinct_point_count() < 3

    def reversed(self) -> "Ring":
        """Return a copy of this ring with opposite winding."""
        return Ring(points=list(reversed(self.points)))

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the ring.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.points:
            return (0.0, 0.0, 0.0, 0.0)

        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with the point list and winding direction
        """
        return {
            "points": [list(p) for p in self.points],
            "direction": self.direction.name.lower(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ring":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a ring

        Returns:
            Ring instance
        """
        return cls(points=[(float(p[0]), float(p[1])) for p in data["points"]])
