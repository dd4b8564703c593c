"""
Point model for the Divide & Conquer Algorithm Benchmarks.

Represents an immutable point in the plane for the closest pair algorithm.
"""

from dataclasses import dataclass
import math


@dataclass(frozen=True, order=True)
class Point:
    """
    Represents a 2-D point.

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate

    Equality is exact on both coordinates (no epsilon); ordering is
    lexicographic on (x, y).
    """
    x: float
    y: float

    def __post_init__(self):
        """Validate coordinates."""
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Point coordinates must be finite, got ({self.x}, {self.y})")

    def distance_to(self, other: "Point") -> float:
        """
        Euclidean distance to another point.

        Coincident points give 0.0.
        """
        return math.hypot(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"
