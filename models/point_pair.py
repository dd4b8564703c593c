"""
Point pair model for the Divide & Conquer Algorithm Benchmarks.

Holds two points and their distance, computed once.
"""

from dataclasses import dataclass, field

from models.point import Point


@dataclass(frozen=True, eq=False)
class PointPair:
    """
    Unordered pair of points with their precomputed Euclidean distance.

    Attributes:
        p1: First point
        p2: Second point
        distance: p1.distance_to(p2), fixed at construction

    Two pairs are equal when they hold the same points in either order.
    """
    p1: Point
    p2: Point
    distance: float = field(init=False)

    def __post_init__(self):
        """Compute the distance once."""
        object.__setattr__(self, "distance", self.p1.distance_to(self.p2))

    def __eq__(self, other) -> bool:
        if not isinstance(other, PointPair):
            return NotImplemented
        return (
            (self.p1 == other.p1 and self.p2 == other.p2)
            or (self.p1 == other.p2 and self.p2 == other.p1)
        )

    def __hash__(self) -> int:
        return hash(frozenset((self.p1, self.p2)))

    def __str__(self) -> str:
        return f"PointPair{{{self.p1} <-> {self.p2}, distance={self.distance:.6f}}}"
