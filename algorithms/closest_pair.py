"""
Closest Pair Algorithm for the Divide & Conquer Algorithm Benchmarks.

Implements the O(n log n) planar divide-and-conquer nearest pair search
with a bounded strip scan, plus the O(n^2) brute-force reference.
"""

from functools import cmp_to_key
from typing import Callable, List, Optional, Sequence

from analysis.metrics import AlgorithmMetrics
from algorithms.primitives import InvalidInputError, less
from models.point import Point
from models.point_pair import PointPair


BRUTE_FORCE_CUTOFF = 3

# A point in the strip is compared with at most this many successors
STRIP_NEIGHBOURS = 7


def find_closest_pair(points: Sequence[Point], metrics: AlgorithmMetrics) -> PointPair:
    """
    Find the pair of points with minimum Euclidean distance.

    Algorithm:
    1. Copy and sort once by (x, y) -> px, once by (y, x) -> py
    2. Ranges of at most 3 points are solved by brute force
    3. Split px at its midpoint; split py into matching left/right y-sorted
       lists in one linear pass
    4. Solve both halves; d = the smaller distance
    5. Strip = points of py within d of the dividing line, in y order
    6. Compare each strip point with at most the next 7 strip points

    Step 6 is exact: inside a d x 2d box straddling the line each half can
    hold at most 4 points that are pairwise >= d apart, so no strip point
    has more than 7 candidates above it.

    Time Complexity: O(n log n)

    Args:
        points: At least two points (not modified)
        metrics: Recorder threaded through the whole call tree

    Returns:
        Closest PointPair (distance 0.0 for coincident points)

    Raises:
        InvalidInputError: If fewer than 2 points are given
    """
    px = _prepare_points(points, "find_closest_pair")
    n = len(px)

    metrics.start_timing()

    metrics.record_allocation(n)
    px.sort(key=cmp_to_key(_comparator(lambda p: p, metrics)))

    py = list(px)
    metrics.record_allocation(n)
    py.sort(key=cmp_to_key(_comparator(lambda p: (p.y, p.x), metrics)))

    result = _closest(px, py, 0, n - 1, metrics)
    metrics.end_timing()
    return result


def find_closest_distance(points: Sequence[Point], metrics: AlgorithmMetrics) -> float:
    """Distance between the closest pair of points."""
    return find_closest_pair(points, metrics).distance


def brute_force_closest_pair(
    points: Sequence[Point],
    metrics: Optional[AlgorithmMetrics] = None
) -> PointPair:
    """
    O(n^2) reference: examine every pair.

    Args:
        points: At least two points
        metrics: Optional recorder

    Returns:
        Closest PointPair

    Raises:
        InvalidInputError: If fewer than 2 points are given
    """
    pts = _prepare_points(points, "brute_force_closest_pair")

    if metrics is not None:
        metrics.start_timing()
    result = _brute_force(pts, 0, len(pts) - 1, metrics)
    if metrics is not None:
        metrics.end_timing()
    return result


def _closest(
    px: List[Point],
    py: List[Point],
    lo: int,
    hi: int,
    metrics: AlgorithmMetrics
) -> PointPair:
    """Closest pair among px[lo..hi]; py holds the same points sorted by (y, x)."""
    metrics.enter_recursion()

    n = hi - lo + 1

    if n <= BRUTE_FORCE_CUTOFF:
        result = _brute_force(px, lo, hi, metrics)
        metrics.exit_recursion()
        return result

    mid = lo + (hi - lo) // 2
    mid_point = px[mid]

    # Copies of mid_point that belong to the left half
    left_ties = 0
    i = mid
    while i >= lo and px[i] == mid_point:
        left_ties += 1
        i -= 1

    pyl: List[Point] = []
    pyr: List[Point] = []
    metrics.record_allocation(len(py))
    for p in py:
        if less(p, mid_point, metrics):
            pyl.append(p)
        elif p == mid_point and left_ties > 0:
            pyl.append(p)
            left_ties -= 1
        else:
            pyr.append(p)

    left = _closest(px, pyl, lo, mid, metrics)
    right = _closest(px, pyr, mid + 1, hi, metrics)

    min_pair = left if left.distance <= right.distance else right
    min_dist = min_pair.distance

    strip = [p for p in py if abs(p.x - mid_point.x) < min_dist]
    metrics.record_allocation(len(strip))

    strip_pair = _closest_in_strip(strip, min_dist, metrics)

    if strip_pair is not None and strip_pair.distance < min_dist:
        result = strip_pair
    else:
        result = min_pair

    metrics.exit_recursion()
    return result


def _brute_force(
    points: List[Point],
    lo: int,
    hi: int,
    metrics: Optional[AlgorithmMetrics]
) -> PointPair:
    best: Optional[PointPair] = None
    best_dist = float("inf")

    for i in range(lo, hi + 1):
        for j in range(i + 1, hi + 1):
            dist = points[i].distance_to(points[j])
            if less(dist, best_dist, metrics):
                best_dist = dist
                best = PointPair(points[i], points[j])

    return best


def _closest_in_strip(
    strip: List[Point],
    min_dist: float,
    metrics: AlgorithmMetrics
) -> Optional[PointPair]:
    """Closest pair in a y-sorted strip closer than min_dist, or None."""
    closest = None
    size = len(strip)

    for i in range(size):
        for j in range(i + 1, min(i + 1 + STRIP_NEIGHBOURS, size)):
            if strip[j].y - strip[i].y >= min_dist:
                break

            dist = strip[i].distance_to(strip[j])
            if less(dist, min_dist, metrics):
                min_dist = dist
                closest = PointPair(strip[i], strip[j])

    return closest


def _comparator(key: Callable, metrics: AlgorithmMetrics) -> Callable[[Point, Point], int]:
    """Three-way comparator on key(p) counting one comparison per call."""
    def compare(a: Point, b: Point) -> int:
        ka = key(a)
        kb = key(b)
        if less(ka, kb, metrics):
            return -1
        return 0 if ka == kb else 1
    return compare


def _as_point(p) -> Point:
    """Accept Point instances or (x, y) pairs."""
    if isinstance(p, Point):
        return p
    x, y = p
    return Point(float(x), float(y))


def _prepare_points(points: Optional[Sequence[Point]], algorithm: str) -> List[Point]:
    """
    Validate and copy the input into a list of Points.

    Raises:
        InvalidInputError: Fewer than 2 points, or an element that is not a
            finite (x, y) point
    """
    if points is None or len(points) < 2:
        count = 0 if points is None else len(points)
        raise InvalidInputError(f"{algorithm}: need at least 2 points, got {count}")

    prepared = []
    for index, p in enumerate(points):
        try:
            prepared.append(_as_point(p))
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"{algorithm}: invalid point at index {index}: {e}") from e
    return prepared
