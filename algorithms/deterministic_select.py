"""
Deterministic Select for the Divide & Conquer Algorithm Benchmarks.

Median-of-medians selection of the k-th order statistic in worst-case
linear time.
"""

from numbers import Integral
from typing import List

from analysis.metrics import AlgorithmMetrics
from algorithms.primitives import (
    InvalidInputError,
    insertion_sort,
    partition,
    swap,
    validate_buffer,
)


GROUP_SIZE = 5


def deterministic_select(buffer: List[int], k: int, metrics: AlgorithmMetrics) -> int:
    """
    Return the value that would sit at index k after an ascending sort.

    Algorithm (median of medians, groups of 5):
    1. Ranges of at most 5 elements are insertion-sorted and indexed directly
    2. Insertion-sort each group of 5 (the last may be shorter) and collect
       the group medians into a new list
    3. Recursively select the median of that list as the pivot value
    4. Move the first occurrence of the pivot value (scanning up from lo) to
       lo and partition around it
    5. Recurse into the side holding rank k, shifting k when going right

    The pivot is larger than roughly 3/10 of the range and smaller than
    another 3/10, so each round discards a fixed fraction: O(n) worst case.

    The buffer is left partially reordered.

    Args:
        buffer: Integer list (reordered in place)
        k: 0-based rank, 0 <= k < len(buffer)
        metrics: Recorder threaded through the whole call tree

    Returns:
        The k-th smallest value

    Raises:
        InvalidInputError: If buffer is None or k is out of range
    """
    validate_buffer(buffer, "deterministic_select")
    if isinstance(k, bool) or not isinstance(k, Integral):
        raise InvalidInputError(f"deterministic_select: rank must be an integer, got {k!r}")
    k = int(k)
    if k < 0 or k >= len(buffer):
        raise InvalidInputError(
            f"deterministic_select: rank {k} out of range for buffer of length {len(buffer)}"
        )

    metrics.start_timing()
    result = _select(buffer, 0, len(buffer) - 1, k, metrics)
    metrics.end_timing()
    return result


def _select(buffer: List[int], lo: int, hi: int, k: int, metrics: AlgorithmMetrics) -> int:
    """Select rank k (relative to lo) within buffer[lo..hi]."""
    metrics.enter_recursion()

    n = hi - lo + 1

    if n <= GROUP_SIZE:
        insertion_sort(buffer, lo, hi, metrics)
        metrics.exit_recursion()
        return buffer[lo + k]

    num_groups = (n + GROUP_SIZE - 1) // GROUP_SIZE
    medians = [0] * num_groups
    metrics.record_allocation(num_groups)

    for g in range(num_groups):
        start = lo + g * GROUP_SIZE
        end = min(start + GROUP_SIZE - 1, hi)
        insertion_sort(buffer, start, end, metrics)
        medians[g] = buffer[start + (end - start) // 2]

    pivot_value = _select(medians, 0, num_groups - 1, num_groups // 2, metrics)

    # First occurrence from lo; keeps duplicate-heavy inputs deterministic
    pivot_index = lo
    while buffer[pivot_index] != pivot_value:
        pivot_index += 1

    swap(buffer, lo, pivot_index, metrics)
    p = partition(buffer, lo, hi, metrics)
    rank = p - lo

    if k == rank:
        result = buffer[p]
    elif k < rank:
        result = _select(buffer, lo, p - 1, k, metrics)
    else:
        result = _select(buffer, p + 1, hi, k - rank - 1, metrics)

    metrics.exit_recursion()
    return result
