"""
Merge Sort for the Divide & Conquer Algorithm Benchmarks.

Top-down merge sort with an insertion-sort base case, a skip-merge fast
path for already ordered halves, and one auxiliary buffer per call.
"""

from typing import List

from analysis.metrics import AlgorithmMetrics
from algorithms.primitives import (
    INSERTION_SORT_CUTOFF,
    insertion_sort,
    less,
    validate_buffer,
)


def merge_sort(buffer: List[int], metrics: AlgorithmMetrics) -> List[int]:
    """
    Sort buffer in place, ascending and stable.

    Algorithm:
    1. Allocate one auxiliary buffer of length n (reused by every merge)
    2. Recursively split [lo, hi] at the midpoint
    3. Ranges of at most INSERTION_SORT_CUTOFF + 1 elements are insertion-sorted
    4. If buffer[mid] <= buffer[mid + 1] the range is already ordered: skip merge
    5. Otherwise copy [lo, hi] into the auxiliary buffer and merge back

    On sorted input step 4 fires at every level, so the merge phase costs a
    single comparison per internal node: O(n) instead of O(n log n).

    Time Complexity: O(n log n), Space: O(n) auxiliary

    Args:
        buffer: Integer list, sorted in place
        metrics: Recorder threaded through the whole call tree

    Returns:
        The same list, sorted

    Raises:
        InvalidInputError: If buffer is None
    """
    validate_buffer(buffer, "merge_sort")
    n = len(buffer)
    if n <= 1:
        return buffer

    metrics.start_timing()
    aux = [0] * n
    metrics.record_allocation(n)
    _sort(buffer, aux, 0, n - 1, metrics)
    metrics.end_timing()
    return buffer


def _sort(buffer: List[int], aux: List[int], lo: int, hi: int, metrics: AlgorithmMetrics) -> None:
    metrics.enter_recursion()

    if hi <= lo + INSERTION_SORT_CUTOFF:
        insertion_sort(buffer, lo, hi, metrics)
        metrics.exit_recursion()
        return

    mid = lo + (hi - lo) // 2
    _sort(buffer, aux, lo, mid, metrics)
    _sort(buffer, aux, mid + 1, hi, metrics)

    # Halves already in order
    if not less(buffer[mid + 1], buffer[mid], metrics):
        metrics.exit_recursion()
        return

    _merge(buffer, aux, lo, mid, hi, metrics)
    metrics.exit_recursion()


def _merge(
    buffer: List[int],
    aux: List[int],
    lo: int,
    mid: int,
    hi: int,
    metrics: AlgorithmMetrics
) -> None:
    """Merge sorted runs buffer[lo..mid] and buffer[mid+1..hi] through aux."""
    aux[lo:hi + 1] = buffer[lo:hi + 1]

    i = lo
    j = mid + 1
    for k in range(lo, hi + 1):
        if i > mid:
            buffer[k] = aux[j]
            j += 1
        elif j > hi:
            buffer[k] = aux[i]
            i += 1
        elif less(aux[j], aux[i], metrics):
            # Take from the right only when strictly smaller (stability)
            buffer[k] = aux[j]
            j += 1
        else:
            buffer[k] = aux[i]
            i += 1
