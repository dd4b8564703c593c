"""
Instrumented Primitives for the Divide & Conquer Algorithm Benchmarks.

Every element comparison and exchange in the algorithms goes through
less() and swap() so that the recorded counts are exact and comparable
across algorithms.
"""

from typing import List, Optional

from analysis.metrics import AlgorithmMetrics


# Ranges with hi <= lo + INSERTION_SORT_CUTOFF are insertion-sorted
INSERTION_SORT_CUTOFF = 16


class InvalidInputError(ValueError):
    """Raised before any mutation or recording when an algorithm gets bad input."""
    pass


def less(a: int, b: int, metrics: Optional[AlgorithmMetrics]) -> bool:
    """
    Compare two elements, recording one comparison.

    Args:
        a: Left operand
        b: Right operand
        metrics: Recorder, or None to skip recording

    Returns:
        True if a < b
    """
    if metrics is not None:
        metrics.record_comparison()
    return a < b


def swap(buffer: List[int], i: int, j: int, metrics: Optional[AlgorithmMetrics]) -> None:
    """
    Exchange buffer[i] and buffer[j], recording one swap.

    Args:
        buffer: Element buffer
        i: First index
        j: Second index
        metrics: Recorder, or None to skip recording
    """
    if metrics is not None:
        metrics.record_swap()
    buffer[i], buffer[j] = buffer[j], buffer[i]


def insertion_sort(buffer: List[int], lo: int, hi: int, metrics: AlgorithmMetrics) -> None:
    """
    Sort buffer[lo..hi] (inclusive) by adjacent swaps.

    Stable: an element only moves left past strictly greater neighbours.
    """
    for i in range(lo + 1, hi + 1):
        j = i
        while j > lo and less(buffer[j], buffer[j - 1], metrics):
            swap(buffer, j, j - 1, metrics)
            j -= 1


def partition(buffer: List[int], lo: int, hi: int, metrics: AlgorithmMetrics) -> int:
    """
    Two-pointer partition of buffer[lo..hi] around the pivot at buffer[lo].

    Both scans stop on elements equal to the pivot, which keeps heavily
    duplicated ranges balanced.

    Returns:
        Final pivot index j, with buffer[lo..j-1] <= pivot <= buffer[j+1..hi]
    """
    pivot = buffer[lo]
    i = lo + 1
    j = hi

    while True:
        while i <= j and less(buffer[i], pivot, metrics):
            i += 1
        while j >= i and less(pivot, buffer[j], metrics):
            j -= 1

        if i >= j:
            break
        swap(buffer, i, j, metrics)
        i += 1
        j -= 1

    swap(buffer, lo, j, metrics)
    return j


def validate_buffer(buffer: Optional[List[int]], algorithm: str) -> None:
    """Reject a missing buffer."""
    if buffer is None:
        raise InvalidInputError(f"{algorithm}: buffer must not be None")
