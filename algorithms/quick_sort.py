"""
Quick Sort for the Divide & Conquer Algorithm Benchmarks.

Randomized in-place quick sort with an up-front shuffle, insertion-sort
base case and tail-call elimination on the larger partition.
"""

from typing import List, Optional

import numpy as np

from analysis.metrics import AlgorithmMetrics
from algorithms.primitives import (
    INSERTION_SORT_CUTOFF,
    insertion_sort,
    partition,
    swap,
    validate_buffer,
)


def quick_sort(
    buffer: List[int],
    metrics: AlgorithmMetrics,
    rng: Optional[np.random.Generator] = None
) -> List[int]:
    """
    Sort buffer in place, ascending (not stable).

    Algorithm:
    1. Shuffle once (Fisher-Yates, instrumented swaps) to defeat inputs
       crafted against a fixed pivot rule
    2. While the active range is larger than the cutoff:
       - pick a uniformly random pivot index in [lo, hi], swap it to lo
       - partition; the pivot lands at its final sorted position p
       - recurse into the smaller side, then narrow [lo, hi] to the larger
         side and loop
    3. Finish small ranges with insertion sort

    Recursing only into the smaller side halves the range at every nested
    call, so recorded depth is at most floor(log2(n)) + 1. Inputs that reach
    the insertion-sort cutoff directly still count one level, as in merge sort.

    Time Complexity: O(n log n) expected

    Args:
        buffer: Integer list, sorted in place
        metrics: Recorder threaded through the whole call tree
        rng: Seedable random source; a fresh default_rng() when omitted

    Returns:
        The same list, sorted

    Raises:
        InvalidInputError: If buffer is None
    """
    validate_buffer(buffer, "quick_sort")
    n = len(buffer)
    if n <= 1:
        return buffer

    if rng is None:
        rng = np.random.default_rng()

    metrics.start_timing()
    _shuffle(buffer, rng, metrics)
    _sort(buffer, 0, n - 1, metrics, rng)
    metrics.end_timing()
    return buffer


def _shuffle(buffer: List[int], rng: np.random.Generator, metrics: AlgorithmMetrics) -> None:
    """Uniform random permutation in place."""
    n = len(buffer)
    # j_i uniform in [0, i] for i = n-1 .. 1
    targets = rng.integers(0, np.arange(n, 1, -1))
    for i, j in zip(range(n - 1, 0, -1), targets):
        swap(buffer, i, int(j), metrics)


def _sort(
    buffer: List[int],
    lo: int,
    hi: int,
    metrics: AlgorithmMetrics,
    rng: np.random.Generator
) -> None:
    # One level per call; the loop over the larger side stays at this depth
    metrics.enter_recursion()

    while hi > lo:
        if hi <= lo + INSERTION_SORT_CUTOFF:
            insertion_sort(buffer, lo, hi, metrics)
            break

        pivot_index = int(rng.integers(lo, hi + 1))
        swap(buffer, lo, pivot_index, metrics)

        p = partition(buffer, lo, hi, metrics)

        if p - lo < hi - p:
            if p - 1 > lo:
                _sort(buffer, lo, p - 1, metrics, rng)
            lo = p + 1
        else:
            if hi > p + 1:
                _sort(buffer, p + 1, hi, metrics, rng)
            hi = p - 1

    metrics.exit_recursion()
