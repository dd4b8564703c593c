"""
Sorting Tests - Merge Sort and Quick Sort

Tests correctness, stability, fast paths, recursion depth and
instrumentation of both sorts and their shared primitives.
"""

import sys
import math
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import numpy as np

from algorithms.merge_sort import merge_sort
from algorithms.quick_sort import quick_sort
from algorithms.primitives import InvalidInputError, insertion_sort, less, partition, swap
from analysis.metrics import AlgorithmMetrics
from utils.array_utils import (
    generate_few_unique_array,
    generate_random_array,
    generate_reverse_sorted_array,
    generate_sorted_array,
    is_sorted,
)


class Tagged:
    """Integer value with a tag that ordering ignores."""

    def __init__(self, value: int, tag: int):
        self.value = value
        self.tag = tag

    def __lt__(self, other: "Tagged") -> bool:
        return self.value < other.value


def test_primitives_record():
    """less() and swap() record one event each and behave like < and exchange."""
    print("\n" + "="*60)
    print("TEST 1: Instrumented Primitives")
    print("="*60)

    metrics = AlgorithmMetrics()
    assert less(1, 2, metrics) is True
    assert less(2, 2, metrics) is False
    assert metrics.comparisons == 2

    buf = [1, 2, 3]
    swap(buf, 0, 2, metrics)
    assert buf == [3, 2, 1]
    assert metrics.swaps == 1

    # None skips recording
    assert less(0, 1, None)
    swap(buf, 0, 1, None)
    assert buf == [2, 3, 1]
    print("  ✓ less/swap recorded exactly once per call")


def test_insertion_sort_and_partition():
    """Shared helpers sort a sub-range and place the pivot finally."""
    rng = np.random.default_rng(11)
    metrics = AlgorithmMetrics()

    buf = [9, 5, 4, 3, 8, 1, 7]
    insertion_sort(buf, 1, 5, metrics)
    assert buf == [9, 1, 3, 4, 5, 8, 7], "only [1..5] is sorted"

    for _ in range(200):
        n = int(rng.integers(1, 40))
        buf = rng.integers(0, 6, size=n).tolist()
        pivot = buf[0]
        p = partition(buf, 0, n - 1, metrics)
        assert buf[p] == pivot
        assert all(v <= pivot for v in buf[:p])
        assert all(v >= pivot for v in buf[p + 1:])
    print("  ✓ Partition leaves pivot at its final sorted position")


def test_sorts_match_sorted():
    """Both sorts output a non-descending permutation of the input."""
    print("\n" + "="*60)
    print("TEST 2: Sort Correctness")
    print("="*60)

    rng = np.random.default_rng(2024)
    for trial in range(300):
        n = int(rng.integers(0, 300))
        if trial % 3 == 0:
            data = generate_random_array(n, rng)
        elif trial % 3 == 1:
            data = generate_few_unique_array(n, rng, distinct=3)
        else:
            data = rng.integers(-1000, 1000, size=n).tolist()

        expected = sorted(data)

        merged = list(data)
        assert merge_sort(merged, AlgorithmMetrics()) is merged
        assert merged == expected, f"merge_sort trial {trial}"

        quick = list(data)
        assert quick_sort(quick, AlgorithmMetrics(), rng) is quick
        assert quick == expected, f"quick_sort trial {trial}"

    for n in (2, 17, 18, 1000):
        for data in (generate_sorted_array(n), generate_reverse_sorted_array(n)):
            m = list(data)
            q = list(data)
            merge_sort(m, AlgorithmMetrics())
            quick_sort(q, AlgorithmMetrics(), rng)
            assert is_sorted(m) and is_sorted(q)
            assert sorted(data) == m == q
    print("  ✓ 300 random trials plus sorted/reverse inputs")


def test_merge_sort_stable():
    """Equal values keep their input order."""
    print("\n" + "="*60)
    print("TEST 3: Merge Sort Stability")
    print("="*60)

    rng = np.random.default_rng(5)
    values = rng.integers(0, 5, size=400).tolist()
    items = [Tagged(v, i) for i, v in enumerate(values)]

    merge_sort(items, AlgorithmMetrics())

    assert [t.value for t in items] == sorted(values)
    for a, b in zip(items, items[1:]):
        if a.value == b.value:
            assert a.tag < b.tag, "equal elements reordered"
    print("  ✓ Tagged duplicates preserve relative order")


def test_merge_sort_skips_merges_on_sorted_input():
    """Sorted input: linear comparisons, no swaps, contents unchanged."""
    print("\n" + "="*60)
    print("TEST 4: Merge Sort Skip-Merge Fast Path")
    print("="*60)

    n = 4096
    data = generate_sorted_array(n)
    metrics = AlgorithmMetrics()
    merge_sort(data, metrics)

    assert data == generate_sorted_array(n), "sorting sorted input must be a no-op"
    assert metrics.swaps == 0
    # n-1 insertion probes in the leaves at most, plus one per internal node
    assert metrics.comparisons < 2 * n, f"{metrics.comparisons} comparisons is not O(n)"
    assert metrics.comparisons < n * math.log2(n) / 4
    assert metrics.allocations == n
    print(f"  ✓ {metrics.comparisons} comparisons for n={n}")

    # Idempotence: a second pass leaves contents alone but still counts
    before = metrics.comparisons
    merge_sort(data, metrics)
    assert data == generate_sorted_array(n)
    assert metrics.comparisons == 2 * before

    reverse = generate_reverse_sorted_array(n)
    reverse_metrics = AlgorithmMetrics()
    merge_sort(reverse, reverse_metrics)
    assert reverse == sorted(reverse)
    assert reverse_metrics.comparisons > metrics.comparisons // 2


def test_trivial_inputs():
    """Empty and single-element buffers return at once with nothing recorded."""
    for sorter in (merge_sort, lambda b, m: quick_sort(b, m, np.random.default_rng(0))):
        for data in ([], [42]):
            metrics = AlgorithmMetrics()
            buf = list(data)
            sorter(buf, metrics)
            assert buf == data
            assert metrics.comparisons == 0
            assert metrics.swaps == 0
            assert metrics.allocations == 0
            assert metrics.max_depth == 0


def test_invalid_buffer():
    """None buffers are rejected before anything is recorded."""
    for sorter in (merge_sort, quick_sort):
        metrics = AlgorithmMetrics()
        try:
            sorter(None, metrics)
            assert False, "Should have raised InvalidInputError"
        except InvalidInputError:
            pass
        assert metrics.to_dict()["comparisons"] == 0
        assert metrics.start_ns is None


def test_quick_sort_depth_bound():
    """Random inputs stay within 2*log2(n) + 10 recursion levels."""
    print("\n" + "="*60)
    print("TEST 5: Quick Sort Recursion Depth")
    print("="*60)

    rng = np.random.default_rng(99)
    for n in (100, 1000, 10000):
        bound = 2 * math.floor(math.log2(n)) + 10
        for _ in range(5):
            data = generate_random_array(n, rng)
            metrics = AlgorithmMetrics()
            quick_sort(data, metrics, rng)
            assert is_sorted(data)
            assert metrics.current_depth == 0
            assert 1 <= metrics.max_depth <= bound, \
                f"n={n}: depth {metrics.max_depth} exceeds {bound}"
        print(f"  ✓ n={n}: depth {metrics.max_depth} <= {bound}")


def test_small_inputs_count_one_level():
    """Both sorts record depth 1 when the whole input is one insertion-sort leaf."""
    rng = np.random.default_rng(6)
    for n in (2, 5, 17):
        data = generate_random_array(n, rng)

        merge_metrics = AlgorithmMetrics()
        merge_sort(list(data), merge_metrics)
        quick_metrics = AlgorithmMetrics()
        quick_sort(list(data), quick_metrics, rng)

        assert merge_metrics.max_depth == 1
        assert quick_metrics.max_depth == merge_metrics.max_depth
        assert quick_metrics.current_depth == 0

    # Smaller-side recursion halves the range at each nested call
    n = 1000
    metrics = AlgorithmMetrics()
    quick_sort(generate_random_array(n, rng), metrics, rng)
    assert 2 <= metrics.max_depth <= math.floor(math.log2(n)) + 1


def test_quick_sort_reproducible_with_seed():
    """Same seed, same permutation choices, same counts."""
    data = generate_random_array(2000, np.random.default_rng(1))

    first = AlgorithmMetrics()
    second = AlgorithmMetrics()
    quick_sort(list(data), first, np.random.default_rng(123))
    quick_sort(list(data), second, np.random.default_rng(123))

    assert first.comparisons == second.comparisons
    assert first.swaps == second.swaps
    assert first.max_depth == second.max_depth
    # Shuffle alone accounts for n-1 swaps
    assert first.swaps >= len(data) - 1


def test_depth_returns_to_zero():
    """Every completed top-level call leaves current_depth at 0."""
    rng = np.random.default_rng(3)
    data = generate_random_array(500, rng)

    metrics = AlgorithmMetrics()
    merge_sort(list(data), metrics)
    assert metrics.current_depth == 0
    assert metrics.max_depth >= 1

    metrics = AlgorithmMetrics()
    quick_sort(list(data), metrics, rng)
    assert metrics.current_depth == 0
    assert metrics.max_depth >= 1


def main():
    """Run all sorting tests."""
    try:
        test_primitives_record()
        test_insertion_sort_and_partition()
        test_sorts_match_sorted()
        test_merge_sort_stable()
        test_merge_sort_skips_merges_on_sorted_input()
        test_trivial_inputs()
        test_invalid_buffer()
        test_quick_sort_depth_bound()
        test_small_inputs_count_one_level()
        test_quick_sort_reproducible_with_seed()
        test_depth_returns_to_zero()
        print("\n✅ Sorting Tests PASSED")
        return 0
    except AssertionError as e:
        print(f"\n❌ TEST FAILED: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
