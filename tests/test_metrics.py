"""
Metrics Recorder Tests

Tests AlgorithmMetrics bookkeeping and MetricsCollector history/averages.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from analysis.metrics import AlgorithmMetrics, MetricsCollector, format_metrics_report
from utils.logger import BenchmarkLogger


def test_counters():
    """Each record_* call bumps exactly its own counter."""
    print("\n" + "="*60)
    print("TEST 1: Counters")
    print("="*60)

    metrics = AlgorithmMetrics(name="counters")
    metrics.record_comparison()
    metrics.record_comparison()
    metrics.record_swap()
    metrics.record_allocation(16)
    metrics.record_allocation(4)

    assert metrics.comparisons == 2
    assert metrics.swaps == 1
    assert metrics.allocations == 20
    assert metrics.max_depth == 0
    print("  ✓ comparisons=2 swaps=1 allocations=20")


def test_recursion_depth():
    """Max depth grows on enter only; current depth returns to zero."""
    print("\n" + "="*60)
    print("TEST 2: Recursion Depth")
    print("="*60)

    metrics = AlgorithmMetrics()
    metrics.enter_recursion()
    metrics.enter_recursion()
    metrics.exit_recursion()
    metrics.enter_recursion()
    metrics.enter_recursion()
    assert metrics.current_depth == 3
    assert metrics.max_depth == 3

    metrics.exit_recursion()
    metrics.exit_recursion()
    metrics.exit_recursion()
    assert metrics.current_depth == 0
    assert metrics.max_depth == 3
    print("  ✓ max_depth=3, current_depth back to 0")

    # Unmatched exit is clamped
    metrics.exit_recursion()
    assert metrics.current_depth == 0
    assert metrics.max_depth >= metrics.current_depth >= 0
    print("  ✓ Unmatched exit clamped at 0")


class RecordingLogger(BenchmarkLogger):
    """Keeps logged messages instead of printing them."""

    def __init__(self):
        super().__init__()
        self.messages = []

    def log(self, message: str, level: str = "info") -> None:
        self.messages.append((level, message))


def test_unmatched_exit_goes_to_logger():
    """The clamp warning reaches the recorder's logger, and nothing else."""
    logger = RecordingLogger()
    metrics = AlgorithmMetrics(name="quicksort", logger=logger)
    metrics.exit_recursion()
    assert metrics.current_depth == 0
    assert len(logger.messages) == 1
    level, message = logger.messages[0]
    assert level == "warning"
    assert "quicksort" in message

    collector = MetricsCollector(logger=logger)
    assert collector.start_collection("select").logger is logger

    # Without a logger the clamp is silent
    quiet = AlgorithmMetrics()
    quiet.exit_recursion()
    assert quiet.current_depth == 0 and quiet.logger is None


def test_timing():
    """Elapsed time is non-negative, and 0 when a mark is missing."""
    print("\n" + "="*60)
    print("TEST 3: Timing")
    print("="*60)

    metrics = AlgorithmMetrics()
    assert metrics.get_execution_time_ns() == 0

    metrics.end_timing()
    assert metrics.get_execution_time_ns() == 0, "end without start must read 0"
    print("  ✓ end_timing() without start_timing() reads 0")

    metrics.start_timing()
    assert metrics.get_execution_time_ns() == 0, "open window must read 0"
    sum(range(10000))
    metrics.end_timing()
    assert metrics.get_execution_time_ns() >= 0
    assert metrics.get_execution_time_ms() == metrics.get_execution_time_ns() / 1_000_000.0
    print(f"  ✓ Measured {metrics.get_execution_time_ns()} ns")


def test_reset():
    """reset() returns the recorder to its initial state."""
    metrics = AlgorithmMetrics(name="reset")
    metrics.start_timing()
    metrics.record_comparison()
    metrics.record_swap()
    metrics.record_allocation(3)
    metrics.enter_recursion()
    metrics.end_timing()

    metrics.reset()
    assert metrics.to_dict() == {
        "comparisons": 0, "swaps": 0, "allocations": 0, "max_depth": 0, "time_ns": 0
    }
    assert metrics.current_depth == 0
    assert metrics.name == "reset"


def test_collector_history_and_averages():
    """Collector keeps one history per algorithm and averages it."""
    print("\n" + "="*60)
    print("TEST 4: Metrics Collector")
    print("="*60)

    collector = MetricsCollector()
    assert collector.get_average_comparisons("mergesort") == 0.0
    assert collector.get_history("mergesort") == []

    for comparisons, depth in [(10, 2), (20, 4)]:
        metrics = collector.start_collection("mergesort")
        assert collector.get_current_metrics("mergesort") is metrics
        metrics.start_timing()
        for _ in range(comparisons):
            metrics.record_comparison()
        for _ in range(depth):
            metrics.enter_recursion()
        for _ in range(depth):
            metrics.exit_recursion()
        collector.end_collection("mergesort")

    assert len(collector.get_history("mergesort")) == 2
    assert collector.get_average_comparisons("mergesort") == 15.0
    assert collector.get_average_max_depth("mergesort") == 3.0
    assert collector.get_average_execution_time("mergesort") >= 0.0
    # end_collection closed the open timing windows
    assert all(m.end_ns is not None for m in collector.get_history("mergesort"))
    print("  ✓ avg comparisons=15.0, avg depth=3.0")

    collector.start_collection("select")
    collector.end_collection("select")
    assert set(collector.get_all_history()) == {"mergesort", "select"}

    collector.clear_history("select")
    assert "select" not in collector.get_all_history()
    collector.clear_history()
    assert collector.get_all_history() == {}
    print("  ✓ clear_history() per algorithm and global")


def test_format_metrics_report():
    metrics = AlgorithmMetrics(name="quicksort")
    metrics.record_comparison()
    report = format_metrics_report(metrics)
    assert "QUICKSORT" in report
    assert "Comparisons: 1" in report


def main():
    """Run all metrics tests."""
    test_counters()
    test_recursion_depth()
    test_unmatched_exit_goes_to_logger()
    test_timing()
    test_reset()
    test_collector_history_and_averages()
    test_format_metrics_report()
    print("\n✅ Metrics Tests PASSED")
    return 0


if __name__ == '__main__':
    sys.exit(main())
