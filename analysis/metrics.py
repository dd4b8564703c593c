"""
Metrics Tracking for the Divide & Conquer Algorithm Benchmarks.

Tracks comparisons, swaps, allocations, recursion depth and wall-clock
time for a single algorithm invocation, plus per-algorithm run history.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional
import statistics
import time

from utils.logger import BenchmarkLogger


@dataclass
class AlgorithmMetrics:
    """
    Mutable counter/timer threaded through one algorithm call tree.

    Passed by reference into every recursive call and primitive operation,
    never copied. One recorder belongs to one call tree at a time.

    Attributes:
        name: Algorithm name (informational)
        comparisons: Element comparisons performed
        swaps: Element exchanges performed
        allocations: Auxiliary buffer volume, in elements (not bytes)
        current_depth: Current recursion depth
        max_depth: Deepest recursion observed so far
        start_ns: perf_counter_ns() at start_timing(), or None
        end_ns: perf_counter_ns() at end_timing(), or None
        logger: Receives the warning for an unmatched exit_recursion(), or None

    Invariant:
        max_depth >= current_depth >= 0
    """
    name: str = ""
    comparisons: int = 0
    swaps: int = 0
    allocations: int = 0
    current_depth: int = 0
    max_depth: int = 0
    start_ns: Optional[int] = None
    end_ns: Optional[int] = None
    logger: Optional[BenchmarkLogger] = field(default=None, repr=False, compare=False)

    def reset(self) -> None:
        """Zero every counter and timestamp so the recorder can be reused."""
        self.comparisons = 0
        self.swaps = 0
        self.allocations = 0
        self.current_depth = 0
        self.max_depth = 0
        self.start_ns = None
        self.end_ns = None

    def start_timing(self) -> None:
        """Open the elapsed-time window."""
        self.start_ns = time.perf_counter_ns()
        self.end_ns = None

    def end_timing(self) -> None:
        """Close the elapsed-time window."""
        self.end_ns = time.perf_counter_ns()

    def enter_recursion(self) -> None:
        """Descend one level; max depth only ever grows here."""
        self.current_depth += 1
        if self.current_depth > self.max_depth:
            self.max_depth = self.current_depth

    def exit_recursion(self) -> None:
        """Return one level."""
        if self.current_depth == 0:
            if self.logger is not None:
                self.logger.log(f"{self.name or 'metrics'}: exit_recursion() without matching enter", "warning")
            return
        self.current_depth -= 1

    def record_comparison(self) -> None:
        """Record one element comparison."""
        self.comparisons += 1

    def record_swap(self) -> None:
        """Record one element exchange."""
        self.swaps += 1

    def record_allocation(self, count: int) -> None:
        """
        Record an auxiliary buffer allocation.

        Args:
            count: Number of elements allocated
        """
        self.allocations += count

    def get_execution_time_ns(self) -> int:
        """
        Elapsed nanoseconds between start_timing() and end_timing().

        Returns 0 when either mark is missing (e.g. end_timing() was called
        without start_timing()).
        """
        if self.start_ns is None or self.end_ns is None:
            return 0
        return max(0, self.end_ns - self.start_ns)

    def get_execution_time_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.get_execution_time_ns() / 1_000_000.0

    def to_dict(self) -> Dict[str, float]:
        """Flat snapshot of the read accessors."""
        return {
            "comparisons": self.comparisons,
            "swaps": self.swaps,
            "allocations": self.allocations,
            "max_depth": self.max_depth,
            "time_ns": self.get_execution_time_ns(),
        }


@dataclass
class MetricsCollector:
    """Keeps per-algorithm metrics history across repeated runs."""
    history: Dict[str, List[AlgorithmMetrics]] = field(default_factory=dict)
    current: Dict[str, AlgorithmMetrics] = field(default_factory=dict)
    logger: Optional[BenchmarkLogger] = field(default=None, repr=False)

    def start_collection(self, algorithm_name: str) -> AlgorithmMetrics:
        """Create and register a fresh recorder for the next run."""
        metrics = AlgorithmMetrics(name=algorithm_name, logger=self.logger)
        self.current[algorithm_name] = metrics
        return metrics

    def end_collection(self, algorithm_name: str) -> None:
        """
        Move the current recorder for an algorithm into its history.

        Closes the timing window if the algorithm left it open.
        """
        metrics = self.current.get(algorithm_name)
        if metrics is None:
            return
        if metrics.end_ns is None and metrics.start_ns is not None:
            metrics.end_timing()
        self.history.setdefault(algorithm_name, []).append(metrics)

    def get_current_metrics(self, algorithm_name: str) -> Optional[AlgorithmMetrics]:
        return self.current.get(algorithm_name)

    def get_history(self, algorithm_name: str) -> List[AlgorithmMetrics]:
        return list(self.history.get(algorithm_name, []))

    def get_all_history(self) -> Dict[str, List[AlgorithmMetrics]]:
        return {name: list(runs) for name, runs in self.history.items()}

    def clear_history(self, algorithm_name: Optional[str] = None) -> None:
        """Forget one algorithm's runs, or everything when no name is given."""
        if algorithm_name is None:
            self.history.clear()
            self.current.clear()
            return
        self.history.pop(algorithm_name, None)
        self.current.pop(algorithm_name, None)

    def get_average_execution_time(self, algorithm_name: str) -> float:
        """Average elapsed time in nanoseconds."""
        runs = self.history.get(algorithm_name)
        if not runs:
            return 0.0
        return statistics.mean(m.get_execution_time_ns() for m in runs)

    def get_average_comparisons(self, algorithm_name: str) -> float:
        runs = self.history.get(algorithm_name)
        if not runs:
            return 0.0
        return statistics.mean(m.comparisons for m in runs)

    def get_average_max_depth(self, algorithm_name: str) -> float:
        runs = self.history.get(algorithm_name)
        if not runs:
            return 0.0
        return statistics.mean(m.max_depth for m in runs)


def format_metrics_report(metrics: AlgorithmMetrics, title: Optional[str] = None) -> str:
    """
    Format one recorder for display.

    Args:
        metrics: Populated recorder
        title: Optional heading (defaults to the recorder name)

    Returns:
        Formatted metrics report string
    """
    lines = []
    lines.append("=" * 60)
    lines.append(f"METRICS: {(title or metrics.name or 'algorithm').upper()}")
    lines.append("=" * 60)
    lines.append(f"Time: {metrics.get_execution_time_ms():.3f} ms")
    lines.append(f"Max Depth: {metrics.max_depth}")
    lines.append(f"Comparisons: {metrics.comparisons}")
    lines.append(f"Swaps: {metrics.swaps}")
    lines.append(f"Allocations: {metrics.allocations} elements")
    lines.append("=" * 60)
    return "\n".join(lines)
