"""
Performance Analysis Library for the Divide & Conquer Algorithm Benchmarks.

Called by benchmark.py to run suites and aggregate repeated runs.
This is a library module, not a standalone CLI tool.
"""

from typing import List, Dict, Optional, Tuple
from dataclasses import dataclass, field
import math
import statistics

import numpy as np

from algorithms.closest_pair import brute_force_closest_pair, find_closest_pair
from algorithms.deterministic_select import deterministic_select
from algorithms.merge_sort import merge_sort
from algorithms.quick_sort import quick_sort
from analysis.metrics import AlgorithmMetrics, MetricsCollector
from utils.array_utils import generate_array, generate_random_points, is_sorted
from utils.logger import BenchmarkLogger
from utils.suite_loader import BenchmarkSuite


# Closest pair only runs on uniform random points
POINT_INPUT_TYPE = "random"

DISTANCE_TOLERANCE = 1e-9


@dataclass
class RunResult:
    """Results from a single algorithm run."""
    algorithm: str
    size: int
    input_type: str
    run_number: int
    time_ms: float
    comparisons: int
    swaps: int
    allocations: int
    max_depth: int
    verified: bool = True
    detail: str = ""

    @classmethod
    def from_metrics(
        cls,
        algorithm: str,
        size: int,
        input_type: str,
        run_number: int,
        metrics: AlgorithmMetrics
    ) -> "RunResult":
        return cls(
            algorithm=algorithm,
            size=size,
            input_type=input_type,
            run_number=run_number,
            time_ms=metrics.get_execution_time_ms(),
            comparisons=metrics.comparisons,
            swaps=metrics.swaps,
            allocations=metrics.allocations,
            max_depth=metrics.max_depth
        )


@dataclass
class MetricStats:
    """Descriptive statistics of one metric over repeated runs."""
    mean: float = 0.0
    median: float = 0.0
    stdev: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0

    @classmethod
    def from_samples(cls, samples: List[float]) -> "MetricStats":
        if not samples:
            return cls()
        return cls(
            mean=statistics.mean(samples),
            median=statistics.median(samples),
            stdev=statistics.stdev(samples) if len(samples) > 1 else 0.0,
            minimum=min(samples),
            maximum=max(samples)
        )


@dataclass
class AlgorithmSummary:
    """Aggregate of all runs for one (algorithm, size, input type)."""
    algorithm: str
    size: int
    input_type: str
    total_runs: int
    failed_runs: int
    time_ms: MetricStats = field(default_factory=MetricStats)
    comparisons: MetricStats = field(default_factory=MetricStats)
    swaps: MetricStats = field(default_factory=MetricStats)
    allocations: MetricStats = field(default_factory=MetricStats)
    max_depth: MetricStats = field(default_factory=MetricStats)

    def display(self) -> str:
        """Format one summary row."""
        status = "OK" if self.failed_runs == 0 else f"FAILED {self.failed_runs}/{self.total_runs}"
        return (
            f"  {self.algorithm:<10} n={self.size:<7} {self.input_type:<11} "
            f"time={self.time_ms.mean:9.3f} ms (sd {self.time_ms.stdev:.3f}) "
            f"cmp={self.comparisons.mean:12.1f} swp={self.swaps.mean:12.1f} "
            f"alloc={self.allocations.mean:10.1f} depth={self.max_depth.maximum:4.0f} [{status}]"
        )


def quicksort_depth_bound(n: int) -> float:
    """Statistical recursion-depth ceiling for randomized quick sort: 2*log2(n) + 10."""
    if n < 2:
        return 10.0
    return 2 * math.floor(math.log2(n)) + 10


def run_algorithm(
    algorithm: str,
    size: int,
    input_type: str,
    rng: np.random.Generator,
    collector: MetricsCollector,
    run_number: int = 1,
    verify_max_size: int = 2000
) -> RunResult:
    """
    Generate one input, run one algorithm on it and verify the output.

    Verification:
    - mergesort / quicksort: output sorted and a permutation of the input
    - select: result equals sorted(input)[n // 2]
    - closest: distance equals brute force within 1e-9 (n <= verify_max_size)

    Args:
        algorithm: One of mergesort, quicksort, select, closest
        size: Input size
        input_type: Integer input distribution (ignored for closest)
        rng: Shared random source
        collector: Receives this run's metrics
        run_number: 1-based run index
        verify_max_size: Largest closest pair input checked against brute force

    Returns:
        RunResult with verified=False and a detail message on mismatch

    Raises:
        ValueError: If algorithm is unknown
    """
    metrics = collector.start_collection(algorithm)
    verified = True
    detail = ""

    if algorithm in ("mergesort", "quicksort"):
        data = generate_array(input_type, size, rng)
        expected = sorted(data)
        if algorithm == "mergesort":
            merge_sort(data, metrics)
        else:
            quick_sort(data, metrics, rng)
        if not is_sorted(data) or data != expected:
            verified = False
            detail = "output is not a sorted permutation of the input"

    elif algorithm == "select":
        data = generate_array(input_type, size, rng)
        k = size // 2
        expected_value = sorted(data)[k]
        value = deterministic_select(list(data), k, metrics)
        if value != expected_value:
            verified = False
            detail = f"select(k={k}) returned {value}, expected {expected_value}"

    elif algorithm == "closest":
        input_type = POINT_INPUT_TYPE
        points = generate_random_points(size, rng)
        pair = find_closest_pair(points, metrics)
        if size <= verify_max_size:
            reference = brute_force_closest_pair(points)
            if abs(pair.distance - reference.distance) > DISTANCE_TOLERANCE:
                verified = False
                detail = f"distance {pair.distance:.9f} != brute force {reference.distance:.9f}"

    else:
        raise ValueError(f"Unknown algorithm '{algorithm}'")

    collector.end_collection(algorithm)

    result = RunResult.from_metrics(algorithm, size, input_type, run_number, metrics)
    result.verified = verified
    result.detail = detail
    return result


def summarize_runs(run_results: List[RunResult]) -> List[AlgorithmSummary]:
    """
    Group runs by (algorithm, size, input type) and aggregate each metric.

    Returns:
        Summaries in first-seen order
    """
    groups: Dict[Tuple[str, int, str], List[RunResult]] = {}
    for result in run_results:
        key = (result.algorithm, result.size, result.input_type)
        groups.setdefault(key, []).append(result)

    summaries = []
    for (algorithm, size, input_type), runs in groups.items():
        summaries.append(AlgorithmSummary(
            algorithm=algorithm,
            size=size,
            input_type=input_type,
            total_runs=len(runs),
            failed_runs=sum(1 for r in runs if not r.verified),
            time_ms=MetricStats.from_samples([r.time_ms for r in runs]),
            comparisons=MetricStats.from_samples([r.comparisons for r in runs]),
            swaps=MetricStats.from_samples([r.swaps for r in runs]),
            allocations=MetricStats.from_samples([r.allocations for r in runs]),
            max_depth=MetricStats.from_samples([r.max_depth for r in runs])
        ))
    return summaries


def run_suite(
    suite: BenchmarkSuite,
    logger: Optional[BenchmarkLogger] = None,
    collector: Optional[MetricsCollector] = None
) -> Tuple[List[AlgorithmSummary], List[RunResult]]:
    """
    Run every (algorithm, size, input type) combination of a suite.

    Args:
        suite: Validated benchmark suite
        logger: Progress and mismatch logging (a quiet default when omitted)
        collector: Receives every run's metrics (a fresh one when omitted)

    Returns:
        Tuple of (List[AlgorithmSummary], List[RunResult])
    """
    if logger is None:
        logger = BenchmarkLogger()
    if collector is None:
        collector = MetricsCollector(logger=logger)

    rng = np.random.default_rng(suite.seed)
    run_results: List[RunResult] = []

    for algorithm in suite.algorithms:
        logger.log_section(f"{algorithm.upper()}")

        for size in suite.sizes:
            if algorithm == "closest":
                if size > suite.closest_max_size:
                    logger.log(f"  Skipping n={size} (above closest_max_size)", "debug")
                    continue
                input_types = [POINT_INPUT_TYPE]
            else:
                input_types = suite.input_types

            for input_type in input_types:
                for run_idx in range(suite.iterations):
                    result = run_algorithm(
                        algorithm,
                        size,
                        input_type,
                        rng,
                        collector,
                        run_number=run_idx + 1,
                        verify_max_size=suite.verify_max_size
                    )
                    run_results.append(result)

                    logger.log_run(
                        algorithm, size, result.input_type, result.time_ms,
                        result.comparisons, result.swaps, result.allocations, result.max_depth
                    )
                    if not result.verified:
                        logger.log_mismatch(algorithm, size, result.input_type, result.detail)

            logger.log(f"  Size {size}: {suite.iterations} run(s) per input type complete")

    return summarize_runs(run_results), run_results


def generate_benchmark_report(summaries: List[AlgorithmSummary], suite: BenchmarkSuite) -> str:
    """
    Generate formatted benchmark report.

    Args:
        summaries: Aggregated results
        suite: Suite that produced them

    Returns:
        Formatted string report
    """
    report = "\n" + "="*70 + "\n"
    report += "BENCHMARK REPORT\n"
    report += "="*70 + "\n"
    report += f"Suite: {suite.name}\n"
    if suite.description:
        report += f"Description: {suite.description}\n"
    report += f"Runs per input: {suite.iterations}\n"
    report += f"Seed: {suite.seed if suite.seed is not None else 'random'}\n"
    report += "="*70 + "\n"

    current = None
    for summary in summaries:
        if summary.algorithm != current:
            current = summary.algorithm
            report += f"\n{current.upper()}\n" + "-"*70 + "\n"
        report += summary.display() + "\n"

    report += "\nKEY INSIGHTS:\n"
    report += "-"*70 + "\n"

    insights = []

    # Fewest comparisons between the two sorts, per (size, input type)
    by_input: Dict[Tuple[int, str], Dict[str, AlgorithmSummary]] = {}
    for summary in summaries:
        if summary.algorithm in ("mergesort", "quicksort"):
            by_input.setdefault((summary.size, summary.input_type), {})[summary.algorithm] = summary

    for (size, input_type), pair in by_input.items():
        if len(pair) < 2:
            continue
        merge_cmp = pair["mergesort"].comparisons.mean
        quick_cmp = pair["quicksort"].comparisons.mean
        if merge_cmp == quick_cmp:
            continue
        winner = "MERGESORT" if merge_cmp < quick_cmp else "QUICKSORT"
        insights.append(
            f"  n={size} {input_type}: {winner} used fewer comparisons "
            f"({min(merge_cmp, quick_cmp):.0f} vs {max(merge_cmp, quick_cmp):.0f})"
        )

    for summary in summaries:
        if summary.algorithm != "quicksort":
            continue
        bound = quicksort_depth_bound(summary.size)
        if summary.max_depth.maximum > bound:
            insights.append(
                f"  QUICKSORT n={summary.size} {summary.input_type}: max depth "
                f"{summary.max_depth.maximum:.0f} exceeds 2*log2(n)+10 = {bound:.0f}"
            )

    failures = sum(s.failed_runs for s in summaries)
    if failures:
        insights.append(f"  {failures} run(s) FAILED verification")
    else:
        insights.append("  All runs passed verification")

    report += "\n".join(insights) + "\n"
    report += "\n" + "="*70 + "\n"
    return report
