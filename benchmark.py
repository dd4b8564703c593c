#!/usr/bin/env python3
"""
Divide & Conquer Algorithm Benchmarks
Main entry point for running instrumented benchmarks.

Runs merge sort, quick sort, deterministic select and closest pair on
generated inputs and reports comparisons, swaps, allocations, recursion
depth and wall-clock time.
"""

import argparse
import sys
from typing import List, Optional

from algorithms.closest_pair import brute_force_closest_pair, find_closest_pair
from algorithms.deterministic_select import deterministic_select
from algorithms.merge_sort import merge_sort
from algorithms.quick_sort import quick_sort
from analysis.analyzer import generate_benchmark_report, quicksort_depth_bound, run_suite
from analysis.metrics import AlgorithmMetrics, MetricsCollector, format_metrics_report
from utils.array_utils import generate_random_array, generate_random_points, is_sorted, make_rng
from utils.logger import BenchmarkLogger
from utils.suite_loader import (
    ALGORITHMS,
    SuiteLoadError,
    default_suite,
    load_suite,
)


# Arrays up to this length are printed in full
PRINT_LIMIT = 20


def run_single_benchmark(
    algorithm: str,
    size: int,
    seed: Optional[int],
    logger: BenchmarkLogger
) -> bool:
    """
    Run one algorithm once on a random input and print its metrics.

    Args:
        algorithm: One of mergesort, quicksort, select, closest
        size: Input size
        seed: Seed for the random source (None for fresh entropy)
        logger: Logger instance

    Returns:
        True if the output verified correctly
    """
    rng = make_rng(seed)
    metrics = AlgorithmMetrics(name=algorithm, logger=logger)

    logger.log(f"Running {algorithm} benchmark with size {size}")

    if algorithm in ("mergesort", "quicksort"):
        arr = generate_random_array(size, rng)
        logger.log(f"Before: {_preview(arr)}")
        if algorithm == "mergesort":
            merge_sort(arr, metrics)
        else:
            quick_sort(arr, metrics, rng)
        logger.log(f"After: {_preview(arr)}")
        logger.log(format_metrics_report(metrics))
        correct = is_sorted(arr)
        logger.log(f"Correctly sorted: {correct}")
        if algorithm == "quicksort":
            bound = quicksort_depth_bound(size)
            logger.log(f"Depth within expected bound (<= {bound:.0f}): {metrics.max_depth <= bound}")
        return correct

    if algorithm == "select":
        arr = generate_random_array(size, rng)
        k = size // 2
        logger.log(f"Finding element of rank {k} in array of size {size}")
        expected = sorted(arr)[k]
        result = deterministic_select(list(arr), k, metrics)
        logger.log(f"Result: {result}, Expected: {expected}")
        logger.log(format_metrics_report(metrics))
        correct = result == expected
        logger.log(f"Correct: {correct}")
        return correct

    if algorithm == "closest":
        points = generate_random_points(size, rng)
        logger.log(f"Finding closest pair among {size} points")
        pair = find_closest_pair(points, metrics)
        logger.log(f"Closest pair: {pair.p1} and {pair.p2}")
        logger.log(f"Distance: {pair.distance:.6f}")
        logger.log(format_metrics_report(metrics))
        if size > 2000:
            return True
        brute_metrics = AlgorithmMetrics(name="brute_force", logger=logger)
        reference = brute_force_closest_pair(points, brute_metrics)
        correct = abs(pair.distance - reference.distance) < 1e-9
        logger.log(f"Brute force distance: {reference.distance:.6f}")
        logger.log(f"Results match: {correct}")
        if metrics.get_execution_time_ns() > 0:
            speedup = brute_metrics.get_execution_time_ns() / metrics.get_execution_time_ns()
            logger.log(f"Speedup: {speedup:.2f}x")
        return correct

    logger.log(f"Unknown algorithm: {algorithm} (available: {', '.join(ALGORITHMS)})", "error")
    return False


def _preview(arr: List[int]) -> str:
    if len(arr) <= PRINT_LIMIT:
        return str(arr)
    return f"array of size {len(arr)}"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the benchmark runner."""
    parser = argparse.ArgumentParser(
        description='Instrumented Divide & Conquer Algorithm Benchmarks'
    )
    parser.add_argument(
        '--algorithm',
        choices=ALGORITHMS + ['all'],
        default='all',
        help='Algorithm to benchmark (default: all)'
    )
    parser.add_argument(
        '--size',
        type=int,
        default=None,
        help='Single input size; with one --algorithm runs a single verbose benchmark'
    )
    parser.add_argument(
        '--suite',
        type=str,
        default=None,
        help='Path to benchmark suite JSON file'
    )
    parser.add_argument(
        '--iterations',
        type=int,
        default=None,
        help='Runs per input (overrides the suite)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed (overrides the suite)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log every individual run'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write the log to this file'
    )

    args = parser.parse_args(argv)

    if args.size is not None and args.size < 2:
        parser.error('--size must be at least 2')
    if args.iterations is not None and args.iterations <= 0:
        parser.error('--iterations must be positive')

    logger = BenchmarkLogger(verbose=args.verbose, log_file=args.log_file)

    try:
        if args.algorithm != 'all' and args.size is not None and args.suite is None:
            ok = run_single_benchmark(args.algorithm, args.size, args.seed, logger)
            return 0 if ok else 2

        try:
            suite = load_suite(args.suite) if args.suite else default_suite()
        except SuiteLoadError as e:
            logger.log(f"Failed to load suite: {e}", "error")
            return 1

        if args.algorithm != 'all':
            suite.algorithms = [args.algorithm]
        if args.size is not None:
            suite.sizes = [args.size]
        if args.iterations is not None:
            suite.iterations = args.iterations
        if args.seed is not None:
            suite.seed = args.seed

        logger.log(f"\n{'='*60}")
        logger.log(f"BENCHMARK START: {suite.name.upper()}")
        logger.log(f"{'='*60}")

        collector = MetricsCollector(logger=logger)
        summaries, run_results = run_suite(suite, logger, collector)

        logger.log(generate_benchmark_report(summaries, suite))

        for algorithm in suite.algorithms:
            if collector.get_history(algorithm):
                logger.log(
                    f"{algorithm}: avg time {collector.get_average_execution_time(algorithm) / 1e6:.3f} ms, "
                    f"avg comparisons {collector.get_average_comparisons(algorithm):.1f}, "
                    f"avg max depth {collector.get_average_max_depth(algorithm):.2f}",
                    "debug"
                )

        failed = any(not r.verified for r in run_results)
        return 2 if failed else 0
    finally:
        logger.close()


if __name__ == '__main__':
    sys.exit(main())
