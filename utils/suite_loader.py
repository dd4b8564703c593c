"""
Suite Loader for the Divide & Conquer Algorithm Benchmarks.

Loads and validates JSON benchmark suite files.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

from utils.array_utils import INPUT_TYPES


ALGORITHMS = ["mergesort", "quicksort", "select", "closest"]

DEFAULT_SIZES = [100, 500, 1000, 2000, 5000, 10000]


class SuiteLoadError(Exception):
    """Exception raised when suite file cannot be loaded or is invalid."""
    pass


@dataclass
class BenchmarkSuite:
    """
    A benchmark plan: which algorithms to run on which inputs.

    Attributes:
        name: Suite name
        description: Free text
        algorithms: Algorithm names (subset of ALGORITHMS)
        sizes: Input sizes
        input_types: Integer input distributions for the sorts
        iterations: Runs per (algorithm, size, input type)
        seed: Seed for the shared numpy Generator, or None for fresh entropy
        closest_max_size: Largest size the closest pair benchmark runs on
        verify_max_size: Largest size closest pair is checked against brute force
    """
    name: str = "standard"
    description: str = ""
    algorithms: List[str] = field(default_factory=lambda: list(ALGORITHMS))
    sizes: List[int] = field(default_factory=lambda: list(DEFAULT_SIZES))
    input_types: List[str] = field(default_factory=lambda: ["random", "sorted", "reverse"])
    iterations: int = 1
    seed: Optional[int] = None
    closest_max_size: int = 10000
    verify_max_size: int = 2000


def default_suite() -> BenchmarkSuite:
    """Built-in standard suite used when no file is given."""
    return BenchmarkSuite(
        name="standard",
        description="All algorithms on random, sorted and reverse-sorted inputs"
    )


def load_suite(file_path: str) -> BenchmarkSuite:
    """
    Load suite from JSON file.

    Args:
        file_path: Path to suite JSON file

    Returns:
        Validated BenchmarkSuite

    Raises:
        SuiteLoadError: If file cannot be loaded or is invalid
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise SuiteLoadError(f"Suite file not found: {file_path}")
    except json.JSONDecodeError as e:
        raise SuiteLoadError(f"Invalid JSON in suite file: {e}")

    if not isinstance(data, dict):
        raise SuiteLoadError("Suite file must contain a JSON object")

    return suite_from_dict(data)


def suite_from_dict(data: Dict[str, Any]) -> BenchmarkSuite:
    """
    Build a suite from already-parsed data, applying defaults.

    Raises:
        SuiteLoadError: If any field is invalid
    """
    suite = default_suite()
    suite.name = str(data.get('name', suite.name))
    suite.description = str(data.get('description', ''))

    if 'algorithms' in data:
        suite.algorithms = _load_names(data['algorithms'], ALGORITHMS, 'algorithms')
    if 'input_types' in data:
        suite.input_types = _load_names(data['input_types'], INPUT_TYPES, 'input_types')
    if 'sizes' in data:
        suite.sizes = _load_sizes(data['sizes'])

    suite.iterations = _positive_int(data, 'iterations', suite.iterations)
    suite.closest_max_size = _positive_int(data, 'closest_max_size', suite.closest_max_size)
    suite.verify_max_size = _positive_int(data, 'verify_max_size', suite.verify_max_size)

    seed = data.get('seed')
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        raise SuiteLoadError(f"'seed' must be a non-negative integer, got {seed!r}")
    suite.seed = seed

    return suite


def _load_names(values: Any, allowed: List[str], field_name: str) -> List[str]:
    """
    Validate a list of names against the allowed set.

    Args:
        values: Raw JSON value
        allowed: Accepted names
        field_name: Field being validated (for messages)

    Returns:
        Names, lower-cased, in file order
    """
    if not isinstance(values, list) or not values:
        raise SuiteLoadError(f"'{field_name}' must be a non-empty list")

    names = []
    for value in values:
        name = str(value).lower()
        if name not in allowed:
            raise SuiteLoadError(
                f"Unknown entry '{value}' in '{field_name}' (expected one of {allowed})"
            )
        names.append(name)
    return names


def _load_sizes(values: Any) -> List[int]:
    """Validate input sizes: positive integers, at least 2 each."""
    if not isinstance(values, list) or not values:
        raise SuiteLoadError("'sizes' must be a non-empty list")

    for size in values:
        if isinstance(size, bool) or not isinstance(size, int) or size < 2:
            raise SuiteLoadError(f"Invalid size {size!r}: sizes must be integers >= 2")
    return list(values)


def _positive_int(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise SuiteLoadError(f"'{key}' must be a positive integer, got {value!r}")
    return value


def get_suite_description(file_path: str) -> str:
    """
    Get description from suite file without full validation.

    Args:
        file_path: Path to suite JSON file

    Returns:
        Description string, or empty string if absent or unreadable
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return ''
    if not isinstance(data, dict):
        return ''
    return data.get('description', '')
