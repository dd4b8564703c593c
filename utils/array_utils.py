"""
Input generators for the Divide & Conquer Algorithm Benchmarks.

All randomness comes from an explicitly passed numpy Generator so every
input is reproducible under a fixed seed.
"""

from typing import List, Optional

import numpy as np

from models.point import Point


INPUT_TYPES = ["random", "sorted", "reverse", "few_unique"]


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random source shared by generators and quick sort."""
    return np.random.default_rng(seed)


def generate_random_array(n: int, rng: np.random.Generator) -> List[int]:
    """n integers drawn uniformly from [0, 10n)."""
    return rng.integers(0, max(1, n * 10), size=n).tolist()


def generate_sorted_array(n: int) -> List[int]:
    """0, 1, ..., n-1."""
    return list(range(n))


def generate_reverse_sorted_array(n: int) -> List[int]:
    """n, n-1, ..., 1."""
    return list(range(n, 0, -1))


def generate_few_unique_array(n: int, rng: np.random.Generator, distinct: int = 10) -> List[int]:
    """n integers drawn from only `distinct` values (duplicate-heavy input)."""
    return rng.integers(0, distinct, size=n).tolist()


def generate_array(input_type: str, n: int, rng: np.random.Generator) -> List[int]:
    """
    Dispatch on input type name.

    Args:
        input_type: One of INPUT_TYPES
        n: Array length
        rng: Random source

    Raises:
        ValueError: If input_type is unknown
    """
    if input_type == "random":
        return generate_random_array(n, rng)
    elif input_type == "sorted":
        return generate_sorted_array(n)
    elif input_type == "reverse":
        return generate_reverse_sorted_array(n)
    elif input_type == "few_unique":
        return generate_few_unique_array(n, rng)
    else:
        raise ValueError(f"Unknown input type '{input_type}' (expected one of {INPUT_TYPES})")


def generate_random_points(n: int, rng: np.random.Generator, extent: float = 1000.0) -> List[Point]:
    """n points uniform in [0, extent) x [0, extent)."""
    coords = rng.random((n, 2)) * extent
    return [Point(float(x), float(y)) for x, y in coords]


def generate_clustered_points(
    n: int,
    rng: np.random.Generator,
    clusters: int = 5,
    spread: float = 10.0,
    extent: float = 1000.0
) -> List[Point]:
    """n points scattered normally around a few random centres."""
    centres = rng.random((clusters, 2)) * extent
    owners = rng.integers(0, clusters, size=n)
    coords = centres[owners] + rng.normal(0.0, spread, size=(n, 2))
    return [Point(float(x), float(y)) for x, y in coords]


def generate_collinear_points(n: int) -> List[Point]:
    """(0, 0), (1, 1), ..., (n-1, n-1): consecutive points are sqrt(2) apart."""
    return [Point(float(i), float(i)) for i in range(n)]


def is_sorted(buffer: List[int]) -> bool:
    """True if buffer is in non-descending order."""
    return all(buffer[i - 1] <= buffer[i] for i in range(1, len(buffer)))
