"""
Algorithms package for the Divide & Conquer Algorithm Benchmarks.
Contains instrumented merge sort, quick sort, deterministic select and closest pair.
"""
