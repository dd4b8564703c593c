"""
Utilities package for the Divide & Conquer Algorithm Benchmarks.
Contains logging, input generation and suite loading.
"""
