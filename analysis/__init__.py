"""
Analysis package for the Divide & Conquer Algorithm Benchmarks.
Contains the metrics recorder, metrics collector and run aggregation.
"""
