"""
Models package for the Divide & Conquer Algorithm Benchmarks.
Contains the Point and PointPair geometric types.
"""
