"""
Algorithm implementations for ghist.
"""

from ghist.algorithms.histogram import MAX_COUNT, Bin, Histogram

__all__ = [
    "Histogram",
    "Bin",
    "MAX_COUNT",
]
