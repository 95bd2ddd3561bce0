"""
ghist - Streaming Histograms

ghist summarizes an unbounded stream of numbers in a fixed number of
adaptive bins and answers percentile, median, mean and mode queries from
that summary.
"""

import logging

__version__ = "0.1.0"

# Import main classes to make them available at the top level
from ghist.algorithms.histogram import MAX_COUNT, Bin, Histogram
from ghist.core.base import DistributionSummary, StreamSummary

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core base classes
    "StreamSummary",
    "DistributionSummary",
    # Algorithm implementations
    "Histogram",
    "Bin",
    "MAX_COUNT",
]
