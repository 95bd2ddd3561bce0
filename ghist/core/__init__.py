"""
Core functionality for ghist.
"""

from ghist.core.base import DistributionSummary, StreamSummary

__all__ = [
    "StreamSummary",
    "DistributionSummary",
]
