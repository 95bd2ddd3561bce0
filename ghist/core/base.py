"""
Base classes and interfaces for ghist streaming summaries.

This module defines the abstract base classes that the streaming summaries
implement to provide a consistent interface: feeding items one at a time,
querying the current state, and reporting size and accuracy statistics.
"""

import abc
import sys
from typing import Any, Dict, Generic, TypeVar

T = TypeVar("T")  # Type for the items being processed
R = TypeVar("R")  # Type for the result of queries
B = TypeVar("B")  # Type for the bucket returned by mode queries


class StreamSummary(Generic[T, R], abc.ABC):
    """
    Abstract base class for streaming data structures.

    A summary consumes a stream one item at a time and never keeps the raw
    items. Subclasses call ``super().update(item)`` once an item has been
    accepted so that the processed-item counter stays in step.
    """

    def __init__(self) -> None:
        self._items_processed = 0

    @abc.abstractmethod
    def update(self, item: T) -> None:
        """
        Update the summary with a new item from the stream.

        Args:
            item: The new item to process.
        """
        self._items_processed += 1

    @abc.abstractmethod
    def query(self, *args: Any, **kwargs: Any) -> R:
        """
        Query the current state of the summary.

        The parameters and return value depend on the specific algorithm.
        """
        pass

    def estimate_size(self) -> int:
        """
        Estimate the current memory usage of this summary in bytes.

        This is a rough figure based on ``sys.getsizeof`` of the object and
        its instance dictionary. Subclasses add their own containers.

        Returns:
            Estimated memory usage in bytes.
        """
        size = sys.getsizeof(self)
        if hasattr(self, "__dict__"):
            size += sys.getsizeof(self.__dict__)
        return size

    def error_bounds(self) -> Dict[str, float]:
        """
        Get the error characteristics of the current summary.

        The base implementation returns an empty dictionary.
        """
        return {}

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the current state of the summary.

        Derived classes should extend the dictionary returned here.

        Returns:
            A dictionary containing statistics about the summary state.
        """
        stats: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "items_processed": self._items_processed,
            "memory_bytes": self.estimate_size(),
        }
        stats.update(self.error_bounds())
        return stats

    @property
    def items_processed(self) -> int:
        """Get the total number of items processed by this summary."""
        return self._items_processed

    @property
    def is_empty(self) -> bool:
        """Check if the summary has seen any data."""
        return self._items_processed == 0


class DistributionSummary(StreamSummary[float, float], Generic[B], abc.ABC):
    """
    Abstract base class for summaries of a numeric distribution.

    Implementations answer rank and location queries from a compact
    summary instead of the observed values.
    """

    @abc.abstractmethod
    def percentile(self, value: float) -> float:
        """
        Estimate the fraction of observations that lie below ``value``.

        Returns:
            A fraction between 0.0 and 1.0.
        """
        pass

    @abc.abstractmethod
    def median(self) -> float:
        """Estimate the median of the observed values."""
        pass

    @abc.abstractmethod
    def mean(self) -> float:
        """Return the mean of the observed values."""
        pass

    @abc.abstractmethod
    def mode(self) -> B:
        """Return the most populated bucket of the summary."""
        pass

    def query(self, value: float) -> float:
        """
        Query the summary for the percentile rank of a value.

        This is a convenience method that calls percentile.
        """
        return self.percentile(value)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the current state of the distribution summary.

        Returns:
            A dictionary with distribution specific statistics.
        """
        stats = super().get_stats()
        stats["mean"] = self.mean()
        stats["median"] = self.median()
        return stats

