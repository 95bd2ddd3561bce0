"""
Adaptive streaming histogram implementation for ghist.

This module provides a bounded-memory histogram over a stream of numbers.
It keeps a fixed number of bins whose boundaries adapt to the data: each
new value either falls inside an existing bin or opens a singleton bin, and
whenever that pushes the histogram over capacity the two adjacent bins with
the smallest combined span are merged. Dense regions of the value range
keep many narrow bins while sparse regions collapse into a few wide ones.

Bins are held in ascending order of their value ranges. Merge ties, the
median rank and mode ties are all resolved by walking the bins from the
top of the value range downward.

References:
    - Ben-Haim, Y., & Tom-Tov, E. (2010).
      A streaming parallel decision tree algorithm.
      Journal of Machine Learning Research, 11, 849-872.
"""

import bisect
import logging
import math
import numbers
import sys
from dataclasses import astuple, dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

from ghist.core.base import DistributionSummary

logger = logging.getLogger(__name__)

# Largest number of observations a histogram accepts (an unsigned 64-bit counter)
MAX_COUNT = 2**64 - 1


@dataclass
class Bin:
    """
    A bin of the streaming histogram.

    Attributes:
        min: Lower bound of the values folded into this bin.
        max: Upper bound of the values folded into this bin.
        count: Number of observations folded into this bin.
        sum: Exact running sum of those observations.
    """

    min: float = 0.0
    max: float = 0.0
    count: int = 0
    sum: float = 0.0

    @property
    def width(self) -> float:
        """Width of the bin's value range, zero for a singleton bin."""
        return self.max - self.min

    def contains(self, value: float) -> bool:
        """Check whether ``value`` lies inside ``[min, max]``."""
        return self.min <= value <= self.max

    def __str__(self) -> str:
        return f"{self.count} in [{self.min:f}:{self.max:f}] totaling {self.sum:f}"


def _lower_bound(b: Bin) -> float:
    return b.min


class Histogram(DistributionSummary[Bin]):
    """
    Streaming histogram with a fixed number of adaptive bins.

    The histogram never stores the observed values. Its memory is bounded
    by ``size`` bins, and the error of every estimator is governed by how
    wide those bins have become. A bin count under 100 is enough for most
    applications.

    Each update is O(size): a binary search locates the owning bin, and an
    overflowing insert is followed by a linear scan for the closest pair.

    Not safe for concurrent updates; keep one histogram per producer.
    """

    DEFAULT_SIZE: int = 20

    def __init__(self, size: int = DEFAULT_SIZE):
        """
        Initialize an empty histogram.

        Args:
            size: Maximum number of bins kept between updates. Must be a
                positive integer. Default: 20.

        Raises:
            ValueError: If size is not a positive integer.
        """
        super().__init__()
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ValueError("Histogram size must be a positive integer")

        self._size = size
        self._bins: List[Bin] = []
        self._sum = 0.0
        logger.debug("Created histogram with capacity for %d bins.", size)

    def update(self, item: float) -> None:
        """
        Add an observation to the histogram.

        The value is counted into the bin whose range contains it. If no bin
        does, a singleton bin is inserted in order and, when that exceeds the
        capacity, the two adjacent bins spanning the smallest range are
        merged.

        Args:
            item: A finite real number.

        Raises:
            TypeError: If item is not a real number.
            ValueError: If item is NaN or infinite.
            OverflowError: If the histogram already holds MAX_COUNT
                observations. This signals a usage bug and is not meant
                to be caught.
        """
        if isinstance(item, bool) or not isinstance(item, numbers.Real):
            raise TypeError(
                f"Histogram values must be real numbers, got {type(item).__name__}"
            )
        value = float(item)
        if not math.isfinite(value):
            raise ValueError(f"Histogram values must be finite, got {value}")
        if self._items_processed >= MAX_COUNT:
            logger.error(
                "Histogram already holds %d observations; refusing value %s.",
                self._items_processed,
                value,
            )
            raise OverflowError(
                "Integer overflow: attempt to exceed maximum count in Histogram"
            )

        super().update(value)
        self._sum += value

        # Last bin whose lower bound does not exceed the value
        index = bisect.bisect_right(self._bins, value, key=_lower_bound) - 1
        if index >= 0 and self._bins[index].max >= value:
            owner = self._bins[index]
            owner.count += 1
            owner.sum += value
            return

        self._bins.insert(index + 1, Bin(min=value, max=value, count=1, sum=value))
        if len(self._bins) > self._size:
            self._merge(self._closest())

    def add(self, value: float) -> None:
        """Add an observation to the histogram. Alias of update."""
        self.update(value)

    def _closest(self) -> int:
        """
        Find the adjacent pair of bins spanning the smallest total range.

        The scan starts at the top of the value range and only a strictly
        smaller span replaces the current best, so ties go to the highest
        pair.

        Returns:
            The index of the lower bin of the pair.
        """
        best = len(self._bins) - 2
        best_span = self._bins[best + 1].max - self._bins[best].min
        for i in range(best - 1, -1, -1):
            span = self._bins[i + 1].max - self._bins[i].min
            if span < best_span:
                best_span = span
                best = i
        return best

    def _merge(self, index: int) -> None:
        """Fold the bin above ``index`` into the bin at ``index``."""
        lower = self._bins[index]
        upper = self._bins.pop(index + 1)
        lower.max = upper.max
        lower.count += upper.count
        lower.sum += upper.sum
        logger.debug(
            "Merged bins %d and %d into [%g, %g] holding %d values.",
            index,
            index + 1,
            lower.min,
            lower.max,
            lower.count,
        )

    def percentile(self, value: float) -> float:
        """
        Estimate the fraction of observations below ``value``.

        Bins entirely below the value count in full. Within the bin that
        contains the value, the count is interpolated linearly across the
        bin's range (half the bin for a singleton) and truncated to whole
        observations. Any value at or above the highest observation ranks
        1.0 and any value at or below the lowest ranks 0.0, even when the
        extreme bins are singletons. The top check wins when the histogram
        holds a single value.

        Args:
            value: The value to rank.

        Returns:
            A fraction between 0.0 and 1.0. An empty histogram returns 0.0.
        """
        if self._items_processed == 0:
            return 0.0
        if value >= self._bins[-1].max:
            return 1.0
        if value <= self._bins[0].min:
            return 0.0

        position = 0
        for b in self._bins:
            if b.count == 0:
                continue
            if value > b.max:
                position += b.count
            elif value >= b.min:
                fraction = 0.5
                if b.width > 0.0:
                    fraction = (value - b.min) / b.width
                position += int(b.count * fraction)
                break
            else:
                break
        return position / self._items_processed

    def median(self) -> float:
        """
        Estimate the median by interpolating within the bin that holds it.

        The middle rank is located by accumulating counts from the top of
        the value range downward. Inside the owning bin the estimate moves
        from its upper bound toward its lower bound in proportion to how far
        the rank lies into the bin.

        Returns:
            The estimated median, or 0.0 if the histogram is empty.
        """
        midpoint = self._items_processed // 2
        seen = 0
        for b in reversed(self._bins):
            seen += b.count
            if seen >= midpoint:
                if b.count > 1:
                    offset = 1 - (seen - midpoint) / (b.count - 1)
                    return b.max - offset * b.width
                return b.max
        return 0.0

    def mean(self) -> float:
        """Return the exact mean of all observations, or 0.0 if empty."""
        if self._items_processed == 0:
            return 0.0
        return self._sum / self._items_processed

    def mode(self) -> Bin:
        """
        Return a copy of the most populated bin.

        This approximates the mode by the densest bucket, not by the most
        frequent value. Ties go to the highest bin.

        Returns:
            The bin with the largest count, or a zero-valued Bin if the
            histogram is empty.
        """
        best: Optional[Bin] = None
        for b in reversed(self._bins):
            if best is None or b.count > best.count:
                best = b
        if best is None:
            return Bin()
        return replace(best)

    @property
    def size(self) -> int:
        """Maximum number of bins kept between updates."""
        return self._size

    @property
    def count(self) -> int:
        """Total number of observations added."""
        return self._items_processed

    @property
    def sum(self) -> float:
        """Running sum of all observations added."""
        return self._sum

    @property
    def bins(self) -> List[Bin]:
        """Copies of the current bins in ascending order."""
        return [replace(b) for b in self._bins]

    @property
    def min_value(self) -> Optional[float]:
        """Lower bound of the lowest bin, or None if empty."""
        return self._bins[0].min if self._bins else None

    @property
    def max_value(self) -> Optional[float]:
        """Upper bound of the highest bin, or None if empty."""
        return self._bins[-1].max if self._bins else None

    def get_bins(self) -> List[Tuple[float, float, int, float]]:
        """
        Return the current bins as (min, max, count, sum) tuples.

        This is primarily for debugging and inspection purposes.
        """
        return [astuple(b) for b in self._bins]

    def __len__(self) -> int:
        """Return the number of values added to the histogram."""
        return self._items_processed

    def __str__(self) -> str:
        lines = [
            f"{len(self._bins)} bin ghist summarizing {self._items_processed} items",
            f"Mean: {self.mean():f}    Median: {self.median():f}",
            f"Mode: {self.mode()}",
            "",
            "Bins:",
        ]
        lines.extend(f"{i}: {b}" for i, b in enumerate(self._bins))
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (
            f"Histogram(size={self._size}, count={self._items_processed}, "
            f"bins={len(self._bins)})"
        )

    def estimate_size(self) -> int:
        """
        Estimate the memory footprint of the histogram in bytes.

        Returns:
            Estimated size in bytes.
        """
        size = super().estimate_size()
        size += sys.getsizeof(self._bins)
        for b in self._bins:
            size += sys.getsizeof(b)
            size += sys.getsizeof(b.min) + sys.getsizeof(b.max)
            size += sys.getsizeof(b.count) + sys.getsizeof(b.sum)
        return size

    def error_bounds(self) -> Dict[str, float]:
        """
        Describe the resolution the histogram currently offers.

        Returns:
            A dictionary with:
            - max_bin_width: width of the widest bin
            - max_bin_fraction: largest share of observations held by one bin
            The dictionary is empty while the histogram has no data.
        """
        if not self._bins:
            return {}
        return {
            "max_bin_width": max(b.width for b in self._bins),
            "max_bin_fraction": max(b.count for b in self._bins)
            / self._items_processed,
        }

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the current state of the histogram.

        Returns:
            A dictionary containing the configuration, totals, estimators
            and bin occupancy of the histogram.
        """
        stats = super().get_stats()
        stats.update(
            {
                "size": self._size,
                "bin_count": len(self._bins),
                "count": self._items_processed,
                "sum": self._sum,
                "min": self.min_value,
                "max": self.max_value,
                "mode_count": self.mode().count,
            }
        )
        return stats
