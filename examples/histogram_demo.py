"""
Streaming Histogram Demo for ghist.

This example demonstrates how to use the adaptive streaming Histogram to
summarize a data stream in a fixed number of bins and query it for
percentiles, median, mean and mode.
"""

import logging
import random
import statistics
import sys

from ghist.algorithms.histogram import Histogram


def demonstrate_basic_histogram():
    """Demonstrate the histogram on the triangular stream 0, 1, 1, 2, 2, 2, ..."""
    print("\n=== Basic Streaming Histogram Demo ===")

    histogram = Histogram(size=5)

    # Value k is added k+1 times
    for k in range(10):
        for _ in range(k + 1):
            histogram.update(float(k))

    print(histogram)
    for value in (0.0, 1.0, 4.5, 9.0):
        print(f"  Percentile of {value}: {histogram.percentile(value):.3f}")


def demonstrate_latency_stream():
    """Compare histogram estimates with exact statistics on skewed latencies."""
    print("\n=== Latency Stream Demo ===")

    rng = random.Random(42)
    histogram = Histogram(size=32)
    latencies = []

    print("Processing 20000 simulated request latencies...")
    for i in range(20000):
        # Mostly fast requests with a slow tail
        if rng.random() < 0.95:
            latency = rng.lognormvariate(3.0, 0.3)
        else:
            latency = rng.uniform(200.0, 2000.0)
        histogram.update(latency)
        latencies.append(latency)

        if i % 5000 == 0:
            print(f"  Processed {i} items, bins in use: {len(histogram.bins)}")

    exact_median = statistics.median(latencies)
    fast_share = sum(1 for v in latencies if v < 100.0) / len(latencies)

    print(f"\nMean:   histogram {histogram.mean():.2f}   exact {statistics.fmean(latencies):.2f}")
    print(f"Median: histogram {histogram.median():.2f}   exact {exact_median:.2f}")
    print(
        f"Share below 100ms: histogram {histogram.percentile(100.0):.3f}   "
        f"exact {fast_share:.3f}"
    )
    mode = histogram.mode()
    print(f"Densest bin: {mode}")

    print(f"\nHistogram memory usage: {histogram.estimate_size()} bytes")
    print(f"Raw list memory usage:  {sys.getsizeof(latencies)} bytes (pointers only)")

    stats = histogram.get_stats()
    print(f"Widest bin: {stats['max_bin_width']:.2f}")
    print(f"Largest bin share: {stats['max_bin_fraction']:.3f}")


def demonstrate_bin_counts():
    """Show how the bin count trades memory for accuracy."""
    print("\n=== Bin Count Comparison ===")

    rng = random.Random(7)
    values = [rng.gauss(50.0, 10.0) for _ in range(10000)]
    exact_median = statistics.median(values)

    print(f"{'Bins':>6} {'Median':>10} {'Error':>8} {'Memory':>8}")
    for size in (5, 10, 20, 50, 100):
        histogram = Histogram(size=size)
        for value in values:
            histogram.update(value)
        error = abs(histogram.median() - exact_median)
        print(
            f"{size:>6} {histogram.median():>10.3f} {error:>8.3f} "
            f"{histogram.estimate_size():>8}"
        )


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    demonstrate_basic_histogram()
    demonstrate_latency_stream()
    demonstrate_bin_counts()
