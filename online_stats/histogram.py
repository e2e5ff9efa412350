"""
Histogram statistics -- per-bin variance and derived views over bin data.

Nothing here stores or manages bins. A bin source is anything that can
report its counts via `bins()` and iterate `((lower, upper), count)` pairs
in bin order. The functions below work on any such object; types that
subclass `Histogram` get them as methods.

All views are generators built fresh on each call, so they can be requested
any number of times as long as iterating the source is repeatable.
"""

import math
from typing import Iterator, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

from .utils import count_to_float

BinRange = Tuple[float, float]
Bin = Tuple[BinRange, int]


# ---------------------------------------------------------------------------
# Bin source capability
# ---------------------------------------------------------------------------

@runtime_checkable
class BinSource(Protocol):
    """Read-only access to histogram bins."""

    def bins(self) -> Sequence[int]:
        """Return the bin counts, in bin order."""
        ...

    def __iter__(self) -> Iterator[Bin]:
        ...


# ---------------------------------------------------------------------------
# Derived statistics
# ---------------------------------------------------------------------------

def multinomial_variance(n: float, total_inv: float) -> float:
    """
    Variance of one bin count treated as a multinomial draw.

    Args:
        n: Bin count
        total_inv: 1 / (sum of all bin counts), inf for an empty total

    An empty bin has zero variance even when total_inv is inf.
    """
    if n == 0:
        return 0.0
    return n * (1.0 - n * total_inv)


def _total_inverse(source: BinSource) -> float:
    total = sum(int(count) for count in source.bins())
    # Zero-count bins still get zero variance; any other count turns -inf.
    if total == 0:
        return math.inf
    return 1.0 / count_to_float(total)


def _ratio(numerator: float, denominator: float) -> float:
    # Zero-width bins give inf/nan instead of raising.
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(numerator, denominator))


def variance(source: BinSource, bin_index: int) -> float:
    """
    Estimate the variance of the count in one bin.

    The square root of this estimates the error of the bin count.
    """
    count = source.bins()[bin_index]
    return multinomial_variance(count_to_float(count), _total_inverse(source))


def normalized_bins(source: BinSource) -> Iterator[float]:
    """Yield each bin count divided by its bin width."""
    for (lower, upper), count in source:
        yield _ratio(count_to_float(count), upper - lower)


def widths(source: BinSource) -> Iterator[float]:
    """Yield the width of each bin."""
    for (lower, upper), _ in source:
        yield upper - lower


def centers(source: BinSource) -> Iterator[float]:
    """Yield the center of each bin."""
    for (lower, upper), _ in source:
        yield 0.5 * (lower + upper)


def variances(source: BinSource) -> Iterator[float]:
    """
    Return an iterator over the variance of every bin.

    Same values as calling variance() per bin, but the total is summed once,
    when this is called.
    """
    total_inv = _total_inverse(source)
    return (
        multinomial_variance(count_to_float(count), total_inv)
        for _, count in source
    )


@runtime_checkable
class Histogram(BinSource, Protocol):
    """
    Bin source with the derived statistics attached as methods.

    Subclasses implement `bins()` and `__iter__`; everything else is
    provided.
    """

    def variance(self, bin_index: int) -> float:
        return variance(self, bin_index)

    def normalized_bins(self) -> Iterator[float]:
        return normalized_bins(self)

    def widths(self) -> Iterator[float]:
        return widths(self)

    def centers(self) -> Iterator[float]:
        return centers(self)

    def variances(self) -> Iterator[float]:
        return variances(self)


# ---------------------------------------------------------------------------
# Edge-array adapter
# ---------------------------------------------------------------------------

class EdgeHistogram(Histogram):
    """
    Read-only view of a counts array and its bin edges.

    `edges` has one more element than `counts`; bin i spans
    [edges[i], edges[i + 1]). This is the layout `numpy.histogram` returns.

    Examples:
        >>> h = EdgeHistogram([2, 6, 4], [0.0, 1.0, 3.0, 4.0])
        >>> list(h.widths())
        [1.0, 2.0, 1.0]
    """

    def __init__(self, counts, edges):
        counts = np.asarray(counts)
        edges = np.asarray(edges, dtype=np.float64)
        if counts.ndim != 1 or edges.ndim != 1:
            raise ValueError("counts and edges must be one-dimensional")
        if len(edges) != len(counts) + 1:
            raise ValueError(
                f"expected {len(counts) + 1} edges for {len(counts)} bins, "
                f"got {len(edges)}"
            )
        if counts.size and not np.issubdtype(counts.dtype, np.integer):
            raise ValueError(f"bin counts must be integers, got {counts.dtype}")
        if counts.size and counts.min() < 0:
            raise ValueError("bin counts must be non-negative")

        self._counts = counts.astype(np.int64)
        self._counts.flags.writeable = False
        self._edges = edges.copy()
        self._edges.flags.writeable = False

    @classmethod
    def from_numpy(cls, result) -> "EdgeHistogram":
        """Wrap the `(counts, edges)` pair returned by `numpy.histogram`."""
        counts, edges = result
        return cls(counts, edges)

    @property
    def edges(self) -> np.ndarray:
        return self._edges

    def bins(self) -> np.ndarray:
        return self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[Bin]:
        edges = self._edges.tolist()
        return zip(zip(edges[:-1], edges[1:]), self._counts.tolist())
