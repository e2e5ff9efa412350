"""
Running mean and variance -- single-pass, O(1) memory, mergeable.

Average absorbs samples one at a time with Welford's update and combines
partial accumulators with the pairwise formula of Chan et al., so a stream
can be split into chunks, accumulated independently, and merged without
ever buffering the samples.
"""

import copy
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .constants import SUMMARY_DIGITS
from .utils import count_to_float, sqrt_or_nan


@dataclass
class Average:
    """
    Arithmetic mean and variance of a sequence of numbers.

    Everything is calculated iteratively using constant memory, so the
    sequence can be a generator. The update and merge formulas avoid the
    cancellation of the naive sum-of-squares approach.

    Examples:
        >>> a = Average.from_iterable([1.0, 2.0, 3.0, 4.0, 5.0])
        >>> a.mean, a.sample_variance(), a.population_variance()
        (3.0, 2.5, 2.0)
    """
    n: int = 0          # number of samples
    mean: float = 0.0   # running mean, 0.0 while empty
    m2: float = 0.0     # sum of squared deviations from the mean

    def __post_init__(self):
        # Only reachable with explicit arguments, e.g. a summary from a worker.
        if isinstance(self.n, float) and not self.n.is_integer():
            raise ValueError(f"sample count must be an integer, got {self.n}")
        if self.n < 0:
            raise ValueError(f"sample count must be non-negative, got {self.n}")
        if self.m2 < 0:
            raise ValueError(
                f"sum of squared deviations must be non-negative, got {self.m2}"
            )
        self.n = int(self.n)

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Average":
        """Accumulate every value of a finite iterable, in order."""
        avg = cls()
        avg.extend(values)
        return avg

    # -----------------------------------------------------------------------
    # Updates
    # -----------------------------------------------------------------------

    def add(self, x: float) -> None:
        """Add a sample to the sequence."""
        # Welford (1962). The second factor must use the updated mean.
        self.n += 1
        delta = x - self.mean
        self.mean += delta / count_to_float(self.n)
        self.m2 += delta * (x - self.mean)

    def extend(self, values: Iterable[float]) -> None:
        """Add every value of an iterable. numpy arrays are flattened."""
        if isinstance(values, np.ndarray):
            values = values.ravel().tolist()
        for x in values:
            self.add(x)

    def merge(self, other: "Average") -> None:
        """
        Merge the samples summarized by another Average into this one.

        `other` is left unchanged. The result matches accumulating both
        sequences directly, up to floating-point rounding.
        """
        if other.n == 0:
            return
        if self.n == 0:
            self.n, self.mean, self.m2 = other.n, other.mean, other.m2
            return

        # Chan et al. (1979).
        delta = other.mean - self.mean
        len_self = count_to_float(self.n)
        len_other = count_to_float(other.n)
        len_total = len_self + len_other
        self.n += other.n
        # Chan et al. use `mean += delta * len_other / len_total`, which
        # cancels badly when both sides hold a similar number of samples.
        self.mean = (len_self * self.mean + len_other * other.mean) / len_total
        self.m2 += other.m2 + delta * delta * len_self * len_other / len_total

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def __len__(self) -> int:
        return self.n

    def is_empty(self) -> bool:
        return self.n == 0

    def estimate(self) -> float:
        """Estimate the mean of the population."""
        return self.mean

    def sample_variance(self) -> float:
        """
        Unbiased sample variance, m2 / (n - 1).

        Assumes the sequence is a sample of a larger population. Returns 0.0
        below two samples, where the estimator is undefined.
        """
        if self.n < 2:
            return 0.0
        return self.m2 / count_to_float(self.n - 1)

    def population_variance(self) -> float:
        """
        Population variance, m2 / n.

        Assumes the sequence is the entire population. Returns 0.0 below two
        samples.
        """
        if self.n < 2:
            return 0.0
        return self.m2 / count_to_float(self.n)

    def std(self) -> float:
        """Sample standard deviation."""
        return sqrt_or_nan(self.sample_variance())

    def error(self) -> float:
        """Standard error of the mean."""
        if self.n == 0:
            return 0.0
        return sqrt_or_nan(self.sample_variance() / count_to_float(self.n))

    def copy(self) -> "Average":
        # copy.copy does not run __post_init__, so -inf/nan state survives.
        return copy.copy(self)

    def to_dict(self) -> dict:
        return {
            "count": self.n,
            "mean": round(self.mean, SUMMARY_DIGITS),
            "variance": round(self.sample_variance(), SUMMARY_DIGITS),
            "std": round(self.std(), SUMMARY_DIGITS),
            "error": round(self.error(), SUMMARY_DIGITS),
        }


def combine(partials: Iterable[Average], *, verbose: bool = False) -> Average:
    """
    Merge partial accumulators into a fresh one.

    This is how independently accumulated chunks (one per thread, process,
    or file) are reduced to a single result. The partials are not modified.

    Args:
        partials: Accumulators to merge, in any order
        verbose: Print a line per absorbed partial

    Returns:
        Average summarizing every sample of every partial
    """
    def log(msg: str):
        if verbose:
            print(msg)

    total = Average()
    count = 0
    for count, part in enumerate(partials, start=1):
        total.merge(part)
        log(f"  [{count}] +{part.n} samples -> n={total.n}, mean={total.mean:.6g}")

    log(f"Combined {count} partials: n={total.n}, "
        f"mean={total.mean:.6g}, variance={total.sample_variance():.6g}")
    return total
