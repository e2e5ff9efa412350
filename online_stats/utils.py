"""
Shared helpers -- count conversion for the accumulator and histogram code.
"""

import numpy as np

from .constants import MAX_EXACT_COUNT


def count_to_float(count: int, *, strict: bool = False) -> float:
    """
    Convert a sample or bin count to a double for use in a formula.

    Counts up to MAX_EXACT_COUNT (2**53) convert exactly. Above that the
    result is rounded to the nearest representable double; the default
    accepts this silently since no realistic stream gets there.

    Args:
        count: Non-negative integer count
        strict: Raise instead of rounding past the exact ceiling

    Raises:
        OverflowError: if strict and count exceeds MAX_EXACT_COUNT

    Examples:
        >>> count_to_float(5)
        5.0
        >>> count_to_float(2 ** 53 + 1)
        9007199254740992.0
    """
    if strict and count > MAX_EXACT_COUNT:
        raise OverflowError(
            f"count {count} exceeds the exact float ceiling "
            f"({MAX_EXACT_COUNT}); converting would lose precision"
        )
    return float(count)


def sqrt_or_nan(value: float) -> float:
    """
    Square root that returns nan for negative or nan input instead of raising.

    Overflowed accumulators can carry -inf; their spread is then nan, not an
    error.
    """
    with np.errstate(invalid="ignore"):
        return float(np.sqrt(value))
