import math

import pytest

from online_stats.constants import MAX_EXACT_COUNT
from online_stats.utils import count_to_float, sqrt_or_nan


def test_exact_below_ceiling() -> None:
    assert count_to_float(0) == 0.0
    assert count_to_float(MAX_EXACT_COUNT) == float(2 ** 53)
    assert int(count_to_float(MAX_EXACT_COUNT - 1)) == MAX_EXACT_COUNT - 1


def test_rounds_silently_above_ceiling() -> None:
    assert count_to_float(MAX_EXACT_COUNT + 1) == float(MAX_EXACT_COUNT)


def test_strict_raises_above_ceiling() -> None:
    assert count_to_float(MAX_EXACT_COUNT, strict=True) == float(MAX_EXACT_COUNT)
    with pytest.raises(OverflowError, match="exact float ceiling"):
        count_to_float(MAX_EXACT_COUNT + 1, strict=True)


def test_sqrt_or_nan() -> None:
    assert sqrt_or_nan(2.25) == 1.5
    assert sqrt_or_nan(float("inf")) == float("inf")
    assert math.isnan(sqrt_or_nan(-1.0))
    assert math.isnan(sqrt_or_nan(float("-inf")))
    assert math.isnan(sqrt_or_nan(float("nan")))
