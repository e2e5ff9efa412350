"""
Capability protocols shared by the running estimators.

Any type with the right methods qualifies; nothing has to inherit from
these. They exist for type hints and isinstance() checks.
"""

from typing import Protocol, TypeVar, runtime_checkable

_T = TypeVar("_T", bound="Merge")


@runtime_checkable
class Estimate(Protocol):
    """Estimate a statistic of a population from observations sampled from it."""

    def add(self, x: float) -> None:
        """Add an observation sampled from the population."""
        ...

    def estimate(self) -> float:
        """Estimate the statistic of the population."""
        ...


@runtime_checkable
class Merge(Protocol):
    """Absorb another estimator of the same kind into this one."""

    def merge(self: _T, other: _T) -> None:
        ...
