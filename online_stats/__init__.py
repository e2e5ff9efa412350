"""
Online Statistics

Running mean/variance over streams too large to buffer, and per-bin
statistics derived from externally owned histogram data.

Package structure:
  average.py    - Average accumulator (Welford update, Chan et al. merge)
  histogram.py  - Histogram capability: bin variances and derived views
  estimators.py - Estimate / Merge capability protocols
  utils.py      - count conversion helpers
  constants.py  - numeric constants
"""

from .average import Average, combine
from .estimators import Estimate, Merge
from .histogram import (
    BinSource,
    EdgeHistogram,
    Histogram,
    multinomial_variance,
)

__version__ = "0.1.0"

__all__ = [
    "Average",
    "combine",
    "Estimate",
    "Merge",
    "BinSource",
    "EdgeHistogram",
    "Histogram",
    "multinomial_variance",
]
