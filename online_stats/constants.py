"""
Numeric constants for the online statistics package.

Tunables live here rather than in a config file: the package does no I/O,
so everything it needs to know is fixed at import time.
"""

# ---------------------------------------------------------------------------
# Count precision
# ---------------------------------------------------------------------------
# Sample counts are ints, but every formula divides by them as doubles.
# A double has a 53-bit significand, so counts up to 2**53 convert exactly.
# Past this ceiling consecutive counts collapse onto the same float.

MAX_EXACT_COUNT: int = 2 ** 53

# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------
# Decimal places kept by to_dict() summaries.

SUMMARY_DIGITS: int = 6
