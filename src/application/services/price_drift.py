"""
Application service: percentage drift of the current price from its 52-week extremes.

Values are returned at full precision; rounding and sign prefixes belong to
whoever renders them. float('nan') marks an undefined result.
"""

import math
from typing import Optional

NAN = float("nan")


def _is_finite(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def pct_drift(current: Optional[float], reference: Optional[float]) -> float:
    if not (_is_finite(current) and _is_finite(reference)) or reference == 0:
        return NAN
    return ((current - reference) / reference) * 100


def pct_from_high(current: Optional[float], high_52: Optional[float]) -> float:
    return pct_drift(current, high_52)


def pct_from_low(current: Optional[float], low_52: Optional[float]) -> float:
    return pct_drift(current, low_52)
