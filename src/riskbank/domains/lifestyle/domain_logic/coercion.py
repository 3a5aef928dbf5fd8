"""Numeric coercion primitives shared by the normalizer and the scoring engine.

None of these functions raise on bad input: an unparsable value comes back
as ``math.nan`` (or ``None`` for integer parses) and callers check for it.
"""

from __future__ import annotations

import math
import re
from typing import Any

_INT_PREFIX = re.compile(r"^\s*([+-]?)0*(\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Leading integers with more significant digits than this saturate.
_MAX_INT_DIGITS = 18


def parse_number(value: Any) -> float:
    """Parse a number from a float, int or numeric string.

    Strings may use a comma as the decimal separator (``"7,5"`` -> 7.5) and
    only their leading numeric part is read (``"7 units"`` -> 7.0).
    Returns ``math.nan`` for empty, non-numeric or non-finite input.
    """
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, float):
        number = value
    elif isinstance(value, int):
        try:
            number = float(value)
        except OverflowError:
            return math.nan
    elif isinstance(value, str):
        match = _FLOAT_PREFIX.match(value.replace(",", ".", 1))
        if match is None:
            return math.nan
        number = float(match.group(1))
    else:
        return math.nan
    return number if math.isfinite(number) else math.nan


def parse_int_prefix(value: Any) -> int | None:
    """Parse the leading integer of a value (``"40.7"`` -> 40, ``"12abc"`` -> 12).

    Digit runs too long to convert saturate to ``±10**18``.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _INT_PREFIX.match(str(value))
    if match is None:
        return None
    sign, digits = match.groups()
    if len(digits) > _MAX_INT_DIGITS:
        digits = "1" + "0" * _MAX_INT_DIGITS
    return int(sign + digits)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a value to [lo, hi]."""
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def derive_bmi(weight_kg: Any, height_cm: Any) -> float:
    """Body-mass index from weight (kg) and height (cm), or NaN if underivable."""
    weight = parse_number(weight_kg)
    height = parse_number(height_cm)
    if math.isnan(weight) or math.isnan(height) or height <= 0:
        return math.nan
    metres = height / 100
    return weight / (metres * metres)
