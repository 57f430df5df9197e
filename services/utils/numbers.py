"""Numeric helpers shared by the calculator, presets and exporters."""

from __future__ import annotations
import math
from typing import Any, Optional


def _finite_float(value: Any) -> Optional[float]:
    """float(value) when it is a finite number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        # int wider than a double
        return None
    return number if math.isfinite(number) else None


def coerce(value: Any) -> float:
    """
    Return a finite number as float, anything else as 0.0.

    Unset fields (None / "") count as zero so callers never need
    null-checks downstream.
    """
    number = _finite_float(value)
    return 0.0 if number is None else number


def format_fixed2(number: Any) -> str:
    """Render with exactly two decimals; non-finite values render as '0.00'."""
    value = _finite_float(number)
    if value is None:
        return "0.00"
    text = f"{value:.2f}"
    # -0.001 rounds to "-0.00"
    return "0.00" if text == "-0.00" else text


def parse_number(raw: Any) -> Optional[float]:
    """
    Parse stored or user input into a finite float.

    Examples:
        12 -> 12.0
        '1,5' -> 1.5
        '' -> None
        'abc' -> None
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return _finite_float(raw)
    if isinstance(raw, str):
        text = raw.strip().replace(",", ".")
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
        return value if math.isfinite(value) else None
    return None


def clamp_non_negative(value: Optional[float]) -> Optional[float]:
    """Clamp negatives to 0.0, keep unset as None."""
    if value is None:
        return None
    return value if value >= 0 else 0.0
