"""
Numeric helpers shared by the graders.

Rounding is half away from zero on the number's shortest decimal
representation: 2.5 -> 3, -2.5 -> -3, 2.675 -> 2.68 at two places.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def _to_decimal(value: float | int) -> Decimal:
    return Decimal(repr(value)) if isinstance(value, float) else Decimal(value)


def round_half_up(value: float | int, places: int = 0) -> float:
    """Round half away from zero to `places` decimal places."""
    try:
        quantum = Decimal(1).scaleb(-places)
        return float(_to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # inf/nan and values too large to quantize pass through
        return float(value)


def within_tolerance(actual: float, expected: float, tolerance: float) -> bool:
    """
    Check |actual - expected| <= tolerance in decimal arithmetic.

    Binary floats make 9.6 - 9.8 slightly larger than 0.2, so the boundary is
    evaluated on the decimal representations instead.
    """
    try:
        diff = abs(_to_decimal(actual) - _to_decimal(expected))
        return diff <= _to_decimal(tolerance)
    except InvalidOperation:
        return abs(actual - expected) <= tolerance


def format_number(value: float | int) -> str:
    """Render a number without a trailing '.0' for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
