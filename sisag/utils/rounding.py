"""Deterministic rounding helpers for dashboard scores."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round *value* half away from zero (``2.5 -> 3``), unlike ``round()``.

    Args:
        value: Number to round.
        ndigits: Decimal places to keep.

    Returns:
        The rounded value as a float.
    """
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))
