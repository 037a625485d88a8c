"""Rounding helpers matching calculator-style half-up rounding."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with ties away from zero instead of to even."""
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    # Values that round to zero lose their sign.
    return float(rounded) + 0.0


def round_int(value: float) -> int:
    """Round to the nearest integer with ties away from zero."""
    return int(round_half_up(value))
