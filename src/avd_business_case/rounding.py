"""Rounding helpers shared by the calculators."""

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties toward positive infinity.

    Matches JavaScript's ``Math.round`` rather than Python's banker's
    rounding, so 12.5 -> 13 and 0.5 -> 1.
    """
    return math.floor(value + 0.5)


def round_to(value: float, digits: int) -> float:
    """Round half up to a fixed number of decimal places."""
    factor = 10 ** digits
    return round_half_up(value * factor) / factor
