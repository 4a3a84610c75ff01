"""Numeric helpers shared by stats and pricing."""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for positives (2.5 -> 3), unlike built-in round()."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor
