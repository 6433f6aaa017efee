"""Integer rounding helpers shared by prediction and pricing."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round halves upward (2.5 -> 3), unlike the built-in banker's rounding."""

    return int(math.floor(float(value) + 0.5))


def ceil_div(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    return -(-int(numerator) // int(denominator))
