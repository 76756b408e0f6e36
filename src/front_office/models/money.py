"""
Integer money helpers.

All contract money is whole dollars. Derived amounts round half-up and
proration always floors, so sums across years never drift.
"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest dollar, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def floor_divide(amount: int, divisor: int) -> int:
    """Floor division for proration; divisor must be positive."""
    if divisor <= 0:
        raise ValueError(f"Divisor must be positive, got {divisor}")
    return amount // divisor
