"""
Core math modules для конвертера

Точная целочисленная арифметика курса без float.
"""

from src.core.math.fixed_point import (
    RATE_SCALE_FACTOR_DEFAULT,
    convert_amount,
    mul_div_floor,
    rate_from_decimal,
)

__all__ = [
    # Constants
    "RATE_SCALE_FACTOR_DEFAULT",
    # Arithmetic
    "mul_div_floor",
    "convert_amount",
    # Rate construction
    "rate_from_decimal",
]
