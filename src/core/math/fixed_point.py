"""
Fixed Point — Точная целочисленная арифметика курса

Модуль обеспечивает точные вычисления конверсии без float:
- mul_div_floor: умножение до деления, округление вниз
- Конверсия суммы по ConversionRate
- Построение точной дроби из десятичного курса и decimals токенов

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float никогда не участвует в расчётах сумм
2. Умножение всегда выполняется до деления (без потери точности)
3. Результат округляется к нулю (floor для неотрицательных операндов)
4. Все операции детерминированы и воспроизводимы
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Final, Union

from src.core.domain.converter_state import ConversionRate
from src.core.domain.units import validate_decimals
from src.core.errors import InvalidRateError

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Масштаб десятичного курса: 4 знака после запятой (0.75 -> 7500 / 10000)
RATE_SCALE_FACTOR_DEFAULT: Final[int] = 10_000


# =============================================================================
# MUL-DIV
# =============================================================================


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """
    Точное floor(a * b / denominator).

    Произведение считается целиком (int произвольной точности),
    поэтому переполнения и потери точности нет.

    Raises:
        InvalidRateError: Если denominator == 0
        ValueError: Если операнды отрицательные

    Examples:
        >>> mul_div_floor(1000, 3, 4)
        750
        >>> mul_div_floor(1, 2, 3)
        0
    """
    if denominator == 0:
        raise InvalidRateError("Denominator must be greater than 0")
    if a < 0 or b < 0 or denominator < 0:
        raise ValueError(f"Operands must be non-negative: {a}, {b}, {denominator}")
    return (a * b) // denominator


def convert_amount(amount_a: int, rate: ConversionRate) -> int:
    """
    Конверсия суммы token A в token B по курсу.

    amount_b = floor(amount_a * numerator / denominator)

    Args:
        amount_a: Сумма token A (atomic units)
        rate: Курс конверсии

    Returns:
        Сумма token B (atomic units)
    """
    return mul_div_floor(amount_a, rate.numerator, rate.denominator)


# =============================================================================
# ПОСТРОЕНИЕ КУРСА
# =============================================================================


def rate_from_decimal(
    rate: Union[str, int, float, Decimal],
    decimals_a: int,
    decimals_b: int,
    scale_factor: int = RATE_SCALE_FACTOR_DEFAULT,
) -> ConversionRate:
    """
    Точная дробь курса из десятичного значения и decimals токенов.

    Алгоритм:
        scaled = rate * scale_factor (должно быть целым)
        divisor = gcd(scale_factor, scaled)
        numerator = scaled / divisor * 10**decimals_b
        denominator = scale_factor / divisor * 10**decimals_a

    Args:
        rate: Курс (сколько целых B за один целый A), например 0.75
        decimals_a: decimals токена A
        decimals_b: decimals токена B
        scale_factor: Масштаб (default: 10000 → 4 знака после запятой)

    Returns:
        ConversionRate

    Raises:
        InvalidRateError: Если курс отрицательный, не конечный или точнее scale_factor

    Examples:
        >>> r = rate_from_decimal(0.75, 18, 9)
        >>> (r.numerator, r.denominator) == (3 * 10**9, 4 * 10**18)
        True
    """
    if isinstance(scale_factor, bool) or not isinstance(scale_factor, int) or scale_factor <= 0:
        raise InvalidRateError(f"scale_factor must be a positive int, got {scale_factor!r}")
    validate_decimals(decimals_a)
    validate_decimals(decimals_b)

    try:
        value = Decimal(str(rate)) if isinstance(rate, float) else Decimal(rate)
    except (InvalidOperation, TypeError) as e:
        raise InvalidRateError(f"Invalid rate: {rate!r}") from e

    if not value.is_finite() or value < 0:
        raise InvalidRateError(f"Rate must be a finite non-negative number, got {rate!r}")

    scaled = value * scale_factor
    if scaled != scaled.to_integral_value():
        raise InvalidRateError(
            f"Rate {rate!r} has more precision than scale factor {scale_factor}"
        )
    scaled_int = int(scaled)

    # gcd(x, 0) == x: нулевой курс сворачивается в 0 / 10**decimals_a
    divisor = math.gcd(scale_factor, scaled_int)

    return ConversionRate(
        numerator=(scaled_int // divisor) * 10**decimals_b,
        denominator=(scale_factor // divisor) * 10**decimals_a,
    )
