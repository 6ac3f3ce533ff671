"""
TokenUnits — конверсия между человекочитаемыми суммами и atomic units

Единственный допустимый способ преобразований между:
- десятичной суммой токена ("1000.5")
- atomic units (целое число, amount * 10**decimals)

Все преобразования точные (Decimal с повышенной точностью), float
допускается только на входе и сразу переводится через str().
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Final, Type, Union


# =============================================================================
# UINT ГРАНИЦЫ
# =============================================================================

# Разрядность суммы по умолчанию (uint256)
UINT_BITS_DEFAULT: Final[int] = 256

# Максимальная представимая сумма (2**256 - 1)
UINT256_MAX: Final[int] = 2**UINT_BITS_DEFAULT - 1

# Максимальное число десятичных знаков токена
DECIMALS_MAX: Final[int] = 77

# Точность Decimal для конверсий (хватает для uint256 + DECIMALS_MAX)
_DECIMAL_PRECISION: Final[int] = 160


UnitsValue = Union[str, int, float, Decimal]


def max_uint(bits: int = UINT_BITS_DEFAULT) -> int:
    """Максимальное беззнаковое значение для заданной разрядности."""
    if bits <= 0:
        raise ValueError(f"bits must be positive, got {bits}")
    return 2**bits - 1


def is_uint(value: object, max_value: int = UINT256_MAX) -> bool:
    """Проверка, что value — int в диапазоне [0, max_value] (bool не считается)."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= max_value


def validate_uint(
    value: object,
    name: str = "value",
    max_value: int = UINT256_MAX,
    error: Type[Exception] = ValueError,
) -> int:
    """
    Проверка беззнакового целого.

    Единая проверка границ uint для сумм, курса и моделей.

    Args:
        value: Проверяемое значение
        name: Имя параметра для сообщения об ошибке
        max_value: Верхняя граница (default: uint256)
        error: Класс исключения (default: ValueError)

    Returns:
        value без изменений

    Raises:
        error: Если value не int, отрицательное или больше max_value
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise error(f"{name} must be int, got {type(value).__name__}")
    if value < 0:
        raise error(f"{name} cannot be negative: {value}")
    if value > max_value:
        raise error(f"{name} {value} exceeds maximum {max_value}")
    return value


def validate_decimals(decimals: int) -> None:
    """
    Проверка числа десятичных знаков токена.

    Raises:
        ValueError: Если decimals не int или вне [0, DECIMALS_MAX]
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise ValueError(f"decimals must be int, got {type(decimals).__name__}")
    if decimals < 0 or decimals > DECIMALS_MAX:
        raise ValueError(f"decimals must be in [0, {DECIMALS_MAX}], got {decimals}")


def _to_decimal(value: UnitsValue) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() даёт кратчайшее представление: 0.75 -> "0.75"
        return Decimal(str(value))
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid decimal value: {value!r}") from e


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def parse_units(value: UnitsValue, decimals: int) -> int:
    """
    Конверсия: десятичная сумма → atomic units.

    Args:
        value: Сумма токена ("750", 1000, Decimal("0.5"))
        decimals: Число десятичных знаков токена

    Returns:
        value * 10**decimals как int

    Raises:
        ValueError: Если сумма отрицательная, не конечная или
            содержит больше знаков после запятой, чем decimals

    Examples:
        >>> parse_units("750", 9)
        750000000000
        >>> parse_units("0.5", 18)
        500000000000000000
    """
    validate_decimals(decimals)
    amount = _to_decimal(value)

    if not amount.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: {value!r}")

    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        scaled = amount.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise ValueError(
                f"Amount {value!r} has more than {decimals} decimal places"
            )
        return int(scaled)


def format_units(amount: int, decimals: int) -> str:
    """
    Конверсия: atomic units → десятичная строка.

    Examples:
        >>> format_units(750000000000, 9)
        '750.0'
        >>> format_units(1500000000000000000, 18)
        '1.5'
    """
    validate_decimals(decimals)
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"amount must be int, got {type(amount).__name__}")

    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), 10**decimals)

    if decimals == 0:
        return f"{sign}{whole}"

    frac_str = str(frac).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{frac_str}"
