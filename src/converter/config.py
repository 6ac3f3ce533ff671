"""
Converter Configuration

Конфигурация конвертера с загрузкой из переменных окружения.
"""

import logging
import os
from dataclasses import dataclass

from src.core.domain.units import UINT_BITS_DEFAULT, max_uint
from src.core.math.fixed_point import RATE_SCALE_FACTOR_DEFAULT

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class ConverterConfig:
    """Конфигурация конвертера.

    - rate_scale_factor: масштаб десятичного курса для rate_from_decimal
    - amount_bits: разрядность сумм и курса (uint256 по умолчанию)
    - strict_pause_transitions: повторный pause()/unpause() отклоняется
      ошибкой вместо no-op
    """

    rate_scale_factor: int = RATE_SCALE_FACTOR_DEFAULT
    amount_bits: int = UINT_BITS_DEFAULT
    strict_pause_transitions: bool = False

    def __post_init__(self):
        if self.rate_scale_factor <= 0:
            raise ValueError(
                f"rate_scale_factor must be positive, got {self.rate_scale_factor}"
            )
        if not 8 <= self.amount_bits <= UINT_BITS_DEFAULT:
            raise ValueError(
                f"amount_bits must be in [8, {UINT_BITS_DEFAULT}], got {self.amount_bits}"
            )

    @property
    def max_uint(self) -> int:
        """Максимальная сумма/числитель/знаменатель."""
        return max_uint(self.amount_bits)

    @classmethod
    def from_env(cls) -> "ConverterConfig":
        """
        Загрузка конфигурации из переменных окружения.

        Environment variables:
            CONVERTER_RATE_SCALE_FACTOR: масштаб десятичного курса (default: 10000)
            CONVERTER_AMOUNT_BITS: разрядность сумм (default: 256)
            CONVERTER_STRICT_PAUSE: строгие переходы паузы (true/false, default: false)

        Returns:
            ConverterConfig

        Raises:
            ValueError: Если значение переменной не парсится
        """
        scale_factor = _env_int("CONVERTER_RATE_SCALE_FACTOR", RATE_SCALE_FACTOR_DEFAULT)
        amount_bits = _env_int("CONVERTER_AMOUNT_BITS", UINT_BITS_DEFAULT)
        strict_pause = _env_bool("CONVERTER_STRICT_PAUSE", False)

        config = cls(
            rate_scale_factor=scale_factor,
            amount_bits=amount_bits,
            strict_pause_transitions=strict_pause,
        )
        logger.info(f"Loaded converter config: {config}")
        return config


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")
