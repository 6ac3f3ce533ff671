"""
Domain models and value objects.

Contains fundamental domain entities like ConversionRate, ConverterState, ConversionReceipt.
"""

from src.core.domain.converter_state import (
    AccessState,
    ConversionRate,
    ConverterState,
    PauseState,
)
from src.core.domain.receipt import ConversionReceipt
from src.core.domain.units import (
    DECIMALS_MAX,
    UINT256_MAX,
    UINT_BITS_DEFAULT,
    format_units,
    is_uint,
    max_uint,
    parse_units,
    validate_decimals,
    validate_uint,
)

__all__ = [
    # Units module
    "UINT_BITS_DEFAULT",
    "UINT256_MAX",
    "DECIMALS_MAX",
    "max_uint",
    "parse_units",
    "format_units",
    "validate_decimals",
    "is_uint",
    "validate_uint",
    # Converter state models
    "PauseState",
    "ConversionRate",
    "AccessState",
    "ConverterState",
    # Receipt model
    "ConversionReceipt",
]
