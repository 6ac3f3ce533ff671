"""
Contract Validation Module

Проверка снапшотов, квитанций и событий конвертера по JSON Schema.
"""

from .validators import (
    SCHEMA_DIR,
    ContractValidator,
    ConversionReceiptValidator,
    ConverterEventValidator,
    ConverterStateValidator,
    SchemaLoader,
    to_payload,
    validate_conversion_receipt,
    validate_converter_event,
    validate_converter_state,
)

__all__ = [
    "SCHEMA_DIR",
    "SchemaLoader",
    "ContractValidator",
    "ConverterStateValidator",
    "ConversionReceiptValidator",
    "ConverterEventValidator",
    "to_payload",
    "validate_converter_state",
    "validate_conversion_receipt",
    "validate_converter_event",
]
