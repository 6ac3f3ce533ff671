"""Converter — конверсия token A в token B по точному курсу.

- RateConverter: балансы, курс, владелец, пауза
- ConversionPreflight: read-only проверки конверсии
- EventLog: канал событий
- ConverterConfig: конфигурация (в том числе из окружения)
"""

from .config import ConverterConfig
from .events import ConverterEvent, EventLog, EventType
from .preflight import ConversionCheckResult, ConversionPreflight
from .rate_converter import RateConverter, generate_address

__all__ = [
    "RateConverter",
    "generate_address",
    "ConversionPreflight",
    "ConversionCheckResult",
    "ConverterConfig",
    "ConverterEvent",
    "EventLog",
    "EventType",
]
