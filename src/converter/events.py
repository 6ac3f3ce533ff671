"""
Converter Events — канал уведомлений конвертера

Конвертер публикует события после успешного изменения состояния
(Paused/Unpaused несут адрес инициатора). Доставка подписчикам best-effort:
ошибка подписчика логируется и не влияет на операцию.

Каждое событие проверяется по contracts/schema/converter_event.json до записи.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from src.core.contracts import validate_converter_event

logger = logging.getLogger(__name__)


# =============================================================================
# EVENT MODEL
# =============================================================================


class EventType(str, Enum):
    """Тип события конвертера."""

    PAUSED = "Paused"
    UNPAUSED = "Unpaused"
    OWNERSHIP_TRANSFERRED = "OwnershipTransferred"
    CONVERSION_RATE_UPDATED = "ConversionRateUpdated"
    TOKEN_B_DEPOSITED = "TokenBDeposited"
    TOKEN_B_WITHDRAWN = "TokenBWithdrawn"
    TOKENS_CONVERTED = "TokensConverted"


class ConverterEvent(BaseModel):
    """Событие конвертера (immutable)."""

    sequence: int = Field(..., ge=1, description="Монотонный номер события")
    event: EventType = Field(..., description="Тип события")
    account: Optional[str] = Field(..., description="Адрес инициатора")
    data: Dict[str, Union[int, str, None]] = Field(
        default_factory=dict, description="Параметры события"
    )

    model_config = {"frozen": True}


EventSubscriber = Callable[[ConverterEvent], None]


# =============================================================================
# EVENT LOG
# =============================================================================


class EventLog:
    """
    Журнал событий с подписчиками.

    Номера событий строго возрастают начиная с 1.
    """

    def __init__(self):
        self._events: List[ConverterEvent] = []
        self._subscribers: List[EventSubscriber] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    @property
    def last_sequence(self) -> int:
        with self._lock:
            return self._events[-1].sequence if self._events else 0

    def subscribe(self, callback: EventSubscriber) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: EventSubscriber) -> None:
        with self._lock:
            self._subscribers.remove(callback)

    def emit(
        self,
        event: EventType,
        account: Optional[str],
        **data: Union[int, str, None],
    ) -> ConverterEvent:
        """
        Запись события и уведомление подписчиков.

        Args:
            event: Тип события
            account: Адрес инициатора
            **data: Параметры события

        Returns:
            Записанное событие

        Raises:
            jsonschema.ValidationError: Событие не соответствует контракту
        """
        with self._lock:
            record = ConverterEvent(
                sequence=len(self._events) + 1,
                event=event,
                account=account,
                data=data,
            )
            validate_converter_event(record)
            self._events.append(record)
            subscribers = list(self._subscribers)

        logger.info(f"Event #{record.sequence} {record.event.value} by {account} {data}")

        for callback in subscribers:
            try:
                callback(record)
            except Exception:
                logger.exception(
                    f"Event subscriber {callback!r} failed on {record.event.value}"
                )

        return record

    def events(self, event_type: Optional[EventType] = None) -> List[ConverterEvent]:
        """Все события (опционально только заданного типа) в порядке записи."""
        with self._lock:
            if event_type is None:
                return list(self._events)
            return [e for e in self._events if e.event == event_type]

    def last(self, event_type: Optional[EventType] = None) -> Optional[ConverterEvent]:
        matching = self.events(event_type)
        return matching[-1] if matching else None
