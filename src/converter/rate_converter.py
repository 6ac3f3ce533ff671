"""RateConverter — конверсия token A в token B по точному курсу

Конвертер держит балансы token A и token B на внешних token ledger,
курс как целочисленную дробь numerator/denominator, владельца и флаг паузы.

Операции:
- update_conversion_rate: owner-only, атомарная замена курса
- deposit_token_b: кто угодно, разрешён на паузе
- withdraw_token_b: owner-only, разрешён на паузе
- convert_tokens: кто угодно, блокируется паузой
- pause/unpause: owner-only
- transfer_ownership/renounce_ownership: owner-only

Атомарность: все публичные операции выполняются под одним RLock,
все проверки выполняются до изменения состояния.
"""

import logging
import secrets
import threading
from decimal import Decimal
from typing import Optional, Union

from src.access.ownable import Ownable
from src.access.pause_state_machine import PauseStateMachine, PauseTransitionResult
from src.core.domain.converter_state import (
    AccessState,
    ConversionRate,
    ConverterState,
    PauseState,
)
from src.core.contracts import validate_conversion_receipt, validate_converter_state
from src.core.domain.receipt import ConversionReceipt
from src.core.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidRateError,
    NotPausedError,
    PausedError,
)
from src.core.domain.units import validate_uint
from src.core.math.fixed_point import convert_amount, rate_from_decimal
from src.converter.config import ConverterConfig
from src.converter.events import EventLog, EventType
from src.converter.preflight import (
    BLOCK_ENFORCED_PAUSE,
    BLOCK_INSUFFICIENT_TOKEN_B,
    BLOCK_INVALID_AMOUNT,
    ConversionCheckResult,
    ConversionPreflight,
)
from src.ledger.token_ledger import TokenLedger

logger = logging.getLogger(__name__)


def generate_address() -> str:
    """Случайный 20-байтный hex адрес."""
    return "0x" + secrets.token_hex(20)


class RateConverter:
    """Конвертер token A → token B по курсу numerator/denominator.

    Вызывающий адрес передаётся явно в каждую операцию (caller).
    Балансы конвертера читаются из ledger по self.address.
    """

    def __init__(
        self,
        token_a: TokenLedger,
        token_b: TokenLedger,
        numerator: int,
        denominator: int,
        owner: str,
        address: Optional[str] = None,
        config: Optional[ConverterConfig] = None,
        event_log: Optional[EventLog] = None,
    ):
        """
        Args:
            token_a: ledger токена A (принимается при конверсии)
            token_b: ledger токена B (выплачивается при конверсии)
            numerator: числитель курса
            denominator: знаменатель курса (> 0)
            owner: адрес владельца (deployer)
            address: адрес конвертера в ledger (default: случайный)
            config: конфигурация
            event_log: канал событий

        Raises:
            InvalidRateError: Если denominator == 0 или значения вне uint
            InvalidOwnerError: Если owner пустой
        """
        self.config = config or ConverterConfig()
        self._rate = self._build_rate(numerator, denominator)

        self.token_a = token_a
        self.token_b = token_b
        self.address = address or generate_address()

        self._ownable = Ownable(owner)
        self._pause_state = PauseState.ACTIVE
        self._pause_machine = PauseStateMachine()
        self._preflight = ConversionPreflight()
        self.event_log = event_log or EventLog()

        self._lock = threading.RLock()

        logger.info(
            f"RateConverter {self.address} deployed by {owner}: "
            f"{token_a.symbol} → {token_b.symbol} at {numerator}/{denominator}"
        )

    @classmethod
    def from_decimal_rate(
        cls,
        token_a: TokenLedger,
        token_b: TokenLedger,
        rate: Union[str, int, float, Decimal],
        owner: str,
        address: Optional[str] = None,
        config: Optional[ConverterConfig] = None,
        event_log: Optional[EventLog] = None,
    ) -> "RateConverter":
        """Создание конвертера по десятичному курсу (например, 0.75).

        Дробь строится по decimals обоих токенов и rate_scale_factor конфигурации.
        """
        config = config or ConverterConfig()
        conversion_rate = rate_from_decimal(
            rate, token_a.decimals, token_b.decimals, config.rate_scale_factor
        )
        return cls(
            token_a,
            token_b,
            conversion_rate.numerator,
            conversion_rate.denominator,
            owner,
            address=address,
            config=config,
            event_log=event_log,
        )

    # =========================================================================
    # ЧТЕНИЕ
    # =========================================================================

    @property
    def owner(self) -> Optional[str]:
        return self._ownable.owner

    @property
    def paused(self) -> bool:
        return self._pause_state == PauseState.PAUSED

    @property
    def conversion_rate(self) -> ConversionRate:
        return self._rate

    @property
    def conversion_rate_numerator(self) -> int:
        return self._rate.numerator

    @property
    def conversion_rate_denominator(self) -> int:
        return self._rate.denominator

    def token_a_balance(self) -> int:
        return self.token_a.balance_of(self.address)

    def token_b_balance(self) -> int:
        return self.token_b.balance_of(self.address)

    def quote(self, amount_a: int) -> int:
        """Сумма token B за amount_a по текущему курсу (без проверок ликвидности)."""
        self._require_amount(amount_a)
        return convert_amount(amount_a, self._rate)

    def preview_conversion(self, caller: str, amount_a: int) -> ConversionCheckResult:
        """Read-only проверка конверсии, включая allowance и баланс caller.

        Returns:
            ConversionCheckResult; состояние не меняется
        """
        with self._lock:
            return self._preflight.evaluate(
                paused=self.paused,
                amount_a=amount_a,
                rate=self._rate,
                token_b_available=self.token_b_balance(),
                caller_allowance=self.token_a.allowance(caller, self.address),
                caller_balance=self.token_a.balance_of(caller),
                max_amount=self.config.max_uint,
            )

    def snapshot(self) -> ConverterState:
        """Снапшот состояния конвертера, проверенный по converter_state.json."""
        with self._lock:
            state = ConverterState(
                address=self.address,
                token_a=self.token_a.address,
                token_b=self.token_b.address,
                rate=self._rate,
                access=AccessState(owner=self.owner, pause_state=self._pause_state),
                token_a_balance=self.token_a_balance(),
                token_b_balance=self.token_b_balance(),
                event_sequence=self.event_log.last_sequence,
            )
            validate_converter_state(state)
            return state

    # =========================================================================
    # OWNER-ONLY
    # =========================================================================

    def update_conversion_rate(self, caller: str, numerator: int, denominator: int) -> None:
        """Атомарная замена курса (numerator и denominator вместе).

        Raises:
            UnauthorizedError: Если caller не владелец
            InvalidRateError: Если denominator == 0 или значения вне uint
        """
        with self._lock:
            self._ownable.check_owner(caller)
            new_rate = self._build_rate(numerator, denominator)

            previous = self._rate
            self._rate = new_rate

            logger.info(
                f"Conversion rate updated by {caller}: "
                f"{previous.numerator}/{previous.denominator} → {numerator}/{denominator}"
            )
            self.event_log.emit(
                EventType.CONVERSION_RATE_UPDATED,
                caller,
                numerator=numerator,
                denominator=denominator,
            )

    def update_conversion_rate_decimal(
        self, caller: str, rate: Union[str, int, float, Decimal]
    ) -> ConversionRate:
        """Замена курса по десятичному значению (через rate_from_decimal)."""
        new_rate = rate_from_decimal(
            rate, self.token_a.decimals, self.token_b.decimals, self.config.rate_scale_factor
        )
        self.update_conversion_rate(caller, new_rate.numerator, new_rate.denominator)
        return new_rate

    def withdraw_token_b(self, caller: str, amount: int) -> None:
        """Вывод token B владельцу. Разрешён на паузе.

        Raises:
            UnauthorizedError: Если caller не владелец
            InvalidAmountError: Если amount == 0
            InsufficientBalanceError: Если amount больше баланса token B конвертера
        """
        with self._lock:
            self._ownable.check_owner(caller)
            self._require_amount(amount)

            available = self.token_b_balance()
            if amount > available:
                raise InsufficientBalanceError(
                    available, amount, message="Insufficient Token B balance to withdraw"
                )

            self.token_b.transfer(self.address, caller, amount)
            self.event_log.emit(EventType.TOKEN_B_WITHDRAWN, caller, amount=amount)

    def pause(self, caller: str) -> PauseTransitionResult:
        """Перевод в PAUSED. Повторный pause() — no-op (или PausedError в strict режиме)."""
        with self._lock:
            self._ownable.check_owner(caller)
            result = self._pause_machine.evaluate_transition(
                self._pause_state, PauseState.PAUSED
            )
            if not result.transition_occurred:
                if self.config.strict_pause_transitions:
                    raise PausedError()
                logger.info(f"pause() by {caller}: {result.details}")
                return result

            self._pause_state = result.new_state
            self.event_log.emit(EventType.PAUSED, caller)
            return result

    def unpause(self, caller: str) -> PauseTransitionResult:
        """Перевод в ACTIVE. Повторный unpause() — no-op (или NotPausedError в strict режиме)."""
        with self._lock:
            self._ownable.check_owner(caller)
            result = self._pause_machine.evaluate_transition(
                self._pause_state, PauseState.ACTIVE
            )
            if not result.transition_occurred:
                if self.config.strict_pause_transitions:
                    raise NotPausedError()
                logger.info(f"unpause() by {caller}: {result.details}")
                return result

            self._pause_state = result.new_state
            self.event_log.emit(EventType.UNPAUSED, caller)
            return result

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """
        Raises:
            UnauthorizedError: Если caller не владелец
            InvalidOwnerError: Если new_owner пустой
        """
        with self._lock:
            previous = self._ownable.transfer_ownership(caller, new_owner)
            self.event_log.emit(
                EventType.OWNERSHIP_TRANSFERRED,
                caller,
                previous_owner=previous,
                new_owner=new_owner,
            )

    def renounce_ownership(self, caller: str) -> None:
        with self._lock:
            previous = self._ownable.renounce_ownership(caller)
            self.event_log.emit(
                EventType.OWNERSHIP_TRANSFERRED,
                caller,
                previous_owner=previous,
                new_owner=None,
            )

    # =========================================================================
    # ПУБЛИЧНЫЕ
    # =========================================================================

    def deposit_token_b(self, caller: str, amount: int) -> None:
        """Пополнение token B конвертера. Разрешено всем, в том числе на паузе.

        Требует allowance token B конвертеру не меньше amount.

        Raises:
            InvalidAmountError: Если amount == 0
            InsufficientAllowanceError / InsufficientFundsError: из ledger token B
        """
        with self._lock:
            self._require_amount(amount)
            self.token_b.transfer_from(self.address, caller, self.address, amount)
            self.event_log.emit(EventType.TOKEN_B_DEPOSITED, caller, amount=amount)

    def convert_tokens(self, caller: str, amount_a: int) -> ConversionReceipt:
        """Конверсия amount_a token A в token B по текущему курсу.

        amount_b = floor(amount_a * numerator / denominator)

        Списание token A и выплата token B выполняются атомарно:
        при любой ошибке выплаты списанный token A и allowance caller восстанавливаются.

        Raises:
            InvalidAmountError: Если amount_a == 0 (в том числе на паузе)
            PausedError: Если конвертер на паузе
            InsufficientBalanceError: Если token B конвертера меньше amount_b
            InsufficientAllowanceError / InsufficientFundsError: из ledger token A
        """
        with self._lock:
            check = self._preflight.evaluate(
                paused=self.paused,
                amount_a=amount_a,
                rate=self._rate,
                token_b_available=self.token_b_balance(),
                max_amount=self.config.max_uint,
            )
            if not check.allowed:
                self._raise_for_block(check)

            rate = self._rate
            amount_b = check.amount_b

            self.token_a.transfer_from(self.address, caller, self.address, amount_a)
            try:
                self.token_b.transfer(self.address, caller, amount_b)
            except Exception:
                logger.error(
                    f"Payout of {amount_b} {self.token_b.symbol} to {caller} failed, "
                    f"refunding {amount_a} {self.token_a.symbol}"
                )
                self.token_a.revert_transfer_from(self.address, caller, self.address, amount_a)
                raise

            event = self.event_log.emit(
                EventType.TOKENS_CONVERTED,
                caller,
                amount_a=amount_a,
                amount_b=amount_b,
            )
            receipt = ConversionReceipt(
                sequence=event.sequence,
                caller=caller,
                amount_a=amount_a,
                rate_numerator=rate.numerator,
                rate_denominator=rate.denominator,
                amount_b=amount_b,
            )
            validate_conversion_receipt(receipt)
            return receipt

    # =========================================================================
    # ВНУТРЕННИЕ
    # =========================================================================

    def _build_rate(self, numerator: int, denominator: int) -> ConversionRate:
        validate_uint(numerator, "numerator", self.config.max_uint, error=InvalidRateError)
        validate_uint(denominator, "denominator", self.config.max_uint, error=InvalidRateError)
        if denominator == 0:
            raise InvalidRateError("Denominator must be greater than 0")
        return ConversionRate(numerator=numerator, denominator=denominator)

    def _require_amount(self, amount: int) -> None:
        validate_uint(amount, "amount", self.config.max_uint, error=InvalidAmountError)
        if amount == 0:
            raise InvalidAmountError()

    def _raise_for_block(self, check: ConversionCheckResult) -> None:
        if check.block_reason == BLOCK_ENFORCED_PAUSE:
            raise PausedError()
        if check.block_reason == BLOCK_INVALID_AMOUNT:
            raise InvalidAmountError()
        if check.block_reason == BLOCK_INSUFFICIENT_TOKEN_B:
            raise InsufficientBalanceError(check.token_b_available, check.amount_b)
        raise RuntimeError(f"Unexpected preflight block: {check.block_reason}")
