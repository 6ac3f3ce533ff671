"""
TokenLedger — ERC20-совместимый реестр балансов и allowance

Внешний коллаборатор конвертера: по одному экземпляру на token A и token B.
Конвертер только вызывает transfer / transfer_from / balance_of и не хранит
балансы сам.

Семантика (как у ERC20):
- Начальная эмиссия зачисляется initial_holder
- transfer_from сначала проверяет allowance, затем баланс владельца
- allowance == UINT256_MAX считается бесконечным и не уменьшается
- Все операции атомарны: при ошибке ни один баланс не меняется
"""

import logging
import threading
from typing import Dict, Optional, Tuple

from src.core.domain.units import UINT256_MAX, format_units, validate_decimals, validate_uint

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class LedgerError(Exception):
    """Базовая ошибка token ledger."""
    pass


class InvalidAddressError(LedgerError):
    """Пустой адрес отправителя/получателя/spender."""

    def __init__(self, address: Optional[str], role: str):
        self.address = address
        self.role = role
        super().__init__(f"Invalid {role} address: {address!r}")


class InsufficientFundsError(LedgerError):
    """
    Баланса holder недостаточно для списания.

    Attributes:
        holder: адрес, с которого списываются токены
        available: текущий баланс
        required: запрошенная сумма
    """

    def __init__(self, holder: str, available: int, required: int):
        self.holder = holder
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient balance: {holder} has {available}, needs {required}"
        )


class InsufficientAllowanceError(LedgerError):
    """
    Allowance spender недостаточен для transfer_from.

    Attributes:
        spender: адрес, списывающий токены
        available: текущий allowance
        required: запрошенная сумма
    """

    def __init__(self, spender: str, available: int, required: int):
        self.spender = spender
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient allowance: {spender} has {available}, needs {required}"
        )


# =============================================================================
# TOKEN LEDGER
# =============================================================================


class TokenLedger:
    """
    In-process ERC20 ledger.

    Потокобезопасен: все чтения и изменения под одним lock.
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        decimals: int = 18,
        initial_supply: int = 0,
        initial_holder: Optional[str] = None,
        address: Optional[str] = None,
    ):
        """
        Args:
            name: Название токена ("WOxen Token")
            symbol: Тикер ("WOXEN")
            decimals: Число десятичных знаков
            initial_supply: Начальная эмиссия (atomic units)
            initial_holder: Получатель начальной эмиссии (обязателен при supply > 0)
            address: Адрес токена (default: symbol)
        """
        validate_decimals(decimals)
        validate_uint(initial_supply, "initial_supply")
        if initial_supply > 0 and not initial_holder:
            raise InvalidAddressError(initial_holder, "initial holder")

        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.address = address or symbol

        self._balances: Dict[str, int] = {}
        self._allowances: Dict[Tuple[str, str], int] = {}
        self._total_supply = 0
        self._lock = threading.RLock()

        if initial_supply > 0:
            self._balances[initial_holder] = initial_supply
            self._total_supply = initial_supply
            logger.info(
                f"{self.symbol}: minted {format_units(initial_supply, decimals)} to {initial_holder}"
            )

    def __repr__(self) -> str:
        return f"TokenLedger(symbol={self.symbol!r}, address={self.address!r})"

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    @property
    def total_supply(self) -> int:
        with self._lock:
            return self._total_supply

    def balance_of(self, holder: str) -> int:
        with self._lock:
            return self._balances.get(holder, 0)

    def allowance(self, owner: str, spender: str) -> int:
        with self._lock:
            return self._allowances.get((owner, spender), 0)

    # -------------------------------------------------------------------------
    # Изменение
    # -------------------------------------------------------------------------

    def approve(self, owner: str, spender: str, amount: int) -> None:
        """
        Установка allowance (замена, не прибавление).

        Raises:
            InvalidAddressError: Пустой owner или spender
            ValueError: amount не uint256
        """
        _require_address(owner, "approver")
        _require_address(spender, "spender")
        validate_uint(amount, "amount")

        with self._lock:
            self._allowances[(owner, spender)] = amount
        logger.debug(f"{self.symbol}: {owner} approved {spender} for {amount}")

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """
        Перевод с баланса sender.

        Raises:
            InsufficientFundsError: Баланс sender < amount
        """
        _require_address(sender, "sender")
        _require_address(to, "receiver")
        validate_uint(amount, "amount")

        with self._lock:
            self._move(sender, to, amount)

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """
        Перевод с баланса owner силами spender в пределах allowance.

        Порядок проверок: allowance, затем баланс owner.

        Raises:
            InsufficientAllowanceError: allowance(owner, spender) < amount
            InsufficientFundsError: Баланс owner < amount
        """
        _require_address(spender, "spender")
        _require_address(owner, "sender")
        _require_address(to, "receiver")
        validate_uint(amount, "amount")

        with self._lock:
            current_allowance = self._allowances.get((owner, spender), 0)
            if current_allowance < amount:
                raise InsufficientAllowanceError(spender, current_allowance, amount)

            balance = self._balances.get(owner, 0)
            if balance < amount:
                raise InsufficientFundsError(owner, balance, amount)

            if current_allowance != UINT256_MAX:
                self._allowances[(owner, spender)] = current_allowance - amount
            self._move(owner, to, amount)

    def revert_transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """
        Откат выполненного transfer_from: amount возвращается от to к owner,
        израсходованный allowance восстанавливается (бесконечный не меняется).

        Raises:
            InsufficientFundsError: Баланс to < amount
        """
        _require_address(spender, "spender")
        _require_address(owner, "receiver")
        _require_address(to, "sender")
        validate_uint(amount, "amount")

        with self._lock:
            self._move(to, owner, amount)
            current_allowance = self._allowances.get((owner, spender), 0)
            if current_allowance != UINT256_MAX:
                self._allowances[(owner, spender)] = min(
                    current_allowance + amount, UINT256_MAX
                )
        logger.info(f"{self.symbol}: reverted {amount} from {to} back to {owner}")

    def _move(self, sender: str, to: str, amount: int) -> None:
        # Вызывается под self._lock
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise InsufficientFundsError(sender, balance, amount)

        self._balances[sender] = balance - amount
        self._balances[to] = self._balances.get(to, 0) + amount
        logger.debug(f"{self.symbol}: {sender} -> {to}: {amount}")


def _require_address(address: Optional[str], role: str) -> None:
    if not isinstance(address, str) or not address.strip():
        raise InvalidAddressError(address, role)
