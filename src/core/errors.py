"""
Converter Errors — таксономия ошибок конвертера

Все ошибки конвертера наследуются от ConverterError.
Каждая проверка выполняется ДО изменения состояния: ошибка означает,
что ни один баланс, курс или флаг не был изменён.

Ошибки token ledger (InsufficientFundsError, InsufficientAllowanceError)
живут в src.ledger.token_ledger и пропагируются без изменений.
"""

from typing import Optional


# =============================================================================
# BASE
# =============================================================================


class ConverterError(Exception):
    """Базовая ошибка конвертера."""
    pass


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class InvalidRateError(ConverterError):
    """
    Невалидный курс конверсии.

    Возникает при нулевом знаменателе (construction или update),
    при выходе numerator/denominator за пределы uint, либо при
    десятичном курсе, который нельзя точно выразить дробью.
    """
    pass


class InvalidAmountError(ConverterError):
    """Нулевая, отрицательная или нецелая сумма (deposit/withdraw/convert)."""

    def __init__(self, message: str = "Amount must be greater than 0"):
        super().__init__(message)


# =============================================================================
# ACCESS ERRORS
# =============================================================================


class UnauthorizedError(ConverterError):
    """
    Вызов owner-only операции не владельцем.

    Attributes:
        account: адрес вызывающего (для диагностики)
    """

    def __init__(self, account: Optional[str]):
        self.account = account
        super().__init__(f"Unauthorized account: {account}")


class InvalidOwnerError(ConverterError):
    """Пустой адрес владельца (construction или transfer_ownership)."""

    def __init__(self, owner: Optional[str]):
        self.owner = owner
        super().__init__(f"Invalid owner: {owner!r}")


# =============================================================================
# PAUSE ERRORS
# =============================================================================


class PausedError(ConverterError):
    """Операция заблокирована паузой (EnforcedPause)."""

    def __init__(self, message: str = "Converter is paused"):
        super().__init__(message)


class NotPausedError(ConverterError):
    """unpause() при активном конвертере (ExpectedPause, только strict режим)."""

    def __init__(self, message: str = "Converter is not paused"):
        super().__init__(message)


# =============================================================================
# LIQUIDITY ERRORS
# =============================================================================


class InsufficientBalanceError(ConverterError):
    """
    Баланса token B у конвертера недостаточно для выплаты или вывода.

    Attributes:
        available: текущий баланс token B конвертера
        required: запрошенная сумма token B
    """

    def __init__(
        self,
        available: int,
        required: int,
        message: str = "Insufficient Token B in contract",
    ):
        self.available = available
        self.required = required
        super().__init__(message)
