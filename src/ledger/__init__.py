"""Ledger — ERC20-совместимые реестры токенов, с которыми работает конвертер."""

from .token_ledger import (
    InsufficientAllowanceError,
    InsufficientFundsError,
    InvalidAddressError,
    LedgerError,
    TokenLedger,
)

__all__ = [
    "TokenLedger",
    "LedgerError",
    "InvalidAddressError",
    "InsufficientFundsError",
    "InsufficientAllowanceError",
]
