"""Conversion Preflight — упорядоченные проверки перед конверсией

Порядок проверок (первая сработавшая блокирует):
1. Сумма (0, отрицательная, не int, больше max) → invalid_amount
2. Пауза → enforced_pause
3. Ликвидность token B конвертера → insufficient_token_b
4. Allowance token A (опционально) → insufficient_allowance
5. Баланс token A вызывающего (опционально) → insufficient_funds

Проверки read-only: preflight ничего не меняет. convert_tokens использует
шаги 1-3, проверки ledger выполняет сам ledger при transfer_from.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.converter_state import ConversionRate
from src.core.domain.units import UINT256_MAX, is_uint
from src.core.math.fixed_point import convert_amount


BLOCK_ENFORCED_PAUSE = "enforced_pause"
BLOCK_INVALID_AMOUNT = "invalid_amount"
BLOCK_INSUFFICIENT_TOKEN_B = "insufficient_token_b"
BLOCK_INSUFFICIENT_ALLOWANCE = "insufficient_allowance"
BLOCK_INSUFFICIENT_FUNDS = "insufficient_funds"


@dataclass(frozen=True)
class ConversionCheckResult:
    """Результат preflight проверки конверсии."""

    allowed: bool
    block_reason: str

    # Входные параметры для диагностики
    amount_a: object
    amount_b: Optional[int]
    token_b_available: int

    # Детали
    details: str


class ConversionPreflight:
    """Preflight конверсии token A → token B."""

    def evaluate(
        self,
        paused: bool,
        amount_a: object,
        rate: ConversionRate,
        token_b_available: int,
        caller_allowance: Optional[int] = None,
        caller_balance: Optional[int] = None,
        max_amount: int = UINT256_MAX,
    ) -> ConversionCheckResult:
        """Оценка допуска конверсии.

        Args:
            paused: конвертер на паузе
            amount_a: запрошенная сумма token A
            rate: текущий курс
            token_b_available: баланс token B конвертера
            caller_allowance: allowance token A конвертеру (None — не проверять)
            caller_balance: баланс token A вызывающего (None — не проверять)
            max_amount: верхняя граница суммы

        Returns:
            ConversionCheckResult с решением о допуске
        """
        # 1. Сумма: нулевая сумма отклоняется независимо от паузы
        if not is_uint(amount_a, max_amount) or amount_a == 0:
            return self._blocked(
                BLOCK_INVALID_AMOUNT, amount_a, None, token_b_available,
                f"Amount must be greater than 0, got {amount_a!r}"
            )

        # 2. Пауза
        if paused:
            return self._blocked(
                BLOCK_ENFORCED_PAUSE, amount_a, None, token_b_available,
                "Converter is paused: conversions blocked"
            )

        amount_b = convert_amount(amount_a, rate)

        # 3. Ликвидность token B
        if token_b_available < amount_b:
            return self._blocked(
                BLOCK_INSUFFICIENT_TOKEN_B, amount_a, amount_b, token_b_available,
                f"Insufficient Token B in contract: available={token_b_available}, required={amount_b}"
            )

        # 4-5. Проверки ledger (только для preview)
        if caller_allowance is not None and caller_allowance < amount_a:
            return self._blocked(
                BLOCK_INSUFFICIENT_ALLOWANCE, amount_a, amount_b, token_b_available,
                f"Allowance {caller_allowance} < amount {amount_a}"
            )

        if caller_balance is not None and caller_balance < amount_a:
            return self._blocked(
                BLOCK_INSUFFICIENT_FUNDS, amount_a, amount_b, token_b_available,
                f"Token A balance {caller_balance} < amount {amount_a}"
            )

        # PASS
        return ConversionCheckResult(
            allowed=True,
            block_reason="",
            amount_a=amount_a,
            amount_b=amount_b,
            token_b_available=token_b_available,
            details=f"PASS: amount_a={amount_a}, amount_b={amount_b}",
        )

    def _blocked(
        self,
        reason: str,
        amount_a: object,
        amount_b: Optional[int],
        token_b_available: int,
        details: str,
    ) -> ConversionCheckResult:
        return ConversionCheckResult(
            allowed=False,
            block_reason=reason,
            amount_a=amount_a,
            amount_b=amount_b,
            token_b_available=token_b_available,
            details=details,
        )
