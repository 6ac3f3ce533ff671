"""
Тесты для доменных моделей: ConversionRate, AccessState, ConverterState, ConversionReceipt

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Границы uint256 и ненулевой знаменатель
3. Immutability (frozen=True)
4. Сериализацию/десериализацию JSON
5. Инвариант квитанции amount_b == floor(amount_a * num / den)
"""

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.domain import (
    UINT256_MAX,
    AccessState,
    ConversionRate,
    ConversionReceipt,
    ConverterState,
    PauseState,
)


# =============================================================================
# CONVERSION RATE TESTS
# =============================================================================


class TestConversionRate:
    """Тесты для модели ConversionRate"""

    def test_valid_rate(self):
        rate = ConversionRate(numerator=3 * 10**9, denominator=4 * 10**18)
        assert rate.numerator == 3 * 10**9
        assert rate.denominator == 4 * 10**18

    def test_zero_numerator_allowed(self):
        """Нулевой курс допустим: конверсия выплачивает 0"""
        assert ConversionRate(numerator=0, denominator=1).numerator == 0

    def test_zero_denominator_rejected(self):
        with pytest.raises(ValidationError):
            ConversionRate(numerator=1, denominator=0)

    def test_negative_numerator_rejected(self):
        with pytest.raises(ValidationError):
            ConversionRate(numerator=-1, denominator=1)

    def test_uint256_bounds(self):
        ConversionRate(numerator=UINT256_MAX, denominator=UINT256_MAX)
        with pytest.raises(ValidationError, match="exceeds maximum"):
            ConversionRate(numerator=UINT256_MAX + 1, denominator=1)
        with pytest.raises(ValidationError, match="exceeds maximum"):
            ConversionRate(numerator=1, denominator=UINT256_MAX + 1)

    def test_immutable(self):
        rate = ConversionRate(numerator=1, denominator=2)
        with pytest.raises(ValidationError):
            rate.numerator = 5

    def test_equality_by_value(self):
        assert ConversionRate(numerator=1, denominator=2) == ConversionRate(
            numerator=1, denominator=2
        )
        # 1/2 и 2/4: разные дроби
        assert ConversionRate(numerator=1, denominator=2) != ConversionRate(
            numerator=2, denominator=4
        )

    def test_to_decimal(self):
        rate = ConversionRate(numerator=3 * 10**9, denominator=4 * 10**18)
        assert rate.to_decimal(18, 9) == Decimal("0.75")

        rate_2 = ConversionRate(numerator=2 * 10**9, denominator=10**18)
        assert rate_2.to_decimal(18, 9) == Decimal("2")

    def test_json_roundtrip_preserves_big_ints(self):
        rate = ConversionRate(numerator=UINT256_MAX, denominator=3)
        restored = ConversionRate.model_validate_json(rate.model_dump_json())
        assert restored == rate


# =============================================================================
# ACCESS / CONVERTER STATE TESTS
# =============================================================================


class TestAccessState:

    def test_default_active(self):
        access = AccessState(owner="0xowner")
        assert access.pause_state == PauseState.ACTIVE
        assert not access.paused

    def test_paused_property(self):
        assert AccessState(owner="0xowner", pause_state=PauseState.PAUSED).paused

    def test_owner_required_but_nullable(self):
        assert AccessState(owner=None).owner is None
        with pytest.raises(ValidationError):
            AccessState()


class TestConverterState:

    @pytest.fixture
    def valid_state(self) -> ConverterState:
        return ConverterState(
            address="0xconverter",
            token_a="0xtokena",
            token_b="0xtokenb",
            rate=ConversionRate(numerator=3, denominator=4),
            access=AccessState(owner="0xowner"),
            token_a_balance=0,
            token_b_balance=100,
            event_sequence=1,
        )

    def test_defaults(self, valid_state):
        assert valid_state.schema_version == "1"

    def test_wrong_schema_version(self, valid_state):
        data = valid_state.model_dump()
        data["schema_version"] = "2"
        with pytest.raises(ValidationError):
            ConverterState(**data)

    def test_negative_balance_rejected(self, valid_state):
        data = valid_state.model_dump()
        data["token_b_balance"] = -1
        with pytest.raises(ValidationError):
            ConverterState(**data)

    def test_empty_address_rejected(self, valid_state):
        data = valid_state.model_dump()
        data["address"] = ""
        with pytest.raises(ValidationError):
            ConverterState(**data)

    def test_immutable(self, valid_state):
        with pytest.raises(ValidationError):
            valid_state.token_b_balance = 0

    def test_json_serialization(self, valid_state):
        data = json.loads(valid_state.model_dump_json())
        assert data["rate"] == {"numerator": 3, "denominator": 4}
        assert data["access"] == {"owner": "0xowner", "pause_state": "ACTIVE"}

        restored = ConverterState.model_validate(data)
        assert restored == valid_state


# =============================================================================
# RECEIPT TESTS
# =============================================================================


class TestConversionReceipt:

    def test_valid_receipt(self):
        receipt = ConversionReceipt(
            sequence=1,
            caller="0xuser",
            amount_a=1000 * 10**18,
            rate_numerator=3 * 10**9,
            rate_denominator=4 * 10**18,
            amount_b=750 * 10**9,
        )
        assert receipt.amount_b == 750 * 10**9

    def test_floor_rounding(self):
        """7 * 1 / 2 = 3.5 → 3"""
        receipt = ConversionReceipt(
            sequence=1, caller="0xuser", amount_a=7,
            rate_numerator=1, rate_denominator=2, amount_b=3,
        )
        assert receipt.amount_b == 3

    @pytest.mark.parametrize("amount_b", [4, 2])
    def test_amount_b_must_match_rate(self, amount_b):
        with pytest.raises(ValidationError, match="does not match rate"):
            ConversionReceipt(
                sequence=1, caller="0xuser", amount_a=7,
                rate_numerator=1, rate_denominator=2, amount_b=amount_b,
            )

    def test_zero_amount_a_rejected(self):
        with pytest.raises(ValidationError):
            ConversionReceipt(
                sequence=1, caller="0xuser", amount_a=0,
                rate_numerator=1, rate_denominator=2, amount_b=0,
            )

    def test_zero_sequence_rejected(self):
        with pytest.raises(ValidationError):
            ConversionReceipt(
                sequence=0, caller="0xuser", amount_a=2,
                rate_numerator=1, rate_denominator=2, amount_b=1,
            )
