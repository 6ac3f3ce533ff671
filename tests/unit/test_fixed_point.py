"""
Tests for Fixed Point — точная арифметика курса

Покрывает:
- mul_div_floor: умножение до деления, floor
- convert_amount по ConversionRate
- rate_from_decimal: сокращение через gcd и масштабирование decimals
- validate_uint / is_uint
"""

import pytest

from src.core.domain import UINT256_MAX, ConversionRate, is_uint, validate_uint
from src.core.errors import InvalidAmountError, InvalidRateError
from src.core.math import (
    RATE_SCALE_FACTOR_DEFAULT,
    convert_amount,
    mul_div_floor,
    rate_from_decimal,
)


# =============================================================================
# MUL-DIV
# =============================================================================


class TestMulDivFloor:
    """Тесты mul_div_floor"""

    def test_exact_division(self):
        assert mul_div_floor(1000, 3, 4) == 750

    def test_truncates_toward_zero(self):
        assert mul_div_floor(1, 2, 3) == 0
        assert mul_div_floor(10, 1, 3) == 3

    def test_multiplies_before_dividing(self):
        """(7 * 3) // 4 = 5, тогда как (7 // 4) * 3 = 3"""
        assert mul_div_floor(7, 3, 4) == 5

    def test_product_beyond_uint256_is_exact(self):
        """Промежуточное произведение больше uint256 не теряет точность"""
        assert mul_div_floor(UINT256_MAX, UINT256_MAX, UINT256_MAX) == UINT256_MAX

    def test_zero_denominator(self):
        with pytest.raises(InvalidRateError):
            mul_div_floor(1, 1, 0)

    def test_negative_operands(self):
        with pytest.raises(ValueError):
            mul_div_floor(-1, 1, 1)


class TestConvertAmount:
    """Тесты convert_amount"""

    def test_scenario_rate_075(self):
        """1000 A (18 decimals) при 0.75 → 750 B (9 decimals)"""
        rate = ConversionRate(numerator=3 * 10**9, denominator=4 * 10**18)
        assert convert_amount(1000 * 10**18, rate) == 750 * 10**9

    def test_scenario_rate_2(self):
        rate = ConversionRate(numerator=2 * 10**9, denominator=10**18)
        assert convert_amount(1000 * 10**18, rate) == 2000 * 10**9

    def test_dust_rounds_to_zero(self):
        """Меньше одной atomic unit B → 0"""
        rate = ConversionRate(numerator=3 * 10**9, denominator=4 * 10**18)
        assert convert_amount(10**8, rate) == 0

    def test_zero_numerator(self):
        rate = ConversionRate(numerator=0, denominator=1)
        assert convert_amount(10**18, rate) == 0


# =============================================================================
# RATE FROM DECIMAL
# =============================================================================


class TestRateFromDecimal:
    """Тесты rate_from_decimal"""

    def test_rate_075(self):
        """7500/10000 сокращается на gcd=2500 → 3/4, затем масштаб decimals"""
        rate = rate_from_decimal(0.75, 18, 9)
        assert rate.numerator == 3 * 10**9
        assert rate.denominator == 4 * 10**18

    def test_rate_2(self):
        """20000/10000 → 2/1"""
        rate = rate_from_decimal(2, 18, 9)
        assert rate.numerator == 2 * 10**9
        assert rate.denominator == 10**18

    def test_string_and_float_equivalent(self):
        assert rate_from_decimal("0.75", 18, 9) == rate_from_decimal(0.75, 18, 9)

    def test_zero_rate(self):
        rate = rate_from_decimal(0, 18, 9)
        assert rate.numerator == 0
        assert rate.denominator == 10**18

    def test_precision_limit(self):
        """4 знака после запятой допустимы, 5 — нет"""
        rate = rate_from_decimal("0.0001", 6, 6)
        assert (rate.numerator, rate.denominator) == (10**6, 10_000 * 10**6)

        with pytest.raises(InvalidRateError, match="precision"):
            rate_from_decimal("0.00001", 6, 6)

    def test_custom_scale_factor(self):
        rate = rate_from_decimal("0.00001", 0, 0, scale_factor=100_000)
        assert (rate.numerator, rate.denominator) == (1, 100_000)

    def test_default_scale_factor(self):
        assert RATE_SCALE_FACTOR_DEFAULT == 10_000

    @pytest.mark.parametrize("bad_rate", [-1, "-0.5", "inf", "NaN", "abc"])
    def test_invalid_rates(self, bad_rate):
        with pytest.raises(InvalidRateError):
            rate_from_decimal(bad_rate, 18, 9)

    def test_invalid_scale_factor(self):
        with pytest.raises(InvalidRateError):
            rate_from_decimal(1, 18, 9, scale_factor=0)

    def test_applies_to_whole_tokens(self):
        """Итоговая дробь даёт rate целых B за один целый A"""
        rate = rate_from_decimal("1.25", 6, 12)
        assert convert_amount(10**6, rate) == 125 * 10**10


# =============================================================================
# UINT VALIDATION
# =============================================================================


class TestUintValidation:
    """Тесты validate_uint / is_uint"""

    def test_valid_values(self):
        assert validate_uint(0) == 0
        assert validate_uint(UINT256_MAX) == UINT256_MAX
        assert is_uint(42)

    @pytest.mark.parametrize("value", [-1, UINT256_MAX + 1, 1.0, "1", True, None])
    def test_invalid_values(self, value):
        assert not is_uint(value)
        with pytest.raises(ValueError):
            validate_uint(value)

    def test_custom_error_class(self):
        with pytest.raises(InvalidAmountError, match="amount cannot be negative"):
            validate_uint(-5, "amount", error=InvalidAmountError)

    def test_custom_max_value(self):
        assert is_uint(255, max_value=255)
        assert not is_uint(256, max_value=255)
