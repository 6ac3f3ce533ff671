"""
Общие фикстуры: два токена, конвертер с курсом 0.75, пользователь с token A.

Token A: 18 decimals (WOXEN), token B: 9 decimals (SESH).
"""

import pytest

from src.converter import RateConverter
from src.core.domain.units import parse_units
from src.core.math.fixed_point import rate_from_decimal
from src.ledger import TokenLedger


OWNER = "0x00000000000000000000000000000000000000a1"
USER = "0x00000000000000000000000000000000000000b2"
OTHER = "0x00000000000000000000000000000000000000c3"
CONVERTER_ADDRESS = "0x00000000000000000000000000000000000000cc"

DECIMALS_A = 18
DECIMALS_B = 9

RATE = 0.75
RATE_2 = 2

# 1000 token A (atomic units)
TEST_AMOUNT_A = parse_units("1000", DECIMALS_A)
# 10000 token B в конвертере
SEED_AMOUNT_B = parse_units("10000", DECIMALS_B)


@pytest.fixture
def first_rate():
    return rate_from_decimal(RATE, DECIMALS_A, DECIMALS_B)


@pytest.fixture
def second_rate():
    return rate_from_decimal(RATE_2, DECIMALS_A, DECIMALS_B)


@pytest.fixture
def token_a():
    return TokenLedger(
        "WOxen Token", "WOXEN", DECIMALS_A,
        initial_supply=100_000_000 * 10**DECIMALS_A, initial_holder=OWNER,
    )


@pytest.fixture
def token_b():
    return TokenLedger(
        "SESH Token", "SESH", DECIMALS_B,
        initial_supply=240_000_000 * 10**DECIMALS_B, initial_holder=OWNER,
    )


@pytest.fixture
def converter(token_a, token_b, first_rate):
    """Конвертер с курсом 0.75; USER владеет 2000 token A и одобрил их конвертеру."""
    conv = RateConverter(
        token_a, token_b,
        first_rate.numerator, first_rate.denominator,
        owner=OWNER, address=CONVERTER_ADDRESS,
    )
    token_a.transfer(OWNER, USER, TEST_AMOUNT_A * 2)
    token_a.approve(USER, conv.address, TEST_AMOUNT_A * 2)
    return conv


@pytest.fixture
def seeded_converter(converter, token_b):
    """Конвертер с 10000 token B на балансе."""
    token_b.approve(OWNER, converter.address, SEED_AMOUNT_B)
    converter.deposit_token_b(OWNER, SEED_AMOUNT_B)
    return converter
