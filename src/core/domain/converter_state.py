"""
ConverterState — Модели состояния конвертера

Immutable Pydantic модели:
- ConversionRate: курс как точная целочисленная дробь numerator/denominator
- AccessState: владелец и состояние паузы
- ConverterState: снапшот конвертера (курс, доступ, балансы)

Полная совместимость с JSON Schema (contracts/schema/converter_state.json).
"""

from enum import Enum
from decimal import Decimal, localcontext
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from .units import validate_uint


# =============================================================================
# ENUMS
# =============================================================================


class PauseState(str, Enum):
    """
    Состояние паузы конвертера.

    ACTIVE → PAUSED через pause(), PAUSED → ACTIVE через unpause().
    Терминального состояния нет.
    """

    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"


# =============================================================================
# CONVERSION RATE
# =============================================================================


class ConversionRate(BaseModel):
    """
    Курс конверсии token A → token B.

    amount_b = floor(amount_a * numerator / denominator)

    Дробь уже включает разницу в decimals токенов, поэтому
    применяется напрямую к atomic units. Заменяется только целиком.
    """

    numerator: int = Field(..., ge=0, description="Числитель курса (uint)")
    denominator: int = Field(..., gt=0, description="Знаменатель курса (uint, > 0)")

    model_config = {"frozen": True}

    @field_validator("numerator", "denominator")
    @classmethod
    def validate_uint256(cls, v: int, info: ValidationInfo) -> int:
        """Числитель и знаменатель должны помещаться в uint256."""
        return validate_uint(v, info.field_name)

    def to_decimal(self, decimals_a: int, decimals_b: int) -> Decimal:
        """
        Человекочитаемый курс (сколько целых B за один целый A).

        Только для отображения и логов; в расчётах не используется.

        Args:
            decimals_a: decimals токена A
            decimals_b: decimals токена B
        """
        with localcontext() as ctx:
            ctx.prec = 80
            scaled = Decimal(self.numerator * 10**decimals_a) / Decimal(
                self.denominator * 10**decimals_b
            )
            return scaled.normalize()


# =============================================================================
# ACCESS STATE
# =============================================================================


class AccessState(BaseModel):
    """Владелец и состояние паузы."""

    owner: Optional[str] = Field(
        ..., description="Адрес владельца (None после renounce_ownership)"
    )
    pause_state: PauseState = Field(
        default=PauseState.ACTIVE, description="Состояние паузы"
    )

    model_config = {"frozen": True}

    @property
    def paused(self) -> bool:
        return self.pause_state == PauseState.PAUSED


# =============================================================================
# CONVERTER STATE MODEL
# =============================================================================


class ConverterState(BaseModel):
    """
    Снапшот состояния конвертера.

    Immutable модель (frozen=True). Балансы читаются из token ledger
    в момент снапшота; конвертер не хранит их отдельно.
    """

    schema_version: str = Field(
        default="1", pattern="^1$", description="Версия схемы снапшота"
    )
    address: str = Field(..., min_length=1, description="Адрес конвертера")
    token_a: str = Field(..., min_length=1, description="Адрес token A")
    token_b: str = Field(..., min_length=1, description="Адрес token B")

    rate: ConversionRate = Field(..., description="Текущий курс")
    access: AccessState = Field(..., description="Владелец и пауза")

    token_a_balance: int = Field(..., ge=0, description="Баланс token A конвертера")
    token_b_balance: int = Field(..., ge=0, description="Баланс token B конвертера")

    event_sequence: int = Field(
        ..., ge=0, description="Номер последнего события (0 если событий не было)"
    )

    model_config = {"frozen": True}
