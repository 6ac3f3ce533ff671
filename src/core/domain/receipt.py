"""
ConversionReceipt — Результат выполненной конверсии

Immutable Pydantic модель, возвращаемая convert_tokens().
Фиксирует курс, по которому прошла конверсия: последующий
update_conversion_rate на квитанцию не влияет.
"""

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class ConversionReceipt(BaseModel):
    """
    Квитанция конверсии token A → token B.

    Инвариант: amount_b == floor(amount_a * rate_numerator / rate_denominator)
    """

    sequence: int = Field(..., ge=1, description="Номер события TokensConverted")
    caller: str = Field(..., min_length=1, description="Адрес инициатора конверсии")

    amount_a: int = Field(..., gt=0, description="Списано token A (atomic units)")
    rate_numerator: int = Field(..., ge=0, description="Числитель курса")
    rate_denominator: int = Field(..., gt=0, description="Знаменатель курса")
    amount_b: int = Field(..., ge=0, description="Выплачено token B (atomic units)")

    model_config = {"frozen": True}

    @field_validator("amount_b")
    @classmethod
    def validate_amount_b_matches_rate(cls, v: int, info: ValidationInfo) -> int:
        """amount_b должен точно соответствовать курсу (floor)."""
        data = info.data
        if not {"amount_a", "rate_numerator", "rate_denominator"} <= data.keys():
            # Ошибка в предыдущих полях уже зафиксирована pydantic
            return v
        expected = data["amount_a"] * data["rate_numerator"] // data["rate_denominator"]
        if v != expected:
            raise ValueError(f"amount_b {v} does not match rate (expected {expected})")
        return v
