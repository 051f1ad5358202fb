"""
PriceState — Снапшот рассчитанной цены токена

Immutable Pydantic модель, представляющая результат одного расчёта цены.
Полная совместимость с JSON Schema (contracts/schema/price_state.json).

Все поля — масштабированные целые (см. src.core.domain.units).
"""

from pydantic import BaseModel, Field


class PriceState(BaseModel):
    """
    Рассчитанная цена токена.

    Immutable модель (frozen=True). Пересчитывается с нуля при каждом
    запросе; между моментами времени не кэшируется.
    """

    # Входы
    time: int = Field(..., gt=0, description="Момент расчёта (Unix timestamp, секунды)")
    elapsed: int = Field(..., gt=0, description="Секунд с начала эпохи")
    quote_price: int = Field(
        ..., gt=0, description="Показание фида: цена базового актива в quote × 10^8"
    )

    # Производные
    token_price_in_quote: int = Field(
        ..., gt=0, description="Цена токена в quote-единицах × 10^9 (BASE_UNIT + elapsed)"
    )
    token_price_in_base: int = Field(
        ..., gt=0, description="Цена токена в wei (token_price_in_quote × 10^17 // quote_price)"
    )
    tokens_per_base_unit: int = Field(
        ..., gt=0, description="Атомарных единиц токена за 1 wei (10^18 // token_price_in_base)"
    )

    model_config = {"frozen": True}
