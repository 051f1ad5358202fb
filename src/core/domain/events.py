"""
Events — Структурированные события изменения состояния

Immutable Pydantic модели событий, которые пишутся в AuditLog.
Имена событий и полей — внешний контракт для наблюдателей
(contracts/schema/audit_event.json), внутренней логикой не читаются.

События:
- Approval, Transfer — стандартная модель allowance
- TokensMint, TokensBurn — эмиссия и погашение
- Price — каждый пересчёт цены
- Received, TransferEther — движение базовой валюты
- Purchase, Sale — итог покупки/продажи с полным контекстом
"""

from enum import Enum
from typing import Any, Dict, Literal, Union

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class EventName(str, Enum):
    """Имя события в журнале."""

    APPROVAL = "Approval"
    PRICE = "Price"
    RECEIVED = "Received"
    TOKENS_BURN = "TokensBurn"
    TOKENS_MINT = "TokensMint"
    TRANSFER = "Transfer"
    TRANSFER_ETHER = "TransferEther"
    PURCHASE = "Purchase"
    SALE = "Sale"


# =============================================================================
# BASE
# =============================================================================


class LedgerEvent(BaseModel):
    """Базовое событие. Поле event — дискриминатор."""

    model_config = {"frozen": True}

    event: EventName

    def payload(self) -> Dict[str, Any]:
        """Поля события без дискриминатора."""
        return self.model_dump(exclude={"event"})


# =============================================================================
# ALLOWANCE / TRANSFER
# =============================================================================


class Approval(LedgerEvent):
    event: Literal[EventName.APPROVAL] = EventName.APPROVAL
    owner: str = Field(..., min_length=1)
    spender: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0, description="Новое абсолютное значение allowance")


class Transfer(LedgerEvent):
    event: Literal[EventName.TRANSFER] = EventName.TRANSFER
    sender: str = Field(..., min_length=1)
    recipient: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)


# =============================================================================
# SUPPLY
# =============================================================================


class TokensMint(LedgerEvent):
    event: Literal[EventName.TOKENS_MINT] = EventName.TOKENS_MINT
    merchant: str = Field(..., min_length=1, description="Инициатор эмиссии (плательщик)")
    beneficiary: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)


class TokensBurn(LedgerEvent):
    event: Literal[EventName.TOKENS_BURN] = EventName.TOKENS_BURN
    from_: str = Field(..., min_length=1, alias="from", description="Держатель")
    amount: int = Field(..., ge=0)

    model_config = {"frozen": True, "populate_by_name": True}

    def payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"event"}, by_alias=True)


# =============================================================================
# PRICE
# =============================================================================


class Price(LedgerEvent):
    """Результат пересчёта цены (см. PriceState)."""

    event: Literal[EventName.PRICE] = EventName.PRICE
    quote_price: int = Field(..., gt=0)
    token_price_in_quote: int = Field(..., gt=0)
    token_price_in_base: int = Field(..., gt=0)
    tokens_per_base_unit: int = Field(..., gt=0)
    time: int = Field(..., gt=0)


# =============================================================================
# BASE CURRENCY
# =============================================================================


class Received(LedgerEvent):
    """Прямое поступление базовой валюты в резерв."""

    event: Literal[EventName.RECEIVED] = EventName.RECEIVED
    sender: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)


class TransferEther(LedgerEvent):
    """Исходящая выплата базовой валюты из резерва."""

    event: Literal[EventName.TRANSFER_ETHER] = EventName.TRANSFER_ETHER
    sender: str = Field(..., min_length=1)
    recipient: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)


# =============================================================================
# PURCHASE / SALE
# =============================================================================


class Purchase(LedgerEvent):
    """
    Итог покупки.

    price — tokens_per_base_unit на момент покупки;
    total_supply и reserve_balance — значения после покупки.
    """

    event: Literal[EventName.PURCHASE] = EventName.PURCHASE
    buyer: str = Field(..., min_length=1)
    beneficiary: str = Field(..., min_length=1)
    amount_in: int = Field(..., gt=0, description="Внесено базовой валюты (wei)")
    tokens_out: int = Field(..., gt=0, description="Выпущено токенов")
    price: int = Field(..., gt=0)
    total_supply: int = Field(..., ge=0)
    reserve_balance: int = Field(..., ge=0)
    time: int = Field(..., gt=0)


class Sale(LedgerEvent):
    """
    Итог продажи.

    amount_out может быть 0: погашение "пыли" меньше одного wei
    по текущей цене сжигает токены без выплаты.
    """

    event: Literal[EventName.SALE] = EventName.SALE
    seller: str = Field(..., min_length=1)
    tokens_in: int = Field(..., gt=0)
    amount_out: int = Field(..., ge=0)
    price: int = Field(..., gt=0)
    total_supply: int = Field(..., ge=0)
    reserve_balance: int = Field(..., ge=0)
    time: int = Field(..., gt=0)


AnyEvent = Union[
    Approval,
    Transfer,
    TokensMint,
    TokensBurn,
    Price,
    Received,
    TransferEther,
    Purchase,
    Sale,
]
