"""
Domain models and value objects.

Contains scaling units, PriceState, LedgerState/LedgerSnapshot and events.
"""

from src.core.domain.events import (
    AnyEvent,
    Approval,
    EventName,
    LedgerEvent,
    Price,
    Purchase,
    Received,
    Sale,
    TokensBurn,
    TokensMint,
    Transfer,
    TransferEther,
)
from src.core.domain.ledger_state import LedgerSnapshot, LedgerState
from src.core.domain.price_state import PriceState
from src.core.domain.units import (
    BASE_UNIT,
    EPOCH_START_TS,
    FEED_DECIMALS,
    QUOTE_SCALE,
    TOKEN_DECIMALS,
    WEI_SCALE,
    ZERO_ADDRESS,
    ether,
    feed_reading,
    is_zero_address,
    tokens,
)

__all__ = [
    # Units module
    "BASE_UNIT",
    "QUOTE_SCALE",
    "WEI_SCALE",
    "FEED_DECIMALS",
    "EPOCH_START_TS",
    "TOKEN_DECIMALS",
    "ZERO_ADDRESS",
    "is_zero_address",
    "ether",
    "tokens",
    "feed_reading",
    # State
    "LedgerState",
    "LedgerSnapshot",
    "PriceState",
    # Events
    "EventName",
    "LedgerEvent",
    "AnyEvent",
    "Approval",
    "Transfer",
    "TokensMint",
    "TokensBurn",
    "Price",
    "Received",
    "TransferEther",
    "Purchase",
    "Sale",
]
