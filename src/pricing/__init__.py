"""Pricing — расчёт цены токена из времени и показания внешнего фида.

- PriceFeed / Clock: протоколы внешних источников
- StaticPriceFeed, CallablePriceFeed, SystemClock, FixedClock: реализации
- PricingEngine: чистый расчёт PriceState
"""

from .engine import PricingEngine
from .feeds import (
    CallablePriceFeed,
    Clock,
    FixedClock,
    PriceFeed,
    StaticPriceFeed,
    SystemClock,
)

__all__ = [
    "PricingEngine",
    "PriceFeed",
    "Clock",
    "StaticPriceFeed",
    "CallablePriceFeed",
    "SystemClock",
    "FixedClock",
]
