"""
Price Feed & Clock — внешние источники для расчёта цены

PriceFeed отдаёт одно показание: цену базового актива в quote-валюте,
масштабированную на 10^8 (целое). Методология агрегации фида вне зоны
ответственности; здесь — только как показание потребляется.

Clock отдаёт текущее время (Unix timestamp, секунды, целое).
"""

import time
from typing import Callable, Protocol, runtime_checkable


# =============================================================================
# PROTOCOLS
# =============================================================================


@runtime_checkable
class PriceFeed(Protocol):
    """Источник цены базового актива."""

    def latest_price(self) -> int:
        """Последнее показание (цена × 10^8). Может быть ≤ 0 — проверяет PricingEngine."""
        ...


@runtime_checkable
class Clock(Protocol):
    """Источник текущего времени."""

    def now(self) -> int:
        ...


# =============================================================================
# FEEDS
# =============================================================================


class StaticPriceFeed:
    """
    Фид с фиксированным показанием.

    Показание можно заменить через set_price (тесты, ручной оракул).
    """

    def __init__(self, price: int):
        self._price = price

    def latest_price(self) -> int:
        return self._price

    def set_price(self, price: int) -> None:
        self._price = price


class CallablePriceFeed:
    """Адаптер: любой callable без аргументов → PriceFeed."""

    def __init__(self, source: Callable[[], int]):
        self._source = source

    def latest_price(self) -> int:
        return self._source()


# =============================================================================
# CLOCKS
# =============================================================================


class SystemClock:
    """Системное время UTC, округлённое вниз до секунды."""

    def now(self) -> int:
        return int(time.time())


class FixedClock:
    """Управляемые часы для тестов и воспроизводимых расчётов."""

    def __init__(self, ts: int):
        self._ts = ts

    def now(self) -> int:
        return self._ts

    def set(self, ts: int) -> None:
        self._ts = ts

    def advance(self, seconds: int) -> int:
        """Сдвиг вперёд на seconds; возвращает новое время."""
        if seconds < 0:
            raise ValueError(f"Clock cannot move backwards: {seconds}")
        self._ts += seconds
        return self._ts
