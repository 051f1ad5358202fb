"""
PricingEngine — Детерминированный расчёт цены токена

Цена токена растёт линейно со временем и номинирована во внешней
quote-валюте; показание фида переводит её в базовую валюту.

ФОРМУЛЫ (все деления — целочисленные, floor):
    elapsed              = now - epoch_start                    (> 0)
    token_price_in_quote = BASE_UNIT + elapsed                  (1 единица / сек)
    token_price_in_base  = token_price_in_quote * QUOTE_SCALE // quote_price
    tokens_per_base_unit = WEI_SCALE // token_price_in_base

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Чистая функция от (now, quote_price, epoch_start), без побочных эффектов
2. Без кэширования между вызовами
3. Промежуточные значения не округляются и не сглаживаются
4. Для фиксированного quote_price token_price_in_quote не убывает по now
"""

import structlog

from src.core.domain.price_state import PriceState
from src.core.domain.units import BASE_UNIT, EPOCH_START_TS, QUOTE_SCALE, WEI_SCALE
from src.core.errors import InvalidPriceFeed, InvalidTimestamp
from src.core.math.fixed_point import checked_add, floor_div, is_uint, mul_div

logger = structlog.get_logger(__name__)


class PricingEngine:
    """
    Расчёт PriceState из (now, feed_reading).

    Порядок проверок:
    1. now > epoch_start → иначе InvalidTimestamp
    2. feed_reading > 0 → иначе InvalidPriceFeed
    3. Производные цены > 0 → иначе InvalidPriceFeed (показание вне
       представимого диапазона: токен дороже 1 ether за атомарную единицу)
    """

    def __init__(self, epoch_start: int = EPOCH_START_TS):
        """
        Args:
            epoch_start: момент, когда цена токена равна 1 quote-единице
        """
        self.epoch_start = epoch_start

    def compute_price(self, now: int, feed_reading: int) -> PriceState:
        """
        Расчёт цены.

        Args:
            now: текущее время (Unix timestamp, секунды)
            feed_reading: цена базового актива в quote × 10^8

        Returns:
            PriceState со всеми промежуточными значениями

        Raises:
            InvalidTimestamp: now <= epoch_start
            InvalidPriceFeed: feed_reading <= 0 или цена непредставима
        """
        if not is_uint(now) or now <= self.epoch_start:
            raise InvalidTimestamp(
                f"Error, invalid timestamp: now={now!r} epoch_start={self.epoch_start}"
            )
        if not is_uint(feed_reading) or feed_reading == 0:
            raise InvalidPriceFeed(f"Error, invalid price feed: {feed_reading!r}")

        elapsed = now - self.epoch_start
        token_price_in_quote = checked_add(BASE_UNIT, elapsed)
        token_price_in_base = mul_div(token_price_in_quote, QUOTE_SCALE, feed_reading)
        if token_price_in_base == 0:
            raise InvalidPriceFeed(
                f"Error, invalid price feed: token price in base rounds to zero "
                f"(feed_reading={feed_reading})"
            )

        tokens_per_base_unit = floor_div(WEI_SCALE, token_price_in_base)
        if tokens_per_base_unit == 0:
            raise InvalidPriceFeed(
                f"Error, invalid price feed: tokens per base unit rounds to zero "
                f"(token_price_in_base={token_price_in_base})"
            )

        logger.debug("price_computed", time=now, tokens_per_base_unit=tokens_per_base_unit)
        return PriceState(
            time=now,
            elapsed=elapsed,
            quote_price=feed_reading,
            token_price_in_quote=token_price_in_quote,
            token_price_in_base=token_price_in_base,
            tokens_per_base_unit=tokens_per_base_unit,
        )

