"""
Units — Централизованный модуль констант масштабирования

Единственный допустимый источник констант fixed-point:
- BASE_UNIT: цена токена в масштабированных единицах quote-валюты (USD × 10^9)
- QUOTE_SCALE: синхронизирован с точностью внешнего фида
- WEI_SCALE: атомарная единица базовой валюты (10^18 wei = 1 ether)
- EPOCH_START_TS: момент, когда цена токена ровно 1 единица quote-валюты

ЗАПРЕЩЕНО смешивать единицы без явного конвертера из этого модуля.
"""

from typing import Final, Optional

# =============================================================================
# КОНСТАНТЫ МАСШТАБИРОВАНИЯ
# =============================================================================

# Цена токена в quote-единицах × 10^9, дрейф 1 единица в секунду
BASE_UNIT: Final[int] = 10**9

# Масштаб деления на показание фида (фид отдаёт цену × 10^8)
QUOTE_SCALE: Final[int] = 10**17

# Атомарная единица базовой валюты
WEI_SCALE: Final[int] = 10**18

# Точность показаний фида (цена базового актива × 10^8)
FEED_DECIMALS: Final[int] = 8

# 2020-01-01T00:00:00Z
EPOCH_START_TS: Final[int] = 1577836800

# Десятичные знаки токена
TOKEN_DECIMALS: Final[int] = 18


# =============================================================================
# АДРЕСА
# =============================================================================

ZERO_ADDRESS: Final[str] = "0x" + "0" * 40


def is_zero_address(address: Optional[str]) -> bool:
    """
    Проверка "пустого" адреса.

    None, пустая строка и 0x000...0 считаются нулевым адресом.
    """
    if address is None:
        return True
    normalized = address.strip().lower()
    return normalized == "" or normalized == ZERO_ADDRESS


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def ether(n: int) -> int:
    """Конверсия целых ether → wei."""
    return n * WEI_SCALE


def tokens(n: int) -> int:
    """Конверсия целых токенов → атомарные единицы токена (18 знаков)."""
    return n * 10**TOKEN_DECIMALS


def feed_reading(quote_price: int) -> int:
    """
    Конверсия цены базового актива в целых quote-единицах → показание фида.

    Например, 200 USD → 20_000_000_000.
    """
    return quote_price * 10**FEED_DECIMALS
