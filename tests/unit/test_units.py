"""
Units Sanity Tests

Проверка масштабирующих констант, конвертеров и нулевого адреса.
"""

import pytest

from src.core.domain.units import (
    BASE_UNIT,
    EPOCH_START_TS,
    QUOTE_SCALE,
    WEI_SCALE,
    ZERO_ADDRESS,
    ether,
    feed_reading,
    is_zero_address,
    tokens,
)
from tests.constants import SCENARIO_FEED, USER


class TestScalingConstants:
    """Константы должны совпадать точно: от них зависят все расчёты."""

    def test_values(self) -> None:
        assert BASE_UNIT == 1_000_000_000
        assert QUOTE_SCALE == 100_000_000_000_000_000
        assert WEI_SCALE == 1_000_000_000_000_000_000
        assert EPOCH_START_TS == 1_577_836_800

    def test_constants_are_ints(self) -> None:
        for value in (BASE_UNIT, QUOTE_SCALE, WEI_SCALE, EPOCH_START_TS):
            assert isinstance(value, int)


class TestConverters:
    def test_ether(self) -> None:
        assert ether(1) == WEI_SCALE
        assert ether(0) == 0

    def test_tokens(self) -> None:
        assert tokens(193) == 193 * 10**18

    def test_feed_reading(self) -> None:
        assert feed_reading(200) == SCENARIO_FEED


class TestZeroAddress:
    @pytest.mark.parametrize("address", [None, "", "   ", ZERO_ADDRESS, ZERO_ADDRESS.upper()])
    def test_zero(self, address) -> None:
        assert is_zero_address(address)

    def test_regular_address(self) -> None:
        assert not is_zero_address(USER)
        assert not is_zero_address("0x" + "0" * 39 + "1")
