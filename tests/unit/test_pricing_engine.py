"""Тесты для PricingEngine.

Coverage:
- Эталонный сценарий (год после эпохи, фид 200 USD)
- Предусловия: время после эпохи, положительное показание фида
- Непредставимые показания фида
- Монотонность по времени и идемпотентность
- Совместимость PriceState с JSON Schema
"""

import pytest

from src.core.contracts import validate_price_state
from src.core.domain.units import BASE_UNIT, EPOCH_START_TS, QUOTE_SCALE, WEI_SCALE
from src.core.errors import InvalidPriceFeed, InvalidTimestamp
from src.pricing.engine import PricingEngine
from tests.constants import SCENARIO_ELAPSED, SCENARIO_FEED, SCENARIO_NOW, SCENARIO_PRICE


class TestScenario:
    """Эталонные значения."""

    def test_reference_values(self):
        """Год после эпохи при 200 USD → 193 токена за wei."""
        price = PricingEngine().compute_price(SCENARIO_NOW, SCENARIO_FEED)

        assert price.elapsed == SCENARIO_ELAPSED
        assert price.quote_price == SCENARIO_FEED
        assert price.token_price_in_quote == 1_031_622_400
        assert price.token_price_in_base == 5_158_112_000_000_000
        assert price.tokens_per_base_unit == SCENARIO_PRICE
        assert price.time == SCENARIO_NOW

    def test_formula_matches_constants(self):
        """Формулы воспроизводятся константами масштабирования."""
        now = EPOCH_START_TS + 12_345
        feed = 17_123_456_789
        price = PricingEngine().compute_price(now, feed)

        expected_quote = BASE_UNIT + 12_345
        expected_base = expected_quote * QUOTE_SCALE // feed
        assert price.token_price_in_quote == expected_quote
        assert price.token_price_in_base == expected_base
        assert price.tokens_per_base_unit == WEI_SCALE // expected_base

    def test_one_second_after_epoch(self):
        price = PricingEngine().compute_price(EPOCH_START_TS + 1, SCENARIO_FEED)
        assert price.token_price_in_quote == BASE_UNIT + 1

    def test_custom_epoch(self):
        engine = PricingEngine(epoch_start=1_000)
        price = engine.compute_price(1_010, SCENARIO_FEED)
        assert price.elapsed == 10
        assert price.token_price_in_quote == BASE_UNIT + 10


class TestPreconditions:
    """Предусловия — отдельные виды ошибок."""

    @pytest.mark.parametrize("now", [EPOCH_START_TS, EPOCH_START_TS - 1, 0])
    def test_timestamp_at_or_before_epoch(self, now):
        with pytest.raises(InvalidTimestamp):
            PricingEngine().compute_price(now, SCENARIO_FEED)

    @pytest.mark.parametrize("reading", [0, -1, -SCENARIO_FEED])
    def test_non_positive_feed(self, reading):
        with pytest.raises(InvalidPriceFeed):
            PricingEngine().compute_price(SCENARIO_NOW, reading)

    def test_timestamp_checked_before_feed(self):
        """Оба предусловия нарушены → InvalidTimestamp."""
        with pytest.raises(InvalidTimestamp):
            PricingEngine().compute_price(EPOCH_START_TS, 0)

    def test_feed_too_large_price_rounds_to_zero(self):
        """Цена токена в wei округлилась до 0."""
        with pytest.raises(InvalidPriceFeed, match="rounds to zero"):
            PricingEngine().compute_price(SCENARIO_NOW, 10**30)

    def test_feed_too_small_tokens_per_unit_rounds_to_zero(self):
        """Токен дороже 1 ether за атомарную единицу."""
        with pytest.raises(InvalidPriceFeed, match="tokens per base unit"):
            PricingEngine().compute_price(SCENARIO_NOW, 1)


class TestProperties:
    """Монотонность и идемпотентность."""

    def test_price_in_quote_non_decreasing(self):
        engine = PricingEngine()
        previous = 0
        for offset in range(1, 10**8, 7_777_777):
            price = engine.compute_price(EPOCH_START_TS + offset, SCENARIO_FEED)
            assert price.token_price_in_quote >= previous
            previous = price.token_price_in_quote

    def test_tokens_per_base_unit_non_increasing(self):
        """Токен дорожает → за wei выдаётся не больше токенов."""
        engine = PricingEngine()
        previous = None
        for offset in range(1, 10**8, 9_999_991):
            price = engine.compute_price(EPOCH_START_TS + offset, SCENARIO_FEED)
            if previous is not None:
                assert price.tokens_per_base_unit <= previous
            previous = price.tokens_per_base_unit

    def test_identical_inputs_identical_result(self):
        engine = PricingEngine()
        first = engine.compute_price(SCENARIO_NOW, SCENARIO_FEED)
        second = engine.compute_price(SCENARIO_NOW, SCENARIO_FEED)
        assert first == second

    def test_price_state_schema(self):
        price = PricingEngine().compute_price(SCENARIO_NOW, SCENARIO_FEED)
        validate_price_state(price.model_dump(mode="json"))

    def test_price_state_is_frozen(self):
        price = PricingEngine().compute_price(SCENARIO_NOW, SCENARIO_FEED)
        with pytest.raises(Exception):
            price.tokens_per_base_unit = 1
