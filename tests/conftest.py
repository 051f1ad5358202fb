"""
Test Configuration
==================
Общие fixtures: часы на момент эталонного сценария, фид 200 USD,
слой расчётов с балансами участников, gateway.
"""

import pytest

from src.core.config import Settings
from src.core.domain.units import ether
from src.gatekeeper.gateway import DEFAULT_SYSTEM_ADDRESS, TransactionGateway
from src.gatekeeper.settlement import InMemorySettlement
from src.pricing.feeds import FixedClock, StaticPriceFeed
from tests.constants import PARTICIPANTS, SCENARIO_FEED, SCENARIO_NOW


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(SCENARIO_NOW)


@pytest.fixture
def feed() -> StaticPriceFeed:
    return StaticPriceFeed(SCENARIO_FEED)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def settlement() -> InMemorySettlement:
    """Каждому участнику по 100 ether."""
    return InMemorySettlement(
        DEFAULT_SYSTEM_ADDRESS,
        balances={address: ether(100) for address in PARTICIPANTS},
    )


@pytest.fixture
def gateway(feed, clock, settlement, settings) -> TransactionGateway:
    return TransactionGateway(
        price_feed=feed,
        clock=clock,
        settlement=settlement,
        settings=settings,
    )
