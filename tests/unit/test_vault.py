"""Тесты для Vault."""

import pytest

from src.core.domain.ledger_state import LedgerState
from src.core.domain.units import ether
from src.core.errors import InsufficientReserve, InvalidAmount
from src.ledger.vault import Vault


class TestVault:
    """Учёт резерва."""

    def test_deposit(self):
        vault = Vault(LedgerState())
        assert vault.deposit(ether(1)) == ether(1)
        assert vault.deposit(0) == ether(1)
        assert vault.reserve == ether(1)

    def test_deposit_negative(self):
        with pytest.raises(InvalidAmount):
            Vault(LedgerState()).deposit(-1)

    def test_withdraw(self):
        vault = Vault(LedgerState(reserve=ether(2)))
        assert vault.withdraw(ether(1)) == ether(1)
        assert vault.reserve == ether(1)

    def test_withdraw_insufficient_is_recoverable(self):
        """Нехватка резерва — ожидаемое, восстанавливаемое состояние."""
        vault = Vault(LedgerState(reserve=ether(1)))

        with pytest.raises(InsufficientReserve) as exc_info:
            vault.withdraw(ether(1) + 1)

        assert exc_info.value.recoverable
        assert exc_info.value.kind == "InsufficientReserve"
        assert vault.reserve == ether(1)

    def test_shares_state(self):
        """Vault работает со скаляром общего LedgerState."""
        state = LedgerState()
        Vault(state).deposit(5)
        assert state.reserve == 5
