"""
Vault — Резерв базовой валюты

Владелец единственного скаляра LedgerState.reserve. Сам Vault денег
не переводит: внешние переводы выполняет Settlement, а Vault ведёт учёт.
"""

from src.core.domain.ledger_state import LedgerState
from src.core.errors import InsufficientReserve
from src.core.math.fixed_point import checked_add, checked_sub, validate_uint


class Vault:
    """Учёт резерва (wei)."""

    def __init__(self, state: LedgerState):
        self.state = state

    @property
    def reserve(self) -> int:
        return self.state.reserve

    def deposit(self, amount: int) -> int:
        """
        Пополнение резерва.

        Returns:
            Новый резерв
        """
        validate_uint(amount)
        self.state.reserve = checked_add(self.state.reserve, amount)
        return self.state.reserve

    def withdraw(self, amount: int) -> int:
        """
        Списание из резерва.

        Returns:
            Новый резерв

        Raises:
            InsufficientReserve: reserve < amount (восстанавливаемое состояние)
        """
        validate_uint(amount)
        self.state.reserve = checked_sub(
            self.state.reserve,
            amount,
            InsufficientReserve,
            f"Error, insufficient vault balance: reserve={self.state.reserve} requested={amount}",
        )
        return self.state.reserve
