"""
LedgerState — Явное состояние реестра токена

Единственная изменяемая структура системы:
- balances: адрес → баланс (uint256)
- allowances: владелец → (spender → разрешённая сумма)
- total_supply: сумма всех балансов
- reserve: базовая валюта, удерживаемая системой (wei)

Ledger владеет balances/allowances/total_supply, Vault — reserve.
Никто, кроме них, не изменяет поля напрямую; оркестрация идёт через
TransactionGateway.

LedgerSnapshot — immutable Pydantic снапшот для внешних наблюдателей
(contracts/schema/ledger_snapshot.json).
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from pydantic import BaseModel, Field

from src.core.domain.price_state import PriceState


@dataclass
class LedgerState:
    """Изменяемое состояние. Передаётся по ссылке в Ledger и Vault."""

    balances: Dict[str, int] = field(default_factory=dict)
    allowances: Dict[str, Dict[str, int]] = field(default_factory=dict)
    total_supply: int = 0
    reserve: int = 0

    def copy(self) -> "LedgerState":
        """Глубокая копия (для отката атомарной операции)."""
        return LedgerState(
            balances=dict(self.balances),
            allowances={owner: dict(spenders) for owner, spenders in self.allowances.items()},
            total_supply=self.total_supply,
            reserve=self.reserve,
        )

    def restore(self, other: "LedgerState") -> None:
        """Восстановление полей из копии на месте (ссылки Ledger/Vault остаются валидны)."""
        self.balances = dict(other.balances)
        self.allowances = {owner: dict(spenders) for owner, spenders in other.allowances.items()}
        self.total_supply = other.total_supply
        self.reserve = other.reserve

    def sum_of_balances(self) -> int:
        return sum(self.balances.values())


class LedgerSnapshot(BaseModel):
    """
    Снапшот состояния реестра.

    Immutable модель (frozen=True). Содержит:
    - Метаданные токена (name, symbol, decimals)
    - Агрегаты (total_supply, reserve_balance)
    - Балансы и allowances (только ненулевые)
    - Последнюю рассчитанную цену (nullable)
    """

    name: str = Field(..., min_length=1)
    symbol: str = Field(..., min_length=1)
    decimals: int = Field(..., ge=0, le=77)

    total_supply: int = Field(..., ge=0)
    reserve_balance: int = Field(..., ge=0, description="Резерв базовой валюты (wei)")

    balances: Dict[str, int] = Field(default_factory=dict)
    allowances: Dict[str, Dict[str, int]] = Field(default_factory=dict)

    last_price: Optional[PriceState] = Field(None, description="Последний расчёт цены")

    model_config = {"frozen": True}
