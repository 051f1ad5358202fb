"""Settlement — внешний слой расчётов в базовой валюте.

Gateway только поручает переводы; атомарность самого перевода
обеспечивает среда исполнения. Исходящая выплата (pay) — единственная
операция, через которую управление может вернуться в систему, поэтому
gateway вызывает её последней.
"""

from typing import Callable, Dict, Optional, Protocol, runtime_checkable

import structlog

from src.core.errors import InsufficientBalance
from src.core.math.fixed_point import checked_add, checked_sub

logger = structlog.get_logger(__name__)

PaymentHook = Callable[[str, int], None]


@runtime_checkable
class Settlement(Protocol):
    """Протокол слоя расчётов."""

    def balance_of(self, address: str) -> int:
        ...

    def collect(self, payer: str, amount: int) -> None:
        """Перевод amount от payer системе."""
        ...

    def pay(self, recipient: str, amount: int) -> None:
        """Перевод amount от системы recipient."""
        ...

    def snapshot(self) -> Dict[str, int]:
        """Копия балансов для отката атомарной операции."""
        ...

    def restore(self, snapshot: Dict[str, int]) -> None:
        """Восстановление балансов из snapshot()."""
        ...


class InMemorySettlement:
    """
    Расчёты в памяти: балансы базовой валюты участников и самой системы.

    on_payment вызывается после зачисления получателю — так получатель
    может вернуться в систему (повторный вход). Если hook падает,
    балансы восстанавливаются на момент до выплаты (вместе со всем, что
    hook успел провести) и исключение hook пробрасывается как есть.
    """

    def __init__(
        self,
        system_address: str,
        balances: Optional[Dict[str, int]] = None,
        on_payment: Optional[PaymentHook] = None,
    ):
        self.system_address = system_address
        self._balances: Dict[str, int] = dict(balances or {})
        self.on_payment = on_payment

    def balance_of(self, address: str) -> int:
        return self._balances.get(address, 0)

    def fund(self, address: str, amount: int) -> None:
        """Начисление участнику (вне системы)."""
        self._balances[address] = checked_add(self.balance_of(address), amount)

    def _move(self, source: str, target: str, amount: int) -> None:
        remaining = checked_sub(
            self.balance_of(source), amount, InsufficientBalance, "Error, insufficient balances"
        )
        self._balances[source] = remaining
        self._balances[target] = self.balance_of(target) + amount

    def collect(self, payer: str, amount: int) -> None:
        self._move(payer, self.system_address, amount)

    def pay(self, recipient: str, amount: int) -> None:
        before = self.snapshot()
        self._move(self.system_address, recipient, amount)
        if self.on_payment is None:
            return
        try:
            self.on_payment(recipient, amount)
        except Exception:
            self.restore(before)
            logger.warning("payment_hook_failed", recipient=recipient, amount=amount)
            raise

    def snapshot(self) -> Dict[str, int]:
        return dict(self._balances)

    def restore(self, snapshot: Dict[str, int]) -> None:
        self._balances = dict(snapshot)
