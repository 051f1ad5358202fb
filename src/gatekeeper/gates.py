"""Gates — предпроверки операций TransactionGateway.

Каждый gate — чистая проверка, возвращающая GateResult. Gateway прогоняет
gates в фиксированном порядке до первой мутации состояния; первый
заблокировавший gate прерывает операцию через enforce().

Gates:
- gate_address: адрес не нулевой → иначе ZeroAddress
- gate_amount: сумма uint256 (и > 0, если required_positive) → иначе InvalidAmount
- gate_payer_funds: у плательщика хватает базовой валюты → иначе InsufficientBalance
- gate_token_balance: у держателя хватает токенов → иначе InsufficientBalance
- gate_reserve: резерв покрывает выплату → иначе InsufficientReserve
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.units import is_zero_address
from src.core.errors import (
    InsufficientBalance,
    InsufficientReserve,
    InvalidAmount,
    LedgerError,
    ZeroAddress,
)
from src.core.math.fixed_point import is_uint


@dataclass(frozen=True)
class GateResult:
    """Результат gate."""

    gate: str
    allowed: bool
    block_reason: str

    # Класс ошибки, который поднимет enforce() при блокировке
    error: Optional[type[LedgerError]]

    # Детали
    details: str

    def enforce(self) -> "GateResult":
        """
        Raises:
            LedgerError: соответствующий подкласс, если gate заблокировал
        """
        if not self.allowed and self.error is not None:
            raise self.error(self.block_reason)
        return self


def _pass(gate: str, details: str) -> GateResult:
    return GateResult(gate=gate, allowed=True, block_reason="", error=None, details=details)


def _block(gate: str, error: type[LedgerError], reason: str, details: str) -> GateResult:
    return GateResult(gate=gate, allowed=False, block_reason=reason, error=error, details=details)


def gate_address(address: Optional[str], reason: str) -> GateResult:
    """Адрес не пустой и не 0x0."""
    if is_zero_address(address):
        return _block("address", ZeroAddress, reason, f"address={address!r}")
    return _pass("address", f"address={address}")


def gate_amount(amount: object, required_positive: bool = True) -> GateResult:
    """Сумма — uint256; при required_positive ещё и > 0."""
    if not is_uint(amount):
        return _block("amount", InvalidAmount, "Error, wrong amount", f"amount={amount!r} not uint256")
    if required_positive and amount == 0:
        return _block("amount", InvalidAmount, "Error, wrong amount", "amount=0")
    return _pass("amount", f"amount={amount}")


def gate_payer_funds(available: int, amount: int) -> GateResult:
    """Плательщик покрывает amount базовой валюты."""
    if available < amount:
        return _block(
            "payer_funds",
            InsufficientBalance,
            "Error, insufficient balances",
            f"available={available} required={amount}",
        )
    return _pass("payer_funds", f"available={available} required={amount}")


def gate_token_balance(balance: int, amount: int) -> GateResult:
    """Держатель покрывает amount токенов."""
    if balance < amount:
        return _block(
            "token_balance",
            InsufficientBalance,
            "Error, insufficient balances",
            f"balance={balance} required={amount}",
        )
    return _pass("token_balance", f"balance={balance} required={amount}")


def gate_reserve(reserve: int, amount: int) -> GateResult:
    """Резерв покрывает выплату. Блокировка восстанавливаема (повтор позже)."""
    if reserve < amount:
        return _block(
            "reserve",
            InsufficientReserve,
            "Error, insufficient vault balance",
            f"reserve={reserve} required={amount}",
        )
    return _pass("reserve", f"reserve={reserve} required={amount}")
