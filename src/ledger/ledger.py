"""
Ledger — Балансы, allowances и total supply

Проверяемые примитивы mint/burn/transfer/approve поверх LedgerState.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. total_supply == Σ balances после любой операции
2. balance >= 0 и allowance >= 0 всегда
3. Все проверки выполняются до первой мутации: отказ не оставляет
   частичных изменений
4. Каждая успешная мутация возвращает событие(я); Ledger сам в журнал
   не пишет — это делает оркестратор
"""

from typing import List, Optional

from src.core.domain.events import Approval, TokensBurn, TokensMint, Transfer
from src.core.domain.ledger_state import LedgerState
from src.core.domain.units import is_zero_address
from src.core.errors import InsufficientAllowance, InsufficientBalance, ZeroAddress
from src.core.math.fixed_point import (
    checked_add,
    checked_sub,
    validate_positive_uint,
    validate_uint,
)


def _require_address(address: Optional[str], reason: str) -> str:
    if is_zero_address(address):
        raise ZeroAddress(reason)
    return address  # type: ignore[return-value]


class Ledger:
    """Владелец balances / allowances / total_supply в LedgerState."""

    def __init__(self, state: LedgerState):
        self.state = state

    # -------------------------------------------------------------------------
    # READ
    # -------------------------------------------------------------------------

    @property
    def total_supply(self) -> int:
        return self.state.total_supply

    def balance_of(self, address: str) -> int:
        return self.state.balances.get(address, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self.state.allowances.get(owner, {}).get(spender, 0)

    # -------------------------------------------------------------------------
    # SUPPLY
    # -------------------------------------------------------------------------

    def mint(self, merchant: str, beneficiary: str, amount: int) -> TokensMint:
        """
        Эмиссия amount токенов на beneficiary.

        Args:
            merchant: инициатор эмиссии (плательщик)
            beneficiary: получатель токенов
            amount: количество (> 0)

        Raises:
            ZeroAddress: beneficiary пустой
            InvalidAmount: amount не uint256 или 0
            ArithmeticOverflow: total_supply вышел бы за uint256
        """
        _require_address(beneficiary, "Error, wrong beneficiary address")
        validate_positive_uint(amount)

        new_supply = checked_add(self.state.total_supply, amount)
        # balance <= total_supply, поэтому переполнение баланса невозможно
        new_balance = self.balance_of(beneficiary) + amount

        self.state.total_supply = new_supply
        self.state.balances[beneficiary] = new_balance
        return TokensMint(merchant=merchant, beneficiary=beneficiary, amount=amount)

    def burn(self, holder: str, amount: int) -> TokensBurn:
        """
        Погашение amount токенов holder.

        Raises:
            ZeroAddress: holder пустой
            InvalidAmount: amount не uint256
            InsufficientBalance: balance[holder] < amount
        """
        _require_address(holder, "Error, holder is the zero address")
        validate_uint(amount)

        new_balance = checked_sub(
            self.balance_of(holder), amount, InsufficientBalance, "Error, insufficient balances"
        )
        self.state.balances[holder] = new_balance
        self.state.total_supply -= amount
        return TokensBurn(from_=holder, amount=amount)

    # -------------------------------------------------------------------------
    # TRANSFER
    # -------------------------------------------------------------------------

    def _validate_transfer(self, sender: str, recipient: str, amount: int) -> None:
        _require_address(sender, "Error, sender is the zero address")
        _require_address(recipient, "Error, recipient is the zero address")
        validate_uint(amount)
        if self.balance_of(sender) < amount:
            raise InsufficientBalance("Error, insufficient balances of sender")

    def transfer(self, sender: str, recipient: str, amount: int) -> Transfer:
        """
        Перевод amount от sender к recipient. total_supply не меняется.

        Raises:
            ZeroAddress: sender или recipient пустой
            InvalidAmount: amount не uint256
            InsufficientBalance: balance[sender] < amount
        """
        self._validate_transfer(sender, recipient, amount)

        if sender != recipient:
            self.state.balances[sender] = self.balance_of(sender) - amount
            self.state.balances[recipient] = self.balance_of(recipient) + amount
        return Transfer(sender=sender, recipient=recipient, amount=amount)

    def transfer_from(
        self, owner: str, recipient: str, spender: str, amount: int
    ) -> List[Approval | Transfer]:
        """
        Перевод от имени owner в пределах allowance[owner][spender].

        Сначала уменьшается allowance (событие Approval с остатком),
        затем выполняется transfer.

        Returns:
            [Approval, Transfer]

        Raises:
            ZeroAddress: spender, owner или recipient пустой
            InsufficientAllowance: allowance[owner][spender] < amount
            InsufficientBalance: balance[owner] < amount
        """
        _require_address(spender, "Error, spender is the zero address")
        _require_address(owner, "Error, owner is the zero address")
        validate_uint(amount)

        remaining = checked_sub(
            self.allowance(owner, spender),
            amount,
            InsufficientAllowance,
            "Error, insufficient allowances",
        )
        self._validate_transfer(owner, recipient, amount)

        approval = self._set_allowance(owner, spender, remaining)
        transfer = self.transfer(owner, recipient, amount)
        return [approval, transfer]

    # -------------------------------------------------------------------------
    # ALLOWANCE
    # -------------------------------------------------------------------------

    def _set_allowance(self, owner: str, spender: str, amount: int) -> Approval:
        self.state.allowances.setdefault(owner, {})[spender] = amount
        return Approval(owner=owner, spender=spender, amount=amount)

    def approve(self, owner: str, spender: str, amount: int) -> Approval:
        """
        Абсолютная установка allowance[owner][spender] = amount (не аддитивно).

        Raises:
            ZeroAddress: owner или spender пустой
            InvalidAmount: amount не uint256
        """
        _require_address(owner, "Error, owner is the zero address")
        _require_address(spender, "Error, spender is the zero address")
        validate_uint(amount)
        return self._set_allowance(owner, spender, amount)

    def increase_allowance(self, owner: str, spender: str, added: int) -> Approval:
        """
        allowance += added.

        Raises:
            ArithmeticOverflow: результат > uint256
        """
        _require_address(owner, "Error, owner is the zero address")
        _require_address(spender, "Error, spender is the zero address")
        validate_uint(added)
        return self._set_allowance(
            owner, spender, checked_add(self.allowance(owner, spender), added)
        )

    def decrease_allowance(self, owner: str, spender: str, subtracted: int) -> Approval:
        """
        allowance -= subtracted.

        Raises:
            InsufficientAllowance: результат < 0
        """
        _require_address(owner, "Error, owner is the zero address")
        _require_address(spender, "Error, spender is the zero address")
        validate_uint(subtracted)
        remaining = checked_sub(
            self.allowance(owner, spender),
            subtracted,
            InsufficientAllowance,
            "Error, allowance will be less than zero",
        )
        return self._set_allowance(owner, spender, remaining)
