"""
Ledger Errors — иерархия ошибок операций с токеном

Каждая ошибка прерывает операцию целиком: ни одно изменение состояния
и ни одно событие не фиксируется. Вызывающая сторона должна трактовать
любую ошибку как "операция не произошла".

Единственное восстанавливаемое состояние — InsufficientReserve:
продавец может подождать пополнения резерва, изменения цены или
воспользоваться внешним каналом расчётов.
"""

from typing import ClassVar


class LedgerError(Exception):
    """
    Базовая ошибка операции.

    Attributes:
        kind: Стабильное имя вида ошибки (для логов и аудита)
        reason: Человекочитаемая причина отказа
        recoverable: True если вызывающий может повторить позже
    """

    kind: ClassVar[str] = "LedgerError"
    default_reason: ClassVar[str] = "Error, operation rejected"
    recoverable: ClassVar[bool] = False

    def __init__(self, reason: str | None = None):
        self.reason = reason or self.default_reason
        super().__init__(self.reason)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.reason!r})"


class ZeroAddress(LedgerError):
    """Нулевой (пустой) адрес там, где требуется реальный участник."""

    kind = "ZeroAddress"
    default_reason = "Error, zero address"


class InvalidAmount(LedgerError):
    """Сумма вне допустимого диапазона (≤ 0 где требуется > 0, не uint256)."""

    kind = "InvalidAmount"
    default_reason = "Error, wrong amount"


class InsufficientBalance(LedgerError):
    kind = "InsufficientBalance"
    default_reason = "Error, insufficient balances"


class InsufficientAllowance(LedgerError):
    kind = "InsufficientAllowance"
    default_reason = "Error, insufficient allowances"


class InsufficientReserve(LedgerError):
    """
    Резерв не покрывает выплату при продаже.

    Ожидаемое состояние, а не ошибка системы: повторить позже
    или рассчитаться вне системы.
    """

    kind = "InsufficientReserve"
    default_reason = "Error, insufficient vault balance"
    recoverable = True


class InvalidPriceFeed(LedgerError):
    """Показание фида ≤ 0 или вне представимого диапазона."""

    kind = "InvalidPriceFeed"
    default_reason = "Error, invalid price feed"


class InvalidTimestamp(LedgerError):
    """Текущее время не позже начала эпохи."""

    kind = "InvalidTimestamp"
    default_reason = "Error, invalid timestamp"


class ArithmeticOverflow(LedgerError):
    """Результат вышел за пределы uint256."""

    kind = "ArithmeticOverflow"
    default_reason = "Error, arithmetic overflow"


ERROR_KINDS: dict[str, type[LedgerError]] = {
    cls.kind: cls
    for cls in (
        ZeroAddress,
        InvalidAmount,
        InsufficientBalance,
        InsufficientAllowance,
        InsufficientReserve,
        InvalidPriceFeed,
        InvalidTimestamp,
        ArithmeticOverflow,
    )
}
