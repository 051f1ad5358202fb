"""TransactionGateway — оркестрация операций токена.

Каждая публичная операция — один атомарный шаг:
    gates (предпроверки) → PricingEngine → мутации Ledger/Vault
    → события в AuditLog → внешний перевод (последним)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все gates выполняются до первой мутации
2. Любая ошибка откатывает состояние, последнюю цену и журнал: у
   неуспешного вызова нет наблюдаемого эффекта
3. Исходящая выплата (Settlement.pay) — последний оператор операции;
   после неё состояние не читается (повторный вход видит уже
   зафиксированные балансы и резерв)
4. Внутренних блокировок нет: сериализацию вызовов обеспечивает среда
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

import structlog

from src.audit.log import AuditLog
from src.core.config import Settings, get_settings
from src.core.contracts.validators import validate_ledger_snapshot
from src.core.domain.events import (
    LedgerEvent,
    Price,
    Purchase,
    Received,
    Sale,
    TransferEther,
)
from src.core.domain.ledger_state import LedgerSnapshot, LedgerState
from src.core.domain.price_state import PriceState
from src.core.errors import LedgerError
from src.core.math.fixed_point import checked_mul, floor_div
from src.gatekeeper.gates import (
    gate_address,
    gate_amount,
    gate_payer_funds,
    gate_reserve,
    gate_token_balance,
)
from src.gatekeeper.settlement import InMemorySettlement, Settlement
from src.ledger.ledger import Ledger
from src.ledger.vault import Vault
from src.pricing.engine import PricingEngine
from src.pricing.feeds import Clock, PriceFeed, SystemClock

logger = structlog.get_logger(__name__)

# Адрес самой системы в слое расчётов
DEFAULT_SYSTEM_ADDRESS = "0x" + "5c" * 20


@dataclass(frozen=True)
class OperationResult:
    """Результат операции: значение и события, зафиксированные этим вызовом."""

    operation: str
    value: Any
    events: Tuple[LedgerEvent, ...]

    def event_names(self) -> List[str]:
        return [e.event.value for e in self.events]


class TransactionGateway:
    """
    Публичный интерфейс токена.

    Операции:
    - buy / sell: эмиссия и погашение по текущей цене
    - receive: прямое поступление базовой валюты в резерв
    - transfer / transfer_from / approve / increase_allowance /
      decrease_allowance: сквозные вызовы Ledger в атомарной обёртке
    - update_price: пересчёт и публикация цены
    """

    def __init__(
        self,
        price_feed: PriceFeed,
        clock: Optional[Clock] = None,
        settlement: Optional[Settlement] = None,
        settings: Optional[Settings] = None,
        address: str = DEFAULT_SYSTEM_ADDRESS,
    ):
        """
        Args:
            price_feed: источник цены базового актива
            clock: источник времени (по умолчанию системные часы)
            settlement: слой расчётов (по умолчанию InMemorySettlement)
            settings: настройки токена (по умолчанию get_settings())
            address: адрес системы в слое расчётов
        """
        self.settings = settings or get_settings()
        self.address = address

        self.state = LedgerState()
        self.ledger = Ledger(self.state)
        self.vault = Vault(self.state)
        self.audit_log = AuditLog()

        self.pricing = PricingEngine(epoch_start=self.settings.epoch_start_ts)
        self.price_feed = price_feed
        self.clock = clock or SystemClock()
        self.settlement = settlement or InMemorySettlement(address)

        self._last_price: Optional[PriceState] = None

    # -------------------------------------------------------------------------
    # ATOMICITY
    # -------------------------------------------------------------------------

    @contextmanager
    def _atomic(self, operation: str, **context: Any) -> Iterator[List[LedgerEvent]]:
        """
        Атомарная область операции.

        Снимает копию состояния, последней цены, длины журнала и балансов
        слоя расчётов; при любом исключении восстанавливает их и
        пробрасывает исключение дальше.
        """
        state_backup = self.state.copy()
        settlement_backup = self.settlement.snapshot()
        price_backup = self._last_price
        log_length = len(self.audit_log)
        batch: List[LedgerEvent] = []
        try:
            yield batch
        except LedgerError as exc:
            self._rollback(state_backup, price_backup, log_length, settlement_backup)
            logger.warning(
                "operation_rejected",
                operation=operation,
                kind=exc.kind,
                reason=exc.reason,
                recoverable=exc.recoverable,
                **context,
            )
            if exc.recoverable:
                logger.info(
                    "operation_retryable",
                    operation=operation,
                    hint="retry after reserve replenishment or settle off-system",
                )
            raise
        except Exception:
            self._rollback(state_backup, price_backup, log_length, settlement_backup)
            logger.exception("operation_failed", operation=operation, **context)
            raise

    def _rollback(
        self,
        state_backup: LedgerState,
        price_backup: Optional[PriceState],
        log_length: int,
        settlement_backup: Dict[str, int],
    ) -> None:
        self.state.restore(state_backup)
        self.settlement.restore(settlement_backup)
        self._last_price = price_backup
        self.audit_log._truncate(log_length)

    def _emit(self, batch: List[LedgerEvent], *events: LedgerEvent) -> None:
        batch.extend(events)
        self.audit_log.extend(events)

    def _refresh_price(self, batch: List[LedgerEvent]) -> PriceState:
        price = self.pricing.compute_price(self.clock.now(), self.price_feed.latest_price())
        self._last_price = price
        self._emit(
            batch,
            Price(
                quote_price=price.quote_price,
                token_price_in_quote=price.token_price_in_quote,
                token_price_in_base=price.token_price_in_base,
                tokens_per_base_unit=price.tokens_per_base_unit,
                time=price.time,
            ),
        )
        return price

    # -------------------------------------------------------------------------
    # METADATA / READ
    # -------------------------------------------------------------------------

    def name(self) -> str:
        return self.settings.token_name

    def symbol(self) -> str:
        return self.settings.token_symbol

    def decimals(self) -> int:
        return self.settings.token_decimals

    def total_supply(self) -> int:
        return self.ledger.total_supply

    def balance_of(self, address: str) -> int:
        return self.ledger.balance_of(address)

    def allowance(self, owner: str, spender: str) -> int:
        return self.ledger.allowance(owner, spender)

    def reserve_balance(self) -> int:
        return self.vault.reserve

    @property
    def last_price(self) -> Optional[PriceState]:
        return self._last_price

    def tokens_per_base_unit(self) -> int:
        """Последняя опубликованная цена (0, если цена ещё не считалась)."""
        return self._last_price.tokens_per_base_unit if self._last_price else 0

    def current_price(self) -> PriceState:
        """Расчёт цены на текущий момент без публикации события."""
        return self.pricing.compute_price(self.clock.now(), self.price_feed.latest_price())

    def snapshot(self) -> LedgerSnapshot:
        """Снапшот реестра (только ненулевые балансы и allowances)."""
        snapshot = LedgerSnapshot(
            name=self.name(),
            symbol=self.symbol(),
            decimals=self.decimals(),
            total_supply=self.state.total_supply,
            reserve_balance=self.state.reserve,
            balances={a: b for a, b in self.state.balances.items() if b > 0},
            allowances={
                owner: {s: v for s, v in spenders.items() if v > 0}
                for owner, spenders in self.state.allowances.items()
                if any(v > 0 for v in spenders.values())
            },
            last_price=self._last_price,
        )
        validate_ledger_snapshot(snapshot.model_dump(mode="json"))
        return snapshot

    # -------------------------------------------------------------------------
    # PRICE
    # -------------------------------------------------------------------------

    def update_price(self) -> OperationResult:
        """
        Пересчёт цены и событие Price.

        Returns:
            OperationResult.value = tokens_per_base_unit

        Raises:
            InvalidTimestamp, InvalidPriceFeed
        """
        with self._atomic("update_price") as batch:
            price = self._refresh_price(batch)
        logger.info("price_updated", tokens_per_base_unit=price.tokens_per_base_unit, time=price.time)
        return OperationResult("update_price", price.tokens_per_base_unit, tuple(batch))

    # -------------------------------------------------------------------------
    # BUY / SELL
    # -------------------------------------------------------------------------

    def buy(self, payer: str, beneficiary: str, deposit_amount: int) -> OperationResult:
        """
        Покупка: deposit_amount wei → deposit_amount × tokens_per_base_unit токенов.

        События: Price → TokensMint → Purchase.

        Returns:
            OperationResult.value = количество выпущенных токенов

        Raises:
            InvalidAmount: deposit_amount == 0
            ZeroAddress: пустой beneficiary или payer
            InsufficientBalance: у payer не хватает базовой валюты
            InvalidTimestamp, InvalidPriceFeed: цена не рассчитывается
        """
        with self._atomic("buy", payer=payer, beneficiary=beneficiary, amount=deposit_amount) as batch:
            gate_amount(deposit_amount).enforce()
            gate_address(beneficiary, "Error, wrong beneficiary address").enforce()
            gate_address(payer, "Error, wrong payer address").enforce()
            gate_payer_funds(self.settlement.balance_of(payer), deposit_amount).enforce()

            price = self._refresh_price(batch)
            token_amount = checked_mul(deposit_amount, price.tokens_per_base_unit)

            mint_event = self.ledger.mint(payer, beneficiary, token_amount)
            new_reserve = self.vault.deposit(deposit_amount)
            self._emit(
                batch,
                mint_event,
                Purchase(
                    buyer=payer,
                    beneficiary=beneficiary,
                    amount_in=deposit_amount,
                    tokens_out=token_amount,
                    price=price.tokens_per_base_unit,
                    total_supply=self.state.total_supply,
                    reserve_balance=new_reserve,
                    time=price.time,
                ),
            )

            self.settlement.collect(payer, deposit_amount)

        logger.info(
            "purchase",
            buyer=payer,
            beneficiary=beneficiary,
            amount_in=deposit_amount,
            tokens_out=token_amount,
            price=price.tokens_per_base_unit,
        )
        return OperationResult("buy", token_amount, tuple(batch))

    def sell(self, seller: str, token_amount: int) -> OperationResult:
        """
        Продажа: token_amount токенов → token_amount // tokens_per_base_unit wei.

        События: Price → TokensBurn → Sale → TransferEther.
        Учёт (burn, withdraw) и события фиксируются до выплаты;
        выплата — последний оператор.

        Returns:
            OperationResult.value = выплачено базовой валюты (wei)

        Raises:
            ZeroAddress: пустой seller
            InvalidAmount: token_amount == 0
            InsufficientBalance: balance[seller] < token_amount
            InsufficientReserve: резерв меньше выплаты (повторить позже)
            InvalidTimestamp, InvalidPriceFeed: цена не рассчитывается
        """
        with self._atomic("sell", seller=seller, amount=token_amount) as batch:
            gate_address(seller, "Error, wrong seller address").enforce()
            gate_amount(token_amount).enforce()
            gate_token_balance(self.ledger.balance_of(seller), token_amount).enforce()

            price = self._refresh_price(batch)
            base_amount = floor_div(token_amount, price.tokens_per_base_unit)
            gate_reserve(self.vault.reserve, base_amount).enforce()

            burn_event = self.ledger.burn(seller, token_amount)
            new_reserve = self.vault.withdraw(base_amount)
            self._emit(
                batch,
                burn_event,
                Sale(
                    seller=seller,
                    tokens_in=token_amount,
                    amount_out=base_amount,
                    price=price.tokens_per_base_unit,
                    total_supply=self.state.total_supply,
                    reserve_balance=new_reserve,
                    time=price.time,
                ),
                TransferEther(sender=self.address, recipient=seller, amount=base_amount),
            )
            logger.info(
                "sale",
                seller=seller,
                tokens_in=token_amount,
                amount_out=base_amount,
                price=price.tokens_per_base_unit,
            )

            self.settlement.pay(seller, base_amount)

        return OperationResult("sell", base_amount, tuple(batch))

    def receive(self, sender: str, amount: int) -> OperationResult:
        """
        Прямое поступление базовой валюты в резерв (без эмиссии).

        Returns:
            OperationResult.value = новый резерв
        """
        with self._atomic("receive", sender=sender, amount=amount) as batch:
            gate_address(sender, "Error, wrong sender address").enforce()
            gate_amount(amount, required_positive=False).enforce()
            gate_payer_funds(self.settlement.balance_of(sender), amount).enforce()

            new_reserve = self.vault.deposit(amount)
            self._emit(batch, Received(sender=sender, amount=amount))

            self.settlement.collect(sender, amount)

        logger.info("received", sender=sender, amount=amount, reserve=new_reserve)
        return OperationResult("receive", new_reserve, tuple(batch))

    # -------------------------------------------------------------------------
    # TRANSFER / ALLOWANCE
    # -------------------------------------------------------------------------

    def transfer(self, sender: str, recipient: str, amount: int) -> OperationResult:
        with self._atomic("transfer", sender=sender, recipient=recipient, amount=amount) as batch:
            self._emit(batch, self.ledger.transfer(sender, recipient, amount))
        logger.info("transfer", sender=sender, recipient=recipient, amount=amount)
        return OperationResult("transfer", True, tuple(batch))

    def transfer_from(
        self, spender: str, owner: str, recipient: str, amount: int
    ) -> OperationResult:
        """
        Перевод от имени owner, вызывающий — spender.

        Как и в остальных операциях gateway, вызывающий идёт первым
        аргументом; Ledger.transfer_from принимает (owner, recipient,
        spender, amount).

        События: Approval (остаток allowance) → Transfer.
        """
        with self._atomic(
            "transfer_from", spender=spender, owner=owner, recipient=recipient, amount=amount
        ) as batch:
            self._emit(batch, *self.ledger.transfer_from(owner, recipient, spender, amount))
        logger.info(
            "transfer_from", spender=spender, owner=owner, recipient=recipient, amount=amount
        )
        return OperationResult("transfer_from", True, tuple(batch))

    def approve(self, owner: str, spender: str, amount: int) -> OperationResult:
        with self._atomic("approve", owner=owner, spender=spender, amount=amount) as batch:
            self._emit(batch, self.ledger.approve(owner, spender, amount))
        logger.info("approve", owner=owner, spender=spender, amount=amount)
        return OperationResult("approve", True, tuple(batch))

    def increase_allowance(self, owner: str, spender: str, added: int) -> OperationResult:
        with self._atomic("increase_allowance", owner=owner, spender=spender, amount=added) as batch:
            self._emit(batch, self.ledger.increase_allowance(owner, spender, added))
        logger.info("increase_allowance", owner=owner, spender=spender, amount=added)
        return OperationResult("increase_allowance", True, tuple(batch))

    def decrease_allowance(self, owner: str, spender: str, subtracted: int) -> OperationResult:
        with self._atomic(
            "decrease_allowance", owner=owner, spender=spender, amount=subtracted
        ) as batch:
            self._emit(batch, self.ledger.decrease_allowance(owner, spender, subtracted))
        logger.info("decrease_allowance", owner=owner, spender=spender, amount=subtracted)
        return OperationResult("decrease_allowance", True, tuple(batch))
