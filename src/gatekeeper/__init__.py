"""Gatekeeper — предпроверки и оркестрация операций токена.

- gates: фиксированный набор предпроверок (GateResult)
- settlement: внешний слой расчётов в базовой валюте
- gateway: TransactionGateway, атомарные операции buy/sell/transfer/...
"""

from .gates import GateResult
from .gateway import OperationResult, TransactionGateway
from .settlement import InMemorySettlement, Settlement

__all__ = [
    "GateResult",
    "OperationResult",
    "TransactionGateway",
    "Settlement",
    "InMemorySettlement",
]
