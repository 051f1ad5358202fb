"""Ledger — учёт токенов (Ledger) и резерва базовой валюты (Vault)."""

from .ledger import Ledger
from .vault import Vault

__all__ = [
    "Ledger",
    "Vault",
]
