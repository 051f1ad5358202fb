"""
Contract Validation Module

Модуль для валидации JSON контрактов: журнал событий, цена, снапшот реестра.
"""

from .validators import (
    AuditEventValidator,
    ContractValidator,
    LedgerSnapshotValidator,
    PriceStateValidator,
    SchemaLoader,
    validate_audit_event,
    validate_ledger_snapshot,
    validate_price_state,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "AuditEventValidator",
    "PriceStateValidator",
    "LedgerSnapshotValidator",
    # Functions
    "validate_audit_event",
    "validate_price_state",
    "validate_ledger_snapshot",
]
