"""Audit — журнал структурированных событий для внешних наблюдателей."""

from .log import AuditLog

__all__ = [
    "AuditLog",
]
