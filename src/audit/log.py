"""
AuditLog — Журнал событий только на добавление

Журнал для внешних наблюдателей; внутренняя логика его не читает.
Откат (truncate) доступен только оркестратору атомарных операций.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional

import structlog

from src.core.contracts.validators import validate_audit_event
from src.core.domain.events import EventName, LedgerEvent

logger = structlog.get_logger(__name__)


class AuditLog:
    """Упорядоченная последовательность событий."""

    def __init__(self) -> None:
        self._events: List[LedgerEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[LedgerEvent]:
        return iter(list(self._events))

    def append(self, event: LedgerEvent) -> int:
        """
        Добавление события.

        Returns:
            Порядковый номер события (seq, с 0)
        """
        self._events.append(event)
        return len(self._events) - 1

    def extend(self, events: Iterable[LedgerEvent]) -> None:
        for event in events:
            self.append(event)

    def _truncate(self, length: int) -> None:
        """Откат журнала до длины length (при отмене операции)."""
        if length < len(self._events):
            dropped = len(self._events) - length
            del self._events[length:]
            logger.debug("audit_log_rolled_back", dropped=dropped, length=length)

    def events(self, name: Optional[EventName] = None) -> List[LedgerEvent]:
        """
        События журнала.

        Args:
            name: фильтр по имени события (None — все)
        """
        if name is None:
            return list(self._events)
        return [e for e in self._events if e.event == name]

    def names(self) -> List[str]:
        return [e.event.value for e in self._events]

    def latest(self, name: Optional[EventName] = None) -> Optional[LedgerEvent]:
        matching = self.events(name)
        return matching[-1] if matching else None

    def to_records(self, start: int = 0) -> List[Dict[str, Any]]:
        """
        JSON-совместимые записи журнала, начиная с seq=start.

        Каждая запись валидируется против audit_event схемы.

        Returns:
            [{"seq": int, "event": str, "fields": {...}}, ...]
        """
        records: List[Dict[str, Any]] = []
        for seq, event in enumerate(self._events[start:], start=start):
            record = {
                "seq": seq,
                "event": event.event.value,
                "fields": event.payload(),
            }
            validate_audit_event(record)
            records.append(record)
        return records
