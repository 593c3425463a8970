"""
In-Memory Storage Implementations

Used by tests and by components created without a data file.
"""

from collections import deque
from typing import Optional

from money_manager.models.audit import AuditEvent
from money_manager.services.storage.interface import (
    AuditStorageInterface,
    LedgerStorageInterface,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Keeps the serialized ledger in a string attribute."""

    def __init__(self, document: Optional[str] = None):
        self.document = document
        self.save_count = 0

    def load(self) -> Optional[str]:
        return self.document

    def save(self, document: str) -> None:
        self.document = document
        self.save_count += 1

    def clear(self) -> None:
        self.document = None


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Append-only buffer of audit events.

    With max_events set, only the newest max_events are kept.
    """

    def __init__(self, max_events: Optional[int] = None):
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
