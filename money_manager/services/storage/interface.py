"""
Abstract Storage Interface

DESIGN DECISION: The ledger is persisted as ONE opaque blob.
Every mutation rewrites the whole document; there are no partial writes.
Implementations: a JSON file, and in-memory storage for tests.

Parsing and migrating the blob is the ledger store's job, not storage's.
"""

from abc import ABC, abstractmethod
from typing import Optional

from money_manager.models.audit import AuditEvent


class LedgerStorageInterface(ABC):
    """
    Abstract interface for whole-document ledger storage.
    """

    @abstractmethod
    def load(self) -> Optional[str]:
        """
        Read the stored ledger document.

        Returns:
            The raw serialized document, or None if nothing is stored

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, document: str) -> None:
        """
        Replace the stored ledger document.

        Args:
            document: The full serialized ledger

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored document entirely."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Storage location does not exist and cannot be created."""
    pass
