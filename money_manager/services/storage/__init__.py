"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
The ledger is stored as a JSON file; in-memory variants back the tests.
"""

from money_manager.services.storage.interface import (
    AuditStorageInterface,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)
from money_manager.services.storage.json_file import JsonFileLedgerStorage
from money_manager.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "LedgerStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]
