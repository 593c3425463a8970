"""Ledger store, balance engine and error taxonomy."""

from money_manager.ledger.balance import (
    apply_transaction,
    net_effect,
    reverse_transaction,
    signed_effect,
)
from money_manager.ledger.errors import (
    DuplicateCategoryName,
    InvalidCategoryName,
    InvalidImportPayload,
    LedgerError,
    MalformedPersistedState,
    NothingToExport,
    UnresolvedAccountReference,
)
from money_manager.ledger.store import LedgerStore, parse_ledger

__all__ = [
    # Balance engine
    "apply_transaction",
    "net_effect",
    "reverse_transaction",
    "signed_effect",
    # Errors
    "DuplicateCategoryName",
    "InvalidCategoryName",
    "InvalidImportPayload",
    "LedgerError",
    "MalformedPersistedState",
    "NothingToExport",
    "UnresolvedAccountReference",
    # Store
    "LedgerStore",
    "parse_ledger",
]
