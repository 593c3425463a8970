"""
Ledger Error Taxonomy

All errors are local and non-fatal. Which ones are raised to the caller
and which are tolerated is decided by the ledger store:

- MalformedPersistedState: never escapes load(); the default ledger is used
- UnresolvedAccountReference: only raised in strict mode
- InvalidImportPayload / DuplicateCategoryName / InvalidCategoryName:
  raised as the user-visible failure signal, with no mutation
"""


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class MalformedPersistedState(LedgerError):
    """Stored ledger data could not be parsed or validated."""
    pass


class UnresolvedAccountReference(LedgerError):
    """A transaction names an account that does not exist."""

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account {account_id} does not exist")


class InvalidImportPayload(LedgerError):
    """Backup document is unreadable or lacks required collections."""
    pass


class DuplicateCategoryName(LedgerError):
    """Category already exists for its transaction type."""

    def __init__(self, tx_type: str, name: str):
        self.tx_type = tx_type
        self.name = name
        super().__init__(f"Category '{name}' already exists for {tx_type}")


class InvalidCategoryName(LedgerError):
    """Category name is blank."""
    pass


class NothingToExport(LedgerError):
    """There are no transactions to export."""
    pass
