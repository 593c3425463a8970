"""
Ledger Store

DESIGN DECISION: The ledger is one explicitly owned object, not module
state. Components receive the store and go through its methods; nothing
else touches the document.

Every mutation follows the same order:
1. Build and validate the new record
2. Apply it to the in-memory document (balance first, then append)
3. Persist the whole document

If step 3 fails the document is restored to its state before step 2,
so the in-memory ledger never disagrees with what is stored.
"""

import json
import time
from contextlib import contextmanager
from datetime import date
from typing import Callable, Iterator, Optional, Union

import structlog
from pydantic import ValidationError

from money_manager.analytics.calendar import day_transactions
from money_manager.audit import AuditLogger
from money_manager.config import LedgerSettings, get_settings
from money_manager.ledger.balance import apply_transaction
from money_manager.ledger.errors import (
    DuplicateCategoryName,
    InvalidCategoryName,
    MalformedPersistedState,
    UnresolvedAccountReference,
)
from money_manager.models.ledger import (
    Account,
    CategoryTaxonomy,
    LedgerDocument,
    Transaction,
    TransactionType,
    default_ledger,
    migrate_categories,
)
from money_manager.services.storage import LedgerStorageInterface, StorageError


logger = structlog.get_logger(__name__)


def parse_ledger(
    raw: Union[str, bytes, dict],
    settings: LedgerSettings,
) -> tuple[LedgerDocument, bool]:
    """
    Parse a serialized ledger, applying the category shape migration.

    Returns (document, categories_migrated).

    Raises:
        MalformedPersistedState: If the data is not a valid ledger
    """
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedPersistedState(f"Not valid JSON: {e}") from e
    else:
        data = raw

    if not isinstance(data, dict):
        raise MalformedPersistedState(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    migrated = False
    if "categories" in data:
        categories, migrated = migrate_categories(
            data["categories"],
            settings.starter_income_categories,
            settings.fallback_category,
        )
        data = {**data, "categories": categories}

    try:
        document = LedgerDocument.model_validate(data)
    except ValidationError as e:
        raise MalformedPersistedState(str(e)) from e

    return document, migrated


class LedgerStore:
    """
    Owns the ledger document and its persistence.

    Read accessors return copies; callers cannot mutate the ledger
    except through the methods below.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        settings: Optional[LedgerSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Args:
            storage: Where the whole document is loaded from and saved to
            settings: Ledger settings; defaults to the configured ones
            audit_logger: Receives an event per mutation; optional
            clock: Seconds since the epoch, used for time-based ids
        """
        self._storage = storage
        self._settings = settings or get_settings().ledger
        self._audit = audit_logger
        self._clock = clock
        self._document = self._default_document()

    @property
    def settings(self) -> LedgerSettings:
        return self._settings

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """
        Load the stored ledger.

        Never raises: missing data starts a fresh ledger, and unreadable
        or malformed data is discarded in favour of the default ledger.
        """
        try:
            raw = self._storage.load()
        except StorageError as e:
            self._discard(str(e))
            return

        if raw is None:
            self._document = self._default_document()
            self._log_loaded(from_storage=False)
            return

        try:
            document, migrated = parse_ledger(raw, self._settings)
        except MalformedPersistedState as e:
            self._discard(str(e))
            return

        self._document = document
        if migrated:
            logger.info("categories_migrated")
            if self._audit:
                self._audit.log_categories_migrated(
                    document.categories.model_dump()
                )
        self._log_loaded(from_storage=True)

    def _discard(self, reason: str) -> None:
        logger.warning("persisted_state_discarded", error=reason)
        if self._audit:
            self._audit.log_state_discarded(reason)
        self._document = self._default_document()

    def _log_loaded(self, from_storage: bool) -> None:
        if self._audit:
            self._audit.log_ledger_loaded(
                transaction_count=len(self._document.transactions),
                account_count=len(self._document.accounts),
                from_storage=from_storage,
            )

    def _default_document(self) -> LedgerDocument:
        return default_ledger(
            self._settings.starter_expense_categories,
            self._settings.starter_income_categories,
        )

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def accounts(self) -> list[Account]:
        return [account.model_copy() for account in self._document.accounts]

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """All transactions in recording order."""
        return tuple(self._document.transactions)

    @property
    def categories(self) -> CategoryTaxonomy:
        return self._document.categories.model_copy(deep=True)

    def document_snapshot(self) -> LedgerDocument:
        return self._document.model_copy(deep=True)

    def to_json(self) -> str:
        return self._document.to_json()

    def get_account(self, account_id: int) -> Optional[Account]:
        account = self._document.find_account(account_id)
        return account.model_copy() if account else None

    def account_name(self, account_id: int) -> str:
        account = self._document.find_account(account_id)
        return account.name if account else self._settings.unknown_account_label

    def total_balance(self) -> int:
        return self._document.total_balance()

    def sorted_transactions(self) -> list[Transaction]:
        """Newest first: date descending, then id descending."""
        return sorted(
            self._document.transactions,
            key=lambda tx: tx.sort_key(),
            reverse=True,
        )

    def recent_transactions(self, limit: Optional[int] = None) -> list[Transaction]:
        limit = self._settings.recent_transactions_limit if limit is None else limit
        return self.sorted_transactions()[:limit]

    def transactions_on(self, day: date) -> list[Transaction]:
        """Transactions dated on one day, in recording order."""
        return day_transactions(self._document.transactions, day)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    @contextmanager
    def _mutation(self, operation: str) -> Iterator[None]:
        """Apply a change and persist it, rolling back if the save fails."""
        snapshot = self._document.model_copy(deep=True)
        try:
            yield
            self._storage.save(self._document.to_json())
        except StorageError as e:
            self._document = snapshot
            logger.error("ledger_save_failed", operation=operation, error=str(e))
            if self._audit:
                self._audit.log_save_failed(str(e), operation)
            raise

    def _next_id(self) -> int:
        """Millisecond timestamp, bumped if needed to stay above every used id."""
        return max(int(self._clock() * 1000), self._document.last_id() + 1)

    def record_transaction(
        self,
        tx_date: date,
        amount: int,
        tx_type: Union[TransactionType, str],
        category: str,
        account_id: int,
        description: str = "",
    ) -> Transaction:
        """
        Record a new transaction and apply it to its account.

        A transaction naming an unknown account is still recorded but
        changes no balance, unless strict_account_references is set.

        Raises:
            pydantic.ValidationError: If the fields are invalid
            UnresolvedAccountReference: In strict mode, for unknown accounts
            StorageError: If persisting fails (nothing is recorded)
        """
        tx = Transaction(
            id=self._next_id(),
            date=tx_date,
            amount=amount,
            type=TransactionType(tx_type),
            category=category,
            account_id=account_id,
            description=description,
        )

        if (
            self._settings.strict_account_references
            and self._document.find_account(account_id) is None
        ):
            if self._audit:
                self._audit.log_unresolved_account(None, account_id)
            raise UnresolvedAccountReference(account_id)

        with self._mutation("record_transaction"):
            applied = apply_transaction(self._document.accounts, tx)
            self._document.transactions.append(tx)

        if not applied:
            logger.warning(
                "unresolved_account_reference",
                transaction_id=tx.id,
                account_id=account_id,
            )
            if self._audit:
                self._audit.log_unresolved_account(tx.id, account_id)

        if self._audit:
            self._audit.log_transaction_recorded(
                transaction_id=tx.id,
                tx_type=tx.type.value,
                amount=tx.amount,
                account_id=tx.account_id,
                balance_applied=applied,
            )
        return tx

    def add_account(self, name: str, balance: int = 0) -> Account:
        """
        Add an account with an opening balance.

        The opening balance is not a transaction, so history reconstruction
        treats it as money that was there before records began.
        """
        account = Account(id=self._next_id(), name=name, balance=balance)
        with self._mutation("add_account"):
            self._document.accounts.append(account)
        if self._audit:
            self._audit.log_account_added(account.id, account.name, account.balance)
        return account.model_copy()

    def add_category(self, tx_type: Union[TransactionType, str], name: str) -> str:
        """
        Add a category for one transaction type.

        Raises:
            InvalidCategoryName: If the name is blank
            DuplicateCategoryName: If the type already has this name
        """
        tx_type = TransactionType(tx_type)
        name = name.strip()
        if not name:
            if self._audit:
                self._audit.log_category_rejected(tx_type.value, name, "blank name")
            raise InvalidCategoryName("Category name must not be blank")

        if self._document.categories.contains(tx_type, name):
            if self._audit:
                self._audit.log_category_rejected(tx_type.value, name, "duplicate")
            raise DuplicateCategoryName(tx_type.value, name)

        with self._mutation("add_category"):
            self._document.categories.add(tx_type, name)
        if self._audit:
            self._audit.log_category_added(tx_type.value, name)
        return name

    def delete_category(self, tx_type: Union[TransactionType, str], name: str) -> bool:
        """
        Remove a category from the taxonomy.

        Transactions already using it keep their category unchanged.
        Returns False if the type has no such category.
        """
        tx_type = TransactionType(tx_type)
        if not self._document.categories.contains(tx_type, name):
            return False
        with self._mutation("delete_category"):
            self._document.categories.remove(tx_type, name)
        if self._audit:
            self._audit.log_category_deleted(tx_type.value, name)
        return True

    def replace(self, document: LedgerDocument) -> None:
        """Swap in a whole new ledger (restore from backup)."""
        with self._mutation("replace"):
            self._document = document.model_copy(deep=True)
        if self._audit:
            self._audit.log_ledger_imported(
                transaction_count=len(self._document.transactions),
                account_count=len(self._document.accounts),
            )

    def reset(self) -> None:
        """Delete all stored data and start over with the default ledger."""
        self._storage.clear()
        self._document = self._default_document()
        logger.warning("ledger_reset")
        if self._audit:
            self._audit.log_ledger_reset()
