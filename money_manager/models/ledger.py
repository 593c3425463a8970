"""
Core Ledger Models for Money Manager

These models define the schema of the single persisted document:

    {
      transactions: [{id, date, amount, type, category, accountId, description}],
      accounts: [{id, name, balance}],
      categories: {expense: [...], income: [...]}
    }

DESIGN DECISION: Transactions are frozen. Every historical view is
reconstructed by reversing transactions from the current balances, which is
only correct while no transaction is ever edited or removed.
"""

import datetime as dt
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransactionType(str, Enum):
    """Direction of a transaction relative to its account."""
    EXPENSE = "expense"
    INCOME = "income"


class Account(BaseModel):
    """
    A place money lives (wallet, bank account).

    Balance is a signed whole-yen amount. Only the balance engine
    changes it after creation.
    """
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    id: int
    name: str = Field(..., min_length=1, max_length=100)
    balance: int = 0


class Transaction(BaseModel):
    """
    A single recorded income or expense.

    CRITICAL: Immutable once created. There is no edit or delete path.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: int = Field(..., description="Time-based id, increasing in creation order")
    date: dt.date = Field(..., description="Calendar date, no time component")
    amount: int = Field(..., gt=0, description="Positive whole-yen amount")
    type: TransactionType
    category: str = Field(
        ...,
        description="Category name; may no longer exist in the taxonomy"
    )
    account_id: int = Field(..., alias="accountId")
    description: str = Field(default="", max_length=500)

    @field_validator("description", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    def sort_key(self) -> tuple[dt.date, int]:
        """Display order key: newest date first, then newest id."""
        return (self.date, self.id)


class CategoryTaxonomy(BaseModel):
    """
    Category names keyed by transaction type.

    Both types are handled through names(type) so expense and income
    never need separate code paths.
    """

    expense: list[str] = Field(default_factory=list)
    income: list[str] = Field(default_factory=list)

    @field_validator("expense", "income")
    @classmethod
    def dedupe(cls, v: list[str]) -> list[str]:
        unique: list[str] = []
        for name in v:
            if name not in unique:
                unique.append(name)
        return unique

    def names(self, tx_type: TransactionType) -> list[str]:
        return getattr(self, tx_type.value)

    def contains(self, tx_type: TransactionType, name: str) -> bool:
        return name in self.names(tx_type)

    def add(self, tx_type: TransactionType, name: str) -> None:
        self.names(tx_type).append(name)

    def remove(self, tx_type: TransactionType, name: str) -> bool:
        names = self.names(tx_type)
        if name not in names:
            return False
        names.remove(name)
        return True


def migrate_categories(
    raw: Any,
    starter_income: list[str],
    fallback: str,
) -> tuple[Any, bool]:
    """
    Bring a stored categories value up to the {expense, income} shape.

    Older documents stored a flat list, which is kept as the expense set.
    Any type still missing afterwards gets a single fallback category.

    Returns (categories, migrated).
    """
    migrated = False
    if isinstance(raw, list):
        raw = {"expense": list(raw), "income": list(starter_income)}
        migrated = True
    if isinstance(raw, dict):
        raw = dict(raw)
        for tx_type in TransactionType:
            if raw.get(tx_type.value) is None:
                raw[tx_type.value] = [fallback]
                migrated = True
    return raw, migrated


class LedgerDocument(BaseModel):
    """
    The whole ledger: the unit of load, save, export and import.

    Validates the current shape only. Stored or imported data goes through
    migrate_categories first (see ledger.store.parse_ledger).
    """
    model_config = ConfigDict(populate_by_name=True)

    transactions: list[Transaction] = Field(...)
    accounts: list[Account] = Field(...)
    categories: CategoryTaxonomy = Field(...)

    def find_account(self, account_id: int) -> Optional[Account]:
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None

    def total_balance(self) -> int:
        return sum(account.balance for account in self.accounts)

    def last_id(self) -> int:
        """Largest id used by any transaction or account."""
        ids = [t.id for t in self.transactions] + [a.id for a in self.accounts]
        return max(ids, default=0)

    def to_json(self) -> str:
        """Serialize with the persisted key names (accountId)."""
        return self.model_dump_json(by_alias=True)


def default_ledger(
    starter_expense: list[str],
    starter_income: list[str],
) -> LedgerDocument:
    """A fresh ledger: two empty accounts, starter categories, no transactions."""
    return LedgerDocument(
        transactions=[],
        accounts=[
            Account(id=1, name="財布", balance=0),
            Account(id=2, name="銀行", balance=0),
        ],
        categories=CategoryTaxonomy(
            expense=list(starter_expense),
            income=list(starter_income),
        ),
    )
