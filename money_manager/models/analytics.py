"""
Analytics Result Models

Read-only views derived from the ledger. None of these are persisted;
they are recomputed from the transaction log on every request.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from money_manager.models.ledger import Account, Transaction, TransactionType


class PeriodSummary(BaseModel):
    """
    Totals for one period.

    An empty period is a valid result: zero totals and empty mappings.
    Category mappings keep the order in which each category first appeared.
    """

    expense_by_category: dict[str, int] = Field(default_factory=dict)
    income_by_category: dict[str, int] = Field(default_factory=dict)
    total_expense: int = 0
    total_income: int = 0
    transaction_count: int = Field(default=0, ge=0)

    @property
    def net(self) -> int:
        """Income minus expense for the period."""
        return self.total_income - self.total_expense

    @property
    def is_empty(self) -> bool:
        return self.transaction_count == 0

    def totals_by_category(self, tx_type: TransactionType) -> dict[str, int]:
        if tx_type == TransactionType.EXPENSE:
            return self.expense_by_category
        return self.income_by_category


class HistoryPoint(BaseModel):
    """One point of the asset trend."""

    label: str
    value: int
    as_of: Optional[date] = Field(
        default=None,
        description="Month-end date the value stands for; None for the current point"
    )


class DailyTotal(BaseModel):
    """Income and expense of a single calendar day."""

    day: int = Field(..., ge=1, le=31)
    income: int = 0
    expense: int = 0

    @property
    def has_activity(self) -> bool:
        return self.income > 0 or self.expense > 0


class Dashboard(BaseModel):
    """Home screen: balances, recent activity and this month's breakdown."""

    total_balance: int
    accounts: list[Account]
    recent_transactions: list[Transaction]
    current_month: PeriodSummary
    account_filter: Optional[int] = None
    year: int
    month: int = Field(..., ge=1, le=12)


class MonthlyReport(BaseModel):
    """Analytics screen for one calendar month."""

    year: int
    month: int = Field(..., ge=1, le=12)
    summary: PeriodSummary
    asset_history: list[HistoryPoint]
    calendar: dict[int, DailyTotal]

    @property
    def balance(self) -> int:
        return self.summary.net
