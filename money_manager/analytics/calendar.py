"""
Calendar Aggregator

Per-day income and expense totals for one month, plus the day-detail list.
"""

from datetime import date
from typing import Iterable

from money_manager.analytics.periods import days_in_month, in_month, on_day
from money_manager.models.analytics import DailyTotal
from money_manager.models.ledger import Transaction, TransactionType


def daily_totals(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
    dense: bool = False,
) -> dict[int, DailyTotal]:
    """
    Sum income and expense separately for each day of the month.

    Sparse by default: only days with transactions appear. With
    dense=True every day of the month is present, zeros included.
    """
    totals: dict[int, DailyTotal] = {}
    if dense:
        totals = {
            day: DailyTotal(day=day)
            for day in range(1, days_in_month(year, month) + 1)
        }

    selected = in_month(year, month)
    for tx in transactions:
        if not selected(tx):
            continue
        entry = totals.setdefault(tx.date.day, DailyTotal(day=tx.date.day))
        if tx.type == TransactionType.INCOME:
            entry.income += tx.amount
        else:
            entry.expense += tx.amount

    if not dense:
        totals = dict(sorted(totals.items()))
    return totals


def day_transactions(
    transactions: Iterable[Transaction],
    day: date,
) -> list[Transaction]:
    """Transactions of one day, in recording order."""
    return list(filter(on_day(day), transactions))
