"""
Periods and Transaction Predicates

A period is whatever a predicate selects. Most views use one calendar
month, optionally narrowed to a single account.
"""

from datetime import date
from typing import Callable, Optional

from dateutil.relativedelta import relativedelta

from money_manager.models.ledger import Transaction


TransactionPredicate = Callable[[Transaction], bool]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move a (year, month) pair by delta months."""
    shifted = date(year, month, 1) + relativedelta(months=delta)
    return shifted.year, shifted.month


def month_end(year: int, month: int) -> date:
    # day=31 clamps to the last day of the month
    return date(year, month, 1) + relativedelta(day=31)


def days_in_month(year: int, month: int) -> int:
    return month_end(year, month).day


def in_month(year: int, month: int) -> TransactionPredicate:
    def _filter(tx: Transaction) -> bool:
        return tx.date.year == year and tx.date.month == month

    return _filter


def on_day(day: date) -> TransactionPredicate:
    def _filter(tx: Transaction) -> bool:
        return tx.date == day

    return _filter


def for_account(account_id: Optional[int]) -> TransactionPredicate:
    """Match one account; None matches every account."""
    def _filter(tx: Transaction) -> bool:
        return account_id is None or tx.account_id == account_id

    return _filter


def all_of(*predicates: TransactionPredicate) -> TransactionPredicate:
    def _filter(tx: Transaction) -> bool:
        return all(pred(tx) for pred in predicates)

    return _filter
