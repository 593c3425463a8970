"""
Analytics Package

Pure, read-only computations over the transaction log:
period totals, asset history and the calendar view.
"""

from money_manager.analytics.aggregator import aggregate
from money_manager.analytics.calendar import daily_totals, day_transactions
from money_manager.analytics.history import build_history, reverse_month
from money_manager.analytics.periods import (
    TransactionPredicate,
    all_of,
    days_in_month,
    for_account,
    in_month,
    month_end,
    on_day,
    shift_month,
)

__all__ = [
    "aggregate",
    "build_history",
    "daily_totals",
    "day_transactions",
    "reverse_month",
    # Periods
    "TransactionPredicate",
    "all_of",
    "days_in_month",
    "for_account",
    "in_month",
    "month_end",
    "on_day",
    "shift_month",
]
