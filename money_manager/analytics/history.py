"""
Asset History Reconstructor

There are no stored balance snapshots. The only ground truth is the
current total balance plus the transaction log, so every past month-end
balance is found by walking backwards and undoing each month:

    balance at end of previous month = balance now - net effect of this month

This is only correct because transactions are never edited or deleted.
Points older than the first recorded transaction are still produced (they
reverse nothing) but say nothing about balances before records began.
"""

from datetime import date
from typing import Iterable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from money_manager.analytics.periods import in_month
from money_manager.ledger.balance import reverse_transaction
from money_manager.models.analytics import HistoryPoint
from money_manager.models.ledger import Transaction


DEFAULT_NOW_LABEL = "現在"
DEFAULT_MONTH_END_LABEL = "{month}月末"


def reverse_month(
    balance: int,
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> int:
    """
    Undo every transaction dated in the given month.

    Turns the balance at the end of that month (or now, for the current
    month) into the balance at its start.
    """
    selected = in_month(year, month)
    for tx in transactions:
        if selected(tx):
            balance = reverse_transaction(balance, tx)
    return balance


def build_history(
    current_balance: int,
    transactions: Sequence[Transaction],
    num_points: int = 6,
    today: Optional[date] = None,
    now_label: str = DEFAULT_NOW_LABEL,
    month_end_label: str = DEFAULT_MONTH_END_LABEL,
) -> list[HistoryPoint]:
    """
    Reconstruct the asset trend, oldest point first.

    The newest point is the current balance. Each older point is the
    balance at the end of one more month back.

    Args:
        current_balance: Sum of all account balances right now
        transactions: The full transaction log
        num_points: Total points including "now"
        today: Reference date; defaults to the current date
        now_label: Label of the current point
        month_end_label: Format string for month-end labels,
            given year and month

    Raises:
        ValueError: If num_points is less than 1
    """
    if num_points < 1:
        raise ValueError("num_points must be at least 1")
    today = today or date.today()

    running = current_balance
    points = [HistoryPoint(label=now_label, value=running)]
    this_month = today.replace(day=1)

    for i in range(num_points - 1):
        month_start = this_month - relativedelta(months=i)
        running = reverse_month(running, transactions, month_start.year, month_start.month)

        prev_end = month_start - relativedelta(days=1)
        points.append(HistoryPoint(
            label=month_end_label.format(year=prev_end.year, month=prev_end.month),
            value=running,
            as_of=prev_end,
        ))

    points.reverse()
    return points
