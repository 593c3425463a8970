"""
Period Aggregator

Sums transaction amounts per category for one period.

Income and expense are always tracked separately, even when both are
requested, so a category name used for both types never mixes amounts.
"""

from typing import Iterable, Optional

from money_manager.analytics.periods import TransactionPredicate
from money_manager.models.analytics import PeriodSummary
from money_manager.models.ledger import Transaction, TransactionType


def aggregate(
    transactions: Iterable[Transaction],
    type_filter: Optional[TransactionType] = None,
    predicate: Optional[TransactionPredicate] = None,
) -> PeriodSummary:
    """
    Aggregate the transactions selected by predicate.

    Args:
        transactions: Full transaction set
        type_filter: Count only this type; None counts both
        predicate: Period filter; None selects everything

    Returns:
        PeriodSummary. With no matching transactions all totals are zero
        and both category mappings are empty.
    """
    expense_by_category: dict[str, int] = {}
    income_by_category: dict[str, int] = {}
    total_expense = 0
    total_income = 0
    count = 0

    for tx in transactions:
        if predicate is not None and not predicate(tx):
            continue
        if type_filter is not None and tx.type != type_filter:
            continue

        count += 1
        if tx.type == TransactionType.EXPENSE:
            total_expense += tx.amount
            expense_by_category[tx.category] = (
                expense_by_category.get(tx.category, 0) + tx.amount
            )
        else:
            total_income += tx.amount
            income_by_category[tx.category] = (
                income_by_category.get(tx.category, 0) + tx.amount
            )

    return PeriodSummary(
        expense_by_category=expense_by_category,
        income_by_category=income_by_category,
        total_expense=total_expense,
        total_income=total_income,
        transaction_count=count,
    )
