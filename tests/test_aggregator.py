"""Tests for period aggregation and period predicates."""

from datetime import date

from conftest import make_tx
from money_manager.analytics import (
    aggregate,
    all_of,
    days_in_month,
    for_account,
    in_month,
    month_end,
    shift_month,
)
from money_manager.models.ledger import TransactionType


INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


TRANSACTIONS = [
    make_tx(1, date(2026, 10, 1), 1200, EXPENSE, "食費", account_id=1),
    make_tx(2, date(2026, 10, 2), 250000, INCOME, "給与", account_id=2),
    make_tx(3, date(2026, 10, 3), 800, EXPENSE, "交通費", account_id=1),
    make_tx(4, date(2026, 10, 5), 300, EXPENSE, "食費", account_id=2),
    make_tx(5, date(2026, 9, 30), 9999, EXPENSE, "食費", account_id=1),
    make_tx(6, date(2026, 10, 9), 500, INCOME, "その他", account_id=1),
    make_tx(7, date(2026, 10, 9), 100, EXPENSE, "その他", account_id=1),
]


class TestAggregate:
    """Tests for the period aggregator."""

    def test_empty_transactions(self):
        """Test that no data gives zero totals and empty mappings."""
        summary = aggregate([])
        assert summary.total_income == 0
        assert summary.total_expense == 0
        assert summary.expense_by_category == {}
        assert summary.income_by_category == {}
        assert summary.is_empty is True

    def test_predicate_matching_nothing(self):
        """Test an empty period over a non-empty ledger."""
        summary = aggregate(TRANSACTIONS, predicate=in_month(2020, 1))
        assert summary.is_empty is True
        assert summary.net == 0

    def test_month_totals(self):
        """Test totals for one calendar month."""
        summary = aggregate(TRANSACTIONS, predicate=in_month(2026, 10))
        assert summary.total_expense == 1200 + 800 + 300 + 100
        assert summary.total_income == 250000 + 500
        assert summary.transaction_count == 6
        assert summary.net == 250500 - 2400

    def test_categories_summed_in_first_occurrence_order(self):
        """Test per-category sums and their ordering."""
        summary = aggregate(TRANSACTIONS, predicate=in_month(2026, 10))
        assert list(summary.expense_by_category.items()) == [
            ("食費", 1500),
            ("交通費", 800),
            ("その他", 100),
        ]
        assert list(summary.income_by_category.items()) == [
            ("給与", 250000),
            ("その他", 500),
        ]

    def test_same_category_name_kept_apart_by_type(self):
        """Test that income and expense are tracked independently."""
        summary = aggregate(TRANSACTIONS, predicate=in_month(2026, 10))
        assert summary.totals_by_category(EXPENSE)["その他"] == 100
        assert summary.totals_by_category(INCOME)["その他"] == 500

    def test_type_filter(self):
        """Test restricting to one transaction type."""
        summary = aggregate(TRANSACTIONS, EXPENSE, in_month(2026, 10))
        assert summary.total_income == 0
        assert summary.income_by_category == {}
        assert summary.total_expense == 2400

    def test_account_filter(self):
        """Test month-and-account predicate."""
        summary = aggregate(
            TRANSACTIONS,
            predicate=all_of(in_month(2026, 10), for_account(2)),
        )
        assert summary.total_income == 250000
        assert summary.expense_by_category == {"食費": 300}

    def test_no_predicate_selects_everything(self):
        summary = aggregate(TRANSACTIONS)
        assert summary.transaction_count == len(TRANSACTIONS)


class TestPeriods:
    """Tests for month arithmetic and predicates."""

    def test_shift_month_within_year(self):
        assert shift_month(2026, 10, -1) == (2026, 9)
        assert shift_month(2026, 10, 2) == (2026, 12)

    def test_shift_month_across_years(self):
        assert shift_month(2026, 1, -1) == (2025, 12)
        assert shift_month(2026, 12, 1) == (2027, 1)
        assert shift_month(2026, 3, -27) == (2023, 12)

    def test_month_end(self):
        assert month_end(2024, 2) == date(2024, 2, 29)
        assert month_end(2026, 2) == date(2026, 2, 28)
        assert month_end(2026, 12) == date(2026, 12, 31)

    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2026, 4) == 30

    def test_shift_month_large_delta(self):
        assert shift_month(2026, 10, -120) == (2016, 10)
        assert shift_month(2026, 10, 15) == (2028, 1)

    def test_for_account_none_matches_all(self):
        assert all(for_account(None)(tx) for tx in TRANSACTIONS)
