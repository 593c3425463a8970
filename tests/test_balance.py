"""Tests for the balance engine."""

from datetime import date

import pytest

from conftest import make_tx
from money_manager.ledger.balance import (
    apply_transaction,
    net_effect,
    reverse_transaction,
    signed_effect,
)
from money_manager.models.ledger import Account, TransactionType


INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


class TestForwardEffect:
    """Tests for applying transactions to accounts."""

    def test_expense_subtracts(self):
        """Test that expenses lower the balance."""
        accounts = [Account(id=1, name="財布", balance=1000)]
        assert apply_transaction(accounts, make_tx(1, date(2026, 10, 1), 300, EXPENSE)) is True
        assert accounts[0].balance == 700

    def test_income_adds(self):
        """Test that income raises the balance."""
        accounts = [Account(id=1, name="財布", balance=0)]
        apply_transaction(accounts, make_tx(1, date(2026, 10, 1), 1000, INCOME))
        assert accounts[0].balance == 1000

    def test_only_target_account_changes(self):
        """Test that other accounts are untouched."""
        accounts = [
            Account(id=1, name="財布", balance=100),
            Account(id=2, name="銀行", balance=100),
        ]
        apply_transaction(accounts, make_tx(1, date(2026, 10, 1), 50, EXPENSE, account_id=2))
        assert [a.balance for a in accounts] == [100, 50]

    def test_unresolved_account_changes_nothing(self):
        """Test that an unknown account id is reported, not applied."""
        accounts = [Account(id=1, name="財布", balance=100)]
        applied = apply_transaction(accounts, make_tx(1, date(2026, 10, 1), 50, account_id=99))
        assert applied is False
        assert accounts[0].balance == 100

    def test_balance_may_go_negative(self):
        """Test that overspending is allowed."""
        accounts = [Account(id=1, name="財布", balance=0)]
        apply_transaction(accounts, make_tx(1, date(2026, 10, 1), 500, EXPENSE))
        assert accounts[0].balance == -500


class TestReversal:
    """Tests for undoing transactions."""

    def test_signed_effect(self):
        assert signed_effect(make_tx(1, date(2026, 10, 1), 300, EXPENSE)) == -300
        assert signed_effect(make_tx(1, date(2026, 10, 1), 300, INCOME)) == 300

    @pytest.mark.parametrize("tx_type", [EXPENSE, INCOME])
    @pytest.mark.parametrize("start", [0, 1234, -500])
    def test_reverse_is_inverse_of_apply(self, tx_type, start):
        """Test that apply then reverse restores the starting balance."""
        tx = make_tx(1, date(2026, 10, 1), 777, tx_type)
        accounts = [Account(id=1, name="財布", balance=start)]
        apply_transaction(accounts, tx)
        assert reverse_transaction(accounts[0].balance, tx) == start


class TestLedgerInvariant:
    """Sum of balances equals income minus expense of applied transactions."""

    SEQUENCES = [
        [],
        [(1000, INCOME, 1)],
        [(1000, INCOME, 1), (300, EXPENSE, 1)],
        [(50, EXPENSE, 1), (50, EXPENSE, 2), (5000, INCOME, 2), (1, EXPENSE, 1)],
        [(250000, INCOME, 2), (80000, EXPENSE, 2), (1200, EXPENSE, 1), (3000, INCOME, 1)],
    ]

    @pytest.mark.parametrize("sequence", SEQUENCES)
    def test_balances_match_net_effect(self, sequence):
        accounts = [
            Account(id=1, name="財布", balance=0),
            Account(id=2, name="銀行", balance=0),
        ]
        transactions = [
            make_tx(i, date(2026, 10, 1 + i), amount, tx_type, account_id=account_id)
            for i, (amount, tx_type, account_id) in enumerate(sequence)
        ]
        for tx in transactions:
            apply_transaction(accounts, tx)

        income = sum(tx.amount for tx in transactions if tx.type == INCOME)
        expense = sum(tx.amount for tx in transactions if tx.type == EXPENSE)
        assert sum(a.balance for a in accounts) == income - expense
        assert net_effect(transactions) == income - expense
