"""
Balance Engine

Forward: applied exactly once per transaction, when it is recorded.
Reverse: used only to reconstruct past balances, never persisted.

reverse_transaction is the exact inverse of the forward effect, so
applying a transaction and reversing it always returns the start balance.
"""

from typing import Iterable

from money_manager.models.ledger import Account, Transaction, TransactionType


def signed_effect(tx: Transaction) -> int:
    """Amount a transaction adds to its account's balance."""
    if tx.type == TransactionType.EXPENSE:
        return -tx.amount
    return tx.amount


def apply_transaction(accounts: Iterable[Account], tx: Transaction) -> bool:
    """
    Adjust the target account's balance by the transaction's effect.

    Returns False without touching any balance when the account id
    does not resolve.
    """
    for account in accounts:
        if account.id == tx.account_id:
            account.balance += signed_effect(tx)
            return True
    return False


def reverse_transaction(balance: int, tx: Transaction) -> int:
    """Undo one transaction's effect on a balance."""
    return balance - signed_effect(tx)


def net_effect(transactions: Iterable[Transaction]) -> int:
    """Income minus expense over the given transactions."""
    return sum(signed_effect(tx) for tx in transactions)
