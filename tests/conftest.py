"""Shared fixtures: an in-memory ledger with a fixed clock."""

from datetime import date

import pytest

from money_manager.audit import AuditLogger
from money_manager.config import ExportSettings, LedgerSettings
from money_manager.ledger import LedgerStore
from money_manager.models.ledger import Transaction, TransactionType
from money_manager.services.storage import InMemoryAuditStorage, InMemoryLedgerStorage


FIXED_EPOCH = 1_790_000_000.0


@pytest.fixture
def today() -> date:
    return date(2026, 10, 17)


@pytest.fixture
def ledger_settings() -> LedgerSettings:
    return LedgerSettings()


@pytest.fixture
def export_settings() -> ExportSettings:
    return ExportSettings()


@pytest.fixture
def storage() -> InMemoryLedgerStorage:
    return InMemoryLedgerStorage()


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage) -> AuditLogger:
    return AuditLogger(audit_storage)


@pytest.fixture
def store(storage, ledger_settings, audit_logger) -> LedgerStore:
    ledger = LedgerStore(
        storage,
        settings=ledger_settings,
        audit_logger=audit_logger,
        clock=lambda: FIXED_EPOCH,
    )
    ledger.load()
    return ledger


def make_tx(
    tx_id: int,
    day: date,
    amount: int,
    tx_type: TransactionType = TransactionType.EXPENSE,
    category: str = "食費",
    account_id: int = 1,
    description: str = "",
) -> Transaction:
    return Transaction(
        id=tx_id,
        date=day,
        amount=amount,
        type=tx_type,
        category=category,
        account_id=account_id,
        description=description,
    )
