"""
Data Models Package

This package contains all Pydantic models used in the Money Manager system.
All data flowing through the system must conform to these schemas.
"""

from money_manager.models.ledger import (
    Account,
    CategoryTaxonomy,
    LedgerDocument,
    Transaction,
    TransactionType,
    default_ledger,
    migrate_categories,
)
from money_manager.models.analytics import (
    DailyTotal,
    Dashboard,
    HistoryPoint,
    MonthlyReport,
    PeriodSummary,
)
from money_manager.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Account",
    "CategoryTaxonomy",
    "LedgerDocument",
    "Transaction",
    "TransactionType",
    "default_ledger",
    "migrate_categories",
    # Analytics models
    "DailyTotal",
    "Dashboard",
    "HistoryPoint",
    "MonthlyReport",
    "PeriodSummary",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
