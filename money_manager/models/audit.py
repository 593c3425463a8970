"""
Audit Models for Money Manager

Every ledger mutation and every tolerated inconsistency is logged.
This provides:
1. Traceability of every balance change
2. Debugging information when stored data is discarded or migrated
3. A record of rejected user actions

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Startup / persistence
    LEDGER_LOADED = "ledger_loaded"
    PERSISTED_STATE_DISCARDED = "persisted_state_discarded"
    CATEGORIES_MIGRATED = "categories_migrated"
    SAVE_FAILED = "save_failed"
    LEDGER_RESET = "ledger_reset"

    # Mutations
    TRANSACTION_RECORDED = "transaction_recorded"
    UNRESOLVED_ACCOUNT_REFERENCE = "unresolved_account_reference"
    ACCOUNT_ADDED = "account_added"
    CATEGORY_ADDED = "category_added"
    CATEGORY_REJECTED = "category_rejected"
    CATEGORY_DELETED = "category_deleted"

    # Backup / restore
    LEDGER_IMPORTED = "ledger_imported"
    IMPORT_REJECTED = "import_rejected"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'account', 'category')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID or name of the entity this event relates to"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_recorded(tx, balance_applied=True)
        event = AuditEventBuilder.category_rejected("expense", "食費", "duplicate")
    """

    @staticmethod
    def ledger_loaded(
        transaction_count: int,
        account_count: int,
        from_storage: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            entity_type="ledger",
            description=(
                "Ledger loaded from storage" if from_storage
                else "No stored ledger, started fresh"
            ),
            details={
                "transactions": transaction_count,
                "accounts": account_count,
            },
        )

    @staticmethod
    def state_discarded(error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSISTED_STATE_DISCARDED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            description="Stored ledger could not be parsed, using default ledger",
            error_message=error_message,
        )

    @staticmethod
    def categories_migrated(categories: dict[str, list[str]]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORIES_MIGRATED,
            entity_type="categories",
            description="Stored categories upgraded to the per-type shape",
            details={"categories": categories},
        )

    @staticmethod
    def save_failed(error_message: str, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="ledger",
            description=f"Persisting ledger failed during {operation}; change rolled back",
            error_message=error_message,
            details={"operation": operation},
        )

    @staticmethod
    def ledger_reset() -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_RESET,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            description="All ledger data deleted",
            is_user_action=True,
        )

    @staticmethod
    def transaction_recorded(
        transaction_id: int,
        tx_type: str,
        amount: int,
        account_id: int,
        balance_applied: bool,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECORDED,
            entity_type="transaction",
            entity_id=str(transaction_id),
            description=f"Recorded {tx_type} of ¥{amount:,}",
            details={
                "type": tx_type,
                "amount": amount,
                "account_id": account_id,
                "balance_applied": balance_applied,
            },
            is_user_action=True,
        )

    @staticmethod
    def unresolved_account(transaction_id: Optional[int], account_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.UNRESOLVED_ACCOUNT_REFERENCE,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=str(transaction_id) if transaction_id is not None else None,
            description=f"Account {account_id} does not exist; balance not changed",
            details={"account_id": account_id},
        )

    @staticmethod
    def account_added(account_id: int, name: str, balance: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_ADDED,
            entity_type="account",
            entity_id=str(account_id),
            description=f"Account added: {name}",
            details={"name": name, "opening_balance": balance},
            is_user_action=True,
        )

    @staticmethod
    def category_added(tx_type: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=name,
            description=f"Category added to {tx_type}: {name}",
            details={"type": tx_type},
            is_user_action=True,
        )

    @staticmethod
    def category_rejected(tx_type: str, name: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="category",
            entity_id=name,
            description=f"Category not added to {tx_type}: {reason}",
            details={"type": tx_type, "reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def category_deleted(tx_type: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_DELETED,
            entity_type="category",
            entity_id=name,
            description=f"Category deleted from {tx_type}: {name}",
            details={"type": tx_type},
            is_user_action=True,
        )

    @staticmethod
    def ledger_imported(transaction_count: int, account_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_IMPORTED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            description="Ledger replaced from backup",
            details={
                "transactions": transaction_count,
                "accounts": account_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def import_rejected(reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.IMPORT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="ledger",
            description="Backup import rejected",
            error_message=reason,
            is_user_action=True,
        )
