"""
Audit Logger

DESIGN DECISION: Every ledger mutation is logged.
This provides:
1. Traceability of every balance change
2. Visibility into silently tolerated problems (unknown accounts,
   discarded or migrated stored data)
3. A history of rejected user actions

The audit logger:
- Is synchronous, like the rest of the ledger
- Gracefully handles failures (doesn't crash the app if logging fails)
"""

import logging
import sys
from typing import Optional

import structlog

from money_manager.models.audit import AuditEvent, AuditEventBuilder
from money_manager.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(ensure_ascii=False)
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output to stderr at the given level."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("money_manager.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """Newest events first; empty when only logging locally."""
        if not self._storage:
            return []
        return self._storage.get_recent_events(limit)

    def log_ledger_loaded(
        self,
        transaction_count: int,
        account_count: int,
        from_storage: bool,
    ) -> None:
        """Log a successful startup load."""
        self.log(AuditEventBuilder.ledger_loaded(
            transaction_count=transaction_count,
            account_count=account_count,
            from_storage=from_storage,
        ))

    def log_state_discarded(self, error_message: str) -> None:
        """Log that stored data was unreadable and replaced by defaults."""
        self.log(AuditEventBuilder.state_discarded(error_message))

    def log_categories_migrated(self, categories: dict[str, list[str]]) -> None:
        self.log(AuditEventBuilder.categories_migrated(categories))

    def log_save_failed(self, error_message: str, operation: str) -> None:
        self.log(AuditEventBuilder.save_failed(error_message, operation))

    def log_ledger_reset(self) -> None:
        self.log(AuditEventBuilder.ledger_reset())

    def log_transaction_recorded(
        self,
        transaction_id: int,
        tx_type: str,
        amount: int,
        account_id: int,
        balance_applied: bool,
    ) -> None:
        """Log a new transaction."""
        self.log(AuditEventBuilder.transaction_recorded(
            transaction_id=transaction_id,
            tx_type=tx_type,
            amount=amount,
            account_id=account_id,
            balance_applied=balance_applied,
        ))

    def log_unresolved_account(
        self,
        transaction_id: Optional[int],
        account_id: int,
    ) -> None:
        self.log(AuditEventBuilder.unresolved_account(transaction_id, account_id))

    def log_account_added(self, account_id: int, name: str, balance: int) -> None:
        self.log(AuditEventBuilder.account_added(account_id, name, balance))

    def log_category_added(self, tx_type: str, name: str) -> None:
        self.log(AuditEventBuilder.category_added(tx_type, name))

    def log_category_rejected(self, tx_type: str, name: str, reason: str) -> None:
        self.log(AuditEventBuilder.category_rejected(tx_type, name, reason))

    def log_category_deleted(self, tx_type: str, name: str) -> None:
        self.log(AuditEventBuilder.category_deleted(tx_type, name))

    def log_ledger_imported(self, transaction_count: int, account_count: int) -> None:
        self.log(AuditEventBuilder.ledger_imported(transaction_count, account_count))

    def log_import_rejected(self, reason: str) -> None:
        self.log(AuditEventBuilder.import_rejected(reason))
