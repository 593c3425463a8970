"""
Main Orchestrator for Money Manager

This module ties together the components and defines the read-side views:
1. Dashboard (total balance, recent activity, this month's breakdown)
2. Monthly analytics (totals, asset trend, calendar)
3. Day detail

DESIGN DECISION: Views are recomputed from the ledger on every request.
Nothing derived is cached or stored, so a view can never go stale
relative to the transaction log.
"""

from datetime import date
from pathlib import Path
from typing import Optional, Union

import structlog

from money_manager.analytics import (
    aggregate,
    all_of,
    build_history,
    daily_totals,
    for_account,
    in_month,
)
from money_manager.audit import AuditLogger, configure_logging
from money_manager.config import ExportSettings, get_settings, validate_all_settings
from money_manager.ledger import LedgerStore
from money_manager.models.analytics import (
    DailyTotal,
    Dashboard,
    HistoryPoint,
    MonthlyReport,
)
from money_manager.models.ledger import Transaction
from money_manager.services.storage import (
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
)


logger = structlog.get_logger(__name__)


class AnalyticsService:
    """
    Builds every read-only view from a ledger store.

    GUARANTEES:
    - Never mutates the store
    - Empty periods produce zero totals, not errors
    """

    def __init__(
        self,
        store: LedgerStore,
        export_settings: Optional[ExportSettings] = None,
    ):
        self._store = store
        self._labels = export_settings or get_settings().export

    def dashboard(
        self,
        account_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> Dashboard:
        """
        Home screen view.

        The category breakdown covers the current month and, when
        account_id is given, only that account. Balances are never filtered.
        """
        today = today or date.today()
        summary = aggregate(
            self._store.transactions,
            predicate=all_of(
                in_month(today.year, today.month),
                for_account(account_id),
            ),
        )
        return Dashboard(
            total_balance=self._store.total_balance(),
            accounts=self._store.accounts,
            recent_transactions=self._store.recent_transactions(),
            current_month=summary,
            account_filter=account_id,
            year=today.year,
            month=today.month,
        )

    def asset_history(
        self,
        num_points: Optional[int] = None,
        today: Optional[date] = None,
    ) -> list[HistoryPoint]:
        """Asset trend ending at the current balance, oldest first."""
        return build_history(
            self._store.total_balance(),
            self._store.transactions,
            num_points=(
                self._store.settings.history_points if num_points is None else num_points
            ),
            today=today,
            now_label=self._labels.history_now_label,
            month_end_label=self._labels.history_month_end_label,
        )

    def calendar(self, year: int, month: int, dense: bool = True) -> dict[int, DailyTotal]:
        return daily_totals(self._store.transactions, year, month, dense=dense)

    def monthly_report(
        self,
        year: int,
        month: int,
        today: Optional[date] = None,
    ) -> MonthlyReport:
        """
        Analytics view for one month.

        The asset trend always ends at today's balance, whichever month
        is being viewed.
        """
        summary = aggregate(
            self._store.transactions,
            predicate=in_month(year, month),
        )
        logger.debug(
            "monthly_report_built",
            year=year,
            month=month,
            transactions=summary.transaction_count,
        )
        return MonthlyReport(
            year=year,
            month=month,
            summary=summary,
            asset_history=self.asset_history(today=today),
            calendar=self.calendar(year, month),
        )

    def day_detail(self, day: date) -> list[Transaction]:
        return self._store.transactions_on(day)


def create_app_components(
    data_path: Optional[Union[str, Path]] = None,
    use_storage: bool = True,
) -> tuple[LedgerStore, AnalyticsService, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        data_path: Ledger file; defaults to the configured data_path
        use_storage: Set to False to keep the ledger in memory only

    Returns:
        (store, analytics_service, audit_logger), with the ledger loaded
    """
    settings = get_settings()
    app_settings = settings.app
    configure_logging("DEBUG" if app_settings.debug_mode else app_settings.log_level)

    checks = validate_all_settings()
    if not all(ok for name, ok in checks.items() if not name.endswith("_error")):
        logger.warning("invalid_settings", **checks)

    storage: LedgerStorageInterface
    if use_storage:
        storage = JsonFileLedgerStorage(data_path or settings.ledger.data_path)
    else:
        storage = InMemoryLedgerStorage()

    audit_logger = AuditLogger(InMemoryAuditStorage(max_events=app_settings.audit_buffer_size))
    store = LedgerStore(
        storage,
        settings=settings.ledger,
        audit_logger=audit_logger,
    )
    store.load()

    analytics = AnalyticsService(store, export_settings=settings.export)
    logger.info(
        "app_components_created",
        environment=app_settings.app_environment,
        persistent=use_storage,
    )
    return store, analytics, audit_logger
