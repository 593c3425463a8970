"""Audit logging package."""

from money_manager.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
