"""Configuration package."""

from money_manager.config.settings import (
    AppSettings,
    ExportSettings,
    LedgerSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ExportSettings",
    "LedgerSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
