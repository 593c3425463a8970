"""
Configuration Management for Money Manager

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Starter categories, labels and view sizes are data, not code, so a
deployment can localize them without touching the ledger logic.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Ledger store and analytics configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MONEY_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_path: Path = Field(
        default=Path("money_manager_data.json"),
        description="Where the whole ledger document is persisted"
    )

    # Starter taxonomy for a fresh ledger
    starter_expense_categories: list[str] = Field(
        default_factory=lambda: ["食費", "交通費", "日用品", "エンタメ", "その他"],
        description="Expense categories of a fresh ledger"
    )
    starter_income_categories: list[str] = Field(
        default_factory=lambda: ["給与", "賞与", "その他"],
        description="Income categories of a fresh ledger"
    )
    fallback_category: str = Field(
        default="その他",
        min_length=1,
        description="Category used when a stored taxonomy lacks a type"
    )

    unknown_account_label: str = Field(
        default="不明",
        description="Display name for transactions whose account does not resolve"
    )

    # View sizes
    history_points: int = Field(
        default=6,
        ge=1,
        le=120,
        description="Number of points in the asset trend (now + prior month-ends)"
    )
    recent_transactions_limit: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Transactions shown on the dashboard"
    )

    strict_account_references: bool = Field(
        default=False,
        description="Reject transactions whose account does not exist"
    )

    @field_validator("starter_expense_categories", "starter_income_categories")
    @classmethod
    def unique_names(cls, v: list[str]) -> list[str]:
        """Drop blanks and duplicates while keeping order."""
        seen: list[str] = []
        for name in (n.strip() for n in v):
            if name and name not in seen:
                seen.append(name)
        return seen


class ExportSettings(BaseSettings):
    """Labels and formats used by the CSV export and the asset trend."""

    model_config = SettingsConfigDict(
        env_prefix="MONEY_MANAGER_EXPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    csv_header: list[str] = Field(
        default_factory=lambda: ["日付", "種別", "カテゴリ", "金額", "口座", "メモ"],
        min_length=6,
        max_length=6,
        description="Header row: date, type, category, amount, account, description"
    )
    expense_label: str = Field(default="支出")
    income_label: str = Field(default="収入")
    csv_bom: bool = Field(
        default=True,
        description="Prefix the CSV with a UTF-8 BOM so spreadsheet apps detect the encoding"
    )
    csv_filename_prefix: str = Field(default="money_manager_export_")
    backup_filename: str = Field(default="money_manager_backup.json")

    # Asset trend labels
    history_now_label: str = Field(default="現在")
    history_month_end_label: str = Field(
        default="{month}月末",
        description="Format for month-end points; receives year and month"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for local structured logs"
    )
    audit_buffer_size: int = Field(
        default=1000,
        ge=1,
        description="Most recent audit events kept in memory"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def export(self) -> ExportSettings:
        return ExportSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("ledger", "export", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
