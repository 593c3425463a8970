"""
Backup and Restore

A backup is the persisted document itself. Restoring replaces the whole
ledger; a rejected payload leaves the current ledger exactly as it was.
"""

import json
from typing import Any, Optional, Union

import structlog

from money_manager.audit import AuditLogger
from money_manager.config import ExportSettings, get_settings
from money_manager.ledger.errors import InvalidImportPayload, MalformedPersistedState
from money_manager.ledger.store import LedgerStore, parse_ledger
from money_manager.models.ledger import LedgerDocument


logger = structlog.get_logger(__name__)

REQUIRED_COLLECTIONS = ("transactions", "accounts")


def backup_filename(settings: Optional[ExportSettings] = None) -> str:
    return (settings or get_settings().export).backup_filename


def dump_backup(store: LedgerStore) -> str:
    """Full-fidelity JSON of the ledger."""
    return store.to_json()


def parse_import(
    payload: Union[str, bytes, dict[str, Any]],
    store: LedgerStore,
) -> LedgerDocument:
    """
    Validate a backup document without applying it.

    Raises:
        InvalidImportPayload: If the payload is not JSON, not an object,
            lacks transactions or accounts, or holds invalid records
    """
    if isinstance(payload, (str, bytes)):
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidImportPayload(f"Backup is not valid JSON: {e}") from e
    else:
        data = payload

    if not isinstance(data, dict):
        raise InvalidImportPayload("Backup must be a JSON object")

    missing = [key for key in REQUIRED_COLLECTIONS if data.get(key) is None]
    if missing:
        raise InvalidImportPayload(f"Backup is missing: {', '.join(missing)}")

    # Older backups may predate categories entirely
    if "categories" not in data:
        data = {**data, "categories": {}}

    try:
        document, _ = parse_ledger(data, store.settings)
    except MalformedPersistedState as e:
        raise InvalidImportPayload(f"Backup contents are invalid: {e}") from e
    return document


def import_backup(
    store: LedgerStore,
    payload: Union[str, bytes, dict[str, Any]],
    audit_logger: Optional[AuditLogger] = None,
) -> LedgerDocument:
    """
    Replace the ledger with a backup.

    Raises:
        InvalidImportPayload: The ledger is left untouched
        StorageError: Persisting failed; the ledger is left untouched
    """
    try:
        document = parse_import(payload, store)
    except InvalidImportPayload as e:
        logger.warning("import_rejected", error=str(e))
        if audit_logger:
            audit_logger.log_import_rejected(str(e))
        raise
    store.replace(document)
    return store.document_snapshot()
