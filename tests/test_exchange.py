"""Tests for CSV export and backup import/restore."""

import json
from datetime import date

import pytest

from money_manager.exchange import (
    UTF8_BOM,
    csv_filename,
    dump_backup,
    export_csv,
    import_backup,
    parse_import,
)
from money_manager.ledger import InvalidImportPayload, NothingToExport
from money_manager.models.audit import AuditEventType
from money_manager.models.ledger import TransactionType


INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


BACKUP = {
    "transactions": [
        {
            "id": 100, "date": "2026-09-25", "amount": 250000, "type": "income",
            "category": "給与", "accountId": 2, "description": "9月分",
        },
        {
            "id": 101, "date": "2026-09-26", "amount": 1500, "type": "expense",
            "category": "食費", "accountId": 1, "description": "",
        },
    ],
    "accounts": [
        {"id": 1, "name": "財布", "balance": -1500},
        {"id": 2, "name": "銀行", "balance": 250000},
    ],
    "categories": {"expense": ["食費"], "income": ["給与"]},
}


class TestCsvExport:
    """Tests for the CSV export."""

    def test_header_and_rows(self, store, export_settings):
        store.record_transaction(date(2026, 10, 1), 1200, EXPENSE, "食費", 1, "ランチ")
        store.record_transaction(date(2026, 10, 2), 250000, INCOME, "給与", 2)

        text = export_csv(store, export_settings, bom=False)
        assert text.splitlines() == [
            "日付,種別,カテゴリ,金額,口座,メモ",
            '"2026-10-01","支出","食費","1200","財布","ランチ"',
            '"2026-10-02","収入","給与","250000","銀行",""',
        ]

    def test_rows_in_recording_order(self, store, export_settings):
        store.record_transaction(date(2026, 10, 5), 1, EXPENSE, "食費", 1, "later date")
        store.record_transaction(date(2026, 10, 1), 1, EXPENSE, "食費", 1, "earlier date")

        rows = export_csv(store, export_settings, bom=False).splitlines()[1:]
        assert "later date" in rows[0]
        assert "earlier date" in rows[1]

    def test_embedded_quotes_are_doubled(self, store, export_settings):
        store.record_transaction(date(2026, 10, 1), 500, EXPENSE, "食費", 1, 'He said "hi"')

        row = export_csv(store, export_settings, bom=False).splitlines()[1]
        assert row.endswith('"He said ""hi"""')

    def test_unknown_account_label(self, store, export_settings):
        store.record_transaction(date(2026, 10, 1), 500, EXPENSE, "食費", 99)

        row = export_csv(store, export_settings, bom=False).splitlines()[1]
        assert '"不明"' in row

    def test_bom_prefix(self, store, export_settings):
        store.record_transaction(date(2026, 10, 1), 500, EXPENSE, "食費", 1)

        assert export_csv(store, export_settings).startswith(UTF8_BOM + "日付")
        assert not export_csv(store, export_settings, bom=False).startswith(UTF8_BOM)

    def test_empty_ledger_has_nothing_to_export(self, store, export_settings):
        with pytest.raises(NothingToExport):
            export_csv(store, export_settings)

    def test_filename_uses_date(self, export_settings):
        assert (
            csv_filename(date(2026, 10, 17), export_settings)
            == "money_manager_export_20261017.csv"
        )


class TestBackupImport:
    """Tests for restoring from a backup document."""

    def test_valid_import_replaces_ledger(self, store, storage, audit_logger, audit_storage):
        store.record_transaction(date(2026, 10, 1), 999, EXPENSE, "食費", 1)

        document = import_backup(store, json.dumps(BACKUP), audit_logger)

        assert [tx.id for tx in store.transactions] == [100, 101]
        assert store.total_balance() == 248500
        assert store.categories.expense == ["食費"]
        assert document.to_json() == store.to_json()
        assert json.loads(storage.document)["accounts"][1]["balance"] == 250000
        assert AuditEventType.LEDGER_IMPORTED in [
            e.event_type for e in audit_storage.get_recent_events()
        ]

    @pytest.mark.parametrize("missing", ["transactions", "accounts"])
    def test_missing_collection_leaves_ledger_untouched(
        self, missing, store, storage, audit_logger, audit_storage
    ):
        """Test that a rejected import changes neither memory nor storage."""
        store.record_transaction(date(2026, 10, 1), 999, EXPENSE, "食費", 1)
        before_json = store.to_json()
        before_stored = storage.document
        payload = {k: v for k, v in BACKUP.items() if k != missing}

        with pytest.raises(InvalidImportPayload):
            import_backup(store, json.dumps(payload), audit_logger)

        assert store.to_json() == before_json
        assert storage.document == before_stored
        assert audit_storage.get_recent_events(1)[0].event_type == AuditEventType.IMPORT_REJECTED

    def test_null_collection_is_rejected(self, store):
        with pytest.raises(InvalidImportPayload):
            parse_import({**BACKUP, "transactions": None}, store)

    @pytest.mark.parametrize("payload", ["{broken", "[]", '"text"'])
    def test_unreadable_payload_rejected(self, payload, store):
        with pytest.raises(InvalidImportPayload):
            import_backup(store, payload)

    def test_invalid_record_rejected(self, store):
        bad = json.loads(json.dumps(BACKUP))
        bad["transactions"][0]["amount"] = -5
        with pytest.raises(InvalidImportPayload):
            parse_import(bad, store)

    def test_missing_categories_fall_back(self, store):
        """Test that backups without categories get the fallback per type."""
        payload = {k: v for k, v in BACKUP.items() if k != "categories"}
        document = parse_import(payload, store)
        assert document.categories.expense == ["その他"]
        assert document.categories.income == ["その他"]

    def test_legacy_flat_categories_migrated(self, store):
        document = parse_import({**BACKUP, "categories": ["食費", "家賃"]}, store)
        assert document.categories.expense == ["食費", "家賃"]
        assert document.categories.income == ["給与", "賞与", "その他"]

    def test_parse_does_not_apply(self, store, storage):
        parse_import(BACKUP, store)
        assert store.transactions == ()
        assert storage.save_count == 0

    def test_dump_then_import_restores_everything(self, store):
        store.record_transaction(date(2026, 10, 1), 1000, INCOME, "給与", 1, "メモ")
        store.add_account("貯金", 300)
        store.add_category(EXPENSE, "家賃")
        backup = dump_backup(store)

        store.reset()
        import_backup(store, backup)

        assert store.to_json() == backup
