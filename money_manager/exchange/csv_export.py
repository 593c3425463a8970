"""
CSV Export

One row per transaction in recording order, every value quoted with
embedded quotes doubled, so spreadsheet apps open it without surprises.
"""

import csv
import io
from datetime import date
from typing import Optional

from money_manager.config import ExportSettings, get_settings
from money_manager.ledger.errors import NothingToExport
from money_manager.ledger.store import LedgerStore
from money_manager.models.ledger import TransactionType


UTF8_BOM = "\ufeff"


def export_csv(
    store: LedgerStore,
    settings: Optional[ExportSettings] = None,
    bom: Optional[bool] = None,
) -> str:
    """
    Render every transaction as CSV text.

    Raises:
        NothingToExport: If the ledger has no transactions
    """
    settings = settings or get_settings().export
    bom = settings.csv_bom if bom is None else bom

    transactions = store.transactions
    if not transactions:
        raise NothingToExport("No transactions to export")

    type_labels = {
        TransactionType.EXPENSE: settings.expense_label,
        TransactionType.INCOME: settings.income_label,
    }

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    # Header is written unquoted
    buffer.write(",".join(settings.csv_header) + "\n")
    for tx in transactions:
        writer.writerow([
            tx.date.isoformat(),
            type_labels[tx.type],
            tx.category,
            tx.amount,
            store.account_name(tx.account_id),
            tx.description,
        ])

    text = buffer.getvalue()
    return UTF8_BOM + text if bom else text


def csv_filename(
    today: Optional[date] = None,
    settings: Optional[ExportSettings] = None,
) -> str:
    """e.g. money_manager_export_20261017.csv"""
    settings = settings or get_settings().export
    today = today or date.today()
    return f"{settings.csv_filename_prefix}{today:%Y%m%d}.csv"
