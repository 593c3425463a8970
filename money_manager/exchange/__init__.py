"""Export, backup and restore of the whole ledger."""

from money_manager.exchange.backup import (
    REQUIRED_COLLECTIONS,
    backup_filename,
    dump_backup,
    import_backup,
    parse_import,
)
from money_manager.exchange.csv_export import UTF8_BOM, csv_filename, export_csv

__all__ = [
    "REQUIRED_COLLECTIONS",
    "UTF8_BOM",
    "backup_filename",
    "csv_filename",
    "dump_backup",
    "export_csv",
    "import_backup",
    "parse_import",
]
