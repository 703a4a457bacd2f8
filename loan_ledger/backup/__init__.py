"""Backup export, validation and merge reconciliation."""

from loan_ledger.backup.codec import (
    SNAPSHOT_VERSION,
    BackupSnapshot,
    export_snapshot,
    parse_snapshot,
    read_snapshot,
    write_snapshot,
)
from loan_ledger.backup.reconcile import index_by_phone, merge_snapshot, phone_key

__all__ = [
    "SNAPSHOT_VERSION",
    "BackupSnapshot",
    "export_snapshot",
    "index_by_phone",
    "merge_snapshot",
    "parse_snapshot",
    "phone_key",
    "read_snapshot",
    "write_snapshot",
]
