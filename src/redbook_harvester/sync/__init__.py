"""Bulk archive synchronisation for Redbook Harvester."""

from .fetch import ArchiveError, download_archive, get_with_backoff, read_first_entry
from .ledger import SyncLedger
from .processor import BulkGrantProcessor, ProcessorSummary

__all__ = [
    "ArchiveError",
    "BulkGrantProcessor",
    "ProcessorSummary",
    "SyncLedger",
    "download_archive",
    "get_with_backoff",
    "read_first_entry",
]
