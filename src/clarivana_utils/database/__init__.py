"""Scan history persistence."""

from .schema import DDL, create_schema
from .utils import (
    HISTORY_LIMIT,
    MAX_STORED_TEXT_LENGTH,
    ScanHistoryEntry,
    get_connection,
    get_scan_history,
    get_scan_history_frame,
    save_scan_result,
    transaction,
)

__all__ = [
    "DDL",
    "create_schema",
    "HISTORY_LIMIT",
    "MAX_STORED_TEXT_LENGTH",
    "ScanHistoryEntry",
    "get_connection",
    "get_scan_history",
    "get_scan_history_frame",
    "save_scan_result",
    "transaction",
]
