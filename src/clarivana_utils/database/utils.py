"""SQLite helpers and the scan history store."""

import contextlib
import dataclasses
import datetime
import json
import logging
import pathlib
import sqlite3
from typing import Generator, List, Optional, Sequence, Union

import pandas as pd

from .schema import create_schema

logger = logging.getLogger(__name__)

# Only the most recent scans are kept, newest first.
HISTORY_LIMIT = 50
MAX_STORED_TEXT_LENGTH = 2000


@dataclasses.dataclass
class ScanHistoryEntry:
    id: int
    created_at: str
    ingredients: str
    allergies_found: List[str]
    harmful_notes: List[str]


def get_connection(db_path: Union[str, pathlib.Path]) -> sqlite3.Connection:
    """Get a SQLite connection with the history schema in place.

    Args:
        db_path: Path to the SQLite database file (or ":memory:")

    Returns:
        SQLite connection
    """
    conn = sqlite3.connect(db_path)
    create_schema(conn)
    return conn


@contextlib.contextmanager
def transaction(conn: sqlite3.Connection) -> Generator[sqlite3.Cursor, None, None]:
    """Context manager for database transactions.

    Args:
        conn: SQLite database connection

    Yields:
        Database cursor for executing queries

    Example:
        with transaction(conn) as cur:
            cur.execute("DELETE FROM scan_history")
    """
    cur = conn.cursor()
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def save_scan_result(
    conn: sqlite3.Connection,
    raw_text: Optional[str],
    allergy_alerts: Sequence[str],
    matched_ids: Sequence[str],
    limit: int = HISTORY_LIMIT,
) -> int:
    """Store one scan and prune the history to the ``limit`` most recent.

    Args:
        conn: SQLite database connection
        raw_text: Scanned text; stored truncated to MAX_STORED_TEXT_LENGTH
        allergy_alerts: Allergies found in the scan
        matched_ids: Matched harmful ingredient ids
        limit: Number of scans to keep

    Returns:
        Row id of the stored scan

    Raises:
        ValueError: If limit is less than 1
    """
    if limit < 1:
        raise ValueError(f"History limit must be at least 1, got {limit}")
    created_at = datetime.datetime.now(datetime.timezone.utc).isoformat()
    with transaction(conn) as cur:
        cur.execute(
            "INSERT INTO scan_history(created_at, ingredients, allergies_found, harmful_notes) "
            "VALUES (?, ?, ?, ?)",
            (
                created_at,
                (raw_text or "")[:MAX_STORED_TEXT_LENGTH],
                json.dumps(list(allergy_alerts)),
                json.dumps(list(matched_ids)),
            ),
        )
        scan_id = cur.lastrowid
        cur.execute(
            "DELETE FROM scan_history WHERE id NOT IN "
            "(SELECT id FROM scan_history ORDER BY id DESC LIMIT ?)",
            (limit,),
        )
        if cur.rowcount:
            logger.debug(f"Pruned {cur.rowcount} old scan(s) from history")
    return scan_id


def get_scan_history(
    conn: sqlite3.Connection, limit: Optional[int] = None
) -> List[ScanHistoryEntry]:
    """Return stored scans, most recent first."""
    query = (
        "SELECT id, created_at, ingredients, allergies_found, harmful_notes "
        "FROM scan_history ORDER BY id DESC"
    )
    params: tuple = ()
    if limit is not None:
        query += " LIMIT ?"
        params = (limit,)
    return [
        ScanHistoryEntry(
            id=row[0],
            created_at=row[1],
            ingredients=row[2],
            allergies_found=json.loads(row[3]),
            harmful_notes=json.loads(row[4]),
        )
        for row in conn.execute(query, params)
    ]


def get_scan_history_frame(db_path: Union[str, pathlib.Path]) -> pd.DataFrame:
    """Get the scan history as a DataFrame, most recent first.

    Args:
        db_path: Path to the SQLite database

    Returns:
        DataFrame with columns: id, created_at, ingredients, allergies_found,
        harmful_notes, harmful_count
    """
    conn = get_connection(db_path)
    try:
        entries = get_scan_history(conn)
    finally:
        conn.close()

    df = pd.DataFrame(
        [dataclasses.asdict(entry) for entry in entries],
        columns=["id", "created_at", "ingredients", "allergies_found", "harmful_notes"],
    )
    df["harmful_count"] = df["harmful_notes"].apply(len)
    return df
