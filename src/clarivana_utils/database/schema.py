"""Database schema for the scan history store."""

import sqlite3

DDL = """
CREATE TABLE IF NOT EXISTS scan_history(
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at      TEXT NOT NULL,
    ingredients     TEXT NOT NULL,
    allergies_found TEXT NOT NULL DEFAULT '[]',
    harmful_notes   TEXT NOT NULL DEFAULT '[]'
);

CREATE INDEX IF NOT EXISTS idx_scan_history_created_at
    ON scan_history(created_at);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the scan history tables.

    Args:
        conn: SQLite database connection
    """
    conn.executescript(DDL)
