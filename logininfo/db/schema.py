"""Application schema ownership for the settings database.

The host application owns ``system_settings``; it is shared by every
feature and holds at most one row.  ``ensure_application_schema`` is safe to
call on every startup.
"""

from __future__ import annotations

import sqlite3

# Tables created by ensure_application_schema.
APPLICATION_TABLES: tuple[str, ...] = ("system_settings",)


def ensure_application_schema(conn: sqlite3.Connection) -> None:
    """Create the application tables when they do not exist yet."""
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS system_settings (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            title            TEXT,
            options_json     TEXT NOT NULL DEFAULT '{}',
            created_at       TEXT,
            updated_at       TEXT
        );
        """
    )
    conn.commit()


def missing_application_tables(conn: sqlite3.Connection) -> list[str]:
    """Return application tables that are not present in the database."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table'"
    ).fetchall()
    existing = {str(row[0]) for row in rows}
    return [name for name in APPLICATION_TABLES if name not in existing]
