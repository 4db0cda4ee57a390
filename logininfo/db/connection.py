"""Connection management for the settings database.

Provides a single source of truth for creating SQLite connections so every
caller gets consistent PRAGMA configuration (WAL journal, foreign keys, busy
timeout, ``sqlite3.Row`` factory).
"""

from __future__ import annotations

import sqlite3
from pathlib import Path


def create_sqlite_connection(path: Path | str) -> sqlite3.Connection:
    """Create a SQLite connection with standard pragmas.

    Applies WAL journal mode (file databases only), foreign keys ON,
    busy_timeout 5000, ``check_same_thread=False`` and
    ``row_factory=sqlite3.Row``.  The parent folder is created when missing.
    """
    target = str(path)
    if target != ":memory:":
        Path(target).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(target, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute("PRAGMA busy_timeout = 5000")
    if target != ":memory:":
        conn.execute("PRAGMA journal_mode = WAL")
    return conn

