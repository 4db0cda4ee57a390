"""Transactions for the settings database.

``transaction(conn)`` opens ``BEGIN``/``COMMIT`` when the connection is idle
and a named ``SAVEPOINT`` when a transaction is already open, so a nested
block can fail without discarding the outer one.
"""

from __future__ import annotations

import itertools
import sqlite3
from contextlib import contextmanager
from typing import Iterator

_savepoint_ids = itertools.count(1)


@contextmanager
def _savepoint(conn: sqlite3.Connection) -> Iterator[None]:
    name = f"logininfo_sp_{next(_savepoint_ids)}"
    conn.execute(f"SAVEPOINT {name}")
    try:
        yield
    except Exception:
        conn.execute(f"ROLLBACK TO SAVEPOINT {name}")
        conn.execute(f"RELEASE SAVEPOINT {name}")
        raise
    conn.execute(f"RELEASE SAVEPOINT {name}")


@contextmanager
def _top_level(conn: sqlite3.Connection) -> Iterator[None]:
    conn.execute("BEGIN")
    try:
        yield
    except Exception:
        conn.rollback()
        raise
    conn.commit()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[None]:
    """Run the block atomically; any exception rolls it back and propagates.

    Usage::

        with transaction(conn):
            conn.execute("UPDATE system_settings SET options_json = ? WHERE id = ?", ...)
    """
    scope = _savepoint(conn) if conn.in_transaction else _top_level(conn)
    with scope:
        yield
