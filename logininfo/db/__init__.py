"""Database-level helpers for the settings store."""

from .connection import create_sqlite_connection
from .schema import APPLICATION_TABLES, ensure_application_schema, missing_application_tables
from .transaction import transaction

__all__ = [
    "create_sqlite_connection",
    "APPLICATION_TABLES",
    "ensure_application_schema",
    "missing_application_tables",
    "transaction",
]
