"""
Singleton settings record store.

The host application keeps one ``system_settings`` row whose ``options``
mapping is shared by every feature. ``SettingsStore`` is the narrow
read/create/update interface this feature needs; ``SQLiteSettingsStore``
backs it with the application database.
"""

from __future__ import annotations

import json
import sqlite3
from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from logininfo.db.schema import missing_application_tables
from logininfo.db.transaction import transaction
from logininfo.logging import get_logger

from .errors import StoreUnavailableError

logger = get_logger(__name__)

OptionsMap = dict[str, Any]


@dataclass(frozen=True)
class SettingsRecord:
    """The host application's singleton configuration row."""

    id: int
    options: OptionsMap = field(default_factory=dict)
    title: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "options": deepcopy(self.options)}


class SettingsStore(ABC):
    """
    Abstract store for the singleton settings record.
    """

    def is_available(self) -> bool:
        """Return False when the backing storage does not exist."""
        return True

    @abstractmethod
    def get_singleton(self) -> Optional[SettingsRecord]:
        """Return the settings record, or None when none has been created."""

    @abstractmethod
    def create(self, initial: Mapping[str, Any]) -> SettingsRecord:
        """Create the settings record with the given options."""

    @abstractmethod
    def update(self, record: SettingsRecord, options: Mapping[str, Any]) -> SettingsRecord:
        """Replace the options of *record* and return the stored record."""


class SQLiteSettingsStore(SettingsStore):
    """Settings store backed by the ``system_settings`` table."""

    TABLE = "system_settings"

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.connection = conn

    def is_available(self) -> bool:
        try:
            return not missing_application_tables(self.connection)
        except sqlite3.Error:
            logger.debug("Settings database could not be inspected", exc_info=True)
            return False

    def get_singleton(self) -> Optional[SettingsRecord]:
        try:
            row = self.connection.execute(
                f"SELECT id, title, options_json FROM {self.TABLE} ORDER BY id LIMIT 1"
            ).fetchone()
        except sqlite3.OperationalError as exc:
            raise StoreUnavailableError(f"Settings table is not available: {exc}") from exc
        if row is None:
            return None
        return self._row_to_record(row)

    def create(self, initial: Mapping[str, Any]) -> SettingsRecord:
        now = _utc_now()
        options_json = _dump_options(initial)
        try:
            with transaction(self.connection):
                cursor = self.connection.execute(
                    f"INSERT INTO {self.TABLE} (options_json, created_at, updated_at) VALUES (?, ?, ?)",
                    (options_json, now, now),
                )
        except sqlite3.OperationalError as exc:
            raise StoreUnavailableError(f"Settings table is not available: {exc}") from exc
        record_id = int(cursor.lastrowid)
        logger.debug("Created settings record %s", record_id)
        return SettingsRecord(id=record_id, options=json.loads(options_json))

    def update(self, record: SettingsRecord, options: Mapping[str, Any]) -> SettingsRecord:
        options_json = _dump_options(options)
        try:
            with transaction(self.connection):
                cursor = self.connection.execute(
                    f"UPDATE {self.TABLE} SET options_json = ?, updated_at = ? WHERE id = ?",
                    (options_json, _utc_now(), record.id),
                )
                if cursor.rowcount != 1:
                    raise LookupError(f"Settings record {record.id} no longer exists")
        except sqlite3.OperationalError as exc:
            raise StoreUnavailableError(f"Settings table is not available: {exc}") from exc
        logger.debug("Updated settings record %s", record.id)
        return SettingsRecord(id=record.id, options=json.loads(options_json), title=record.title)

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> SettingsRecord:
        raw = row["options_json"] or "{}"
        try:
            options = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Settings record %s has invalid options JSON; treating as empty", row["id"])
            options = {}
        if not isinstance(options, dict):
            options = {}
        return SettingsRecord(id=int(row["id"]), options=options, title=row["title"])


def _dump_options(options: Mapping[str, Any]) -> str:
    return json.dumps(dict(options or {}), ensure_ascii=False)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()
