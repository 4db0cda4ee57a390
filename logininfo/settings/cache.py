"""Client-side view of the shared settings record."""

from __future__ import annotations

from typing import Optional

from logininfo.logging import get_logger

from .errors import StoreUnavailableError
from .namespace import OwnedNamespace
from .store import SettingsRecord, SettingsStore

logger = get_logger(__name__)


class SystemSettingsCache:
    """Holds the last settings record read from the store."""

    def __init__(self, store: SettingsStore) -> None:
        self._store = store
        self._record: Optional[SettingsRecord] = None

    @property
    def record(self) -> Optional[SettingsRecord]:
        return self._record

    def refresh(self) -> Optional[SettingsRecord]:
        """Reload the record; an unavailable store leaves the cache empty."""
        try:
            self._record = self._store.get_singleton()
        except StoreUnavailableError as exc:
            logger.warning("System settings unavailable: %s", exc)
            self._record = None
        return self._record

    def owned_namespace(self) -> OwnedNamespace:
        return OwnedNamespace.from_options(self._record.options if self._record else None)
