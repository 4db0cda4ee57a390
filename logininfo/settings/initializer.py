"""
One-time default materialization for the owned settings namespace.
"""

from __future__ import annotations

from logininfo.logging import get_logger

from .errors import StoreUnavailableError
from .namespace import RECORD_NUMBER_KEY, OwnedNamespace, merge_owned_namespace, normalize_record_number
from .store import SettingsStore

logger = get_logger(__name__)


class SettingsInitializer:
    """
    Ensure ``pluginLoginInfo.recordNumber`` holds a value without clobbering
    one that is already stored.
    """

    def __init__(self, store: SettingsStore) -> None:
        self.store = store

    def ensure_default(self, default_value: str) -> bool:
        """
        Write *default_value* when no record number is stored yet.

        Performs at most one write and never raises for a missing settings
        table, so an optional feature cannot block startup.

        Args:
            default_value: Record number to store on first initialization.

        Returns:
            True when a write happened.
        """
        value = normalize_record_number(default_value)

        if not self.store.is_available():
            logger.warning("System settings table not found, skipping login-info default setup")
            return False

        try:
            record = self.store.get_singleton()
            if record is None:
                self.store.create(merge_owned_namespace({}, {RECORD_NUMBER_KEY: value}))
                logger.info("Created system settings with default record number %s", value)
                return True

            if OwnedNamespace.from_options(record.options).is_initialized:
                logger.debug("Record number already initialized; leaving it unchanged")
                return False

            self.store.update(record, merge_owned_namespace(record.options, {RECORD_NUMBER_KEY: value}))
        except StoreUnavailableError as exc:
            logger.warning("System settings unavailable, skipping login-info default setup: %s", exc)
            return False

        logger.info("Initialized default record number %s", value)
        return True
