"""
Server-side plugin: default installation and action registration.
"""

from __future__ import annotations

from typing import Optional

from logininfo.config.models import DEFAULT_RECORD_NUMBER, LoginInfoConfig
from logininfo.db.connection import create_sqlite_connection
from logininfo.db.schema import ensure_application_schema
from logininfo.logging import get_logger
from logininfo.settings.actions import Actor, ActionRouter, LoginInfoResource, SettingsUpdateAction
from logininfo.settings.initializer import SettingsInitializer
from logininfo.settings.store import SettingsStore, SQLiteSettingsStore

logger = get_logger(__name__)

PLUGIN_NAME = "login-info"


class LoginInfoPlugin:
    """Wires the record number feature into a host application."""

    name = PLUGIN_NAME

    def __init__(
        self,
        store: SettingsStore,
        router: ActionRouter,
        *,
        default_record_number: str = DEFAULT_RECORD_NUMBER,
    ) -> None:
        self.store = store
        self.router = router
        self.default_record_number = default_record_number
        self.resource: LoginInfoResource | None = None

    def install(self) -> bool:
        """Store the default record number unless one is already set."""
        return SettingsInitializer(self.store).ensure_default(self.default_record_number)

    def load(self) -> LoginInfoResource:
        """Define the ``loginInfo`` resource on the host router."""
        if self.resource is None:
            self.resource = LoginInfoResource(SettingsUpdateAction(self.store))
            self.router.define(self.resource)
            logger.debug("Defined resource %s", self.resource.name)
        return self.resource


def open_store(config: LoginInfoConfig, *, create_schema: bool = True) -> SQLiteSettingsStore:
    """
    Open the settings database named by *config*.

    Args:
        config: Loaded configuration
        create_schema: Create the ``system_settings`` table when missing

    Returns:
        SQLiteSettingsStore over a new connection
    """
    db_path = config.resolved_db_path
    conn = create_sqlite_connection(db_path)
    if create_schema:
        ensure_application_schema(conn)
    logger.debug("Opened settings database at %s", db_path)
    return SQLiteSettingsStore(conn)


def resolve_actor(config: LoginInfoConfig, name: Optional[str] = None) -> Optional[Actor]:
    """
    Build the acting identity for *name*, or the configured session user.

    Returns None when no user is selected. A name missing from ``users``
    yields a non-admin actor.
    """
    wanted = str(name or config.session_user or "").strip()
    if not wanted:
        return None
    user = config.find_user(wanted)
    if user is None:
        logger.warning("User '%s' is not configured; acting without admin rights", wanted)
        return Actor(name=wanted, is_admin=False)
    return Actor.from_roles(user.name, user.roles, config.admin_roles)


def bootstrap(
    store: SettingsStore,
    *,
    default_record_number: str = DEFAULT_RECORD_NUMBER,
    router: Optional[ActionRouter] = None,
) -> LoginInfoPlugin:
    """Install and load the plugin against *store*; returns the plugin."""
    plugin = LoginInfoPlugin(store, router or ActionRouter(), default_record_number=default_record_number)
    plugin.install()
    plugin.load()
    return plugin
