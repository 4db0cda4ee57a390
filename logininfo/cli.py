"""
Single-shot CLI commands: init, show, set.
"""

from __future__ import annotations

import argparse
import sys
from contextlib import closing

from logininfo.config.models import LoginInfoConfig
from logininfo.logging import get_logger
from logininfo.paths import ensure_global_folder
from logininfo.plugin import LoginInfoPlugin, bootstrap, open_store, resolve_actor
from logininfo.settings.actions import RESOURCE_NAME, UPDATE_RECORD_NUMBER, ActionRouter
from logininfo.settings.namespace import RECORD_NUMBER_KEY, OwnedNamespace
from logininfo.settings.store import SettingsStore

logger = get_logger(__name__)


def run_init(config: LoginInfoConfig, args: argparse.Namespace) -> int:
    """Create the settings table and store the default record number."""
    if config.global_folder is not None:
        ensure_global_folder(config.global_folder)
    store = open_store(config)
    with closing(store.connection):
        plugin = LoginInfoPlugin(
            store,
            ActionRouter(),
            default_record_number=config.default_record_number,
        )
        wrote = plugin.install()
        namespace = OwnedNamespace.from_options(_options(store))

    if wrote:
        print(f"Initialized record number: {namespace.record_number}")
    else:
        print(f"Record number already set: {namespace.record_number}")
    print(f"Database: {config.resolved_db_path}")
    return 0


def run_show(config: LoginInfoConfig, args: argparse.Namespace) -> int:
    """Print the stored record number."""
    store = open_store(config, create_schema=False)
    with closing(store.connection):
        if not store.is_available():
            print("Settings table not found. Run 'login-info init' first.", file=sys.stderr)
            return 1
        namespace = OwnedNamespace.from_options(_options(store))

    print(f"Record number: {namespace.record_number or '(not set)'}")
    return 0


def run_set(config: LoginInfoConfig, args: argparse.Namespace) -> int:
    """Update the record number as a configured user."""
    actor = resolve_actor(config, args.user)
    store = open_store(config)
    with closing(store.connection):
        plugin = bootstrap(store, default_record_number=config.default_record_number)
        response = plugin.router.call(
            RESOURCE_NAME,
            UPDATE_RECORD_NUMBER,
            actor,
            {RECORD_NUMBER_KEY: args.value},
        )

    if not response.ok:
        logger.debug("Set record number failed with status %s", response.status)
        print(f"Error ({response.status}): {response.error}", file=sys.stderr)
        return 1
    namespace = OwnedNamespace.from_options(response.body.options if response.body else None)
    print(f"Record number set to {namespace.record_number}")
    return 0


def _options(store: SettingsStore) -> dict | None:
    record = store.get_singleton()
    return record.options if record is not None else None
