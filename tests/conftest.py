"""
Shared pytest fixtures for Login Info tests.

Provides sample configurations, in-memory and SQLite settings stores, and
actors for exercising the action surface.
"""

import sqlite3
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from logininfo.db.connection import create_sqlite_connection
from logininfo.db.schema import ensure_application_schema
from logininfo.settings.actions import Actor
from logininfo.settings.store import SQLiteSettingsStore
from tests.fakes import InMemorySettingsStore


# -----------------------------------------------------------------------------
# Configuration Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def sample_config_dict(tmp_path: Path) -> Dict[str, Any]:
    """
    Provide a minimal valid configuration dictionary for testing.

    Uses tmp_path for all file system paths to ensure isolation.
    """
    return {
        "global_folder": str(tmp_path / "login-info-home"),
        "db_path": "settings.db",
        "default_record_number": "10",
        "admin_roles": ["admin"],
        "session_user": "alice",
        "users": [
            {"name": "alice", "roles": ["admin"]},
            {"name": "bob", "roles": ["member"]},
        ],
        "injector": {
            "poll_interval_s": 0.05,
            "timeout_s": 1.0,
        },
    }


@pytest.fixture
def sample_config_file(tmp_path: Path, sample_config_dict: Dict[str, Any]) -> Path:
    """Write the sample configuration to a YAML file."""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(sample_config_dict), encoding="utf-8")
    return path


# -----------------------------------------------------------------------------
# Store Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def memory_store() -> InMemorySettingsStore:
    """Empty in-memory settings store."""
    return InMemorySettingsStore()


@pytest.fixture
def sqlite_conn(tmp_path: Path):
    """SQLite connection with the application schema applied."""
    conn = create_sqlite_connection(tmp_path / "settings.db")
    ensure_application_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def sqlite_store(sqlite_conn: sqlite3.Connection) -> SQLiteSettingsStore:
    return SQLiteSettingsStore(sqlite_conn)


# -----------------------------------------------------------------------------
# Actors
# -----------------------------------------------------------------------------

@pytest.fixture
def admin() -> Actor:
    return Actor(name="alice", is_admin=True)


@pytest.fixture
def member() -> Actor:
    return Actor(name="bob", is_admin=False)
