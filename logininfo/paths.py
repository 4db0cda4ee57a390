"""
Global path helpers for Login Info.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


GLOBAL_FOLDER_ENV_VAR = "LOGININFO_GLOBAL_FOLDER"
DEFAULT_DB_FILENAME = "login-info.db"


def get_global_folder(override: Optional[str | Path] = None) -> Path:
    """
    Resolve the global Login Info folder path.

    Priority:
    1. Explicit override argument
    2. LOGININFO_GLOBAL_FOLDER environment variable
    3. <home>/Login Info
    """
    candidate: str | Path | None = override
    if candidate is None:
        candidate = os.environ.get(GLOBAL_FOLDER_ENV_VAR)
    if candidate is None:
        candidate = Path.home() / "Login Info"
    return Path(candidate).expanduser().resolve()


def get_default_db_path(global_folder: Optional[str | Path] = None) -> Path:
    """Return the default settings database path."""
    return get_global_folder(global_folder) / DEFAULT_DB_FILENAME


def resolve_relative_path(path: str | Path, global_folder: Optional[str | Path] = None) -> Path:
    """
    Resolve a possibly-relative path against the global folder.
    """
    value = Path(path).expanduser()
    if value.is_absolute():
        return value.resolve()
    return (get_global_folder(global_folder) / value).resolve()


def ensure_global_folder(global_folder: Optional[str | Path] = None) -> Path:
    """
    Ensure the global folder exists and return it.
    """
    root = get_global_folder(global_folder)
    root.mkdir(parents=True, exist_ok=True)
    return root
