"""
Configuration loader for Login Info.

Handles loading configuration from JSON/YAML files and converting
to typed dataclass models.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

from .models import InjectorConfig, LoginInfoConfig, UserConfig


def load_raw_config(path: Path) -> Dict[str, Any]:
    """
    Load raw configuration from JSON or YAML file.

    Also loads environment variables from .env file if present.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Dictionary with raw configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is unsupported or the root is not a mapping
    """
    load_dotenv()

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    content = path.read_text(encoding="utf-8")

    if suffix in {".yaml", ".yml"}:
        config = yaml.safe_load(content) or {}
    elif suffix == ".json":
        config = json.loads(content)
    else:
        raise ValueError(
            f"Unsupported config format: {suffix}. "
            f"Use .json, .yaml, or .yml"
        )

    if not isinstance(config, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return config


def build_injector_config(raw: Dict[str, Any]) -> InjectorConfig:
    """
    Build InjectorConfig from the raw ``injector`` section.
    """
    defaults = InjectorConfig()
    return InjectorConfig(
        layout_component=raw.get("layout_component", defaults.layout_component),
        anchor_selector=raw.get("anchor_selector", defaults.anchor_selector),
        container_id=raw.get("container_id", defaults.container_id),
        mount_id=raw.get("mount_id", defaults.mount_id),
        poll_interval_s=raw.get("poll_interval_s", defaults.poll_interval_s),
        timeout_s=raw.get("timeout_s", defaults.timeout_s),
    )


def build_user_config(raw: Any) -> UserConfig:
    """
    Build UserConfig from a ``users[]`` entry.

    Accepts either a mapping or a bare user name.
    """
    if isinstance(raw, str):
        return UserConfig(name=raw)
    if not isinstance(raw, dict):
        raise ValueError("Each users[] entry must be a mapping or a name")
    roles = raw.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    return UserConfig(name=raw.get("name", ""), roles=list(roles))


def build_config_from_raw(raw: Dict[str, Any], path: Path | None = None) -> LoginInfoConfig:
    """
    Build a validated LoginInfoConfig from a raw dictionary.

    Args:
        raw: Raw configuration mapping
        path: Source file, used to resolve a relative global folder

    Returns:
        LoginInfoConfig instance

    Raises:
        ValueError: If a field is invalid
    """
    global_folder = raw.get("global_folder")
    if global_folder is not None:
        folder = Path(str(global_folder)).expanduser()
        if not folder.is_absolute() and path is not None:
            folder = path.parent / folder
        global_folder = folder

    admin_roles = raw.get("admin_roles")
    if isinstance(admin_roles, str):
        admin_roles = [admin_roles]

    default_record_number = raw.get("default_record_number", LoginInfoConfig.default_record_number)
    if isinstance(default_record_number, bool):
        raise ValueError("default_record_number must be a decimal integer string")

    kwargs: Dict[str, Any] = {
        "global_folder": global_folder,
        "default_record_number": str(default_record_number),
        "users": [build_user_config(item) for item in raw.get("users") or []],
        "session_user": raw.get("session_user"),
        "injector": build_injector_config(raw.get("injector") or {}),
        "config_path": path,
    }
    if raw.get("db_path"):
        kwargs["db_path"] = Path(str(raw["db_path"]))
    if admin_roles is not None:
        kwargs["admin_roles"] = list(admin_roles)

    config = LoginInfoConfig(**kwargs)
    config.validate()
    return config


def load_config_from_file(path: Path | str) -> LoginInfoConfig:
    """
    Load and validate configuration from a JSON or YAML file.
    """
    config_path = Path(path).expanduser().resolve()
    raw = load_raw_config(config_path)
    return build_config_from_raw(raw, config_path)


def config_to_raw(config: LoginInfoConfig) -> Dict[str, Any]:
    """
    Convert a config object back into a serializable mapping.
    """
    injector = config.injector
    return {
        "global_folder": str(config.global_folder) if config.global_folder else None,
        "db_path": str(config.db_path),
        "default_record_number": config.default_record_number,
        "admin_roles": list(config.admin_roles),
        "session_user": config.session_user,
        "users": [{"name": user.name, "roles": list(user.roles)} for user in config.users],
        "injector": {
            "layout_component": injector.layout_component,
            "anchor_selector": injector.anchor_selector,
            "container_id": injector.container_id,
            "mount_id": injector.mount_id,
            "poll_interval_s": injector.poll_interval_s,
            "timeout_s": injector.timeout_s,
        },
    }
