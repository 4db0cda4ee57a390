"""
Typed configuration models for Login Info.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from logininfo.paths import DEFAULT_DB_FILENAME, resolve_relative_path
from logininfo.settings.errors import RecordNumberValidationError
from logininfo.settings.namespace import normalize_record_number

DEFAULT_RECORD_NUMBER = "10"
DEFAULT_ADMIN_ROLES = ("admin", "root")
DEFAULT_POLL_INTERVAL_S = 0.5
DEFAULT_INJECTION_TIMEOUT_S = 10.0


@dataclass
class InjectorConfig:
    """
    Settings for attaching the record number widget to the login layout.
    """

    layout_component: str = "AuthLayout"
    """Registry name of the host layout to wrap when it is registered."""

    anchor_selector: str = ".powered-by"
    """Selector for the footer marker used to locate the insertion point."""

    container_id: str = "auth-layout"
    """Id of the outer layout container the anchor must live in."""

    mount_id: str = "record-number-display-root"
    """Id of the mount node; at most one node with this id is ever created."""

    poll_interval_s: float = DEFAULT_POLL_INTERVAL_S
    """Seconds between DOM searches while polling."""

    timeout_s: float = DEFAULT_INJECTION_TIMEOUT_S
    """Seconds after which polling is abandoned."""

    def __post_init__(self) -> None:
        self.layout_component = str(self.layout_component or "").strip()
        self.anchor_selector = str(self.anchor_selector or "").strip()
        self.container_id = str(self.container_id or "").strip().lstrip("#")
        self.mount_id = str(self.mount_id or "").strip().lstrip("#")
        self.poll_interval_s = float(self.poll_interval_s)
        self.timeout_s = float(self.timeout_s)

    def validate(self) -> None:
        if not self.anchor_selector:
            raise ValueError("injector.anchor_selector is required")
        if not self.container_id:
            raise ValueError("injector.container_id is required")
        if not self.mount_id:
            raise ValueError("injector.mount_id is required")
        if self.poll_interval_s <= 0:
            raise ValueError("injector.poll_interval_s must be positive")
        if self.timeout_s <= 0:
            raise ValueError("injector.timeout_s must be positive")


@dataclass
class UserConfig:
    """A known user and the roles granted to them."""

    name: str
    roles: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.name = str(self.name or "").strip()
        self.roles = [str(role).strip() for role in (self.roles or []) if str(role).strip()]

    def validate(self) -> None:
        if not self.name:
            raise ValueError("users[].name is required")


@dataclass
class LoginInfoConfig:
    """
    Top-level configuration.
    """

    global_folder: Optional[Path] = None
    """Folder holding the database; defaults to <home>/Login Info."""

    db_path: Path = Path(DEFAULT_DB_FILENAME)
    """Settings database path, relative paths resolve against global_folder."""

    default_record_number: str = DEFAULT_RECORD_NUMBER
    """Value written by the installer when none is stored yet."""

    admin_roles: List[str] = field(default_factory=lambda: list(DEFAULT_ADMIN_ROLES))
    """Roles that grant administrator rights."""

    users: List[UserConfig] = field(default_factory=list)
    """Known users, used to build the acting identity."""

    session_user: Optional[str] = None
    """User the TUI acts as when none is given on the command line."""

    injector: InjectorConfig = field(default_factory=InjectorConfig)

    config_path: Optional[Path] = None
    """Path the configuration was loaded from, if any."""

    def __post_init__(self) -> None:
        self.default_record_number = str(self.default_record_number or "").strip()
        self.admin_roles = [str(role).strip() for role in (self.admin_roles or []) if str(role).strip()]
        if self.session_user is not None:
            self.session_user = str(self.session_user).strip() or None

    @property
    def resolved_db_path(self) -> Path:
        """Absolute database path."""
        return resolve_relative_path(self.db_path, self.global_folder)

    def find_user(self, name: Optional[str]) -> Optional[UserConfig]:
        wanted = str(name or "").strip()
        if not wanted:
            return None
        for user in self.users:
            if user.name == wanted:
                return user
        return None

    def validate(self) -> None:
        try:
            self.default_record_number = normalize_record_number(self.default_record_number)
        except RecordNumberValidationError as exc:
            raise ValueError("default_record_number must be a decimal integer string") from exc
        seen: set[str] = set()
        for user in self.users:
            user.validate()
            if user.name in seen:
                raise ValueError(f"users[{user.name}] is defined more than once")
            seen.add(user.name)
        if self.session_user and self.find_user(self.session_user) is None:
            raise ValueError(f"session_user '{self.session_user}' is not listed in users")
        self.injector.validate()
