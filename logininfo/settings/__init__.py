"""Shared settings record handling for the login info feature."""

from .actions import (
    ActionResponse,
    ActionRouter,
    Actor,
    LoginInfoResource,
    SettingsUpdateAction,
    RESOURCE_NAME,
    UPDATE_RECORD_NUMBER,
)
from .cache import SystemSettingsCache
from .errors import AuthorizationError, LoginInfoError, RecordNumberValidationError, StoreUnavailableError
from .initializer import SettingsInitializer
from .namespace import NAMESPACE_KEY, RECORD_NUMBER_KEY, OwnedNamespace, merge_owned_namespace
from .store import SettingsRecord, SettingsStore, SQLiteSettingsStore

__all__ = [
    "ActionResponse",
    "ActionRouter",
    "Actor",
    "LoginInfoResource",
    "SettingsUpdateAction",
    "RESOURCE_NAME",
    "UPDATE_RECORD_NUMBER",
    "SystemSettingsCache",
    "AuthorizationError",
    "LoginInfoError",
    "RecordNumberValidationError",
    "StoreUnavailableError",
    "SettingsInitializer",
    "NAMESPACE_KEY",
    "RECORD_NUMBER_KEY",
    "OwnedNamespace",
    "merge_owned_namespace",
    "SettingsRecord",
    "SettingsStore",
    "SQLiteSettingsStore",
]
