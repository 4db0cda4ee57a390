"""
Authorized mutation of the record number and the ``loginInfo`` resource.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

from logininfo.logging import exception_exc_info, format_exception_summary, get_logger

from .errors import AuthorizationError, RecordNumberValidationError
from .namespace import RECORD_NUMBER_KEY, merge_owned_namespace, normalize_record_number
from .store import SettingsRecord, SettingsStore

logger = get_logger(__name__)

RESOURCE_NAME = "loginInfo"
UPDATE_RECORD_NUMBER = "updateRecordNumber"

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_NOT_FOUND = 404
HTTP_SERVER_ERROR = 500


@dataclass(frozen=True)
class Actor:
    """Identity invoking an action."""

    name: str
    is_admin: bool = False

    @classmethod
    def from_roles(cls, name: str, roles: Iterable[str], admin_roles: Iterable[str]) -> "Actor":
        granted = {str(role).strip() for role in roles}
        return cls(name=name, is_admin=bool(granted & {str(role).strip() for role in admin_roles}))


@dataclass(frozen=True)
class ActionResponse:
    """Outcome of a routed action call."""

    status: int
    body: Optional[SettingsRecord] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class SettingsUpdateAction:
    """Set the record number on behalf of an administrator."""

    def __init__(self, store: SettingsStore) -> None:
        self.store = store

    def update(self, actor: Actor, new_value: str) -> SettingsRecord:
        """
        Merge *new_value* into the owned namespace and persist it.

        Concurrent calls are not coordinated; the last write wins.

        Raises:
            AuthorizationError: If the actor is not an administrator.
            RecordNumberValidationError: If the value is not a whole number.
            StoreUnavailableError: If the settings table is missing.
        """
        if not actor.is_admin:
            raise AuthorizationError()
        value = normalize_record_number(new_value)

        record = self.store.get_singleton()
        if record is None:
            created = self.store.create(merge_owned_namespace({}, {RECORD_NUMBER_KEY: value}))
            logger.info("%s created system settings with record number %s", actor.name, value)
            return created

        updated = self.store.update(record, merge_owned_namespace(record.options, {RECORD_NUMBER_KEY: value}))
        logger.info("%s set record number to %s", actor.name, value)
        return updated


ActionHandler = Callable[[Optional[Actor], Mapping[str, Any]], ActionResponse]


class LoginInfoResource:
    """The ``loginInfo`` resource exposed to host routing."""

    name = RESOURCE_NAME

    def __init__(self, action: SettingsUpdateAction) -> None:
        self._action = action
        self.actions: dict[str, ActionHandler] = {
            UPDATE_RECORD_NUMBER: self.update_record_number,
        }

    def update_record_number(self, actor: Optional[Actor], values: Mapping[str, Any]) -> ActionResponse:
        if actor is None:
            return ActionResponse(status=HTTP_UNAUTHORIZED, error="Unauthorized")
        try:
            record = self._action.update(actor, (values or {}).get(RECORD_NUMBER_KEY))
        except AuthorizationError as exc:
            logger.warning("Rejected record number update from %s: %s", actor.name, exc)
            return ActionResponse(status=HTTP_FORBIDDEN, error=str(exc))
        except RecordNumberValidationError as exc:
            return ActionResponse(status=HTTP_BAD_REQUEST, error=str(exc))
        except Exception as exc:
            logger.error(
                "Record number update failed for %s",
                actor.name,
                exc_info=exception_exc_info(exc),
            )
            return ActionResponse(status=HTTP_SERVER_ERROR, error=format_exception_summary(exc))
        return ActionResponse(status=HTTP_OK, body=record)


class ActionRouter:
    """Named resources and their actions, addressed as ``resource:action``."""

    def __init__(self) -> None:
        self._resources: dict[str, Any] = {}

    def define(self, resource: Any) -> None:
        name = str(getattr(resource, "name", "") or "").strip()
        if not name:
            raise ValueError("Resource must have a name")
        self._resources[name] = resource

    def resource(self, name: str) -> Optional[Any]:
        return self._resources.get(name)

    def call(
        self,
        resource_name: str,
        action_name: str,
        actor: Optional[Actor],
        values: Optional[Mapping[str, Any]] = None,
    ) -> ActionResponse:
        resource = self._resources.get(resource_name)
        handler = None if resource is None else resource.actions.get(action_name)
        if handler is None:
            return ActionResponse(status=HTTP_NOT_FOUND, error=f"Unknown action {resource_name}:{action_name}")
        return handler(actor, dict(values or {}))
