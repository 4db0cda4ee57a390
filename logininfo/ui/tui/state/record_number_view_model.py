"""Draft/persisted state for the record number settings form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from logininfo.config.models import DEFAULT_RECORD_NUMBER
from logininfo.settings.actions import ActionResponse
from logininfo.settings.errors import RecordNumberValidationError
from logininfo.settings.namespace import RECORD_NUMBER_KEY, OwnedNamespace, normalize_record_number

TAB_ID = "settings-login-info"

REQUIRED_MESSAGE = "Please input the record number!"
WHOLE_NUMBER_MESSAGE = "Record number must be a whole number."


@dataclass(frozen=True)
class SettingsActionResult:
    """Result value for view model actions."""

    handled: bool
    changed_tabs: tuple[str, ...] = ()
    error: Optional[str] = None


SubmitFn = Callable[[Mapping[str, Any]], ActionResponse]


class RecordNumberViewModel:
    """ViewModel for the record number form with draft/persisted separation."""

    def __init__(self, submit: SubmitFn, *, default_value: str = DEFAULT_RECORD_NUMBER) -> None:
        self._submit = submit
        self._default_value = default_value
        self._persisted = default_value
        self._draft = default_value

    @property
    def persisted_value(self) -> str:
        return self._persisted

    @property
    def draft_value(self) -> str:
        return self._draft

    @property
    def is_dirty(self) -> bool:
        return self._draft != self._persisted

    def load(self, namespace: OwnedNamespace) -> None:
        """Take the stored value as persisted state, falling back to the default."""
        self._persisted = namespace.record_number or self._default_value
        self._draft = self._persisted

    def set_draft(self, value: Any) -> SettingsActionResult:
        text = "" if value is None else str(value).strip()
        if text == self._draft:
            return SettingsActionResult(handled=True)
        self._draft = text
        return SettingsActionResult(handled=True, changed_tabs=(TAB_ID,))

    def reset(self) -> SettingsActionResult:
        if not self.is_dirty:
            return SettingsActionResult(handled=True)
        self._draft = self._persisted
        return SettingsActionResult(handled=True, changed_tabs=(TAB_ID,))

    def save(self) -> SettingsActionResult:
        """Validate the draft and submit it through the action surface."""
        if not self._draft:
            return SettingsActionResult(handled=False, error=REQUIRED_MESSAGE)
        try:
            value = normalize_record_number(self._draft)
        except RecordNumberValidationError:
            return SettingsActionResult(handled=False, error=WHOLE_NUMBER_MESSAGE)

        try:
            response = self._submit({RECORD_NUMBER_KEY: value})
        except Exception as exc:
            return SettingsActionResult(handled=False, error=f"Failed to save: {exc}")
        if not response.ok:
            return SettingsActionResult(handled=False, error=f"Failed to save: {response.error}")

        self._persisted = value
        self._draft = value
        return SettingsActionResult(handled=True, changed_tabs=(TAB_ID,))
