"""Login info settings tab: edit the record number."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Button, Input, Static

from logininfo.config.models import DEFAULT_RECORD_NUMBER
from logininfo.logging import get_logger
from logininfo.settings.actions import RESOURCE_NAME, UPDATE_RECORD_NUMBER, ActionResponse
from logininfo.settings.cache import SystemSettingsCache
from logininfo.ui.tui.state.record_number_view_model import RecordNumberViewModel, SettingsActionResult
from logininfo.ui.tui.widgets.settings_base import BaseSettingsTab

logger = get_logger(__name__)

RECORD_NUMBER_FIELD = "settings-login-info-record-number"


class RecordNumberSettingsTab(BaseSettingsTab):
    """Settings view for the login info record number."""

    SECTION = "login-info"

    def __init__(self, *args: Any, view_model: Optional[RecordNumberViewModel] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._view_model = view_model

    @property
    def view_model(self) -> RecordNumberViewModel:
        if self._view_model is None:
            default_value = getattr(getattr(self.app, "config", None), "default_record_number", None)
            self._view_model = RecordNumberViewModel(
                self._submit,
                default_value=default_value or DEFAULT_RECORD_NUMBER,
            )
        return self._view_model

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Login Info Settings", classes="settings-section-title"),
            self.field_row("Record Number", RECORD_NUMBER_FIELD, placeholder="10", input_type="integer"),
            self.action_row(),
            classes="settings-section",
        )

    def on_mount(self) -> None:
        cache = getattr(self.app, "system_settings", None)
        if cache is not None:
            self.guarded_refresh_fields(cache)

    def refresh_fields(self, settings: SystemSettingsCache) -> None:
        self.view_model.load(settings.owned_namespace())
        self.set_input(RECORD_NUMBER_FIELD, self.view_model.draft_value)

    def apply_update(self, field_id: str, value: Any) -> bool:
        if field_id != RECORD_NUMBER_FIELD:
            return False
        return self.view_model.set_draft(value).handled

    def on_input_changed(self, event: Input.Changed) -> None:
        if self._is_refreshing:
            return
        if event.input.id:
            self.apply_update(event.input.id, event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id == self.save_button_id:
            event.stop()
            self.save()
        elif button_id == self.reset_button_id:
            event.stop()
            self.view_model.reset()
            self.set_input(RECORD_NUMBER_FIELD, self.view_model.draft_value)
            self.post_status("Record number reset to saved value.")

    def save(self) -> SettingsActionResult:
        result = self.view_model.save()
        if result.error:
            self.post_status(result.error, True)
            self._notify(result.error, severity="error")
            return result

        refresh = getattr(self.app, "refresh_system_settings", None)
        if callable(refresh):
            refresh()
        self.post_status("Saved successfully")
        self._notify("Saved successfully", severity="info")
        return result

    def _submit(self, values: Mapping[str, Any]) -> ActionResponse:
        router = getattr(self.app, "router", None)
        if router is None:
            raise RuntimeError("No action router available")
        return router.call(RESOURCE_NAME, UPDATE_RECORD_NUMBER, getattr(self.app, "actor", None), values)

    def _notify(self, message: str, *, severity: str) -> None:
        notify = getattr(self.app, "notify_event", None)
        if not callable(notify):
            return
        try:
            notify(message, severity=severity)
        except Exception:
            logger.exception("Failed to emit settings notification")
