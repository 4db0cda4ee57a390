"""
Base class for settings pages contributed by plugins.
"""

from __future__ import annotations

from typing import Any

from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Input, Static


class BaseSettingsTab(Widget):
    """
    A settings page shown in its own tab of the settings screen.

    Subclasses set ``SECTION``, build their form with ``field_row`` and
    ``action_row``, and implement ``refresh_fields``/``apply_update``.
    """

    SECTION = ""

    class StatusUpdate(Message):
        """Status line text posted to the settings screen."""

        def __init__(self, message: str, error: bool = False) -> None:
            super().__init__()
            self.message = message
            self.error = error

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._is_refreshing = False

    @property
    def save_button_id(self) -> str:
        return f"settings-save-{self.SECTION}"

    @property
    def reset_button_id(self) -> str:
        return f"settings-reset-{self.SECTION}"

    def refresh_fields(self, settings: Any) -> None:
        """Load the stored values into the form."""
        raise NotImplementedError("Settings tab must implement refresh_fields().")

    def apply_update(self, field_id: str, value: Any) -> bool:
        """Record an edit of *field_id*; returns False for unknown fields."""
        raise NotImplementedError("Settings tab must implement apply_update().")

    def guarded_refresh_fields(self, settings: Any) -> None:
        """Refresh without treating the programmatic input changes as edits."""
        if self._is_refreshing:
            return
        self._is_refreshing = True
        try:
            self.refresh_fields(settings)
        finally:
            self._is_refreshing = False

    def post_status(self, message: str, error: bool = False) -> None:
        self.post_message(self.StatusUpdate(message, error))

    def field_row(self, label: str, field_id: str, *, placeholder: str = "", input_type: str = "text") -> Widget:
        return Horizontal(
            Static(label, classes="settings-label"),
            Input(placeholder=placeholder, type=input_type, id=field_id),
            classes="settings-field",
        )

    def action_row(self) -> Widget:
        return Horizontal(
            Button("Save", id=self.save_button_id, variant="primary"),
            Button("Reset", id=self.reset_button_id),
            classes="settings-actions",
        )

    def set_input(self, field_id: str, value: str) -> None:
        """Set an Input's value; missing inputs are ignored before compose."""
        inputs = self.query(f"#{field_id}")
        for widget in inputs:
            if isinstance(widget, Input):
                widget.value = value or ""
