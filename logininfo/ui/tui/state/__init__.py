"""TUI state containers."""

from .app_state import AppState, AppStateSnapshot, Notification
from .record_number_view_model import RecordNumberViewModel, SettingsActionResult

__all__ = [
    "AppState",
    "AppStateSnapshot",
    "Notification",
    "RecordNumberViewModel",
    "SettingsActionResult",
]
