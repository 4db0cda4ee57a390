"""
TUI widgets for Login Info.

- RecordNumberDisplay: read-only record number label
- RecordNumberSettingsTab: settings form for the record number
- BaseSettingsTab: shared settings tab helpers
"""

from __future__ import annotations

__all__ = [
    "BaseSettingsTab",
    "RecordNumberDisplay",
    "RecordNumberSettingsTab",
]


# Lazy imports to avoid circular dependencies
def __getattr__(name: str):
    if name == "BaseSettingsTab":
        from logininfo.ui.tui.widgets.settings_base import BaseSettingsTab
        return BaseSettingsTab
    elif name == "RecordNumberDisplay":
        from logininfo.ui.tui.widgets.record_number_display import RecordNumberDisplay
        return RecordNumberDisplay
    elif name == "RecordNumberSettingsTab":
        from logininfo.ui.tui.widgets.record_number_settings import RecordNumberSettingsTab
        return RecordNumberSettingsTab
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
