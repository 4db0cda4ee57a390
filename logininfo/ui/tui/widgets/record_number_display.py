"""Read-only record number label shown on the login layout."""

from __future__ import annotations

from typing import Any, Optional

from textual.widgets import Static

LABEL = "Record Number"


def format_record_number_label(value: Any) -> Optional[str]:
    """Return the label text, or None when there is nothing to show."""
    if not value:
        return None
    return f"{LABEL}: {value}"


class RecordNumberDisplay(Static):
    """Shows the configured record number; hidden while none is set."""

    DEFAULT_CSS = """
    RecordNumberDisplay {
        width: 100%;
        content-align: center middle;
        text-align: center;
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("classes", "record-number-display")
        super().__init__("", **kwargs)
        self.label_text: Optional[str] = None

    def on_mount(self) -> None:
        self.refresh_value()

    def refresh_value(self) -> None:
        cache = getattr(self.app, "system_settings", None)
        value = cache.owned_namespace().record_number if cache is not None else None
        self.label_text = format_record_number_label(value)
        self.update(self.label_text or "")
        self.display = self.label_text is not None
