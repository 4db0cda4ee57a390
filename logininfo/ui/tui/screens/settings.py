"""Settings screen hosting the pages registered by plugins."""

from __future__ import annotations

from typing import Any

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.markup import escape
from textual.widget import Widget
from textual.widgets import Static, TabbedContent, TabPane

from logininfo.logging import get_logger
from logininfo.ui.tui.widgets.settings_base import BaseSettingsTab

logger = get_logger(__name__)


def settings_tab_id(page_name: str) -> str:
    return f"settings-{page_name}"


class SettingsScreen(Widget):
    """Controller for the registered settings pages."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.last_status: tuple[str, bool] = ("", False)

    def compose(self) -> ComposeResult:
        pages = self._pages()
        with Vertical(id="settings-layout"):
            yield Static("", id="settings-status")
            if not pages:
                yield Static("No settings pages registered.", classes="settings-empty")
                return
            with TabbedContent(id="settings-tabs", initial=settings_tab_id(pages[0].name)):
                for page in pages:
                    tab_id = settings_tab_id(page.name)
                    with TabPane(page.title, id=tab_id):
                        yield self._build_page(page, tab_id)

    def on_show(self) -> None:
        self.refresh_from_settings()

    def refresh_from_settings(self) -> None:
        """Reload every settings page from the app's settings cache."""
        cache = getattr(self.app, "system_settings", None)
        if cache is None:
            return
        for tab in self.query(BaseSettingsTab):
            try:
                tab.guarded_refresh_fields(cache)
            except Exception:
                logger.exception("Failed to refresh settings tab %s", tab.id)

    @property
    def has_unsaved_changes(self) -> bool:
        for tab in self.query(BaseSettingsTab):
            view_model = getattr(tab, "view_model", None)
            if getattr(view_model, "is_dirty", False):
                return True
        return False

    def on_base_settings_tab_status_update(self, message: BaseSettingsTab.StatusUpdate) -> None:
        self._set_status(message.message, message.error)

    def _set_status(self, message: str, error: bool) -> None:
        self.last_status = (message, error)
        try:
            widget = self.query_one("#settings-status", Static)
            text = escape(message)
            widget.update(f"[red]{text}[/red]" if error else text)
        except Exception:
            logger.warning(message)

    def _pages(self) -> list[Any]:
        registry = getattr(self.app, "settings_pages", None)
        return registry.pages() if registry is not None else []

    def _build_page(self, page: Any, tab_id: str) -> Widget:
        components = getattr(self.app, "components", None)
        factory = components.get(page.component) if components is not None else None
        if factory is None:
            logger.warning("Settings page %s uses unknown component %s", page.name, page.component)
            return Static(f"Component '{page.component}' is not registered.", classes="settings-missing")
        return factory(id=f"{tab_id}-view")
