"""
Client-side plugin: settings page, display component and layout injection.
"""

from __future__ import annotations

from typing import Any, Optional

from logininfo.config.models import InjectorConfig
from logininfo.logging import get_logger
from logininfo.plugin import PLUGIN_NAME
from logininfo.ui.tui.injector import LayoutInjector
from logininfo.ui.tui.widgets.record_number_display import RecordNumberDisplay
from logininfo.ui.tui.widgets.record_number_settings import RecordNumberSettingsTab

logger = get_logger(__name__)

SETTINGS_PAGE_COMPONENT = "LoginInfoSettingsPage"
DISPLAY_COMPONENT = "RecordNumberDisplay"
SETTINGS_PAGE_TITLE = "Login Info Settings"


class LoginInfoClientPlugin:
    """Registers the record number UI with a host app."""

    name = PLUGIN_NAME

    def __init__(self, injector_config: Optional[InjectorConfig] = None) -> None:
        self.injector_config = injector_config or InjectorConfig()
        self.injector: Optional[LayoutInjector] = None

    def load(self, app: Any) -> LayoutInjector:
        """
        Register components and the settings page, then start the injector.

        The app must expose ``components`` and ``settings_pages`` registries.
        """
        if self.injector is not None:
            return self.injector

        app.components.add(SETTINGS_PAGE_COMPONENT, RecordNumberSettingsTab)
        app.components.add(DISPLAY_COMPONENT, RecordNumberDisplay)
        app.settings_pages.add(PLUGIN_NAME, title=SETTINGS_PAGE_TITLE, component=SETTINGS_PAGE_COMPONENT)

        self.injector = LayoutInjector(
            host=app,
            components=app.components,
            widget_factory=lambda: app.components.get(DISPLAY_COMPONENT)(),
            widget_type=RecordNumberDisplay,
            settings=self.injector_config,
        )
        state = self.injector.start()
        app.layout_injector = self.injector
        logger.debug("Loaded %s client plugin (injector %s)", self.name, state.value)
        return self.injector
