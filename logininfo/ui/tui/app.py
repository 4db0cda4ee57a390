"""
Main TUI application for Login Info.

Provides the host shell that plugins attach to:
- Tabbed interface for Login/Settings
- Component and settings-page registries filled by plugins
- App-managed timers and a notification log
"""

from __future__ import annotations

import threading
from contextlib import closing
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Literal, Optional, cast

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.timer import Timer
from textual.widget import Widget
from textual.widgets import Footer, Header, TabbedContent, TabPane

from logininfo.config.models import LoginInfoConfig
from logininfo.logging import get_logger
from logininfo.plugin import bootstrap, open_store, resolve_actor
from logininfo.settings.actions import ActionRouter, Actor
from logininfo.settings.cache import SystemSettingsCache
from logininfo.settings.store import SettingsRecord, SettingsStore
from logininfo.ui.tui.registry import ComponentRegistry, SettingsPageRegistry
from logininfo.ui.tui.screens.auth import AuthLayout
from logininfo.ui.tui.state import AppState
from logininfo.ui.tui.state.app_state import ContextType
from logininfo.ui.tui.widgets.record_number_display import RecordNumberDisplay

logger = get_logger(__name__)


@dataclass
class _ManagedTimer:
    """Lifecycle metadata for an app-managed timer object."""

    owner: str
    key: str
    timer: Timer


class LoginInfoApp(App):
    """
    Login Info TUI application.

    Hosts the login layout and the settings pages contributed by plugins.
    """

    TITLE = "Login Info"
    SUB_TITLE = "Record number settings"

    CSS_PATH = "styles/login_info.tcss"

    _NOTIFY_TIMEOUT_SECONDS = 5.0
    _NOTIFY_ERROR_TIMEOUT_SECONDS = 10.0

    BINDINGS = [
        Binding("ctrl+l", "switch_login", "Login", show=True),
        Binding("ctrl+s", "switch_settings", "Settings", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
        Binding("ctrl+c", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        config: LoginInfoConfig,
        *args: Any,
        store: SettingsStore,
        router: ActionRouter,
        actor: Optional[Actor] = None,
        components: Optional[ComponentRegistry] = None,
        client_plugins: Optional[Iterable[Any]] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the Login Info TUI application.

        Args:
            config: Login Info configuration
            store: Settings store backing the settings cache
            router: Action router the settings pages submit to
            actor: Identity used for action calls, None when signed out
            components: Pre-populated component registry
            client_plugins: UI plugins to load; defaults to the record number plugin
        """
        super().__init__(*args, **kwargs)
        self.config = config
        self.store = store
        self.router = router
        self.actor = actor
        self.components = components if components is not None else ComponentRegistry()
        self.settings_pages = SettingsPageRegistry()
        self.system_settings = SystemSettingsCache(store)
        self.ui_state = AppState(active_context="login")
        self.layout_injector: Any = None
        self._managed_timers: dict[tuple[str, str], _ManagedTimer] = {}
        self._managed_timers_lock = threading.RLock()
        self._after_mount_callbacks: list[Callable[[], Any]] = []
        self._host_mounted = False
        self._quit_warned = False

        self.system_settings.refresh()

        if client_plugins is None:
            from logininfo.ui.tui.plugin import LoginInfoClientPlugin
            client_plugins = [LoginInfoClientPlugin(config.injector)]
        self.client_plugins = list(client_plugins)
        for plugin in self.client_plugins:
            plugin.load(self)

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield Header(icon="")

        with TabbedContent(initial="login", id="main-tabs"):
            with TabPane("Login (^l)", id="login"):
                yield self._build_login_layout()

            with TabPane("Settings (^s)", id="settings"):
                # Import here to avoid circular imports
                from logininfo.ui.tui.screens.settings import SettingsScreen
                yield SettingsScreen(id="settings-screen")

        yield Footer()

    def _build_login_layout(self) -> Widget:
        name = self.config.injector.layout_component
        factory = self.components.get(name) if name else None
        if factory is None:
            return AuthLayout(id="auth-screen")
        return factory(id="auth-screen")

    def on_mount(self) -> None:
        """Run callbacks queued until the first screen is mounted."""
        logger.info("Login Info TUI application mounted")
        self._host_mounted = True
        callbacks, self._after_mount_callbacks = self._after_mount_callbacks, []
        for callback in callbacks:
            self.call_after_refresh(callback)

    def on_unmount(self) -> None:
        injector = self.layout_injector
        if injector is not None:
            injector.cancel()
        self.shutdown_managed_timers(reason="app-unmount")

    def after_mount(self, callback: Callable[[], Any]) -> None:
        """Run *callback* once the app's screen has been mounted and refreshed."""
        if self._host_mounted:
            self.call_after_refresh(callback)
        else:
            self._after_mount_callbacks.append(callback)

    def refresh_system_settings(self) -> Optional[SettingsRecord]:
        """Reload the settings record and every mounted record number display."""
        record = self.system_settings.refresh()
        for display in self.query(RecordNumberDisplay):
            display.refresh_value()
        return record

    # -------------------------------------------------------------------------
    # Managed timers
    # -------------------------------------------------------------------------

    @staticmethod
    def _timer_key(owner: str, key: str) -> tuple[str, str]:
        return (str(owner or "").strip() or "app", str(key or "").strip() or "timer")

    def register_managed_timer(self, *, owner: str, key: str, timer: Timer) -> None:
        """Track *timer* so it is stopped on restart or shutdown."""
        timer_key = self._timer_key(owner, key)
        with self._managed_timers_lock:
            self._managed_timers[timer_key] = _ManagedTimer(*timer_key, timer=timer)

    def managed_timer_keys(self) -> list[tuple[str, str]]:
        with self._managed_timers_lock:
            return list(self._managed_timers)

    def start_managed_timer(
        self,
        *,
        owner: str,
        key: str,
        start: Callable[[], Timer | None],
        restart: bool = True,
    ) -> Timer | None:
        """
        Start a timer through *start* and track it under ``(owner, key)``.

        With *restart*, a timer already tracked under the same key is stopped
        first. Returns the new timer, or None when *start* produced none.
        """
        timer_owner, timer_name = self._timer_key(owner, key)
        if restart:
            self.stop_managed_timer(owner=timer_owner, key=timer_name, reason="replaced")
        timer = start()
        if timer is not None:
            self.register_managed_timer(owner=timer_owner, key=timer_name, timer=timer)
        return timer

    def stop_managed_timer(self, *, owner: str, key: str, reason: str = "") -> bool:
        """Stop and forget a timer; False only when stopping raised."""
        timer_key = self._timer_key(owner, key)
        with self._managed_timers_lock:
            record = self._managed_timers.pop(timer_key, None)
        if record is None:
            return True
        try:
            record.timer.stop()
        except Exception:
            logger.exception("Failed to stop timer %s:%s (%s)", *timer_key, reason or "no reason")
            return False
        return True

    def shutdown_managed_timers(self, *, reason: str = "") -> dict[str, bool]:
        """Stop every tracked timer; keys of the result are ``owner:key``."""
        with self._managed_timers_lock:
            timer_keys = list(self._managed_timers)
        return {
            f"{owner}:{name}": self.stop_managed_timer(owner=owner, key=name, reason=reason)
            for owner, name in timer_keys
        }

    # -------------------------------------------------------------------------
    # Actions (bound to keyboard shortcuts)
    # -------------------------------------------------------------------------

    def _set_active_context(self, context: ContextType) -> None:
        self.ui_state.set_active_context(context)

    def action_switch_login(self) -> None:
        """Switch to login tab."""
        tabbed_content = self.query_one("#main-tabs", TabbedContent)
        tabbed_content.active = "login"
        self._set_active_context("login")
        logger.debug("Switched to login context")

    def action_switch_settings(self) -> None:
        """Switch to settings tab."""
        tabbed_content = self.query_one("#main-tabs", TabbedContent)
        tabbed_content.active = "settings"
        self._set_active_context("settings")
        self._refresh_settings_screen()
        logger.debug("Switched to settings context")

    def action_quit(self) -> None:
        """Quit the application, warning once about unsaved settings."""
        if self._settings_has_unsaved_changes() and not self._quit_warned:
            self._quit_warned = True
            self.notify_event(
                "Settings have unsaved changes. Save or reset them, or quit again to discard.",
                severity="warning",
            )
            return
        logger.info("User requested quit")
        self.shutdown_managed_timers(reason="app-quit")
        self.exit()

    def _settings_has_unsaved_changes(self) -> bool:
        try:
            settings_screen = self.query_one("#settings-screen")
            return bool(getattr(settings_screen, "has_unsaved_changes", False))
        except Exception:
            return False

    def on_tabbed_content_tab_activated(
        self, event: TabbedContent.TabActivated
    ) -> None:
        """Handle tab activation to update context."""
        # Ignore nested TabbedContent events (the settings page tabs).
        event_tabs = getattr(event, "tabbed_content", None)
        if event_tabs is not None and getattr(event_tabs, "id", None) != "main-tabs":
            return

        pane_id = getattr(getattr(event, "pane", None), "id", None)
        if pane_id in ("login", "settings"):
            self._set_active_context(cast(ContextType, pane_id))
            if pane_id == "settings":
                self._refresh_settings_screen()
            logger.debug("Tab activated: %s", pane_id)

    def _refresh_settings_screen(self) -> None:
        try:
            settings_screen = self.query_one("#settings-screen")
        except Exception:
            return
        refresh = getattr(settings_screen, "refresh_from_settings", None)
        if callable(refresh):
            refresh()

    def notify_event(
        self,
        message: str,
        *,
        severity: Literal["info", "warning", "error"] = "info",
        timeout: Optional[float] = None,
    ) -> None:
        """Emit and record a UI notification event."""
        effective_timeout = timeout
        if effective_timeout is None:
            effective_timeout = (
                self._NOTIFY_ERROR_TIMEOUT_SECONDS
                if severity == "error"
                else self._NOTIFY_TIMEOUT_SECONDS
            )
        self.ui_state.push_notification(message, severity=severity)
        self.notify(
            message,
            severity=severity,
            timeout=effective_timeout,
        )


def build_app(
    config: LoginInfoConfig,
    *,
    user: Optional[str] = None,
    store: Optional[SettingsStore] = None,
) -> LoginInfoApp:
    """
    Open the store, install and load the server plugin, and build the app.

    Args:
        config: Login Info configuration
        user: Session user name, defaults to ``config.session_user``
        store: Settings store to use instead of the configured database
    """
    if store is None:
        store = open_store(config)
    plugin = bootstrap(store, default_record_number=config.default_record_number)
    return LoginInfoApp(
        config,
        store=store,
        router=plugin.router,
        actor=resolve_actor(config, user),
    )


def run_tui(config: LoginInfoConfig, *, user: Optional[str] = None) -> int:
    """
    Run the TUI application.

    Args:
        config: Login Info configuration
        user: Session user name

    Returns:
        Exit code (0 for success)
    """
    store = open_store(config)
    with closing(store.connection):
        app = build_app(config, user=user, store=store)
        app.run()
    return 0
