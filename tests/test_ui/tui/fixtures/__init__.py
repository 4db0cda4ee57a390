"""Shared helpers for TUI tests: fake timer hosts and app builders."""

from __future__ import annotations

from typing import Any, Callable, Optional

from logininfo.config.models import InjectorConfig, LoginInfoConfig
from logininfo.plugin import bootstrap
from logininfo.settings.actions import Actor
from logininfo.settings.namespace import NAMESPACE_KEY, RECORD_NUMBER_KEY
from logininfo.ui.tui.app import LoginInfoApp
from logininfo.ui.tui.registry import ComponentRegistry
from tests.fakes import InMemorySettingsStore

ADMIN = Actor(name="alice", is_admin=True)
MEMBER = Actor(name="bob", is_admin=False)


class FakeTimer:
    """Stand-in for ``textual.timer.Timer`` that records scheduling."""

    def __init__(self, delay: float, callback: Callable[[], Any], *, repeat: bool, name: Optional[str] = None) -> None:
        self.delay = delay
        self.callback = callback
        self.repeat = repeat
        self.name = name
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True

    def fire(self) -> None:
        if not self.stopped:
            self.callback()


class FakeTimerHost:
    """Host exposing Textual's timer API without an event loop."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def set_interval(self, interval: float, callback: Callable[[], Any], *, name: Optional[str] = None) -> FakeTimer:
        timer = FakeTimer(interval, callback, repeat=True, name=name)
        self.timers.append(timer)
        return timer

    def set_timer(self, delay: float, callback: Callable[[], Any], *, name: Optional[str] = None) -> FakeTimer:
        timer = FakeTimer(delay, callback, repeat=False, name=name)
        self.timers.append(timer)
        return timer

    @property
    def poll_timer(self) -> FakeTimer:
        return next(timer for timer in self.timers if timer.repeat)

    @property
    def timeout_timer(self) -> FakeTimer:
        return next(timer for timer in self.timers if not timer.repeat)


class DeferredMountHost(FakeTimerHost):
    """Fake host that queues ``after_mount`` callbacks until ``mount()``."""

    def __init__(self) -> None:
        super().__init__()
        self.pending: list[Callable[[], Any]] = []

    def after_mount(self, callback: Callable[[], Any]) -> None:
        self.pending.append(callback)

    def mount(self) -> None:
        callbacks, self.pending = self.pending, []
        for callback in callbacks:
            callback()


class ManagedTimerHost(FakeTimerHost):
    """Fake host with the app-managed timer API."""

    def __init__(self) -> None:
        super().__init__()
        self.started: list[tuple[str, str]] = []
        self.stopped: list[tuple[str, str, str]] = []

    def start_managed_timer(self, *, owner: str, key: str, start: Callable[[], Any], restart: bool = True) -> Any:
        self.started.append((owner, key))
        return start()

    def stop_managed_timer(self, *, owner: str, key: str, reason: str = "") -> bool:
        self.stopped.append((owner, key, reason))
        return True


def make_config(**injector: Any) -> LoginInfoConfig:
    injector.setdefault("poll_interval_s", 0.05)
    injector.setdefault("timeout_s", 3.0)
    return LoginInfoConfig(injector=InjectorConfig(**injector))


def make_store(record_number: Optional[str] = "10", **extra: Any) -> InMemorySettingsStore:
    options = dict(extra)
    if record_number is not None:
        options[NAMESPACE_KEY] = {RECORD_NUMBER_KEY: record_number}
    return InMemorySettingsStore(options)


def make_app(
    store: Optional[InMemorySettingsStore] = None,
    *,
    actor: Optional[Actor] = ADMIN,
    components: Optional[ComponentRegistry] = None,
    **injector: Any,
) -> LoginInfoApp:
    """Build a LoginInfoApp over an in-memory store with fast injector timers."""
    store = store if store is not None else make_store()
    config = make_config(**injector)
    plugin = bootstrap(store, default_record_number=config.default_record_number)
    return LoginInfoApp(
        config,
        store=store,
        router=plugin.router,
        actor=actor,
        components=components,
    )


async def wait_for(pilot: Any, predicate: Callable[[], bool], *, attempts: int = 80, delay: float = 0.05) -> bool:
    """Pause the pilot until *predicate* holds or attempts run out."""
    for _ in range(attempts):
        if predicate():
            return True
        await pilot.pause(delay)
    return predicate()
