"""Unit tests for the LayoutInjector state machine using fake timer hosts."""

from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

pytest.importorskip("textual")

from logininfo.config.models import InjectorConfig
from logininfo.ui.tui.injector import (
    AugmentedLayout,
    InjectionState,
    LayoutInjector,
    compose_with_widget,
)
from logininfo.ui.tui.registry import ComponentRegistry
from logininfo.ui.tui.screens.auth import AuthLayout
from logininfo.ui.tui.widgets.record_number_display import RecordNumberDisplay
from tests.test_ui.tui.fixtures import DeferredMountHost, FakeTimerHost, ManagedTimerHost

pytestmark = pytest.mark.tui_fast


def _injector(host, *, components=None, document=lambda: None, **settings) -> LayoutInjector:
    return LayoutInjector(
        host=host,
        components=components if components is not None else ComponentRegistry(),
        widget_factory=RecordNumberDisplay,
        widget_type=RecordNumberDisplay,
        settings=InjectorConfig(**settings),
        document=document,
    )


def test_registered_layout_is_wrapped() -> None:
    components = ComponentRegistry({"AuthLayout": AuthLayout})
    host = FakeTimerHost()
    injector = _injector(host, components=components)

    assert injector.start() is InjectionState.COMPOSED
    factory = components.get("AuthLayout")
    assert factory.wrapped is AuthLayout
    assert host.timers == []

    layout = factory(id="auth-screen")
    assert isinstance(layout, AugmentedLayout)
    assert isinstance(layout.host_layout, AuthLayout)
    assert layout.host_layout.id == "auth-screen"
    assert isinstance(layout.extra_widget, RecordNumberDisplay)


def test_compose_with_widget_builds_fresh_widgets_per_call() -> None:
    factory = compose_with_widget(AuthLayout, RecordNumberDisplay)
    first, second = factory(), factory()
    assert first.extra_widget is not second.extra_widget


def test_missing_layout_starts_polling_immediately_without_after_mount() -> None:
    host = FakeTimerHost()
    injector = _injector(host, layout_component="NoSuchLayout", poll_interval_s=0.5, timeout_s=10.0)

    assert injector.start() is InjectionState.POLLING
    assert host.poll_timer.delay == 0.5
    assert host.timeout_timer.delay == 10.0


def test_polling_waits_for_host_mount() -> None:
    host = DeferredMountHost()
    injector = _injector(host)

    assert injector.start() is InjectionState.POLLING
    assert host.timers == []

    host.mount()
    assert len(host.timers) == 2


def test_start_is_only_effective_once() -> None:
    host = FakeTimerHost()
    injector = _injector(host)
    injector.start()
    injector.start()
    assert len(host.timers) == 2


@pytest.mark.parametrize(
    ("interval", "timeout", "expected"),
    [(0.5, 10.0, 20), (0.3, 1.0, 4), (2.0, 1.0, 1)],
)
def test_max_ticks_is_ceiling_of_timeout_over_interval(interval, timeout, expected) -> None:
    injector = _injector(FakeTimerHost(), poll_interval_s=interval, timeout_s=timeout)
    assert injector.max_ticks == expected


def test_ticks_are_bounded_and_then_abandoned() -> None:
    host = FakeTimerHost()
    injector = _injector(host, poll_interval_s=0.5, timeout_s=2.0)
    injector.start()

    for _ in range(10):
        host.poll_timer.fire()

    assert injector.ticks == 4
    assert injector.state is InjectionState.ABANDONED
    assert host.poll_timer.stopped
    assert host.timeout_timer.stopped


def test_timeout_timer_abandons_polling() -> None:
    host = FakeTimerHost()
    injector = _injector(host)
    injector.start()
    host.poll_timer.fire()

    host.timeout_timer.fire()

    assert injector.state is InjectionState.ABANDONED
    assert injector.tick() is False
    assert injector.ticks == 1
    assert host.poll_timer.stopped


def test_search_errors_are_swallowed(caplog: pytest.LogCaptureFixture) -> None:
    def _broken_document():
        raise RuntimeError("screen not ready")

    host = FakeTimerHost()
    injector = _injector(host, document=_broken_document)
    injector.start()

    with caplog.at_level(logging.DEBUG, logger="logininfo"):
        assert injector.tick() is False

    assert injector.state is InjectionState.POLLING
    assert "Layout search failed" in caplog.text


def test_anchor_outside_container_is_ignored() -> None:
    stray = SimpleNamespace(ancestors=[SimpleNamespace(id="somewhere-else")], parent=None)
    document = SimpleNamespace(query=lambda selector: [stray])
    host = FakeTimerHost()
    injector = _injector(host, document=lambda: document)
    injector.start()

    assert injector.tick() is False
    assert injector.state is InjectionState.POLLING


def test_cancel_stops_polling() -> None:
    host = FakeTimerHost()
    injector = _injector(host)
    injector.start()

    injector.cancel()

    assert injector.state is InjectionState.ABANDONED
    assert host.poll_timer.stopped and host.timeout_timer.stopped


def test_cancel_keeps_terminal_state() -> None:
    components = ComponentRegistry({"AuthLayout": AuthLayout})
    injector = _injector(FakeTimerHost(), components=components)
    injector.start()
    injector.cancel()
    assert injector.state is InjectionState.COMPOSED


def test_tick_before_start_does_nothing() -> None:
    injector = _injector(FakeTimerHost())
    assert injector.tick() is False
    assert injector.ticks == 0
    assert injector.state is InjectionState.INIT


def test_timers_use_managed_api_when_available() -> None:
    host = ManagedTimerHost()
    injector = _injector(host, poll_interval_s=1.0, timeout_s=1.0)
    injector.start()

    assert host.started == [("layout-injector", "poll"), ("layout-injector", "timeout")]

    host.poll_timer.fire()

    assert injector.state is InjectionState.ABANDONED
    assert ("layout-injector", "poll", "abandoned") in host.stopped
    assert ("layout-injector", "timeout", "abandoned") in host.stopped
    assert host.poll_timer.stopped
