"""Attach the record number widget to the host login layout.

The host does not offer a hook for adding content to its login layout. When
the layout is registered as a component, it is wrapped so the widget is
composed after it. Otherwise the mounted screen is polled for the layout's
footer marker and the widget is mounted next to it.

States::

    INIT --(component found)--> COMPOSED
    INIT --(no component)-----> POLLING --(anchor found)--> MOUNTED
                                        --(timeout)-------> ABANDONED

Polling stops after ``ceil(timeout_s / poll_interval_s)`` searches at most,
and a failed search never raises into the event loop.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Callable, Optional

from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.timer import Timer
from textual.widget import Widget

from logininfo.config.models import InjectorConfig
from logininfo.logging import get_logger

from .registry import ComponentFactory, ComponentRegistry

logger = get_logger(__name__)

_OWNER = "layout-injector"
_POLL_KEY = "poll"
_TIMEOUT_KEY = "timeout"


class InjectionState(str, Enum):
    INIT = "init"
    POLLING = "polling"
    COMPOSED = "composed"
    MOUNTED = "mounted"
    ABANDONED = "abandoned"


TERMINAL_STATES = frozenset({InjectionState.COMPOSED, InjectionState.MOUNTED, InjectionState.ABANDONED})


class AugmentedLayout(Vertical):
    """Renders a host layout followed by an extra widget."""

    DEFAULT_CSS = """
    AugmentedLayout {
        height: auto;
    }
    """

    def __init__(self, layout: Widget, extra: Widget) -> None:
        super().__init__(classes="augmented-layout")
        self.host_layout = layout
        self.extra_widget = extra

    def compose(self) -> ComposeResult:
        yield self.host_layout
        yield self.extra_widget


def compose_with_widget(original: ComponentFactory, widget_factory: Callable[[], Widget]) -> ComponentFactory:
    """Return a factory that wraps *original* in an ``AugmentedLayout``."""

    def _factory(*args: Any, **kwargs: Any) -> AugmentedLayout:
        return AugmentedLayout(original(*args, **kwargs), widget_factory())

    _factory.wrapped = original  # type: ignore[attr-defined]
    return _factory


class LayoutInjector:
    """State machine placing one widget into the host login layout."""

    def __init__(
        self,
        *,
        host: Any,
        components: ComponentRegistry,
        widget_factory: Callable[[], Widget],
        widget_type: type[Widget],
        settings: Optional[InjectorConfig] = None,
        document: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.host = host
        self.components = components
        self.widget_factory = widget_factory
        self.widget_type = widget_type
        self.settings = settings or InjectorConfig()
        self._document = document or (lambda: self.host.screen)
        self._state = InjectionState.INIT
        self._ticks = 0
        self._poll_timer: Optional[Timer] = None
        self._timeout_timer: Optional[Timer] = None

    @property
    def state(self) -> InjectionState:
        return self._state

    @property
    def ticks(self) -> int:
        """Number of DOM searches performed so far."""
        return self._ticks

    @property
    def max_ticks(self) -> int:
        return max(1, math.ceil(self.settings.timeout_s / self.settings.poll_interval_s))

    def start(self) -> InjectionState:
        """Wrap the registered layout, or schedule polling once the host is mounted."""
        if self._state is not InjectionState.INIT:
            return self._state

        name = self.settings.layout_component
        original = self.components.get(name) if name else None
        if original is not None:
            self.components.add(name, compose_with_widget(original, self.widget_factory), override=True)
            self._state = InjectionState.COMPOSED
            logger.debug("Wrapped layout component %s", name)
            return self._state

        self._state = InjectionState.POLLING
        after_mount = getattr(self.host, "after_mount", None)
        if callable(after_mount):
            after_mount(self._start_timers)
        else:
            self._start_timers()
        return self._state

    def tick(self) -> bool:
        """Search once for the anchor; returns True when the widget was mounted."""
        if self._state is not InjectionState.POLLING:
            return False
        if self._ticks >= self.max_ticks:
            self.abandon()
            return False

        self._ticks += 1
        try:
            mounted = self._try_mount()
        except Exception:
            logger.debug("Layout search failed on tick %d", self._ticks, exc_info=True)
            mounted = False

        if mounted:
            self._stop_timers(reason="mounted")
            self._state = InjectionState.MOUNTED
            logger.debug("Mounted %s after %d search(es)", self.widget_type.__name__, self._ticks)
        elif self._ticks >= self.max_ticks:
            self.abandon()
        return mounted

    def abandon(self) -> None:
        """Give up polling; the widget is simply not shown."""
        if self._state is not InjectionState.POLLING:
            return
        self._stop_timers(reason="abandoned")
        self._state = InjectionState.ABANDONED
        logger.debug("Gave up looking for %s after %d search(es)", self.settings.anchor_selector, self._ticks)

    def cancel(self) -> None:
        """Stop polling early, e.g. when the host shuts down."""
        if self._state in TERMINAL_STATES:
            return
        self._stop_timers(reason="cancelled")
        self._state = InjectionState.ABANDONED

    # ------------------------------------------------------------------
    # DOM search
    # ------------------------------------------------------------------

    def _try_mount(self) -> bool:
        document = self._document()
        if document is None:
            return False
        for anchor in document.query(self.settings.anchor_selector):
            container = self._find_container(anchor)
            if container is None:
                continue
            node = self._ensure_mount_node(document, container, getattr(anchor, "parent", None))
            self._ensure_widget(node)
            return True
        return False

    def _find_container(self, anchor: Any) -> Optional[Widget]:
        for ancestor in getattr(anchor, "ancestors", []):
            if getattr(ancestor, "id", None) == self.settings.container_id:
                return ancestor
        return None

    def _ensure_mount_node(self, document: Any, container: Widget, anchor_parent: Any) -> Widget:
        existing = list(document.query(f"#{self.settings.mount_id}"))
        if existing:
            return existing[0]

        node = Container(id=self.settings.mount_id, classes="injected-mount")
        if anchor_parent is not None and getattr(anchor_parent, "parent", None) is container:
            container.mount(node, before=anchor_parent)
        else:
            container.mount(node)
        return node

    def _ensure_widget(self, node: Any) -> None:
        if list(node.query(self.widget_type)):
            return
        node.mount(self.widget_factory())

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def _start_timers(self) -> None:
        if self._state is not InjectionState.POLLING:
            return
        interval = self.settings.poll_interval_s
        timeout = self.settings.timeout_s
        self._poll_timer = self._start_timer(
            _POLL_KEY,
            lambda: self.host.set_interval(interval, self.tick, name="layout-injector-poll"),
        )
        self._timeout_timer = self._start_timer(
            _TIMEOUT_KEY,
            lambda: self.host.set_timer(timeout, self.abandon, name="layout-injector-timeout"),
        )

    def _start_timer(self, key: str, start: Callable[[], Optional[Timer]]) -> Optional[Timer]:
        start_managed = getattr(self.host, "start_managed_timer", None)
        if callable(start_managed):
            try:
                return start_managed(owner=_OWNER, key=key, start=start)
            except Exception:
                logger.exception("Failed to start managed timer '%s'.", key)
        return start()

    def _stop_timers(self, *, reason: str) -> None:
        for key, timer in ((_POLL_KEY, self._poll_timer), (_TIMEOUT_KEY, self._timeout_timer)):
            self._stop_timer(key, timer, reason=reason)
        self._poll_timer = None
        self._timeout_timer = None

    def _stop_timer(self, key: str, timer: Optional[Timer], *, reason: str) -> None:
        stop_managed = getattr(self.host, "stop_managed_timer", None)
        if callable(stop_managed):
            try:
                stop_managed(owner=_OWNER, key=key, reason=reason)
            except Exception:
                logger.exception("Failed to stop managed timer '%s'.", key)
        if timer is None:
            return
        try:
            timer.stop()
        except Exception:
            return
