"""Cross-screen UI state: the active tab and a bounded notification log."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal, Optional

ContextType = Literal["login", "settings"]
Severity = Literal["info", "warning", "error"]

MAX_NOTIFICATIONS = 50


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity = "info"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class AppStateSnapshot:
    active_context: ContextType
    notifications: tuple[Notification, ...]


class AppState:
    """
    Mutable UI state shared by the app and its screens.

    Only the newest ``max_notifications`` notifications are kept.
    """

    def __init__(self, *, active_context: ContextType = "login", max_notifications: int = MAX_NOTIFICATIONS) -> None:
        self.active_context: ContextType = active_context
        self._notifications: deque[Notification] = deque(maxlen=max(1, max_notifications))

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return tuple(self._notifications)

    def snapshot(self) -> AppStateSnapshot:
        return AppStateSnapshot(self.active_context, self.notifications)

    def set_active_context(self, context: ContextType) -> None:
        self.active_context = context

    def push_notification(self, message: str, *, severity: Severity = "info") -> Notification:
        notification = Notification(message, severity)
        self._notifications.append(notification)
        return notification

    def latest_notification(self, severity: Optional[Severity] = None) -> Optional[Notification]:
        """Newest notification, optionally limited to one severity."""
        for notification in reversed(self._notifications):
            if severity is None or notification.severity == severity:
                return notification
        return None

    def clear_notifications(self) -> None:
        self._notifications.clear()

    def drain_notifications(self) -> list[Notification]:
        drained = list(self._notifications)
        self._notifications.clear()
        return drained
