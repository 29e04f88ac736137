"""
Transient notification surface.

Managers and repositories report outcomes here; a UI layer subscribes and
shows them as toasts. Every notification is also logged.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List

from .utils import get_logger

DEFAULT = "default"
DESTRUCTIVE = "destructive"

NotificationHandler = Callable[["Notification"], None]


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == DESTRUCTIVE


class Notifier:
    """
    Collects notifications and forwards them to subscribers.
    """

    def __init__(self, *, history_size: int = 50) -> None:
        self.history_size = history_size
        self.history: Deque[Notification] = deque(maxlen=history_size)
        self._subscribers: List[NotificationHandler] = []
        self.logger = get_logger("notifications")

    def subscribe(self, handler: NotificationHandler) -> None:
        self._subscribers.append(handler)

    def notify(self, title: str, description: str, *, variant: str = DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.history.append(notification)
        level = logging.WARNING if notification.is_error else logging.INFO
        self.logger.log(level, "%s: %s", title, description)
        for handler in self._subscribers:
            handler(notification)
        return notification

    def success(self, description: str, *, title: str = "Success") -> Notification:
        return self.notify(title, description)

    def error(self, description: str, *, title: str = "Error") -> Notification:
        return self.notify(title, description, variant=DESTRUCTIVE)

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None

    def clear(self) -> None:
        self.history.clear()
