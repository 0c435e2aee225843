"""
storefront/cart/notifications.py - Transient toast notifications.

The UI layer subscribes a handler; cart operations call `show()`.
"""
import enum
from collections import deque
import logging
from dataclasses import dataclass
from typing import Callable, List

logger = logging.getLogger("storefront.notifications")


class NotificationKind(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# seconds on screen before auto-dismiss
DEFAULT_DURATIONS = {
    NotificationKind.SUCCESS: 3.0,
    NotificationKind.ERROR: 5.0,
    NotificationKind.WARNING: 4.0,
    NotificationKind.INFO: 3.0,
}


@dataclass(frozen=True)
class Notification:
    message: str
    kind: NotificationKind = NotificationKind.INFO
    duration: float = 3.0


class Notifier:
    def __init__(self):
        self._handlers: List[Callable[[Notification], None]] = []
        self.history: deque = deque(maxlen=20)

    def subscribe(self, handler: Callable[[Notification], None]) -> None:
        self._handlers.append(handler)

    def show(self, message: str, kind: NotificationKind = NotificationKind.INFO, duration: float = None) -> Notification:
        if duration is None:
            duration = DEFAULT_DURATIONS[kind]
        note = Notification(message=message, kind=kind, duration=duration)
        self.history.append(note)
        logger.debug("notification [%s] %s", kind.value, message)
        for handler in self._handlers:
            handler(note)
        return note

    def success(self, message: str, duration: float = None) -> Notification:
        return self.show(message, NotificationKind.SUCCESS, duration)

    def error(self, message: str, duration: float = None) -> Notification:
        return self.show(message, NotificationKind.ERROR, duration)

    def warning(self, message: str, duration: float = None) -> Notification:
        return self.show(message, NotificationKind.WARNING, duration)

    def info(self, message: str, duration: float = None) -> Notification:
        return self.show(message, NotificationKind.INFO, duration)
