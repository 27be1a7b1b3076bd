"""User-visible notifications (toasts) and route changes."""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from medibook import config
from medibook.logging_config import get_logger

logger = get_logger(__name__)


class NotificationLevel(str, Enum):
    """Toast severities."""
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    level: NotificationLevel
    message: str


class Notifier:
    """Collects transient notifications in the order they were raised."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def notify(self, level: NotificationLevel, message: str):
        self.notifications.append(Notification(level, message))
        logger.info("notification", severity=level.value, text=message)

    def success(self, message: str):
        self.notify(NotificationLevel.SUCCESS, message)

    def info(self, message: str):
        self.notify(NotificationLevel.INFO, message)

    def warning(self, message: str):
        self.notify(NotificationLevel.WARNING, message)

    def error(self, message: str):
        self.notify(NotificationLevel.ERROR, message)

    @property
    def last(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None

    def drain(self) -> List[Notification]:
        """Return and forget pending notifications."""
        pending, self.notifications = self.notifications, []
        return pending


class Navigator:
    """Records route changes requested by the views."""

    def __init__(self, initial_route: str = config.HOME_ROUTE):
        self.history: List[str] = [initial_route]

    @property
    def current_route(self) -> str:
        return self.history[-1]

    def navigate(self, route: str):
        logger.info("navigate", route=route, previous=self.current_route)
        self.history.append(route)
