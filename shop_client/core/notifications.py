"""User-facing toast notifications"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass
class Notification:
    """A transient message shown to the shopper"""
    title: str
    description: str = ""
    variant: str = DEFAULT
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_error(self) -> bool:
        return self.variant == DESTRUCTIVE


class Notifier:
    """Fans notifications out to listeners and keeps a short history"""

    def __init__(self, history_size: int = 50):
        self.history: deque[Notification] = deque(maxlen=history_size)
        self._listeners: list[Callable[[Notification], None]] = []

    def subscribe(self, listener: Callable[[Notification], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def toast(self, title: str, description: str = "", variant: str = DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.history.append(notification)

        if notification.is_error:
            logger.warning(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")

        for listener in list(self._listeners):
            listener(notification)
        return notification

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None

    def errors(self) -> list[Notification]:
        return [n for n in self.history if n.is_error]
