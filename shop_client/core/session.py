"""Authenticated-session signal for the shop client"""

import logging
from typing import Awaitable, Callable, Optional

from ..models import UserProfile

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[UserProfile]], Awaitable[None]]


class AuthSession:
    """
    Holds the signed-in user and bearer token.

    Listeners are awaited whenever the user changes, including
    transitions to and from anonymous.
    """

    def __init__(self):
        self.user: Optional[UserProfile] = None
        self.token: Optional[str] = None
        self._listeners: list[SessionListener] = []

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def set_user(self, user: Optional[UserProfile], token: Optional[str] = None) -> None:
        previous_id = self.user.id if self.user else None
        self.user = user
        self.token = token if user else None

        current_id = user.id if user else None
        if previous_id == current_id:
            return

        logger.info(f"Session changed: {previous_id or 'anonymous'} -> {current_id or 'anonymous'}")
        for listener in list(self._listeners):
            await listener(user)

    async def clear(self) -> None:
        await self.set_user(None)
