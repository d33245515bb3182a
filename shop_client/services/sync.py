"""
Sync Coordinator

Reconciles the wishlist (and optionally the cart) with the server whenever
a signed-in user appears: on login, or at start-up if a session was
restored. Never runs periodically or per mutation.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

from ..core.session import AuthSession
from ..models import UserProfile

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    ANONYMOUS = "anonymous"
    SYNCING = "syncing"
    SYNCED = "synced"
    FAILED = "failed"


class SyncCoordinator:
    """Runs push-then-pull reconciliation on anonymous -> signed-in transitions"""

    def __init__(self, session: AuthSession, wishlist, cart=None, sync_cart: bool = True):
        """
        Args:
            session: Session signal to follow
            wishlist: Container exposing ``async sync_wishlist() -> bool``
            cart: Container exposing ``async sync_cart() -> bool``
            sync_cart: Also reconcile the cart on login
        """
        self.session = session
        self.wishlist = wishlist
        self.cart = cart
        self.sync_cart = sync_cart
        self.state = SyncState.ANONYMOUS

        self._lock = asyncio.Lock()
        self._unsubscribe: Optional[Callable[[], None]] = None

    async def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self.session.subscribe(self._on_session_change)
        if self.session.is_authenticated:
            await self.run()

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _on_session_change(self, user: Optional[UserProfile]) -> None:
        if user is None:
            self.state = SyncState.ANONYMOUS
            return
        await self.run()

    async def run(self) -> SyncState:
        """Reconcile now; returns the resulting state"""
        async with self._lock:
            self.state = SyncState.SYNCING
            logger.info("Reconciling local state with server")

            ok = await self.wishlist.sync_wishlist()
            if self.sync_cart and self.cart is not None:
                ok = await self.cart.sync_cart() and ok

            # a logout during the run wins
            if not self.session.is_authenticated:
                self.state = SyncState.ANONYMOUS
            else:
                self.state = SyncState.SYNCED if ok else SyncState.FAILED
            return self.state
