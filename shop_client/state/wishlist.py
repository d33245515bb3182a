"""
Wishlist state container

State changes go through a pure reducer. Mutations apply locally first;
when a session is active the matching server call is made on a best-effort
basis, and the full server list replaces local state on ``sync_wishlist()``.
"""

import logging
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

import httpx
from pydantic import ValidationError

from ..core.notifications import Notifier, DESTRUCTIVE
from ..core.session import AuthSession
from ..models import WishlistItem, WishlistProduct, dump
from ..services.commands import (
    CommandBus,
    AddWishlistItem,
    RemoveWishlistItem,
    ClearWishlist,
    PushWishlist,
    FetchWishlist,
)
from ..services.storefront_client import StorefrontClientError
from ..storage import SnapshotStore, SnapshotError

logger = logging.getLogger(__name__)


class WishlistActionType(str, Enum):
    SET_ITEMS = "SET_ITEMS"
    ADD_ITEM = "ADD_ITEM"
    REMOVE_ITEM = "REMOVE_ITEM"
    CLEAR_WISHLIST = "CLEAR_WISHLIST"
    SET_LOADING = "SET_LOADING"


@dataclass(frozen=True)
class WishlistAction:
    """
    ``payload`` depends on the type: a list of items for SET_ITEMS, an item
    for ADD_ITEM, a product id for REMOVE_ITEM, a bool for SET_LOADING.
    """
    type: WishlistActionType
    payload: Any = None


@dataclass(frozen=True)
class WishlistState:
    items: tuple = field(default_factory=tuple)
    is_loading: bool = False


def wishlist_reducer(state: WishlistState, action: WishlistAction) -> WishlistState:
    """Return the next state; unchanged parts keep their identity"""
    if action.type == WishlistActionType.SET_ITEMS:
        return replace(state, items=tuple(action.payload))

    if action.type == WishlistActionType.ADD_ITEM:
        item = action.payload
        if any(existing.product_id == item.product_id for existing in state.items):
            return state
        return replace(state, items=state.items + (item,))

    if action.type == WishlistActionType.REMOVE_ITEM:
        return replace(state, items=tuple(i for i in state.items if i.product_id != action.payload))

    if action.type == WishlistActionType.CLEAR_WISHLIST:
        return replace(state, items=())

    if action.type == WishlistActionType.SET_LOADING:
        return replace(state, is_loading=bool(action.payload))

    return state


def local_item_id(product_id: str) -> str:
    """Temporary id used until the server assigns one"""
    return f"local_{int(time.time() * 1000)}_{product_id}"


class WishlistStore:
    """Local-first wishlist with server reconciliation"""

    def __init__(
        self,
        snapshots: SnapshotStore,
        notifier: Notifier,
        session: Optional[AuthSession] = None,
        bus: Optional[CommandBus] = None,
        storage_key: str = "wishlist",
    ):
        self.snapshots = snapshots
        self.notifier = notifier
        self.session = session
        self.bus = bus
        self.storage_key = storage_key
        self.state = WishlistState()

    @property
    def items(self) -> list[WishlistItem]:
        return list(self.state.items)

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    def dispatch(self, action: WishlistAction) -> None:
        previous = self.state
        self.state = wishlist_reducer(previous, action)
        if self.state.items is not previous.items:
            self.snapshots.save(self.storage_key, [dump(item) for item in self.state.items])

    def _remote_enabled(self) -> bool:
        return self.bus is not None and self.session is not None and self.session.is_authenticated

    def mount(self) -> None:
        """Restore the wishlist saved by a previous run; corrupt data leaves it empty"""
        try:
            stored = self.snapshots.load(self.storage_key)
            if stored is None:
                return
            items = [WishlistItem.model_validate(item) for item in stored]
        except (SnapshotError, ValidationError, TypeError) as e:
            logger.error(f"Failed to parse wishlist from local storage: {e}")
            self.snapshots.discard(self.storage_key)
            return

        # restored as-is, no re-save
        self.state = replace(self.state, items=tuple(items))
        logger.info(f"Restored {len(items)} wishlist item(s)")

    def is_in_wishlist(self, product_id: str) -> bool:
        return any(item.product_id == product_id for item in self.state.items)

    def _find(self, product_id: str) -> Optional[WishlistItem]:
        for item in self.state.items:
            if item.product_id == product_id:
                return item
        return None

    async def add_item(self, item: Union[dict, WishlistProduct]) -> None:
        product = item if isinstance(item, WishlistProduct) else WishlistProduct.model_validate(item)

        entry = WishlistItem(
            _id=local_item_id(product.product_id),
            addedAt=datetime.now(timezone.utc).isoformat(),
            **product.model_dump(by_alias=True, exclude={"id", "added_at"}),
        )
        self.dispatch(WishlistAction(WishlistActionType.ADD_ITEM, entry))
        self.notifier.toast("Added to wishlist", f"{product.name} has been added to your wishlist")

        if self._remote_enabled():
            await self.bus.dispatch(AddWishlistItem(product_id=product.product_id))

    async def remove_item(self, product_id: str) -> None:
        item = self._find(product_id)
        self.dispatch(WishlistAction(WishlistActionType.REMOVE_ITEM, product_id))

        if item is not None:
            self.notifier.toast("Removed from wishlist", f"{item.name} has been removed from your wishlist")

        if self._remote_enabled():
            await self.bus.dispatch(RemoveWishlistItem(product_id=product_id))

    async def toggle_wishlist(self, item: Union[dict, WishlistProduct]) -> None:
        product = item if isinstance(item, WishlistProduct) else WishlistProduct.model_validate(item)
        if self.is_in_wishlist(product.product_id):
            await self.remove_item(product.product_id)
        else:
            await self.add_item(product)

    async def clear_wishlist(self) -> None:
        self.dispatch(WishlistAction(WishlistActionType.CLEAR_WISHLIST))
        self.notifier.toast("Wishlist cleared", "All items have been removed from your wishlist")

        if self._remote_enabled():
            await self.bus.dispatch(ClearWishlist())

    def reset(self) -> None:
        """Drop all items without notifying (used on logout)"""
        self.dispatch(WishlistAction(WishlistActionType.CLEAR_WISHLIST))

    async def sync_wishlist(self) -> bool:
        """
        Push local items to the server, then replace local state with the
        server's list. Errors are reported to the user, never raised.

        Returns:
            True if the server list was loaded
        """
        if self.bus is None:
            return False

        self.dispatch(WishlistAction(WishlistActionType.SET_LOADING, True))
        try:
            if self.state.items:
                await self.bus.execute(PushWishlist(product_ids=[i.product_id for i in self.state.items]))

            items = await self.bus.execute(FetchWishlist())
            if items is None:
                return False
            self.dispatch(WishlistAction(WishlistActionType.SET_ITEMS, items))
            logger.info(f"Wishlist synced: {len(items)} item(s)")
            return True
        except (httpx.HTTPError, StorefrontClientError, ValueError) as e:
            logger.error(f"Error syncing wishlist: {e}")
            self.notifier.toast("Error syncing wishlist", "Failed to sync your wishlist. Please try again.", DESTRUCTIVE)
            return False
        finally:
            self.dispatch(WishlistAction(WishlistActionType.SET_LOADING, False))
