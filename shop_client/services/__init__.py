# Service modules

from .storefront_client import StorefrontClient, StorefrontClientError
from .commands import (
    RemoteCommand,
    AddWishlistItem,
    RemoveWishlistItem,
    ClearWishlist,
    PushWishlist,
    FetchWishlist,
    PushCart,
    FetchCart,
    RetryPolicy,
    CommandBus,
)
from .sync import SyncCoordinator, SyncState

__all__ = [
    "StorefrontClient",
    "StorefrontClientError",
    "RemoteCommand",
    "AddWishlistItem",
    "RemoveWishlistItem",
    "ClearWishlist",
    "PushWishlist",
    "FetchWishlist",
    "PushCart",
    "FetchCart",
    "RetryPolicy",
    "CommandBus",
    "SyncCoordinator",
    "SyncState",
]
