# State containers

from .cart import CartStore, CartSummary
from .wishlist import (
    WishlistStore,
    WishlistState,
    WishlistAction,
    WishlistActionType,
    wishlist_reducer,
)

__all__ = [
    "CartStore",
    "CartSummary",
    "WishlistStore",
    "WishlistState",
    "WishlistAction",
    "WishlistActionType",
    "wishlist_reducer",
]
