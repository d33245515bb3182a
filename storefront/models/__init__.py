# Storefront Models

from .product import Product, ProductCategory, Inventory, ProductSearchResponse
from .cart import (
    CartLine,
    AddToCartRequest,
    SyncCartRequest,
    UpdateCartItemRequest,
    CartResponse,
)
from .wishlist import (
    WishlistItemOut,
    AddToWishlistRequest,
    WishlistSyncItem,
    SyncWishlistRequest,
    WishlistResponse,
    MessageResponse,
)
from .user import User, UserPublic, RegisterRequest, LoginRequest, AuthResponse
from .promotion import (
    Promotion,
    PromotionType,
    PromotionCartItem,
    ValidatePromotionRequest,
    ValidatePromotionResponse,
    AppliedPromotion,
    ActivePromotion,
)

__all__ = [
    "Product",
    "ProductCategory",
    "Inventory",
    "ProductSearchResponse",
    "CartLine",
    "AddToCartRequest",
    "SyncCartRequest",
    "UpdateCartItemRequest",
    "CartResponse",
    "WishlistItemOut",
    "AddToWishlistRequest",
    "WishlistSyncItem",
    "SyncWishlistRequest",
    "WishlistResponse",
    "MessageResponse",
    "User",
    "UserPublic",
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    "Promotion",
    "PromotionType",
    "PromotionCartItem",
    "ValidatePromotionRequest",
    "ValidatePromotionResponse",
    "AppliedPromotion",
    "ActivePromotion",
]
