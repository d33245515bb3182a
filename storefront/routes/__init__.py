# API Routes

from .products import router as products_router
from .cart import router as cart_router
from .wishlist import router as wishlist_router
from .auth import router as auth_router
from .promotions import router as promotions_router

__all__ = [
    "products_router",
    "cart_router",
    "wishlist_router",
    "auth_router",
    "promotions_router",
]
