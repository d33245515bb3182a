# Database modules

from dataclasses import dataclass

from .products import ProductDatabase
from .carts import CartDatabase
from .wishlists import WishlistDatabase
from .users import UserDatabase
from .promotions import PromotionDatabase


@dataclass
class Database:
    """All storefront collections, owned by one application instance"""
    products: ProductDatabase
    carts: CartDatabase
    wishlists: WishlistDatabase
    users: UserDatabase
    promotions: PromotionDatabase

    @classmethod
    def create(
        cls,
        seed_catalog: bool = True,
        seed_promotions: bool = True,
        default_max_quantity: int = 999,
    ) -> "Database":
        products = ProductDatabase(seed=seed_catalog)
        return cls(
            products=products,
            carts=CartDatabase(products, default_max_quantity=default_max_quantity),
            wishlists=WishlistDatabase(products),
            users=UserDatabase(),
            promotions=PromotionDatabase(seed=seed_promotions),
        )


__all__ = [
    "Database",
    "ProductDatabase",
    "CartDatabase",
    "WishlistDatabase",
    "UserDatabase",
    "PromotionDatabase",
]
