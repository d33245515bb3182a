"""Wishlist storage for the storefront"""

import uuid
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..models.wishlist import WishlistItemOut
from .products import ProductDatabase

logger = logging.getLogger(__name__)


@dataclass
class WishlistEntry:
    """One saved product for one user"""
    id: str
    user_id: str
    product_id: str
    created_at: datetime


class WishlistDatabase:
    """In-memory wishlist storage, keyed by user"""

    def __init__(self, products: ProductDatabase):
        self.products = products
        self.entries: dict[str, list[WishlistEntry]] = {}

    def _find(self, user_id: str, product_id: str) -> Optional[WishlistEntry]:
        return next(
            (e for e in self.entries.get(user_id, []) if e.product_id == product_id),
            None,
        )

    def _create(self, user_id: str, product_id: str) -> WishlistEntry:
        entry = WishlistEntry(
            id=uuid.uuid4().hex,
            user_id=user_id,
            product_id=product_id,
            created_at=datetime.now(timezone.utc),
        )
        self.entries.setdefault(user_id, []).append(entry)
        return entry

    def _format(self, entry: WishlistEntry) -> Optional[WishlistItemOut]:
        product = self.products.get_product(entry.product_id)
        if not product:
            return None
        return WishlistItemOut(
            id=entry.id,
            product_id=product.id,
            name=product.name,
            slug=product.slug,
            image=product.image,
            price=product.price,
            sale_price=product.sale_price,
            added_at=entry.created_at,
            in_stock=product.in_stock,
        )

    def list_items(self, user_id: str) -> list[WishlistItemOut]:
        """User's wishlist joined with product data, newest first"""
        items = []
        for entry in reversed(self.entries.get(user_id, [])):
            item = self._format(entry)
            if item:
                items.append(item)
        return items

    def add_item(self, user_id: str, product_id: str) -> tuple[WishlistItemOut, bool]:
        """
        Add a product to the user's wishlist.

        Returns:
            Tuple of (formatted item, whether a new entry was created)
        """
        existing = self._find(user_id, product_id)
        if existing:
            return self._format(existing), False
        return self._format(self._create(user_id, product_id)), True

    def sync_items(self, user_id: str, product_ids: list[Optional[str]]) -> list[WishlistItemOut]:
        """Merge locally saved products into the stored wishlist"""
        added = 0
        for product_id in product_ids:
            if not product_id:
                continue
            if not self.products.get_product(product_id):
                logger.debug(f"Skipping unknown product {product_id} during wishlist sync")
                continue
            if not self._find(user_id, product_id):
                self._create(user_id, product_id)
                added += 1

        logger.info(f"Wishlist sync for user {user_id}: {added} new item(s)")
        return self.list_items(user_id)

    def remove_item(self, user_id: str, item_id: str) -> bool:
        """Remove by wishlist entry ID, falling back to product ID"""
        entries = self.entries.get(user_id, [])
        for key in ("id", "product_id"):
            match = next((e for e in entries if getattr(e, key) == item_id), None)
            if match:
                entries.remove(match)
                return True
        return False

    def clear(self, user_id: str) -> None:
        self.entries.pop(user_id, None)
