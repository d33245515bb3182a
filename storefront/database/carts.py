"""Cart storage for the storefront"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..models.cart import CartLine
from .products import ProductDatabase


@dataclass
class CartEntry:
    """One product line in a user's cart"""
    id: str
    user_id: str
    product_id: str
    quantity: int
    selected_color: Optional[str]
    selected_size: Optional[str]
    created_at: datetime


class CartDatabase:
    """In-memory cart storage, one line per product per user"""

    def __init__(self, products: ProductDatabase, default_max_quantity: int = 999):
        self.products = products
        self.default_max_quantity = default_max_quantity
        self.entries: dict[str, list[CartEntry]] = {}

    def _find(self, user_id: str, product_id: str) -> Optional[CartEntry]:
        return next(
            (e for e in self.entries.get(user_id, []) if e.product_id == product_id),
            None,
        )

    def _cap(self, product_id: str, quantity: int) -> int:
        product = self.products.get_product(product_id)
        max_quantity = product.max_quantity(self.default_max_quantity) if product else self.default_max_quantity
        return min(quantity, max_quantity)

    def _format(self, entry: CartEntry) -> Optional[CartLine]:
        product = self.products.get_product(entry.product_id)
        if not product:
            return None
        return CartLine(
            id=entry.id,
            product_id=product.id,
            name=product.name,
            slug=product.slug,
            image=product.image,
            images=product.images,
            price=product.price,
            sale_price=product.sale_price,
            quantity=entry.quantity,
            selected_color=entry.selected_color,
            selected_size=entry.selected_size,
            max_quantity=product.max_quantity(self.default_max_quantity),
        )

    def list_items(self, user_id: str) -> list[CartLine]:
        """User's cart joined with product data, newest first"""
        lines = []
        for entry in reversed(self.entries.get(user_id, [])):
            line = self._format(entry)
            if line:
                lines.append(line)
        return lines

    def subtotal(self, user_id: str) -> float:
        return round(sum(line.price * line.quantity for line in self.list_items(user_id)), 2)

    def add_item(
        self,
        user_id: str,
        product_id: str,
        quantity: int,
        selected_color: Optional[str] = None,
        selected_size: Optional[str] = None,
    ) -> CartLine:
        """Add to the cart, incrementing an existing line"""
        entry = self._find(user_id, product_id)
        if entry:
            entry.quantity = self._cap(product_id, entry.quantity + quantity)
            if selected_color:
                entry.selected_color = selected_color
            if selected_size:
                entry.selected_size = selected_size
        else:
            entry = CartEntry(
                id=uuid.uuid4().hex,
                user_id=user_id,
                product_id=product_id,
                quantity=self._cap(product_id, quantity),
                selected_color=selected_color,
                selected_size=selected_size,
                created_at=datetime.now(timezone.utc),
            )
            self.entries.setdefault(user_id, []).append(entry)
        return self._format(entry)

    def sync_items(self, user_id: str, items: list[dict]) -> list[CartLine]:
        """
        Merge a locally held cart into the stored one.

        Lines already present keep the larger of the two quantities.
        Items without a product ID or a positive quantity, or naming unknown
        products, are skipped.
        """
        for item in items:
            product_id = item.get("product_id")
            quantity = item.get("quantity")
            if not product_id or not isinstance(quantity, int) or quantity < 1:
                continue
            if not self.products.get_product(product_id):
                continue

            entry = self._find(user_id, product_id)
            if entry:
                entry.quantity = self._cap(product_id, max(entry.quantity, quantity))
                entry.selected_color = item.get("selected_color") or entry.selected_color
                entry.selected_size = item.get("selected_size") or entry.selected_size
            else:
                self.add_item(
                    user_id,
                    product_id,
                    quantity,
                    item.get("selected_color"),
                    item.get("selected_size"),
                )
        return self.list_items(user_id)

    def update_quantity(self, user_id: str, item_id: str, quantity: int) -> Optional[CartLine]:
        entry = next((e for e in self.entries.get(user_id, []) if e.id == item_id), None)
        if not entry:
            return None
        entry.quantity = self._cap(entry.product_id, quantity)
        return self._format(entry)

    def remove_item(self, user_id: str, item_id: str) -> bool:
        """Remove by cart entry ID, falling back to product ID"""
        entries = self.entries.get(user_id, [])
        for key in ("id", "product_id"):
            match = next((e for e in entries if getattr(e, key) == item_id), None)
            if match:
                entries.remove(match)
                return True
        return False

    def clear(self, user_id: str) -> None:
        self.entries.pop(user_id, None)
