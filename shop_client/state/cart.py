"""
Cart state container

Holds the shopper's line items in memory, persists a full snapshot after
every change and reconciles with the server cart on login.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import httpx
from pydantic import ValidationError

from ..core.notifications import Notifier, DESTRUCTIVE
from ..models import CartLineItem, ProductId, dump
from ..services.commands import CommandBus, FetchCart, PushCart
from ..services.storefront_client import StorefrontClientError
from ..storage import SnapshotStore, SnapshotError

logger = logging.getLogger(__name__)


@dataclass
class CartSummary:
    """Order summary shown next to the cart"""
    subtotal: float
    delivery_charge: float
    discount: float
    total: float


class CartStore:
    """
    Local-first cart.

    Mutations are synchronous and never touch the network; the server cart
    is only reconciled through ``sync_cart()``.
    """

    def __init__(
        self,
        snapshots: SnapshotStore,
        notifier: Notifier,
        bus: Optional[CommandBus] = None,
        storage_key: str = "cart",
        free_delivery_threshold: float = 999.0,
        delivery_charge: float = 70.0,
    ):
        self.snapshots = snapshots
        self.notifier = notifier
        self.bus = bus
        self.storage_key = storage_key
        self.free_delivery_threshold = free_delivery_threshold
        self.delivery_charge = delivery_charge

        self.is_loading = False
        self._items: list[CartLineItem] = []

    @property
    def items(self) -> list[CartLineItem]:
        return list(self._items)

    def _set_items(self, items: list[CartLineItem]) -> None:
        self._items = items
        self.snapshots.save(self.storage_key, [dump(item) for item in items])

    def _find(self, product_id: ProductId) -> Optional[CartLineItem]:
        for item in self._items:
            if item.id == product_id:
                return item
        return None

    def mount(self) -> None:
        """Restore the cart saved by a previous run; corrupt data leaves it empty"""
        try:
            stored = self.snapshots.load(self.storage_key)
            if stored is None:
                return
            self._items = [CartLineItem.model_validate(item) for item in stored]
        except (SnapshotError, ValidationError, TypeError) as e:
            logger.error(f"Failed to parse cart from local storage: {e}")
            self.snapshots.discard(self.storage_key)
            self._items = []
            return

        logger.info(f"Restored {len(self._items)} cart item(s)")

    def add_to_cart(self, product: Union[dict, CartLineItem], quantity: int = 1) -> None:
        """
        Add a product, or increase the quantity of its existing line.

        Args:
            product: Product fields to copy into the line. A ``quantity``
                carried by the product takes precedence over ``quantity``
                when the line already exists.
            quantity: Quantity for a new line
        """
        if isinstance(product, CartLineItem):
            data = dump(product)
            carried = product.quantity if "quantity" in product.model_fields_set else None
        else:
            data = dict(product)
            carried = data.get("quantity")

        existing = self._find(data["id"])
        if existing is None:
            new_item = CartLineItem.model_validate({**data, "quantity": quantity})
            self._set_items(self._items + [new_item])
            return

        incoming = CartLineItem.model_validate({**data, "quantity": 1})
        update = {"quantity": existing.quantity + (carried if carried is not None else quantity)}
        if incoming.selected_color:
            update["selected_color"] = incoming.selected_color
        if incoming.selected_size:
            update["selected_size"] = incoming.selected_size

        self._set_items([
            item.model_copy(update=update) if item.id == existing.id else item
            for item in self._items
        ])

    def remove_from_cart(self, product_id: ProductId) -> None:
        item = self._find(product_id)
        self._set_items([i for i in self._items if i.id != product_id])

        name = item.name if item and item.name else "Item"
        self.notifier.toast("Removed from cart", f"{name} has been removed from your cart")

    def update_quantity(self, product_id: ProductId, quantity: int) -> None:
        if quantity < 1:
            self.remove_from_cart(product_id)
            return

        self._set_items([
            item.model_copy(update={"quantity": quantity}) if item.id == product_id else item
            for item in self._items
        ])

    def clear_cart(self) -> None:
        self._set_items([])
        self.notifier.toast("Cart cleared", "All items have been removed from your cart")

    def reset(self) -> None:
        """Drop all items without notifying (used on logout)"""
        self._set_items([])

    def get_cart_total(self) -> float:
        return sum(item.price * item.quantity for item in self._items)

    def get_item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def get_summary(self, delivery_charge: Optional[float] = None, discount: float = 0) -> CartSummary:
        """
        Subtotal plus delivery minus discount.

        Delivery is free at or above the free-delivery threshold and for an
        empty cart; otherwise ``delivery_charge`` (or the configured flat
        charge) applies. The total never goes below zero.
        """
        subtotal = self.get_cart_total()
        if not self._items or subtotal >= self.free_delivery_threshold:
            delivery = 0.0
        else:
            delivery = self.delivery_charge if delivery_charge is None else delivery_charge

        total = max(subtotal + delivery - discount, 0.0)
        return CartSummary(
            subtotal=round(subtotal, 2),
            delivery_charge=delivery,
            discount=discount,
            total=round(total, 2),
        )

    async def sync_cart(self) -> bool:
        """
        Push local lines to the server cart, then replace them with the
        server's cart. Errors are reported to the user, never raised.

        Returns:
            True if the server cart was loaded
        """
        if self.bus is None:
            return False

        self.is_loading = True
        try:
            if self._items:
                await self.bus.execute(PushCart(items=list(self._items)))

            items = await self.bus.execute(FetchCart())
            if items is None:
                return False
            self._set_items(items)
            logger.info(f"Cart synced: {len(items)} item(s)")
            return True
        except (httpx.HTTPError, StorefrontClientError, ValueError) as e:
            logger.error(f"Error syncing cart: {e}")
            self.notifier.toast("Error syncing cart", "Failed to sync your cart. Please try again.", DESTRUCTIVE)
            return False
        finally:
            self.is_loading = False
