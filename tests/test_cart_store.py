# Test the local-first cart container

import json

import httpx
import pytest

from shop_client.core.notifications import Notifier
from shop_client.models import CartLineItem
from shop_client.state.cart import CartStore
from shop_client.storage import MemoryKeyValueStore, SnapshotStore


@pytest.fixture
def backend():
    return MemoryKeyValueStore()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def cart(backend, notifier):
    return CartStore(SnapshotStore(backend), notifier)


def stored_items(backend, key="cart"):
    return json.loads(backend.get(key))["items"]


class TestAddToCart:

    def test_repeated_adds_merge_into_one_line(self, cart):
        for quantity in (1, 2, 4):
            cart.add_to_cart({"id": "prod-001", "name": "Dog food", "price": 1749}, quantity)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 7

    def test_default_quantity(self, cart):
        cart.add_to_cart({"id": 5, "price": 10})
        cart.add_to_cart({"id": 5, "price": 10})
        assert cart.items[0].quantity == 2

    def test_carried_quantity_wins_on_existing_line(self, cart):
        cart.add_to_cart({"id": "prod-006", "price": 249}, 1)
        cart.add_to_cart({"id": "prod-006", "price": 249, "quantity": 3}, 10)
        assert cart.items[0].quantity == 4

    def test_new_line_uses_given_quantity(self, cart):
        cart.add_to_cart({"id": "prod-006", "price": 249, "quantity": 3}, 2)
        assert cart.items[0].quantity == 2

    def test_variant_selection_overwritten_when_given(self, cart):
        cart.add_to_cart({"id": "prod-006", "price": 249, "selectedColor": "red", "selectedSize": "M"})
        cart.add_to_cart({"id": "prod-006", "price": 249, "selectedColor": "blue"})

        item = cart.items[0]
        assert item.selected_color == "blue"
        assert item.selected_size == "M"

    def test_variant_selection_by_field_name(self, cart):
        cart.add_to_cart({"id": 1, "price": 100, "selected_color": "red"})
        cart.add_to_cart({"id": 1, "price": 100, "selected_color": "blue", "selected_size": "L"})

        item = cart.items[0]
        assert item.quantity == 2
        assert item.selected_color == "blue"
        assert item.selected_size == "L"

    def test_accepts_line_item_models(self, cart):
        cart.add_to_cart(CartLineItem(id="prod-002", name="Puppy food", price=500), 2)
        cart.add_to_cart(CartLineItem(id="prod-002", name="Puppy food", price=500), 1)
        assert cart.items[0].quantity == 3

    def test_extra_product_fields_are_kept(self, cart, backend):
        cart.add_to_cart({"id": "prod-001", "price": 1899, "salePrice": 1749, "brand": "Royal Canin"})
        assert stored_items(backend)[0]["brand"] == "Royal Canin"

    def test_distinct_products_get_distinct_lines(self, cart):
        cart.add_to_cart({"id": 1, "price": 100})
        cart.add_to_cart({"id": "1", "price": 100})
        cart.add_to_cart({"id": 2, "price": 50})
        assert len(cart.items) == 3


class TestQuantityAndRemoval:

    def test_update_quantity_replaces(self, cart):
        cart.add_to_cart({"id": 1, "price": 100}, 2)
        cart.update_quantity(1, 9)
        assert cart.items[0].quantity == 9

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_update_below_one_removes(self, cart, notifier, quantity):
        cart.add_to_cart({"id": 1, "name": "Bowl", "price": 100}, 2)
        cart.add_to_cart({"id": 2, "price": 10}, 1)

        cart.update_quantity(1, quantity)

        assert [item.id for item in cart.items] == [2]
        assert notifier.last.title == "Removed from cart"
        assert notifier.last.description == "Bowl has been removed from your cart"

    def test_update_below_one_matches_remove(self, backend, notifier):
        via_update = CartStore(SnapshotStore(MemoryKeyValueStore()), Notifier())
        via_remove = CartStore(SnapshotStore(MemoryKeyValueStore()), Notifier())
        for store in (via_update, via_remove):
            store.add_to_cart({"id": 1, "price": 100}, 2)
            store.add_to_cart({"id": 2, "price": 30}, 1)

        via_update.update_quantity(1, 0)
        via_remove.remove_from_cart(1)

        assert via_update.items == via_remove.items
        assert via_update.get_cart_total() == via_remove.get_cart_total()

    def test_remove_unknown_id_still_notifies(self, cart, notifier):
        cart.remove_from_cart("missing")
        assert cart.items == []
        assert notifier.last.title == "Removed from cart"

    def test_clear_cart(self, cart, notifier):
        cart.add_to_cart({"id": 1, "price": 100})
        cart.clear_cart()
        assert cart.items == []
        assert notifier.last.description == "All items have been removed from your cart"

    def test_reset_is_silent(self, cart, notifier):
        cart.add_to_cart({"id": 1, "price": 100})
        cart.reset()
        assert cart.items == []
        assert notifier.last is None


class TestTotals:

    def test_cart_scenario(self, cart):
        """Empty -> add 2 -> add 3 more -> set to zero"""
        cart.add_to_cart({"id": 1, "price": 100}, 2)
        assert cart.get_cart_total() == 200

        cart.add_to_cart({"id": 1, "price": 100}, 3)
        assert cart.items[0].quantity == 5
        assert cart.get_cart_total() == 500

        cart.update_quantity(1, 0)
        assert cart.items == []
        assert cart.get_cart_total() == 0

    def test_total_tracks_every_change(self, cart):
        cart.add_to_cart({"id": 1, "price": 99.5}, 2)
        cart.add_to_cart({"id": 2, "price": 10}, 3)
        assert cart.get_cart_total() == sum(i.price * i.quantity for i in cart.items) == 229

        cart.remove_from_cart(1)
        assert cart.get_cart_total() == 30
        assert cart.get_item_count() == 3

    def test_summary_charges_delivery_below_threshold(self, cart):
        cart.add_to_cart({"id": 1, "price": 500})
        summary = cart.get_summary()
        assert summary.subtotal == 500
        assert summary.delivery_charge == 70
        assert summary.total == 570

    def test_summary_free_delivery_at_threshold(self, cart):
        cart.add_to_cart({"id": 1, "price": 999})
        assert cart.get_summary().delivery_charge == 0

    def test_summary_discount_never_negative(self, cart):
        cart.add_to_cart({"id": 1, "price": 50})
        summary = cart.get_summary(delivery_charge=0, discount=500)
        assert summary.total == 0

    def test_summary_empty_cart(self, cart):
        assert cart.get_summary().total == 0


class TestPersistence:

    def test_every_change_is_persisted(self, cart, backend):
        cart.add_to_cart({"id": 1, "name": "Ball", "price": 100}, 2)
        assert stored_items(backend) == [{"id": 1, "name": "Ball", "price": 100.0, "quantity": 2, "images": []}]

        cart.update_quantity(1, 3)
        assert stored_items(backend)[0]["quantity"] == 3

        cart.clear_cart()
        assert stored_items(backend) == []

    def test_mount_restores_saved_cart(self, backend, notifier):
        first = CartStore(SnapshotStore(backend), notifier)
        first.add_to_cart({"id": "prod-006", "price": 249, "selectedColor": "green"}, 2)

        second = CartStore(SnapshotStore(backend), notifier)
        second.mount()
        assert second.items == first.items

    def test_mount_reads_legacy_array(self, backend, notifier):
        backend.set("cart", json.dumps([{"id": 3, "price": 20, "quantity": 4}]))
        cart = CartStore(SnapshotStore(backend), notifier)
        cart.mount()
        assert cart.get_cart_total() == 80

    @pytest.mark.parametrize("raw", [
        "definitely not json",
        '{"version": 7, "items": []}',
        '[{"id": 1}]',
        '[1, 2, 3]',
    ])
    def test_corrupt_snapshot_leaves_cart_empty(self, backend, notifier, raw):
        backend.set("cart", raw)
        cart = CartStore(SnapshotStore(backend), notifier)

        cart.mount()

        assert cart.items == []
        assert backend.get("cart") is None

    def test_custom_storage_key(self, backend, notifier):
        cart = CartStore(SnapshotStore(backend), notifier, storage_key="guest-cart")
        cart.add_to_cart({"id": 1, "price": 1})
        assert backend.get("guest-cart") is not None
        assert backend.get("cart") is None


class TestSyncCart:

    async def test_push_then_replace_with_server_cart(self, shop, client, registered_user):
        shop.cart.add_to_cart({"id": "prod-006", "name": "Rope Tug Toy", "price": 249, "selectedColor": "red"}, 2)
        shop.cart.add_to_cart({"id": "not-in-catalog", "name": "Ghost", "price": 1}, 1)

        await shop.login("shopper@example.com", "woof-woof-123")

        ids = {item.id for item in shop.cart.items}
        assert ids == {"prod-006"}
        line = shop.cart.items[0]
        assert line.quantity == 2
        assert line.selected_color == "red"
        assert not shop.cart.is_loading

        server = client.get("/api/cart", headers={"Authorization": f"Bearer {shop.session.token}"}).json()
        assert [i["productId"] for i in server["items"]] == ["prod-006"]

    async def test_mutations_stay_local(self, make_offline_app):
        def handler(request):
            return httpx.Response(500)

        app = make_offline_app(handler)
        app.cart.add_to_cart({"id": 1, "price": 10})
        app.cart.update_quantity(1, 3)
        app.cart.remove_from_cart(1)
        assert app.transport.requests == []

    async def test_failure_notifies_and_keeps_local_items(self, make_offline_app):
        def handler(request):
            return httpx.Response(503, json={"detail": "down"})

        app = make_offline_app(handler)
        app.cart.add_to_cart({"id": "prod-001", "price": 1749})

        assert await app.cart.sync_cart() is False
        assert [i.id for i in app.cart.items] == ["prod-001"]
        assert app.notifier.last.title == "Error syncing cart"
        assert app.notifier.last.is_error
        assert not app.cart.is_loading

    async def test_without_bus_is_noop(self, cart):
        assert await cart.sync_cart() is False
