# Test remote commands, the retry policy and the command bus

import json

import httpx
import pytest

from shop_client.core.notifications import Notifier
from shop_client.services.commands import (
    AddWishlistItem,
    ClearWishlist,
    CommandBus,
    FetchCart,
    PushCart,
    RetryPolicy,
)
from shop_client.services.storefront_client import StorefrontClient
from shop_client.models import CartLineItem


def status_error(status_code):
    request = httpx.Request("GET", "http://storefront.test/api/wishlist")
    return httpx.HTTPStatusError("failed", request=request, response=httpx.Response(status_code, request=request))


class TestRetryPolicy:

    def test_default_is_single_attempt(self):
        assert not RetryPolicy().should_retry(httpx.ConnectError("down"), attempt=1)

    @pytest.mark.parametrize("error, expected", [
        (httpx.ConnectError("down"), True),
        (httpx.ReadTimeout("slow"), True),
        (status_error(500), True),
        (status_error(503), True),
        (status_error(404), False),
        (status_error(401), False),
    ])
    def test_retries_transport_and_server_errors(self, error, expected):
        assert RetryPolicy(max_attempts=3).should_retry(error, attempt=1) is expected

    def test_stops_at_max_attempts(self):
        assert not RetryPolicy(max_attempts=3).should_retry(httpx.ConnectError("down"), attempt=3)


class TestCommandBus:

    def make_bus(self, handler, **policy):
        requests = []

        def recording(request):
            requests.append(request)
            return handler(request)

        api = StorefrontClient(
            "http://storefront.test",
            token_provider=lambda: "tok",
            transport=httpx.MockTransport(recording),
        )
        notifier = Notifier()
        return CommandBus(api, notifier, RetryPolicy(**policy)), notifier, requests

    async def test_dispatch_success(self):
        bus, notifier, requests = self.make_bus(lambda r: httpx.Response(201, json={"_id": "w1"}))

        assert await bus.dispatch(AddWishlistItem(product_id="prod-001")) is True
        assert requests[0].headers["Authorization"] == "Bearer tok"
        assert requests[0].url.path == "/api/wishlist/add"
        assert notifier.errors() == []

    async def test_dispatch_failure_notifies_without_raising(self):
        bus, notifier, _ = self.make_bus(lambda r: httpx.Response(500, json={"detail": "boom"}))

        assert await bus.dispatch(ClearWishlist()) is False
        assert notifier.last.title == "Error"
        assert notifier.last.description == "Failed to clear wishlist on server"

    async def test_dispatch_handles_non_json_body(self):
        bus, notifier, _ = self.make_bus(lambda r: httpx.Response(200, text="<html>"))

        assert await bus.dispatch(ClearWishlist()) is False
        assert notifier.last.is_error

    async def test_execute_propagates_final_error(self):
        bus, _, requests = self.make_bus(lambda r: httpx.Response(503), max_attempts=3)

        with pytest.raises(httpx.HTTPStatusError):
            await bus.execute(ClearWishlist())
        assert len(requests) == 3

    async def test_client_errors_are_not_retried(self):
        bus, _, requests = self.make_bus(lambda r: httpx.Response(404), max_attempts=3)

        with pytest.raises(httpx.HTTPStatusError):
            await bus.execute(AddWishlistItem(product_id="missing"))
        assert len(requests) == 1


class TestCartCommands:

    async def test_push_cart_payload(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"items": [], "subtotal": 0})

        api = StorefrontClient("http://storefront.test", transport=httpx.MockTransport(handler))
        items = [
            CartLineItem(id=7, price=10, quantity=2, selectedColor="red"),
            CartLineItem(id="prod-001", price=1749),
        ]
        await PushCart(items=items).execute(api)

        assert json.loads(seen[0].content) == {"items": [
            {"productId": "7", "quantity": 2, "selectedColor": "red"},
            {"productId": "prod-001", "quantity": 1},
        ]}
        assert "Authorization" not in seen[0].headers

    async def test_fetch_cart_maps_product_id_to_line_id(self):
        line = {
            "_id": "entry-1",
            "productId": "prod-006",
            "name": "Rope Tug Toy",
            "slug": "rope-tug-toy",
            "images": [],
            "price": 249,
            "quantity": 2,
            "selectedColor": "blue",
            "maxQuantity": 60,
        }
        api = StorefrontClient(
            "http://storefront.test",
            transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"items": [line], "subtotal": 498})),
        )

        items = await FetchCart().execute(api)

        assert items[0].id == "prod-006"
        assert items[0].quantity == 2
        assert items[0].selected_color == "blue"
        assert items[0].line_total == 498


class TestStorefrontClient:

    async def test_catalog_and_promotions(self, server_app):
        api = StorefrontClient("http://storefront.test", transport=httpx.ASGITransport(app=server_app))

        results = await api.search_products(category="toys", min_price=200)
        assert [p["id"] for p in results["products"]] == ["prod-006"]

        product = await api.get_product("prod-007")
        assert product["inventory"]["quantity"] == 5

        codes = {p["code"] for p in await api.get_active_promotions()}
        assert "TREATS15" in codes

        await api.close()

    async def test_error_status_raises(self, server_app):
        api = StorefrontClient("http://storefront.test", transport=httpx.ASGITransport(app=server_app))

        with pytest.raises(httpx.HTTPStatusError) as exc:
            await api.get_wishlist()
        assert exc.value.response.status_code == 401

        await api.close()
