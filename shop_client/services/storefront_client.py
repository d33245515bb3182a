"""
Storefront API Client

HTTP client for the storefront's catalog, account, cart, wishlist and
promotion endpoints. Attaches the session's bearer token when present.
"""

import logging
from typing import Any, Callable, Optional

import httpx

logger = logging.getLogger(__name__)


class StorefrontClientError(Exception):
    """Storefront returned a response the client cannot use"""
    pass


class StorefrontClient:
    """Client for the storefront REST API"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize storefront client.

        Args:
            base_url: Base URL of the storefront API
            timeout: Request timeout in seconds
            token_provider: Returns the current bearer token, if any
            transport: Custom httpx transport (in-process app, mocks)
        """
        self.base_url = base_url.rstrip("/")
        self._token_provider = token_provider or (lambda: None)
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _generate_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self._token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request; raises httpx.HTTPStatusError on 4xx/5xx"""
        url = f"{self.base_url}{path}"

        response = await self._http_client.request(
            method=method,
            url=url,
            headers=self._generate_headers(),
            json=body,
            params=params,
        )

        if response.status_code >= 400:
            logger.error(f"Request failed: {method} {path} {response.status_code} - {response.text}")
            response.raise_for_status()

        try:
            return response.json()
        except ValueError as e:
            raise StorefrontClientError(f"Invalid JSON from {method} {path}: {e}") from e

    # ==================== Account APIs ====================

    async def register(self, email: str, password: str, full_name: Optional[str] = None) -> dict:
        body = {"email": email, "password": password}
        if full_name:
            body["fullName"] = full_name
        return await self._request("POST", "/api/auth/register", body=body)

    async def login(self, email: str, password: str) -> dict:
        """Returns ``{"user": ..., "token": ...}``"""
        return await self._request("POST", "/api/auth/login", body={"email": email, "password": password})

    async def logout(self) -> dict:
        return await self._request("POST", "/api/auth/logout")

    async def get_user(self) -> dict:
        return await self._request("GET", "/api/auth/user")

    # ==================== Product APIs ====================

    async def search_products(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> dict:
        """Search products in the catalog"""
        params = {"limit": limit, "offset": offset}
        if query:
            params["query"] = query
        if category:
            params["category"] = category
        if min_price is not None:
            params["min_price"] = min_price
        if max_price is not None:
            params["max_price"] = max_price
        return await self._request("GET", "/api/products", params=params)

    async def get_product(self, product_id: str) -> dict:
        """Get product details"""
        return await self._request("GET", f"/api/products/{product_id}")

    # ==================== Wishlist APIs ====================

    async def get_wishlist(self) -> dict:
        """Returns ``{"items": [...]}``"""
        return await self._request("GET", "/api/wishlist")

    async def sync_wishlist(self, product_ids: list[str]) -> dict:
        """Push locally saved products; the server de-duplicates"""
        return await self._request(
            "POST",
            "/api/wishlist/sync",
            body={"items": [{"productId": pid} for pid in product_ids]},
        )

    async def add_to_wishlist(self, product_id: str) -> dict:
        return await self._request("POST", "/api/wishlist/add", body={"productId": product_id})

    async def remove_from_wishlist(self, product_id: str) -> dict:
        return await self._request("DELETE", f"/api/wishlist/{product_id}")

    async def clear_wishlist(self) -> dict:
        return await self._request("DELETE", "/api/wishlist")

    # ==================== Cart APIs ====================

    async def get_cart(self) -> dict:
        """Returns ``{"items": [...], "subtotal": ...}``"""
        return await self._request("GET", "/api/cart")

    async def sync_cart(self, items: list[dict]) -> dict:
        """Push a local cart; existing lines keep the larger quantity"""
        return await self._request("POST", "/api/cart/sync", body={"items": items})

    # ==================== Promotion APIs ====================

    async def validate_promotion(self, code: str, cart_total: float, cart_items: list[dict]) -> dict:
        return await self._request(
            "POST",
            "/api/promotions/validate",
            body={"code": code, "cartTotal": cart_total, "cartItems": cart_items},
        )

    async def get_active_promotions(self) -> list[dict]:
        return await self._request("GET", "/api/promotions/active")
