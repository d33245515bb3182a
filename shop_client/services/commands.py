"""
Remote commands

Server-side effects of local mutations, expressed as command objects so
the retry policy lives in one place instead of at every call site.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

import httpx

from ..models import CartLineItem, WishlistItem
from ..core.notifications import Notifier, DESTRUCTIVE
from .storefront_client import StorefrontClient, StorefrontClientError

logger = logging.getLogger(__name__)


class RemoteCommand:
    """Base class for a server call made on behalf of a container"""

    failure_title: ClassVar[str] = "Error"
    failure_message: ClassVar[str] = "Request to the server failed"

    async def execute(self, api: StorefrontClient) -> Any:
        raise NotImplementedError


@dataclass
class AddWishlistItem(RemoteCommand):
    product_id: str
    failure_message: ClassVar[str] = "Failed to add item to wishlist on server"

    async def execute(self, api: StorefrontClient) -> Any:
        return await api.add_to_wishlist(self.product_id)


@dataclass
class RemoveWishlistItem(RemoteCommand):
    product_id: str
    failure_message: ClassVar[str] = "Failed to remove item from wishlist on server"

    async def execute(self, api: StorefrontClient) -> Any:
        return await api.remove_from_wishlist(self.product_id)


@dataclass
class ClearWishlist(RemoteCommand):
    failure_message: ClassVar[str] = "Failed to clear wishlist on server"

    async def execute(self, api: StorefrontClient) -> Any:
        return await api.clear_wishlist()


@dataclass
class PushWishlist(RemoteCommand):
    product_ids: list[str] = field(default_factory=list)
    failure_message: ClassVar[str] = "Failed to sync your wishlist. Please try again."

    async def execute(self, api: StorefrontClient) -> Any:
        return await api.sync_wishlist(self.product_ids)


@dataclass
class FetchWishlist(RemoteCommand):
    """Returns the server's wishlist, or None if the response has no item list"""
    failure_message: ClassVar[str] = "Failed to load your wishlist"

    async def execute(self, api: StorefrontClient) -> Optional[list[WishlistItem]]:
        data = await api.get_wishlist()
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            logger.warning("Wishlist response has no item list")
            return None
        return [WishlistItem.model_validate(item) for item in items]


@dataclass
class PushCart(RemoteCommand):
    items: list[CartLineItem] = field(default_factory=list)
    failure_message: ClassVar[str] = "Failed to sync your cart. Please try again."

    async def execute(self, api: StorefrontClient) -> Any:
        payload = []
        for item in self.items:
            entry = {"productId": str(item.id), "quantity": item.quantity}
            if item.selected_color:
                entry["selectedColor"] = item.selected_color
            if item.selected_size:
                entry["selectedSize"] = item.selected_size
            payload.append(entry)
        return await api.sync_cart(payload)


@dataclass
class FetchCart(RemoteCommand):
    """Returns the server's cart as local line items, or None if malformed"""
    failure_message: ClassVar[str] = "Failed to load your cart"

    async def execute(self, api: StorefrontClient) -> Optional[list[CartLineItem]]:
        data = await api.get_cart()
        lines = data.get("items") if isinstance(data, dict) else None
        if not isinstance(lines, list):
            logger.warning("Cart response has no item list")
            return None

        items = []
        for line in lines:
            fields = {k: v for k, v in line.items() if k not in ("_id", "productId")}
            items.append(CartLineItem.model_validate({**fields, "id": line["productId"]}))
        return items


@dataclass
class RetryPolicy:
    """
    How often a failed command is attempted.

    Only transport failures and 5xx responses are retried; 4xx responses
    will not change on retry.
    """
    max_attempts: int = 1
    backoff_seconds: float = 0.0

    def should_retry(self, error: Exception, attempt: int) -> bool:
        if attempt >= self.max_attempts:
            return False
        if isinstance(error, httpx.TransportError):
            return True
        if isinstance(error, httpx.HTTPStatusError):
            return error.response.status_code >= 500
        return False


class CommandBus:
    """Executes remote commands against the storefront API"""

    def __init__(
        self,
        api: StorefrontClient,
        notifier: Notifier,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.api = api
        self.notifier = notifier
        self.retry_policy = retry_policy or RetryPolicy()

    async def execute(self, command: RemoteCommand) -> Any:
        """Run a command under the retry policy; the final error propagates"""
        attempt = 0
        while True:
            attempt += 1
            try:
                return await command.execute(self.api)
            except httpx.HTTPError as e:
                if not self.retry_policy.should_retry(e, attempt):
                    raise
                delay = self.retry_policy.backoff_seconds * attempt
                logger.warning(f"{type(command).__name__} attempt {attempt} failed ({e}); retrying in {delay:.1f}s")
                await asyncio.sleep(delay)

    async def dispatch(self, command: RemoteCommand) -> bool:
        """
        Run a command without letting failures escape.

        A failure is logged and shown to the user; nothing is rolled back.

        Returns:
            True if the command succeeded
        """
        try:
            await self.execute(command)
        except (httpx.HTTPError, StorefrontClientError, ValueError) as e:
            logger.error(f"{type(command).__name__} failed: {e}")
            self.notifier.toast(command.failure_title, command.failure_message, DESTRUCTIVE)
            return False
        return True
