"""
TinyPaws Shop Client

Root composition of the shopper-side runtime: builds the persistence
capability, the cart and wishlist containers, the session signal, the
command bus and the sync coordinator, and ties their lifetime together.
"""

import logging
from typing import Optional

import httpx

from .core.config import ClientSettings, LogoutPolicy, get_client_settings
from .core.notifications import Notifier, DESTRUCTIVE
from .core.session import AuthSession
from .models import UserProfile
from .services.commands import CommandBus, RetryPolicy
from .services.storefront_client import StorefrontClient, StorefrontClientError
from .services.sync import SyncCoordinator
from .state.cart import CartStore
from .state.wishlist import WishlistStore
from .storage import KeyValueStore, SnapshotStore, create_store

logger = logging.getLogger(__name__)


class ClientApp:
    """
    One shopper's runtime (the equivalent of a browser tab).

    Usage:
        async with ClientApp() as shop:
            shop.cart.add_to_cart({"id": "prod-001", "name": "...", "price": 1749})
            await shop.login("me@example.com", "secret123")
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        kv_store: Optional[KeyValueStore] = None,
    ):
        """
        Args:
            settings: Client settings (defaults to the environment)
            transport: httpx transport for the storefront API
            kv_store: Persistence backend (defaults to ``settings.storage_backend``)
        """
        self.settings = settings or get_client_settings()

        self.notifier = Notifier(history_size=self.settings.notification_history)
        self.session = AuthSession()

        self.api = StorefrontClient(
            base_url=self.settings.api_base_url,
            timeout=self.settings.http_timeout,
            token_provider=lambda: self.session.token,
            transport=transport,
        )
        self.bus = CommandBus(
            self.api,
            self.notifier,
            RetryPolicy(
                max_attempts=self.settings.remote_retry_attempts,
                backoff_seconds=self.settings.remote_retry_backoff,
            ),
        )

        backend = kv_store or create_store(self.settings.storage_backend, self.settings.storage_dir)
        self.snapshots = SnapshotStore(backend)

        self.cart = CartStore(
            self.snapshots,
            self.notifier,
            bus=self.bus,
            storage_key=self.settings.cart_key,
            free_delivery_threshold=self.settings.free_delivery_threshold,
            delivery_charge=self.settings.delivery_charge,
        )
        self.wishlist = WishlistStore(
            self.snapshots,
            self.notifier,
            session=self.session,
            bus=self.bus,
            storage_key=self.settings.wishlist_key,
        )
        self.sync = SyncCoordinator(
            self.session,
            self.wishlist,
            cart=self.cart,
            sync_cart=self.settings.sync_cart_on_login,
        )

    async def start(self, token: Optional[str] = None) -> None:
        """
        Restore local state, then resume a saved session if ``token`` is
        given. A resumed session triggers reconciliation like a login.
        """
        self.cart.mount()
        self.wishlist.mount()
        await self.sync.start()

        if token:
            await self._resume(token)

    async def _resume(self, token: str) -> None:
        self.session.token = token
        try:
            data = await self.api.get_user()
        except (httpx.HTTPError, StorefrontClientError) as e:
            logger.warning(f"Could not resume session: {e}")
            self.session.token = None
            return
        await self.session.set_user(UserProfile.model_validate(data), token)

    async def close(self) -> None:
        self.sync.stop()
        await self.api.close()

    async def __aenter__(self) -> "ClientApp":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ==================== Account ====================

    async def login(self, email: str, password: str) -> UserProfile:
        """Sign in; raises httpx.HTTPStatusError on bad credentials"""
        data = await self.api.login(email, password)
        user = UserProfile.model_validate(data["user"])
        await self.session.set_user(user, data["token"])
        return user

    async def register(self, email: str, password: str, full_name: Optional[str] = None) -> UserProfile:
        """Create an account and sign in with it"""
        data = await self.api.register(email, password, full_name)
        user = UserProfile.model_validate(data["user"])
        await self.session.set_user(user, data["token"])
        return user

    async def logout(self) -> None:
        if not self.session.is_authenticated:
            return

        try:
            await self.api.logout()
        except (httpx.HTTPError, StorefrontClientError) as e:
            logger.warning(f"Server logout failed: {e}")

        await self.session.clear()

        if self.settings.logout_policy == LogoutPolicy.CLEAR:
            self.cart.reset()
            self.wishlist.reset()
            logger.info("Local cart and wishlist cleared on logout")

    # ==================== Checkout ====================

    async def apply_coupon(self, code: str) -> float:
        """
        Validate a coupon against the current cart.

        Returns:
            The discount, or 0 if the code was rejected
        """
        cart_items = [
            {"productId": str(item.id), "price": item.price, "quantity": item.quantity}
            for item in self.cart.items
        ]
        try:
            result = await self.api.validate_promotion(code, self.cart.get_cart_total(), cart_items)
        except httpx.HTTPStatusError as e:
            try:
                detail = e.response.json().get("detail", "Invalid coupon code")
            except ValueError:
                detail = "Invalid coupon code"
            self.notifier.toast("Invalid coupon", str(detail), DESTRUCTIVE)
            return 0.0
        except (httpx.TransportError, StorefrontClientError) as e:
            logger.error(f"Coupon validation failed: {e}")
            self.notifier.toast("Error", "Could not validate coupon. Please try again.", DESTRUCTIVE)
            return 0.0

        promotion = result["promotion"]
        self.notifier.toast("Coupon applied", f"{promotion['name']} applied to your order")
        return float(promotion["discount"])
