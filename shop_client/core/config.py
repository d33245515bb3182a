"""Shop Client Configuration"""

from enum import Enum
from pydantic_settings import BaseSettings
from functools import lru_cache


class StorageBackend(str, Enum):
    MEMORY = "memory"
    FILE = "file"


class LogoutPolicy(str, Enum):
    """What happens to local cart/wishlist state when the user logs out"""
    KEEP = "keep"
    CLEAR = "clear"


class ClientSettings(BaseSettings):
    """Client settings loaded from environment"""

    # Storefront API
    api_base_url: str = "http://localhost:8001"
    http_timeout: float = 30.0

    # Local persistence
    storage_backend: StorageBackend = StorageBackend.FILE
    storage_dir: str = ".tinypaws"
    cart_key: str = "cart"
    wishlist_key: str = "wishlist"

    # Reconciliation
    sync_cart_on_login: bool = True
    logout_policy: LogoutPolicy = LogoutPolicy.KEEP
    remote_retry_attempts: int = 1
    remote_retry_backoff: float = 0.5

    # Checkout summary
    free_delivery_threshold: float = 999.0
    delivery_charge: float = 70.0

    # Notifications
    notification_history: int = 50

    class Config:
        env_prefix = "TINYPAWS_"
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_client_settings() -> ClientSettings:
    """Get cached settings instance"""
    return ClientSettings()
