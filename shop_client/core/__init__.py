# Core modules

from .config import ClientSettings, StorageBackend, LogoutPolicy, get_client_settings
from .notifications import Notification, Notifier, DEFAULT, DESTRUCTIVE
from .session import AuthSession

__all__ = [
    "ClientSettings",
    "StorageBackend",
    "LogoutPolicy",
    "get_client_settings",
    "Notification",
    "Notifier",
    "DEFAULT",
    "DESTRUCTIVE",
    "AuthSession",
]
