"""
TinyPaws shop client: local-first cart and wishlist with server
reconciliation on login.
"""

from .app import ClientApp

__all__ = ["ClientApp"]
