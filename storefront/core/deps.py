"""Request-scoped accessors for application state"""

from fastapi import Request

from ..database import Database
from .config import Settings


def get_db(request: Request) -> Database:
    """Collections owned by the running application"""
    return request.app.state.db


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
