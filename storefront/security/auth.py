"""
Bearer Token Authentication

Resolves the caller's account from the Authorization header.
Anonymous requests proceed; routes decide whether a user is required.
"""

import uuid
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Callable

import jwt
from fastapi import Request, HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ..core.config import Settings
from ..models.user import User

logger = logging.getLogger(__name__)


def issue_token(user: User, settings: Settings) -> tuple[str, str]:
    """
    Sign a bearer token for a user.

    Returns:
        Tuple of (encoded token, token ID used for revocation)
    """
    token_id = uuid.uuid4().hex
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "role": user.role,
        "jti": token_id,
        "iat": now,
        "exp": now + timedelta(minutes=settings.token_ttl_minutes),
    }
    token = jwt.encode(payload, settings.secret_key, algorithm=settings.token_algorithm)
    return token, token_id


def decode_token(token: str, settings: Settings) -> dict:
    """Decode and verify a bearer token; raises jwt.PyJWTError"""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.token_algorithm])


class SessionAuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware that resolves bearer tokens on requests.

    A valid, unrevoked token stores the user ID in request state.
    Missing or invalid tokens leave the request anonymous.
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request.state.user_id = None
        request.state.token_id = None

        authorization = request.headers.get("Authorization", "")
        scheme, _, token = authorization.partition(" ")

        if scheme.lower() == "bearer" and token:
            try:
                claims = decode_token(token, self.settings)
            except jwt.PyJWTError as e:
                logger.warning(f"Rejected bearer token: {e}")
            else:
                db = request.app.state.db
                if db.users.is_revoked(claims.get("jti", "")):
                    logger.info(f"Revoked token presented for user {claims.get('sub')}")
                else:
                    request.state.user_id = claims.get("sub")
                    request.state.token_id = claims.get("jti")

        response = await call_next(request)
        return response


@dataclass
class AuthContext:
    """Authentication state of the current request"""
    user: Optional[User] = None
    token_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


class AuthDependency:
    """
    FastAPI dependency resolving the current user.

    Args:
        require_user: If True, reject anonymous requests with 401
        message: Detail returned with the 401
    """

    def __init__(self, require_user: bool = False, message: Optional[str] = None):
        self.require_user = require_user
        self.message = message or "You must be logged in to perform this action"

    async def __call__(self, request: Request) -> AuthContext:
        user_id = getattr(request.state, "user_id", None)
        user = request.app.state.db.users.get_user(user_id) if user_id else None

        if self.require_user and user is None:
            raise HTTPException(status_code=401, detail=self.message)

        return AuthContext(user=user, token_id=getattr(request.state, "token_id", None))


# Dependency instances
require_user = AuthDependency(require_user=True)
optional_user = AuthDependency(require_user=False)
