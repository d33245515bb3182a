# Security

from .auth import (
    SessionAuthMiddleware,
    AuthDependency,
    AuthContext,
    issue_token,
    decode_token,
    require_user,
    optional_user,
)

__all__ = [
    "SessionAuthMiddleware",
    "AuthDependency",
    "AuthContext",
    "issue_token",
    "decode_token",
    "require_user",
    "optional_user",
]
