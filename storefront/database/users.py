"""Customer accounts for the storefront"""

import os
import uuid
import logging
from datetime import datetime, timezone
from typing import Optional

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from ..models.user import User

logger = logging.getLogger(__name__)

SCRYPT_LENGTH = 64
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1


def _kdf(salt: bytes) -> Scrypt:
    # Scrypt instances are single-use
    return Scrypt(salt=salt, length=SCRYPT_LENGTH, n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P)


def hash_password(password: str) -> str:
    """Hash a password as ``<hex digest>.<hex salt>``"""
    salt = os.urandom(16).hex()
    digest = _kdf(salt.encode()).derive(password.encode())
    return f"{digest.hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    """Check a password against a stored ``hash.salt`` value"""
    try:
        hashed, salt = stored.split(".")
        _kdf(salt.encode()).verify(password.encode(), bytes.fromhex(hashed))
    except (ValueError, InvalidKey):
        return False
    return True


class UserDatabase:
    """In-memory account storage"""

    def __init__(self):
        self.users: dict[str, User] = {}
        self.revoked_tokens: set[str] = set()

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(
        self,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        role: str = "customer",
    ) -> Optional[User]:
        """Create an account; returns None if the email is taken"""
        if self.get_by_email(email):
            return None

        user = User(
            id=uuid.uuid4().hex,
            email=email.strip().lower(),
            full_name=full_name,
            role=role,
            password_hash=hash_password(password),
            created_at=datetime.now(timezone.utc),
        )
        self.users[user.id] = user
        logger.info(f"Registered user {user.id} ({role})")
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    def revoke_token(self, token_id: str) -> None:
        self.revoked_tokens.add(token_id)

    def is_revoked(self, token_id: str) -> bool:
        return token_id in self.revoked_tokens
