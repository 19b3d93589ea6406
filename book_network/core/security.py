"""
Password hashing and session token signing.

Passwords are stored as bcrypt hashes. Session tokens are HS256 JWTs carrying
the user's email as ``sub`` plus the ``fullName``, ``userId`` and
``authorities`` claims.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from book_network.core.errors import AuthenticationError


def hash_password(raw_password: str) -> str:
    """Hash a password with a freshly generated bcrypt salt."""
    return bcrypt.hashpw(raw_password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(raw_password: str, hashed_password: str) -> bool:
    """Check a raw password against a stored bcrypt hash.

    Malformed hashes never match.
    """
    try:
        return bcrypt.checkpw(raw_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


class JwtService:
    """Sign and decode session tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expiration_minutes: int = 1440) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expiration_minutes = expiration_minutes

    def generate_token(self, subject: str, claims: Optional[Dict[str, Any]] = None) -> str:
        """
        Build a signed token for ``subject``.

        Args:
            subject: Value of the ``sub`` claim (the user's email)
            claims: Extra claims merged into the payload

        Returns:
            The encoded JWT
        """
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = dict(claims or {})
        payload.update(
            {
                "sub": subject,
                "iat": now,
                "exp": now + timedelta(minutes=self.expiration_minutes),
            }
        )
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Verify the signature and expiry of ``token`` and return its claims.

        Raises:
            AuthenticationError: If the token is expired, tampered with or malformed
        """
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Session token expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid session token") from e

    def extract_username(self, token: str) -> str:
        return self.decode_token(token)["sub"]
