"""
Verification token store.

Issues the 6-digit codes emailed for account activation, password reset and
admin-created accounts, and resolves them again. Issuing a code for a
(user, type) pair invalidates every earlier code of that pair.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from book_network.core.database.base import utc_now
from book_network.core.database.entities import Token, User
from book_network.core.database.utils import SqlRepoBundle
from book_network.core.errors import ExpiredTokenError, InvalidTokenError
from book_network.core.models.domain import TokenType

logger = logging.getLogger(__name__)

CODE_CHARACTERS = "0123456789"


def generate_code(length: int = 6) -> str:
    """Generate a numeric code with the operating system CSPRNG."""
    return "".join(secrets.choice(CODE_CHARACTERS) for _ in range(length))


class TokenService:
    """Issue, resolve and clean up verification codes."""

    def __init__(self, repos: SqlRepoBundle, *, expiration_minutes: int = 15, code_length: int = 6) -> None:
        self.repos = repos
        self.expiration = timedelta(minutes=expiration_minutes)
        self.code_length = code_length

    async def issue_token(self, user: User, token_type: TokenType) -> str:
        """
        Replace any outstanding code of ``token_type`` for ``user`` with a fresh one.

        Args:
            user: Owner of the code
            token_type: Purpose the code can be redeemed for

        Returns:
            The new code
        """
        await self.repos.tokens.delete_by_user_and_type(user.id, token_type.value)
        code = generate_code(self.code_length)
        now = utc_now()
        await self.repos.tokens.create(
            Token(
                token=code,
                type=token_type.value,
                user_id=user.id,
                created_at=now,
                expires_at=now + self.expiration,
            )
        )
        logger.info(f"Issued {token_type.value} token for user {user.id}")
        return code

    async def find_token(self, code: str, token_type: TokenType, message: str = "Invalid token") -> Token:
        """Resolve the most recent token matching (code, type).

        Raises:
            InvalidTokenError: If no token matches
        """
        token = await self.repos.tokens.find_latest(code, token_type.value)
        if token is None:
            logger.warning(f"Rejected unknown {token_type.value} token")
            raise InvalidTokenError(message)
        return token

    @staticmethod
    def ensure_not_expired(token: Token, now: Optional[datetime] = None, message: str = "Token expired") -> None:
        if token.is_expired(now):
            raise ExpiredTokenError(message)

    async def mark_validated(self, token: Token) -> Token:
        token.validated_at = utc_now()
        return await self.repos.tokens.update(token)

    async def delete_token(self, code: str, user_id: Optional[int] = None) -> int:
        deleted = await self.repos.tokens.delete_by_code(code, user_id)
        logger.debug(f"Deleted {deleted} token row(s)")
        return deleted
