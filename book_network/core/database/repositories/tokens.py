"""
Verification token repository.

Lookups are always scoped to a (code, type) pair and return the most recently
created match.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.tokens import Token
from .base import SqlRepository


class TokenRepository(SqlRepository[Token]):
    """Repository for verification tokens."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Token)

    async def find_latest(self, code: str, token_type: str) -> Optional[Token]:
        stmt = (
            select(Token)
            .where(Token.token == code)
            .where(Token.type == token_type)
            .order_by(Token.created_at.desc(), Token.id.desc())  # type: ignore
        )
        return await self.first(stmt)

    async def delete_by_user_and_type(self, user_id: int, token_type: str) -> int:
        """Delete every token of ``token_type`` issued to ``user_id``.

        Returns:
            Number of rows deleted
        """
        result = await self.session.execute(
            delete(Token).where(Token.user_id == user_id).where(Token.type == token_type)  # type: ignore
        )
        await self._commit()
        return result.rowcount

    async def delete_by_code(self, code: str, user_id: Optional[int] = None) -> int:
        stmt = delete(Token).where(Token.token == code)  # type: ignore
        if user_id is not None:
            stmt = stmt.where(Token.user_id == user_id)  # type: ignore
        result = await self.session.execute(stmt)
        await self._commit()
        return result.rowcount
