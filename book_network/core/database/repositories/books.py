"""
Book repository.

Catalog queries: displayable books for a browsing user and books by owner.
"""

from __future__ import annotations

from typing import List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.books import Book
from .base import SqlRepository


class BookRepository(SqlRepository[Book]):
    """Repository for books."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Book)

    async def find_all_displayable(self, user_id: int, page: int, size: int) -> Tuple[List[Book], int]:
        """Books other users can borrow: shareable, not archived, not owned by ``user_id``.

        Newest first.
        """
        stmt = (
            select(Book)
            .where(Book.archived == False)  # noqa: E712
            .where(Book.shareable == True)  # noqa: E712
            .where(Book.owner_id != user_id)
            .order_by(Book.created_at.desc(), Book.id.desc())  # type: ignore
        )
        return await self.paginate(stmt, page, size)

    async def find_all_by_owner(self, owner_id: int, page: int, size: int) -> Tuple[List[Book], int]:
        stmt = (
            select(Book)
            .where(Book.owner_id == owner_id)
            .order_by(Book.created_at.desc(), Book.id.desc())  # type: ignore
        )
        return await self.paginate(stmt, page, size)
