"""Reservation repository."""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.reservations import BookReservation
from .base import SqlRepository


class ReservationRepository(SqlRepository[BookReservation]):
    """Repository for book reservations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, BookReservation)

    async def find_by_book_and_user(self, book_id: int, user_id: int) -> Optional[BookReservation]:
        stmt = (
            select(BookReservation)
            .where(BookReservation.book_id == book_id)
            .where(BookReservation.user_id == user_id)
        )
        return await self.first(stmt)

    async def exists_by_book_and_user(self, book_id: int, user_id: int) -> bool:
        return await self.find_by_book_and_user(book_id, user_id) is not None

    async def find_all_by_user(self, user_id: int, page: int, size: int) -> Tuple[List[BookReservation], int]:
        stmt = (
            select(BookReservation)
            .where(BookReservation.user_id == user_id)
            .order_by(BookReservation.created_at.desc(), BookReservation.id.desc())  # type: ignore
        )
        return await self.paginate(stmt, page, size)
