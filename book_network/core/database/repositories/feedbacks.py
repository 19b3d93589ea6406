"""
Feedback repository.

Besides paged listings, it exposes the raw notes of a book so the rate can be
computed without loading full rows.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.feedbacks import Feedback
from .base import SqlRepository


class FeedbackRepository(SqlRepository[Feedback]):
    """Repository for feedback."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Feedback)

    async def find_all_by_book(self, book_id: int, page: int, size: int) -> Tuple[List[Feedback], int]:
        stmt = (
            select(Feedback)
            .where(Feedback.book_id == book_id)
            .order_by(Feedback.created_at.desc(), Feedback.id.desc())  # type: ignore
        )
        return await self.paginate(stmt, page, size)

    async def get_notes(self, book_id: int) -> List[float]:
        result = await self.session.execute(select(Feedback.note).where(Feedback.book_id == book_id))
        return list(result.scalars().all())

    async def get_notes_by_books(self, book_ids: Iterable[int]) -> Dict[int, List[float]]:
        """Map each of ``book_ids`` to its notes (empty list when none)."""
        ids = list(book_ids)
        notes: Dict[int, List[float]] = {book_id: [] for book_id in ids}
        if not ids:
            return notes
        stmt = select(Feedback.book_id, Feedback.note).where(Feedback.book_id.in_(ids))  # type: ignore
        result = await self.session.execute(stmt)
        for book_id, note in result.all():
            notes[book_id].append(note)
        return notes
