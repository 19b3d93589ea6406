"""
Feedback and book rating.

A book's rate is the mean of its feedback notes rounded half-up to one
decimal, or 0.0 when nobody has rated it yet.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

from book_network.core.database.entities import Feedback, User
from book_network.core.database.utils import SqlRepoBundle
from book_network.core.errors import EntityNotFoundError, OperationNotPermittedError
from book_network.core.models.io import FeedbackResponse, PageResponse

logger = logging.getLogger(__name__)


def compute_rate(notes: Iterable[float]) -> float:
    """Mean of ``notes`` rounded half-up to one decimal; 0.0 when empty."""
    notes = list(notes)
    if not notes:
        return 0.0
    mean = sum(notes) / len(notes)
    return math.floor(mean * 10 + 0.5) / 10


class FeedbackService:
    """Leave and list feedback on books."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def save(self, book_id: int, note: float, comment: str, current_user: User) -> int:
        """
        Record the caller's feedback on ``book_id``.

        Raises:
            EntityNotFoundError: Unknown book
            OperationNotPermittedError: Book archived or not shareable, or owned by the caller

        Returns:
            The feedback id
        """
        book = await self.repos.books.get_by_id(book_id)
        if book is None:
            raise EntityNotFoundError("book", book_id)
        if not book.is_lendable:
            logger.warning(f"Feedback rejected on unavailable book {book_id}")
            raise OperationNotPermittedError("You cannot give a feedback for an archived or not shareable book")
        if book.owner_id == current_user.id:
            logger.warning(f"User {current_user.id} tried to rate their own book {book_id}")
            raise OperationNotPermittedError("You cannot give a feedback to your own book")
        feedback = await self.repos.feedbacks.create(
            Feedback(note=note, comment=comment, book_id=book_id, created_by=current_user.id)
        )
        logger.info(f"Feedback {feedback.id} left on book {book_id} by user {current_user.id}")
        return feedback.id

    async def find_all_feedbacks_by_book(
        self, book_id: int, page: int, size: int, current_user: User
    ) -> PageResponse[FeedbackResponse]:
        feedbacks, total = await self.repos.feedbacks.find_all_by_book(book_id, page, size)
        content = [
            FeedbackResponse(note=f.note, comment=f.comment, own_feedback=f.created_by == current_user.id)
            for f in feedbacks
        ]
        return PageResponse[FeedbackResponse].of(content, page, size, total)

    async def get_rate(self, book_id: int) -> float:
        return compute_rate(await self.repos.feedbacks.get_notes(book_id))
