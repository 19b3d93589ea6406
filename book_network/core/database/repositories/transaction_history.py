"""
Loan repository.

Predicate queries over ``book_transaction_history`` used by the lending guards:
open loans per book and per (book, user), loans pending return approval, and
paged listings for borrowers and owners.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.books import Book
from ..entities.transaction_history import BookTransactionHistory
from .base import SqlRepository

History = BookTransactionHistory


class TransactionHistoryRepository(SqlRepository[BookTransactionHistory]):
    """Repository for loans."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, BookTransactionHistory)

    async def exists_open_loan(self, book_id: int) -> bool:
        """Whether anyone currently holds ``book_id`` (``returned`` is false)."""
        stmt = select(History.id).where(History.book_id == book_id).where(History.returned == False)  # noqa: E712
        return await self.exists(stmt)

    async def find_open_loan(self, book_id: int, user_id: int) -> Optional[BookTransactionHistory]:
        stmt = (
            select(History)
            .where(History.book_id == book_id)
            .where(History.user_id == user_id)
            .where(History.returned == False)  # noqa: E712
        )
        return await self.first(stmt)

    async def exists_open_loan_by_user(self, book_id: int, user_id: int) -> bool:
        return await self.find_open_loan(book_id, user_id) is not None

    async def find_pending_approval(self, book_id: int) -> Optional[BookTransactionHistory]:
        """Oldest loan of ``book_id`` that was returned but not yet approved."""
        stmt = (
            select(History)
            .where(History.book_id == book_id)
            .where(History.returned == True)  # noqa: E712
            .where(History.returned_approved == False)  # noqa: E712
            .order_by(History.created_at, History.id)  # type: ignore
        )
        return await self.first(stmt)

    async def find_all_borrowed_by_user(
        self, user_id: int, page: int, size: int
    ) -> Tuple[List[BookTransactionHistory], int]:
        stmt = (
            select(History)
            .where(History.user_id == user_id)
            .order_by(History.created_at.desc(), History.id.desc())  # type: ignore
        )
        return await self.paginate(stmt, page, size)

    async def find_all_returned_to_owner(
        self, owner_id: int, page: int, size: int
    ) -> Tuple[List[BookTransactionHistory], int]:
        """Loans of books owned by ``owner_id`` that the borrower has handed back."""
        stmt = (
            select(History)
            .join(Book, Book.id == History.book_id)
            .where(Book.owner_id == owner_id)
            .where(History.returned == True)  # noqa: E712
            .order_by(History.updated_at.desc(), History.id.desc())  # type: ignore
        )
        return await self.paginate(stmt, page, size)
