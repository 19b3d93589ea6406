"""
Book catalog and lending workflow.

Every operation receives the calling user explicitly. Lending guards are
evaluated in a fixed order and the first failing guard wins:

- borrow: missing book, not lendable (archived or not shareable), own book,
  already borrowed by the caller, borrowed by another user
- return: missing book, not lendable, own book, no open loan by the caller
- approve return: missing book, caller is not the owner, nothing returned
- reserve: missing book, archived, own book, already reserved, book available

The "one open loan per book" and "one reservation per user and book" rules are
also enforced by unique indexes; a violation raised by the database is mapped
to the same typed error as the pre-check.
"""

from __future__ import annotations

import base64
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError

from book_network.core.database.entities import Book, BookReservation, BookTransactionHistory, User
from book_network.core.database.utils import SqlRepoBundle
from book_network.core.errors import (
    EntityNotFoundError,
    OperationNotPermittedError,
    ReservationConflictError,
)
from book_network.core.models.domain import NotificationStatus
from book_network.core.models.io import BookRequest, BookResponse, BorrowedBookResponse, PageResponse

from .feedback_service import compute_rate
from .file_storage import FileStorageService, read_cover
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class BookService:
    """Catalog management and the borrow / return / approve / reserve state machine."""

    def __init__(
        self,
        repos: SqlRepoBundle,
        notification_service: NotificationService,
        file_storage: FileStorageService,
    ) -> None:
        self.repos = repos
        self.notifications = notification_service
        self.file_storage = file_storage

    # -----------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------

    async def _get_book(self, book_id: int) -> Book:
        book = await self.repos.books.get_by_id(book_id)
        if book is None:
            raise EntityNotFoundError("book", book_id)
        return book

    @staticmethod
    def _reject(user: User, book: Book, message: str) -> None:
        logger.warning(f"User {user.id} rejected on book {book.id}: {message}")
        raise OperationNotPermittedError(message)

    def _ensure_lendable(self, book: Book, user: User) -> None:
        if not book.is_lendable:
            self._reject(user, book, "This book cannot be borrowed (archived or not shareable).")

    async def _to_responses(self, books: Iterable[Book]) -> List[BookResponse]:
        books = list(books)
        notes = await self.repos.feedbacks.get_notes_by_books(b.id for b in books)
        owners: Dict[int, Optional[User]] = {}
        responses = []
        for book in books:
            if book.owner_id not in owners:
                owners[book.owner_id] = await self.repos.users.get_by_id(book.owner_id)
            owner = owners[book.owner_id]
            cover = await read_cover(book.book_cover)
            responses.append(
                BookResponse(
                    id=book.id,
                    title=book.title,
                    author_name=book.author_name,
                    isbn=book.isbn,
                    synopsis=book.synopsis,
                    owner=owner.full_name if owner else "",
                    cover=base64.b64encode(cover).decode("ascii") if cover else None,
                    rate=compute_rate(notes.get(book.id, [])),
                    archived=book.archived,
                    shareable=book.shareable,
                )
            )
        return responses

    async def _to_borrowed_responses(self, histories: Iterable[BookTransactionHistory]) -> List[BorrowedBookResponse]:
        histories = list(histories)
        book_ids = {h.book_id for h in histories}
        notes = await self.repos.feedbacks.get_notes_by_books(book_ids)
        books = {book_id: await self._get_book(book_id) for book_id in book_ids}
        return [
            BorrowedBookResponse(
                id=h.book_id,
                title=books[h.book_id].title,
                author_name=books[h.book_id].author_name,
                isbn=books[h.book_id].isbn,
                rate=compute_rate(notes.get(h.book_id, [])),
                returned=h.returned,
                returned_approved=h.returned_approved,
            )
            for h in histories
        ]

    # -----------------------------------------------------------------
    # Catalog
    # -----------------------------------------------------------------

    async def save(self, request: BookRequest, current_user: User) -> int:
        """
        Create a book owned by the caller, or update one of the caller's books.

        Args:
            request: Book fields; ``request.id`` selects the book to update
            current_user: Caller

        Returns:
            The book id
        """
        if request.id is not None:
            book = await self._get_book(request.id)
            if book.owner_id != current_user.id:
                self._reject(current_user, book, "You cannot update others book")
            book.title = request.title
            book.author_name = request.author_name
            book.isbn = request.isbn
            book.synopsis = request.synopsis
            book.shareable = request.shareable
            book.last_modified_by = current_user.id
            book = await self.repos.books.update(book)
            logger.info(f"Book {book.id} updated by user {current_user.id}")
            return book.id

        book = await self.repos.books.create(
            Book(
                title=request.title,
                author_name=request.author_name,
                isbn=request.isbn,
                synopsis=request.synopsis,
                shareable=request.shareable,
                archived=False,
                owner_id=current_user.id,
                created_by=current_user.id,
            )
        )
        logger.info(f"Book {book.id} created by user {current_user.id}")
        return book.id

    async def find_by_id(self, book_id: int) -> BookResponse:
        book = await self._get_book(book_id)
        return (await self._to_responses([book]))[0]

    async def find_all_books(self, page: int, size: int, current_user: User) -> PageResponse[BookResponse]:
        """Books the caller could borrow, newest first."""
        books, total = await self.repos.books.find_all_displayable(current_user.id, page, size)
        return PageResponse[BookResponse].of(await self._to_responses(books), page, size, total)

    async def find_all_books_by_owner(self, page: int, size: int, current_user: User) -> PageResponse[BookResponse]:
        books, total = await self.repos.books.find_all_by_owner(current_user.id, page, size)
        return PageResponse[BookResponse].of(await self._to_responses(books), page, size, total)

    async def find_all_borrowed_books(
        self, page: int, size: int, current_user: User
    ) -> PageResponse[BorrowedBookResponse]:
        histories, total = await self.repos.histories.find_all_borrowed_by_user(current_user.id, page, size)
        return PageResponse[BorrowedBookResponse].of(await self._to_borrowed_responses(histories), page, size, total)

    async def find_all_returned_books(
        self, page: int, size: int, current_user: User
    ) -> PageResponse[BorrowedBookResponse]:
        histories, total = await self.repos.histories.find_all_returned_to_owner(current_user.id, page, size)
        return PageResponse[BorrowedBookResponse].of(await self._to_borrowed_responses(histories), page, size, total)

    async def get_user_reservations(self, page: int, size: int, current_user: User) -> PageResponse[BookResponse]:
        reservations, total = await self.repos.reservations.find_all_by_user(current_user.id, page, size)
        books = [await self._get_book(r.book_id) for r in reservations]
        return PageResponse[BookResponse].of(await self._to_responses(books), page, size, total)

    async def update_shareable_status(self, book_id: int, current_user: User) -> int:
        book = await self._get_book(book_id)
        if book.owner_id != current_user.id:
            self._reject(current_user, book, "You cannot update others book shareable status")
        book.shareable = not book.shareable
        await self.repos.books.update(book)
        logger.info(f"Book {book_id} shareable set to {book.shareable}")
        return book_id

    async def update_archived_status(self, book_id: int, current_user: User) -> int:
        book = await self._get_book(book_id)
        if book.owner_id != current_user.id:
            self._reject(current_user, book, "You cannot update others book archived status")
        book.archived = not book.archived
        await self.repos.books.update(book)
        logger.info(f"Book {book_id} archived set to {book.archived}")
        return book_id

    async def upload_cover(
        self, book_id: int, content: Optional[bytes], filename: Optional[str], current_user: User
    ) -> Optional[str]:
        """
        Store a cover image for one of the caller's books.

        An empty upload is ignored.

        Returns:
            The stored location, or None when nothing was stored
        """
        if not content:
            return None
        book = await self._get_book(book_id)
        if book.owner_id != current_user.id:
            self._reject(current_user, book, "You cannot update others book cover")
        location = await self.file_storage.store(content, filename, current_user.id)
        book.book_cover = location
        await self.repos.books.update(book)
        return location

    # -----------------------------------------------------------------
    # Lending
    # -----------------------------------------------------------------

    async def borrow_book(self, book_id: int, current_user: User) -> int:
        """
        Open a loan of ``book_id`` for the caller and notify the owner.

        Returns:
            The loan (transaction history) id
        """
        book = await self._get_book(book_id)
        self._ensure_lendable(book, current_user)
        if book.owner_id == current_user.id:
            self._reject(current_user, book, "You cannot borrow your own book")
        if await self.repos.histories.exists_open_loan_by_user(book_id, current_user.id):
            self._reject(current_user, book, "The requested book is already borrowed")
        if await self.repos.histories.exists_open_loan(book_id):
            self._reject(current_user, book, "The requested book is already borrowed by another user")

        user_id = current_user.id
        try:
            history = await self.repos.histories.create(
                BookTransactionHistory(book_id=book_id, user_id=user_id, returned=False, returned_approved=False)
            )
        except IntegrityError as e:
            # The rollback expired every loaded row, only plain values are safe to touch here.
            logger.warning(f"Concurrent borrow of book {book_id} lost by user {user_id}")
            raise OperationNotPermittedError("The requested book is already borrowed by another user") from e

        await self.notifications.send_notification(
            book.owner_id, NotificationStatus.borrowed, "Your book has been borrowed", book.title
        )
        logger.info(f"Book {book_id} borrowed by user {current_user.id} (loan {history.id})")
        return history.id

    async def return_borrowed_book(self, book_id: int, current_user: User) -> int:
        """Mark the caller's open loan of ``book_id`` as returned and notify the owner."""
        book = await self._get_book(book_id)
        self._ensure_lendable(book, current_user)
        if book.owner_id == current_user.id:
            self._reject(current_user, book, "You cannot borrow or return your own book")
        history = await self.repos.histories.find_open_loan(book_id, current_user.id)
        if history is None:
            self._reject(current_user, book, "You did not borrow this book")

        history.returned = True
        history = await self.repos.histories.update(history)
        await self.notifications.send_notification(
            book.owner_id, NotificationStatus.returned, "Your book has been returned", book.title
        )
        logger.info(f"Book {book_id} returned by user {current_user.id} (loan {history.id})")
        return history.id

    async def approve_return_borrowed_book(self, book_id: int, current_user: User) -> int:
        """Confirm a returned loan of one of the caller's books and notify the borrower."""
        book = await self._get_book(book_id)
        if book.owner_id != current_user.id:
            self._reject(current_user, book, "You cannot approve the return of a book you do not own")
        history = await self.repos.histories.find_pending_approval(book_id)
        if history is None:
            self._reject(current_user, book, "The book is not returned yet. You cannot approve its return")

        history.returned_approved = True
        history = await self.repos.histories.update(history)
        await self.notifications.send_notification(
            history.user_id, NotificationStatus.return_approved, "Your book return has been approved", book.title
        )
        logger.info(f"Return of book {book_id} approved (loan {history.id})")
        return history.id

    async def add_reservation(self, book_id: int, current_user: User) -> int:
        """Reserve a currently borrowed book for the caller and notify the owner."""
        book = await self._get_book(book_id)
        if book.archived:
            self._reject(current_user, book, "Archived book cannot be reserved")
        if book.owner_id == current_user.id:
            self._reject(current_user, book, "You cannot reserve a book that you do own")
        if await self.repos.reservations.exists_by_book_and_user(book_id, current_user.id):
            raise ReservationConflictError()
        if not await self.repos.histories.exists_open_loan(book_id):
            self._reject(current_user, book, "This book is currently available, you can borrow it directly")

        try:
            reservation = await self.repos.reservations.create(
                BookReservation(book_id=book_id, user_id=current_user.id)
            )
        except IntegrityError as e:
            raise ReservationConflictError() from e

        await self.notifications.send_notification(
            book.owner_id, NotificationStatus.reserved, f"{current_user.full_name} has reserved your book", book.title
        )
        logger.info(f"Book {book_id} reserved by user {current_user.id}")
        return reservation.id

    async def remove_reservation(self, book_id: int, current_user: User) -> None:
        reservation = await self.repos.reservations.find_by_book_and_user(book_id, current_user.id)
        if reservation is None:
            raise EntityNotFoundError("reservation", message="No reservation found for this user and book")
        book = await self._get_book(reservation.book_id)
        await self.repos.reservations.delete(reservation.id)
        await self.notifications.send_notification(
            book.owner_id,
            NotificationStatus.cancelled,
            f"{current_user.full_name} has cancelled the reservation for your book",
            book.title,
        )
        logger.info(f"Reservation of book {book_id} cancelled by user {current_user.id}")
