"""
Book Endpoints.

Catalog management and the lending workflow: borrow, return, approve return,
and reservations. Every endpoint acts on behalf of the connected user.
"""

from typing import Optional

from fastapi import APIRouter, File, Query, UploadFile, status

from book_network.core.models.io import (
    BookRequest,
    BookResponse,
    BorrowedBookResponse,
    IdResponse,
    PageResponse,
)
from book_network.server.services.deps import BookServiceDep, CurrentUserDep

router = APIRouter()

PageQuery = Query(default=0, ge=0, description="Zero-based page number")
SizeQuery = Query(default=10, ge=1, le=100, description="Page size")

GUARD_RESPONSES = {
    403: {"description": "Rejected by a lending rule"},
    404: {"description": "Book not found"},
}


@router.post(
    "",
    response_model=IdResponse,
    summary="Save Book",
    description="Create a book owned by the caller, or update one when `id` is set.",
    responses={403: {"description": "Not the owner"}, 404: {"description": "Book not found"}},
)
async def save_book(request: BookRequest, user: CurrentUserDep, books: BookServiceDep) -> IdResponse:
    return IdResponse(id=await books.save(request, user))


@router.get(
    "",
    response_model=PageResponse[BookResponse],
    summary="List Books",
    description="Books the caller could borrow: shareable, not archived, owned by someone else.",
)
async def find_all_books(
    user: CurrentUserDep, books: BookServiceDep, page: int = PageQuery, size: int = SizeQuery
) -> PageResponse[BookResponse]:
    return await books.find_all_books(page, size, user)


@router.get(
    "/owner",
    response_model=PageResponse[BookResponse],
    summary="List My Books",
    description="Books owned by the caller.",
)
async def find_all_books_by_owner(
    user: CurrentUserDep, books: BookServiceDep, page: int = PageQuery, size: int = SizeQuery
) -> PageResponse[BookResponse]:
    return await books.find_all_books_by_owner(page, size, user)


@router.get(
    "/borrowed",
    response_model=PageResponse[BorrowedBookResponse],
    summary="List Borrowed Books",
    description="Loans taken by the caller.",
)
async def find_all_borrowed_books(
    user: CurrentUserDep, books: BookServiceDep, page: int = PageQuery, size: int = SizeQuery
) -> PageResponse[BorrowedBookResponse]:
    return await books.find_all_borrowed_books(page, size, user)


@router.get(
    "/returned",
    response_model=PageResponse[BorrowedBookResponse],
    summary="List Returned Books",
    description="Loans of the caller's books that the borrower has handed back.",
)
async def find_all_returned_books(
    user: CurrentUserDep, books: BookServiceDep, page: int = PageQuery, size: int = SizeQuery
) -> PageResponse[BorrowedBookResponse]:
    return await books.find_all_returned_books(page, size, user)


@router.get(
    "/reservations",
    response_model=PageResponse[BookResponse],
    summary="List My Reservations",
    description="Books the caller has reserved.",
)
async def get_user_reservations(
    user: CurrentUserDep, books: BookServiceDep, page: int = PageQuery, size: int = SizeQuery
) -> PageResponse[BookResponse]:
    return await books.get_user_reservations(page, size, user)


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get Book",
    description="Retrieve one book with its owner, rate and cover.",
    responses={404: {"description": "Book not found"}},
)
async def find_book_by_id(book_id: int, user: CurrentUserDep, books: BookServiceDep) -> BookResponse:
    return await books.find_by_id(book_id)


@router.patch(
    "/shareable/{book_id}",
    response_model=IdResponse,
    summary="Toggle Shareable",
    description="Flip the shareable flag of one of the caller's books.",
    responses=GUARD_RESPONSES,
)
async def update_shareable_status(book_id: int, user: CurrentUserDep, books: BookServiceDep) -> IdResponse:
    return IdResponse(id=await books.update_shareable_status(book_id, user))


@router.patch(
    "/archived/{book_id}",
    response_model=IdResponse,
    summary="Toggle Archived",
    description="Flip the archived flag of one of the caller's books.",
    responses=GUARD_RESPONSES,
)
async def update_archived_status(book_id: int, user: CurrentUserDep, books: BookServiceDep) -> IdResponse:
    return IdResponse(id=await books.update_archived_status(book_id, user))


@router.post(
    "/borrow/{book_id}",
    response_model=IdResponse,
    summary="Borrow Book",
    description="Open a loan of the book for the caller. Returns the loan id.",
    responses=GUARD_RESPONSES,
)
async def borrow_book(book_id: int, user: CurrentUserDep, books: BookServiceDep) -> IdResponse:
    return IdResponse(id=await books.borrow_book(book_id, user))


@router.patch(
    "/borrow/return/{book_id}",
    response_model=IdResponse,
    summary="Return Book",
    description="Hand back a book the caller borrowed. Returns the loan id.",
    responses=GUARD_RESPONSES,
)
async def return_borrowed_book(book_id: int, user: CurrentUserDep, books: BookServiceDep) -> IdResponse:
    return IdResponse(id=await books.return_borrowed_book(book_id, user))


@router.patch(
    "/borrow/return/approve/{book_id}",
    response_model=IdResponse,
    summary="Approve Return",
    description="Confirm that a returned book is back with its owner. Returns the loan id.",
    responses=GUARD_RESPONSES,
)
async def approve_return_borrowed_book(book_id: int, user: CurrentUserDep, books: BookServiceDep) -> IdResponse:
    return IdResponse(id=await books.approve_return_borrowed_book(book_id, user))


@router.post(
    "/cover/{book_id}",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Upload Cover",
    description="Upload a cover image for one of the caller's books. An empty file is ignored.",
    responses=GUARD_RESPONSES,
)
async def upload_cover(
    book_id: int, user: CurrentUserDep, books: BookServiceDep, file: UploadFile = File(...)
) -> dict:
    content = await file.read()
    location: Optional[str] = await books.upload_cover(book_id, content, file.filename, user)
    return {"stored": location is not None}


@router.post(
    "/reservations/{book_id}",
    response_model=IdResponse,
    summary="Reserve Book",
    description="Reserve a book that someone else currently holds.",
    responses={**GUARD_RESPONSES, 409: {"description": "Already reserved"}},
)
async def add_reservation(book_id: int, user: CurrentUserDep, books: BookServiceDep) -> IdResponse:
    return IdResponse(id=await books.add_reservation(book_id, user))


@router.delete(
    "/reservations/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel Reservation",
    description="Cancel the caller's reservation of a book.",
    responses={404: {"description": "Reservation not found"}},
)
async def remove_reservation(book_id: int, user: CurrentUserDep, books: BookServiceDep) -> None:
    await books.remove_reservation(book_id, user)
