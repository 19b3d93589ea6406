"""
Book I/O models for API requests and responses.

``BookResponse`` carries the owner's full name, the derived rate and the cover
image as base64 text.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class BookRequest(BaseModel):
    """Schema for creating a book, or updating one when ``id`` is set."""

    id: Optional[int] = Field(default=None, description="Existing book to update")
    title: str = Field(min_length=1)
    author_name: str = Field(min_length=1)
    isbn: str = Field(min_length=1)
    synopsis: str = Field(min_length=1)
    shareable: bool = False


class BookResponse(BaseModel):
    """Schema for reading a book from the API."""

    id: int
    title: str
    author_name: str
    isbn: str
    synopsis: str
    owner: str = Field(description="Owner full name")
    cover: Optional[str] = Field(default=None, description="Base64 encoded cover image")
    rate: float = Field(description="Mean feedback note rounded to one decimal")
    archived: bool
    shareable: bool


class BorrowedBookResponse(BaseModel):
    """Schema for a loan as seen by the borrower or the owner."""

    id: int = Field(description="Book id")
    title: str
    author_name: str
    isbn: str
    rate: float
    returned: bool
    returned_approved: bool
