"""
Book entity model.

A book belongs to its owner. Only books that are shareable and not archived
take part in lending.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from ..base import AuditedBase


class BookBase(AuditedBase):
    """Base fields for book entity."""

    title: str = Field(max_length=255)
    author_name: str = Field(max_length=255)
    isbn: str = Field(max_length=32)
    synopsis: str = Field(default="")
    book_cover: Optional[str] = Field(default=None, max_length=512, description="Stored cover location")
    archived: bool = Field(default=False)
    shareable: bool = Field(default=False)


class Book(BookBase, table=True):
    """Entity for a book offered on the network.

    Table: books
    """

    __tablename__ = "books"

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: int = Field(foreign_key="users.id", index=True)
    created_by: Optional[int] = Field(default=None)
    last_modified_by: Optional[int] = Field(default=None)

    @property
    def is_lendable(self) -> bool:
        return self.shareable and not self.archived

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title={self.title}, owner_id={self.owner_id})"
