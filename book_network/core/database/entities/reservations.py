"""
Book reservation entity model.

A user may hold at most one reservation per book.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import AuditedBase


class BookReservation(AuditedBase, table=True):
    """Entity for a user's reservation of a currently borrowed book.

    Table: book_reservations
    """

    __tablename__ = "book_reservations"
    __table_args__ = (UniqueConstraint("book_id", "user_id", name="uq_book_reservations_book_user"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    book_id: int = Field(foreign_key="books.id", index=True)
    user_id: int = Field(foreign_key="users.id", index=True)
