"""
Feedback entity model.

Feedback rows carry a note between 0 and 5; a book's rate is derived from them.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from ..base import AuditedBase


class Feedback(AuditedBase, table=True):
    """Entity for a note and comment left on a book.

    Table: feedbacks
    """

    __tablename__ = "feedbacks"

    id: Optional[int] = Field(default=None, primary_key=True)
    note: float = Field(ge=0, le=5)
    comment: str = Field(default="")
    book_id: int = Field(foreign_key="books.id", index=True)
    created_by: int = Field(foreign_key="users.id", index=True)
