"""
Loan (book transaction history) entity model.

One row per borrow. A loan is open while ``returned`` is false; storage
enforces at most one open loan per book through a partial unique index.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Index, text
from sqlmodel import Field

from ..base import AuditedBase

OPEN_LOAN_INDEX = "uq_book_transaction_history_open_loan"


class BookTransactionHistory(AuditedBase, table=True):
    """Entity for a loan of a book to a user.

    Table: book_transaction_history
    """

    __tablename__ = "book_transaction_history"
    __table_args__ = (
        Index(
            OPEN_LOAN_INDEX,
            "book_id",
            unique=True,
            sqlite_where=text("returned = 0"),
            postgresql_where=text("returned = false"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    book_id: int = Field(foreign_key="books.id", index=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    returned: bool = Field(default=False)
    returned_approved: bool = Field(default=False)

    def __repr__(self) -> str:
        return (
            f"BookTransactionHistory(id={self.id}, book_id={self.book_id}, user_id={self.user_id}, "
            f"returned={self.returned}, returned_approved={self.returned_approved})"
        )
