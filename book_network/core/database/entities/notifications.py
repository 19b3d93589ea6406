"""
Notification entity model.

Rows are created when a lending event happens and only ever change by having
``read`` flipped to true.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class Notification(Base, table=True):
    """Entity for a message delivered to a user about one of their books or loans.

    Table: notifications
    """

    __tablename__ = "notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    status: str = Field(max_length=32)
    message: str
    book_title: str = Field(max_length=255)
    read: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utc_now, nullable=False, index=True, sa_type=UTCDateTime)

    def __repr__(self) -> str:
        return f"Notification(id={self.id}, user_id={self.user_id}, status={self.status}, read={self.read})"
