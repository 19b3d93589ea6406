"""
Verification token entity model.

Tokens are the 6-digit codes emailed for account activation, password reset
and admin-created accounts.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, UTCDateTime, as_utc, utc_now


class Token(Base, table=True):
    """Entity for an emailed verification code.

    Table: tokens
    """

    __tablename__ = "tokens"

    id: Optional[int] = Field(default=None, primary_key=True)
    token: str = Field(max_length=16, index=True)
    type: str = Field(max_length=32, index=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now, nullable=False, sa_type=UTCDateTime)
    expires_at: datetime = Field(nullable=False, sa_type=UTCDateTime)
    validated_at: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return as_utc(now or utc_now()) > as_utc(self.expires_at)

    def __repr__(self) -> str:
        return f"Token(id={self.id}, type={self.type}, user_id={self.user_id}, expires_at={self.expires_at})"
