"""Notification I/O models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationResponse(BaseModel):
    """Payload stored for, and pushed live to, the recipient."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    message: str
    book_title: str
    read: bool
    created_at: datetime
