"""Feedback I/O models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FeedbackRequest(BaseModel):
    """Schema for leaving feedback on a book."""

    note: float = Field(ge=0, le=5, description="Note between 0 and 5")
    comment: str = Field(min_length=1)
    book_id: int


class FeedbackResponse(BaseModel):
    note: float
    comment: str
    own_feedback: bool = Field(description="Whether the caller wrote this feedback")
