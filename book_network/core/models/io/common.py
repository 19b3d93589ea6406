"""
Shared I/O models.

``PageResponse`` is the envelope every paged listing is returned in. Pages are
zero-based.
"""

from __future__ import annotations

import math
from typing import Generic, List, Sequence, TypeVar

from pydantic import BaseModel, Field

ItemType = TypeVar("ItemType")


class PageResponse(BaseModel, Generic[ItemType]):
    """One page of a listing plus the paging metadata."""

    content: List[ItemType] = Field(default_factory=list)
    number: int = Field(description="Zero-based page number")
    size: int = Field(description="Requested page size")
    total_elements: int = Field(description="Number of items across all pages")
    total_pages: int = Field(description="Number of pages")
    first: bool
    last: bool

    @classmethod
    def of(cls, content: Sequence[ItemType], page: int, size: int, total: int) -> "PageResponse[ItemType]":
        """Build a page from its items and the overall row count."""
        total_pages = math.ceil(total / size) if size > 0 else 0
        return cls(
            content=list(content),
            number=page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
            first=page == 0,
            last=page >= total_pages - 1,
        )


class MessageResponse(BaseModel):
    message: str
