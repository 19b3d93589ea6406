"""Notification repository."""

from __future__ import annotations

from typing import List

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.notifications import Notification
from .base import SqlRepository


class NotificationRepository(SqlRepository[Notification]):
    """Repository for notifications."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Notification)

    async def find_all_by_user(self, user_id: int) -> List[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())  # type: ignore
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def mark_all_read(self, user_id: int) -> int:
        """Flip every unread notification of ``user_id`` in a single statement.

        Returns:
            Number of notifications updated
        """
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id)  # type: ignore
            .where(Notification.read == False)  # noqa: E712
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        await self._commit()
        return result.rowcount
