"""
Notification dispatch.

Persists a notification row for the recipient and then pushes the same payload
over the live channel. Persistence errors propagate; push errors never do.
"""

from __future__ import annotations

import logging
from typing import List

from book_network.core.database.entities import Notification, User
from book_network.core.database.utils import SqlRepoBundle
from book_network.core.errors import EntityNotFoundError, OperationNotPermittedError
from book_network.core.models.domain import NotificationStatus
from book_network.core.models.io import NotificationResponse
from book_network.server.core.constant import NOTIFICATION_DESTINATION

from .notification_channel import NotificationChannel

logger = logging.getLogger(__name__)


class NotificationService:
    """Store, deliver and acknowledge notifications."""

    def __init__(self, repos: SqlRepoBundle, channel: NotificationChannel) -> None:
        self.repos = repos
        self.channel = channel

    async def send_notification(
        self, user_id: int, status: NotificationStatus, message: str, book_title: str
    ) -> NotificationResponse:
        """
        Persist a notification for ``user_id`` and push it live.

        Args:
            user_id: Recipient
            status: Lending event being reported
            message: Human readable text
            book_title: Title of the book concerned

        Returns:
            The stored notification as sent to the client
        """
        notification = await self.repos.notifications.create(
            Notification(user_id=user_id, status=status.value, message=message, book_title=book_title)
        )
        response = NotificationResponse.model_validate(notification)
        try:
            await self.channel.push_to_user(user_id, NOTIFICATION_DESTINATION, response.model_dump(mode="json"))
        except Exception as e:  # noqa: BLE001 - live push is best-effort
            logger.error(f"Live push of notification {notification.id} to user {user_id} failed: {e}")
        logger.info(f"Notification {notification.id} ({status.value}) sent to user {user_id}")
        return response

    async def get_user_notifications(self, user: User) -> List[NotificationResponse]:
        notifications = await self.repos.notifications.find_all_by_user(user.id)
        return [NotificationResponse.model_validate(n) for n in notifications]

    async def mark_as_read(self, notification_id: int, user: User) -> NotificationResponse:
        """Flip ``read`` on one of the caller's notifications."""
        notification = await self.repos.notifications.get_by_id(notification_id)
        if notification is None:
            raise EntityNotFoundError("notification", notification_id, message="Notification not found")
        if notification.user_id != user.id:
            logger.warning(f"User {user.id} tried to update notification {notification_id} of user {notification.user_id}")
            raise OperationNotPermittedError("Not allowed to update this notification")
        if not notification.read:
            notification.read = True
            notification = await self.repos.notifications.update(notification)
        return NotificationResponse.model_validate(notification)

    async def mark_all_as_read(self, user: User) -> int:
        """Mark every unread notification of the caller as read in one commit.

        Returns:
            Number of notifications updated
        """
        updated = await self.repos.notifications.mark_all_read(user.id)
        logger.info(f"Marked {updated} notifications as read for user {user.id}")
        return updated
