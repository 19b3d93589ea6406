"""
Live notification channel.

In-process registry of open WebSocket connections keyed by user id. A user may
have several sockets open (one per browser tab); a push goes to all of them.
Pushes are best-effort: a socket that fails to receive is dropped and the
failure logged.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any, DefaultDict, Dict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationChannel:
    """Registry of live connections and fan-out of payloads to a user."""

    def __init__(self) -> None:
        self._connections: DefaultDict[int, Set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def connect(self, user_id: int, websocket: WebSocket) -> None:
        """Accept ``websocket`` and register it for ``user_id``."""
        await websocket.accept()
        async with self._lock:
            self._connections[user_id].add(websocket)
        logger.debug(f"WebSocket connected for user {user_id}")

    async def disconnect(self, user_id: int, websocket: WebSocket) -> None:
        async with self._lock:
            sockets = self._connections.get(user_id)
            if sockets is not None:
                sockets.discard(websocket)
                if not sockets:
                    del self._connections[user_id]
        logger.debug(f"WebSocket disconnected for user {user_id}")

    def connection_count(self, user_id: int) -> int:
        return len(self._connections.get(user_id, ()))

    async def push_to_user(self, user_id: int, destination: str, payload: Dict[str, Any]) -> int:
        """
        Send ``payload`` to every socket ``user_id`` has open.

        Args:
            user_id: Recipient
            destination: Channel name the client subscribes to (``/notifications``)
            payload: JSON-serialisable message body

        Returns:
            Number of sockets the payload was delivered to
        """
        async with self._lock:
            sockets = list(self._connections.get(user_id, ()))
        delivered = 0
        for websocket in sockets:
            try:
                await websocket.send_json({"destination": destination, "payload": payload})
                delivered += 1
            except Exception as e:  # noqa: BLE001 - a dead socket must not fail the caller
                logger.warning(f"Dropping WebSocket for user {user_id} after failed push: {e}")
                await self.disconnect(user_id, websocket)
        return delivered


notification_channel = NotificationChannel()
