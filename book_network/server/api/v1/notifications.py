"""
Live Notification Endpoint.

WebSocket the web UI keeps open to receive notifications as they happen. The
session token is passed as the ``token`` query parameter.
"""

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from book_network.core.database.utils import build_repos
from book_network.core.errors import AuthenticationError
from book_network.core.logging_config import get_logger
from book_network.server.services.deps import (
    JwtServiceDep,
    NotificationChannelDep,
    SessionFactoryDep,
    resolve_user_from_token,
)

logger = get_logger(__name__)

router = APIRouter()


@router.websocket("/notifications")
async def notifications_socket(
    websocket: WebSocket,
    jwt_service: JwtServiceDep,
    channel: NotificationChannelDep,
    session_factory: SessionFactoryDep,
    token: str = Query(...),
) -> None:
    """
    Authenticate the socket and keep it registered until the client leaves.

    Incoming messages are ignored; the socket is push-only.
    """
    try:
        async with session_factory() as session:
            user = await resolve_user_from_token(token, jwt_service, build_repos(session))
            user_id = user.id
    except AuthenticationError as e:
        logger.info(f"WebSocket rejected: {e.message}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await channel.connect(user_id, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await channel.disconnect(user_id, websocket)
