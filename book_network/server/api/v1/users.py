"""
User Endpoints.

Password change, administrator account creation and the connected user's
notification inbox.
"""

from typing import List

from fastapi import APIRouter, status

from book_network.core.models.io import (
    ChangePasswordRequest,
    IdResponse,
    MessageResponse,
    NotificationResponse,
    UserRequest,
)
from book_network.server.services.deps import (
    AdminUserDep,
    AuthServiceDep,
    CurrentUserDep,
    NotificationServiceDep,
    UserServiceDep,
)

router = APIRouter()


@router.patch(
    "/change-password",
    response_model=MessageResponse,
    summary="Change Password",
    description="Replace the caller's password after checking the current one.",
    responses={400: {"description": "Wrong current password or confirmation mismatch"}},
)
async def change_password(
    request: ChangePasswordRequest, user: CurrentUserDep, users: UserServiceDep
) -> MessageResponse:
    await users.change_password(request.current_password, request.new_password, request.confirm_password, user)
    return MessageResponse(message="Password changed")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=IdResponse,
    summary="Create User",
    description="Administrators only. Create an enabled account and email the owner a set-password code.",
    responses={403: {"description": "Administrator role required"}, 409: {"description": "Email already in use"}},
)
async def create_user(request: UserRequest, admin: AdminUserDep, auth: AuthServiceDep) -> IdResponse:
    user_id = await auth.create_user(request.first_name, request.last_name, request.email, request.date_of_birth)
    return IdResponse(id=user_id)


@router.get(
    "/me/notifications",
    response_model=List[NotificationResponse],
    summary="List Notifications",
    description="The caller's notifications, newest first.",
)
async def get_notifications(user: CurrentUserDep, notifications: NotificationServiceDep) -> List[NotificationResponse]:
    return await notifications.get_user_notifications(user)


@router.put(
    "/me/notifications/read-all",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Mark All Read",
    description="Mark every unread notification of the caller as read.",
)
async def mark_all_as_read(user: CurrentUserDep, notifications: NotificationServiceDep) -> None:
    await notifications.mark_all_as_read(user)


@router.put(
    "/me/notifications/{notification_id}/read",
    response_model=NotificationResponse,
    summary="Mark Read",
    description="Mark one of the caller's notifications as read.",
    responses={403: {"description": "Not the recipient"}, 404: {"description": "Notification not found"}},
)
async def mark_as_read(
    notification_id: int, user: CurrentUserDep, notifications: NotificationServiceDep
) -> NotificationResponse:
    return await notifications.mark_as_read(notification_id, user)
