"""
Service Dependencies.

Wires sessions, repositories and services for API endpoints, and resolves the
connected user from the bearer token.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from book_network.core.database import async_session_maker, get_session
from book_network.core.database.entities import User
from book_network.core.database.utils import SqlRepoBundle, build_repos
from book_network.core.errors import AuthenticationError
from book_network.core.models.domain import RoleName
from book_network.core.security import JwtService
from book_network.server.core import constant
from book_network.server.core.config import settings

from .auth_service import AuthenticationService
from .book_service import BookService
from .email_service import EmailService
from .feedback_service import FeedbackService
from .file_storage import FileStorageService
from .notification_channel import NotificationChannel, notification_channel
from .notification_service import NotificationService
from .token_service import TokenService
from .user_service import UserService

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{constant.API_V1_STR}/auth/authenticate")

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for endpoints that outlive a single unit of work (WebSockets)."""
    return async_session_maker


SessionFactoryDep = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]


def get_repos(session: SessionDep) -> SqlRepoBundle:
    return build_repos(session)


ReposDep = Annotated[SqlRepoBundle, Depends(get_repos)]


def get_jwt_service() -> JwtService:
    security = settings.security
    return JwtService(security.secret_key, security.algorithm, security.expiration_minutes)


def get_email_service() -> EmailService:
    return EmailService(settings.mail)


def get_file_storage() -> FileStorageService:
    return FileStorageService(settings.storage.file_upload_path)


def get_notification_channel() -> NotificationChannel:
    return notification_channel


JwtServiceDep = Annotated[JwtService, Depends(get_jwt_service)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
FileStorageDep = Annotated[FileStorageService, Depends(get_file_storage)]
NotificationChannelDep = Annotated[NotificationChannel, Depends(get_notification_channel)]


def get_token_service(repos: ReposDep) -> TokenService:
    config = settings.verification_token
    return TokenService(repos, expiration_minutes=config.expiration_minutes, code_length=config.code_length)


TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]


def get_auth_service(
    repos: ReposDep,
    token_service: TokenServiceDep,
    email_service: EmailServiceDep,
    jwt_service: JwtServiceDep,
) -> AuthenticationService:
    return AuthenticationService(repos, token_service, email_service, jwt_service, settings.frontend)


def get_notification_service(repos: ReposDep, channel: NotificationChannelDep) -> NotificationService:
    return NotificationService(repos, channel)


NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


def get_book_service(
    repos: ReposDep, notification_service: NotificationServiceDep, file_storage: FileStorageDep
) -> BookService:
    return BookService(repos, notification_service, file_storage)


def get_feedback_service(repos: ReposDep) -> FeedbackService:
    return FeedbackService(repos)


def get_user_service(repos: ReposDep) -> UserService:
    return UserService(repos)


AuthServiceDep = Annotated[AuthenticationService, Depends(get_auth_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]
FeedbackServiceDep = Annotated[FeedbackService, Depends(get_feedback_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


async def resolve_user_from_token(token: str, jwt_service: JwtService, repos: SqlRepoBundle) -> User:
    """
    Decode a session token and load the account it was issued for.

    Raises:
        AuthenticationError: Invalid token, unknown subject, or unusable account
    """
    email = jwt_service.extract_username(token)
    user = await repos.users.get_by_email(email)
    if user is None:
        raise AuthenticationError("Invalid session token")
    if not user.enabled or user.account_locked:
        raise AuthenticationError("User account is disabled or locked")
    return user


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    jwt_service: JwtServiceDep,
    repos: ReposDep,
) -> User:
    return await resolve_user_from_token(token, jwt_service, repos)


CurrentUserDep = Annotated[User, Depends(get_current_user)]


async def require_admin(user: CurrentUserDep, repos: ReposDep) -> User:
    if RoleName.admin.value not in await repos.users.get_role_names(user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator role required")
    return user


AdminUserDep = Annotated[User, Depends(require_admin)]
