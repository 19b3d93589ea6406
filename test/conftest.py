"""
Shared test fixtures.

Every test gets its own in-memory SQLite database with the schema created and
the default roles seeded. Outbound email is replaced by an ``AsyncMock`` so the
issued verification codes can be read back from the recorded calls.
"""

from __future__ import annotations

import os
from typing import AsyncGenerator, Awaitable, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel.pool import StaticPool

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Set test configuration before importing the application
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789abcdefghijklmnop")
os.environ.setdefault("BOOK_NETWORK_ENABLE_FILE_LOGGING", "false")

from book_network.core.database import Base, build_repos, seed_roles  # noqa: E402
from book_network.core.database.entities import Book, User  # noqa: E402
from book_network.core.database.utils import SqlRepoBundle  # noqa: E402
from book_network.core.models.domain import RoleName  # noqa: E402
from book_network.core.security import JwtService, hash_password  # noqa: E402
from book_network.server.core.config import FrontendConfig  # noqa: E402
from book_network.server.services.auth_service import AuthenticationService  # noqa: E402
from book_network.server.services.book_service import BookService  # noqa: E402
from book_network.server.services.email_service import EmailService  # noqa: E402
from book_network.server.services.file_storage import FileStorageService  # noqa: E402
from book_network.server.services.notification_channel import NotificationChannel  # noqa: E402
from book_network.server.services.notification_service import NotificationService  # noqa: E402
from book_network.server.services.token_service import TokenService  # noqa: E402

from test.helpers import DEFAULT_PASSWORD  # noqa: E402
TEST_SECRET = "test-secret-key-0123456789abcdefghijklmnop"


@pytest_asyncio.fixture
async def test_engine():
    """Create an isolated in-memory database for one test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(name="session")
async def session_fixture(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session with the default roles seeded."""
    async with session_factory() as session:
        await seed_roles(session)
        yield session


@pytest.fixture
def repos(session: AsyncSession) -> SqlRepoBundle:
    return build_repos(session)


@pytest.fixture
def mock_email_service() -> MagicMock:
    """Email service whose ``send_email`` records calls instead of posting."""
    email = MagicMock(spec=EmailService)
    email.send_email = AsyncMock(return_value=None)
    return email


@pytest.fixture
def channel() -> NotificationChannel:
    return NotificationChannel()


@pytest.fixture
def jwt_service() -> JwtService:
    return JwtService(TEST_SECRET, "HS256", 60)


@pytest.fixture
def file_storage(tmp_path) -> FileStorageService:
    return FileStorageService(str(tmp_path / "uploads"))


@pytest.fixture
def token_service(repos: SqlRepoBundle) -> TokenService:
    return TokenService(repos, expiration_minutes=15, code_length=6)


@pytest.fixture
def auth_service(repos, token_service, mock_email_service, jwt_service) -> AuthenticationService:
    return AuthenticationService(repos, token_service, mock_email_service, jwt_service, FrontendConfig())


@pytest.fixture
def notification_service(repos, channel) -> NotificationService:
    return NotificationService(repos, channel)


@pytest.fixture
def book_service(repos, notification_service, file_storage) -> BookService:
    return BookService(repos, notification_service, file_storage)


@pytest.fixture
def user_factory(repos: SqlRepoBundle) -> Callable[..., Awaitable[User]]:
    """Create accounts directly in the database."""

    async def _create(
        email: str,
        *,
        first_name: str = "Test",
        last_name: str = "User",
        password: str = DEFAULT_PASSWORD,
        enabled: bool = True,
        account_locked: bool = False,
        roles: tuple = (RoleName.user.value,),
    ) -> User:
        role_rows = [await repos.roles.get_by_name(name) for name in roles]
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=hash_password(password),
            enabled=enabled,
            account_locked=account_locked,
        )
        return await repos.users.create_with_roles(user, role_rows)

    return _create


@pytest.fixture
def book_factory(repos: SqlRepoBundle) -> Callable[..., Awaitable[Book]]:
    """Create books directly in the database."""

    async def _create(
        owner: User,
        *,
        title: str = "Dune",
        shareable: bool = True,
        archived: bool = False,
    ) -> Book:
        return await repos.books.create(
            Book(
                title=title,
                author_name="Frank Herbert",
                isbn="9780441013593",
                synopsis="Desert planet",
                shareable=shareable,
                archived=archived,
                owner_id=owner.id,
                created_by=owner.id,
            )
        )

    return _create


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession, session_factory, mock_email_service, channel, file_storage
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from book_network.core.database import get_session
    from book_network.server.main import app
    from book_network.server.services import deps

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[deps.get_session_factory] = lambda: session_factory
    app.dependency_overrides[deps.get_email_service] = lambda: mock_email_service
    app.dependency_overrides[deps.get_notification_channel] = lambda: channel
    app.dependency_overrides[deps.get_file_storage] = lambda: file_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
