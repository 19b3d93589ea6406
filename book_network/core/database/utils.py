"""
Database utility functions for engine and session management.

This module provides the core utility functions for creating database engines,
session factories, and repository bundles, built with async SQLAlchemy.

Functions:
- create_engine: Creates async SQLAlchemy engine with URL normalization
- create_sessionmaker: Creates async session factory with safe defaults
- create_all: Creates all tables from ORM metadata (for tests/dev)
- seed_roles: Inserts the default authorities
- build_repos: Builds the repository bundle bound to one session
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from book_network.core.models.domain import RoleName

from . import entities  # noqa: F401  registers tables on the metadata
from .base import Base
from .repositories import (
    BookRepository,
    FeedbackRepository,
    NotificationRepository,
    ReservationRepository,
    RoleRepository,
    TokenRepository,
    TransactionHistoryRepository,
    UserRepository,
)

DEFAULT_ROLES = (RoleName.user.value, RoleName.admin.value)


def normalize_url(db_url: str) -> str:
    """Rewrite sync driver URLs to their async counterparts.

    ``postgresql://`` and other Postgres variants become ``postgresql+asyncpg://``
    and a bare ``sqlite://`` becomes ``sqlite+aiosqlite://``.
    """
    url = re.sub(r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://", "postgresql+asyncpg://", db_url, count=1)
    return re.sub(r"^sqlite://", "sqlite+aiosqlite://", url, count=1)


def create_engine(db_url: str) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    Args:
        db_url: Database connection URL

    Returns:
        Configured AsyncEngine instance
    """
    return create_async_engine(normalize_url(db_url), pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project.

    Args:
        engine: Async SQLAlchemy engine

    Returns:
        Configured async session factory
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables for the current ORM metadata.

    This is mainly intended for tests and local development.
    Production should use Alembic migrations instead.

    Args:
        engine: Async SQLAlchemy engine
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_roles(session: AsyncSession, names: Iterable[str] = DEFAULT_ROLES) -> None:
    """Insert the default roles that are missing.

    Args:
        session: Async session to write with
        names: Role names to ensure
    """
    await RoleRepository(session).ensure_roles(names)


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    users: UserRepository
    roles: RoleRepository
    books: BookRepository
    histories: TransactionHistoryRepository
    reservations: ReservationRepository
    feedbacks: FeedbackRepository
    tokens: TokenRepository
    notifications: NotificationRepository


def build_repos(session: AsyncSession) -> SqlRepoBundle:
    """Build a ``SqlRepoBundle`` bound to ``session``.

    Args:
        session: Async session every repository will use

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        users=UserRepository(session),
        roles=RoleRepository(session),
        books=BookRepository(session),
        histories=TransactionHistoryRepository(session),
        reservations=ReservationRepository(session),
        feedbacks=FeedbackRepository(session),
        tokens=TokenRepository(session),
        notifications=NotificationRepository(session),
    )
