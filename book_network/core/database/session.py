"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access.
"""

from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from book_network.core.logging_config import get_logger
from book_network.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker, seed_roles

logger = get_logger(__name__)

# Create global engine and session factory
engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session.
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the database.

    Creates any missing tables from the SQLModel metadata and seeds the default
    roles. Deployments that run Alembic migrations get the same schema, so this
    is a no-op on an already migrated database apart from the role check.
    """
    await create_all(engine)
    async with async_session_maker() as session:
        await seed_roles(session)
    logger.info("Database schema ready and default roles seeded")
