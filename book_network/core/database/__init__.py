"""
Centralized database layer for Book Network.

This package provides a unified location for all database entities and repositories.

Structure:
- entities/: Database entity models organized by table
- repositories/: Data access layer organized by table
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session, seeding, repo bundle)
"""

from .base import Base, UTCDateTime, as_utc, utc_now
from .session import (
    async_session_maker,
    engine,
    get_session,
    init_db,
)
from .utils import (
    SqlRepoBundle,
    build_repos,
    create_all,
    create_engine,
    create_sessionmaker,
    seed_roles,
)

__all__ = [
    "Base",
    "SqlRepoBundle",
    "UTCDateTime",
    "as_utc",
    "async_session_maker",
    "build_repos",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "init_db",
    "seed_roles",
    "utc_now",
]
