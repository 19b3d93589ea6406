"""Unit tests for database utilities."""

import pytest

from book_network.core.database import SqlRepoBundle, build_repos, create_sessionmaker, seed_roles
from book_network.core.database.repositories import UserRepository
from book_network.core.database.utils import normalize_url


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        "url,expected",
        [
            ("postgresql://u:p@db:5432/books", "postgresql+asyncpg://u:p@db:5432/books"),
            ("postgres://u:p@db/books", "postgresql+asyncpg://u:p@db/books"),
            ("postgresql+psycopg2://u:p@db/books", "postgresql+asyncpg://u:p@db/books"),
            ("postgresql+asyncpg://u:p@db/books", "postgresql+asyncpg://u:p@db/books"),
            ("sqlite:///./book_network.db", "sqlite+aiosqlite:///./book_network.db"),
            ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
        ],
    )
    def test_normalize_url(self, url, expected):
        assert normalize_url(url) == expected


class TestSeedRoles:
    @pytest.mark.asyncio
    async def test_seed_roles_twice_keeps_two_roles(self, session, repos):
        await seed_roles(session)

        assert sorted(r.name for r in await repos.roles.list()) == ["ADMIN", "USER"]


class TestBuildRepos:
    def test_bundle_shares_one_session(self, session):
        bundle = build_repos(session)

        assert isinstance(bundle, SqlRepoBundle)
        assert isinstance(bundle.users, UserRepository)
        assert bundle.users.session is bundle.books.session is bundle.notifications.session is session


class TestSessionmaker:
    def test_does_not_expire_on_commit(self, test_engine):
        factory = create_sessionmaker(test_engine)

        assert factory.kw["expire_on_commit"] is False
