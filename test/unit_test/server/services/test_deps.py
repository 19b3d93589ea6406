"""Unit tests for server service dependencies.

Tests verify the dependency wiring and the bearer token resolution used by
both HTTP endpoints and the notification WebSocket.
"""

import pytest

from book_network.core.errors import AuthenticationError
from book_network.server.services import deps
from book_network.server.services.book_service import BookService
from book_network.server.services.email_service import EmailService
from book_network.server.services.notification_channel import notification_channel


class TestAnnotatedDeps:
    def test_book_service_dep_uses_get_book_service(self):
        depends_obj = deps.BookServiceDep.__metadata__[0]
        assert depends_obj.dependency == deps.get_book_service

    def test_current_user_dep_uses_get_current_user(self):
        assert deps.CurrentUserDep.__metadata__[0].dependency == deps.get_current_user


class TestFactories:
    def test_services_built_from_settings(self, repos, notification_service, file_storage):
        assert isinstance(deps.get_email_service(), EmailService)
        assert deps.get_notification_channel() is notification_channel
        assert deps.get_jwt_service().algorithm == "HS256"
        assert deps.get_token_service(repos).expiration.total_seconds() == 15 * 60
        assert isinstance(deps.get_book_service(repos, notification_service, file_storage), BookService)


class TestResolveUserFromToken:
    @pytest.mark.asyncio
    async def test_resolves_enabled_user(self, repos, jwt_service, user_factory):
        user = await user_factory("ada@example.com")

        resolved = await deps.resolve_user_from_token(jwt_service.generate_token("ada@example.com"), jwt_service, repos)

        assert resolved.id == user.id

    @pytest.mark.asyncio
    async def test_unknown_subject(self, repos, jwt_service):
        with pytest.raises(AuthenticationError):
            await deps.resolve_user_from_token(jwt_service.generate_token("ghost@example.com"), jwt_service, repos)

    @pytest.mark.asyncio
    async def test_locked_account(self, repos, jwt_service, user_factory):
        await user_factory("ada@example.com", account_locked=True)

        with pytest.raises(AuthenticationError, match="disabled or locked"):
            await deps.resolve_user_from_token(jwt_service.generate_token("ada@example.com"), jwt_service, repos)
