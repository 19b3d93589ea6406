"""
Authentication workflow.

Registration, account activation, login, the forgot/reset password flow and
admin-created accounts. Verification codes come from ``TokenService`` and are
delivered through ``EmailService``; a code whose email could not be sent is
deleted again before the failure propagates.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError

from book_network.core.database.entities import Token, User
from book_network.core.database.utils import SqlRepoBundle
from book_network.core.errors import (
    AccountDisabledError,
    AccountLockedError,
    BadCredentialsError,
    CodeNotVerifiedError,
    EmailAlreadyExistsError,
    EntityNotFoundError,
    ExpiredTokenError,
    MissingDefaultRoleError,
    PasswordMismatchError,
)
from book_network.core.models.domain import EmailTemplateName, RoleName, TokenType
from book_network.core.models.io import AuthenticationResponse
from book_network.core.security import JwtService, hash_password, verify_password
from book_network.server.core.config import FrontendConfig

from .email_service import EmailService
from .token_service import TokenService

logger = logging.getLogger(__name__)


class CredentialVerifier:
    """Check an email/password pair and the state of the matching account."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def verify(self, email: str, password: str) -> User:
        """
        Return the user owning ``email`` if ``password`` matches and the account is usable.

        Raises:
            BadCredentialsError: Unknown email or wrong password
            AccountDisabledError: Account not activated yet
            AccountLockedError: Account locked
        """
        user = await self.repos.users.get_by_email(email)
        if user is None or not verify_password(password, user.password):
            raise BadCredentialsError()
        if not user.enabled:
            raise AccountDisabledError()
        if user.account_locked:
            raise AccountLockedError()
        return user


class AuthenticationService:
    """Account lifecycle operations."""

    def __init__(
        self,
        repos: SqlRepoBundle,
        token_service: TokenService,
        email_service: EmailService,
        jwt_service: JwtService,
        frontend: FrontendConfig,
        credential_verifier: Optional[CredentialVerifier] = None,
    ) -> None:
        self.repos = repos
        self.token_service = token_service
        self.email_service = email_service
        self.jwt_service = jwt_service
        self.frontend = frontend
        self.credential_verifier = credential_verifier or CredentialVerifier(repos)

    async def _default_role(self):
        role = await self.repos.roles.get_by_name(RoleName.user.value)
        if role is None:
            logger.error("USER role not found in the database")
            raise MissingDefaultRoleError(RoleName.user.value)
        return role

    async def _issue_and_send(
        self,
        user: User,
        token_type: TokenType,
        template: EmailTemplateName,
        url: str,
        subject: str,
    ) -> str:
        """Issue a code for ``user`` and email it; drop the code again if sending fails."""
        code = await self.token_service.issue_token(user, token_type)
        try:
            await self.email_service.send_email(user.email, user.full_name, template, url, code, subject)
        except Exception:
            logger.error(f"Email '{template.value}' failed for {user.email}, deleting the issued code")
            await self.token_service.delete_token(code, user.id)
            raise
        return code

    async def _create_account(self, user: User, role) -> User:
        try:
            return await self.repos.users.create_with_roles(user, [role])
        except IntegrityError as e:
            logger.warning(f"Account creation lost a race, email already in use: {user.email}")
            raise EmailAlreadyExistsError(user.email) from e

    async def register(self, first_name: str, last_name: str, email: str, password: str) -> User:
        """
        Create a disabled account and email its activation code.

        Raises:
            EmailAlreadyExistsError: If ``email`` is taken
            MissingDefaultRoleError: If the ``USER`` role was never seeded
            EmailDeliveryError: If the activation email could not be sent (the user row is kept)
        """
        if await self.repos.users.exists_by_email(email):
            logger.warning(f"Registration rejected, email already in use: {email}")
            raise EmailAlreadyExistsError(email)
        role = await self._default_role()
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=hash_password(password),
            account_locked=False,
            enabled=False,
        )
        user = await self._create_account(user, role)
        logger.info(f"Registration successful for user: {user.email}")
        await self.send_validation_email(user)
        return user

    async def send_validation_email(self, user: User) -> str:
        code = await self._issue_and_send(
            user,
            TokenType.account_activation,
            EmailTemplateName.activate_account,
            self.frontend.activation_url,
            "Account activation",
        )
        logger.info(f"Activation email sent to {user.email}")
        return code

    async def activate_account(self, code: str) -> User:
        """
        Enable the account an activation code was issued for.

        An expired code triggers a fresh activation email before the
        ``ExpiredTokenError`` is raised.
        """
        token = await self._find(code, TokenType.account_activation, "Invalid activation token")
        user = await self._token_user(token)
        if token.is_expired():
            logger.warning(f"Expired activation token for {user.email}. Sending new token")
            await self.send_validation_email(user)
            raise ExpiredTokenError("Token expired . A new token has been send to the same email")
        user.enabled = True
        user = await self.repos.users.update(user)
        await self.token_service.mark_validated(token)
        logger.info(f"Account successfully activated for user: {user.email}")
        return user

    async def authenticate(self, email: str, password: str) -> AuthenticationResponse:
        """Verify credentials and sign a session token for the account."""
        user = await self.credential_verifier.verify(email, password)
        authorities = await self.repos.users.get_role_names(user.id)
        claims = {
            "fullName": user.full_name,
            "userId": user.id,
            "authorities": authorities,
        }
        token = self.jwt_service.generate_token(user.email, claims)
        logger.info(f"User {user.id} authenticated")
        return AuthenticationResponse(token=token)

    async def forgot_password(self, email: str) -> None:
        user = await self.repos.users.get_by_email(email)
        if user is None:
            logger.warning(f"No user found with email: {email}")
            raise EntityNotFoundError("user", message="User not found")
        await self._issue_and_send(
            user,
            TokenType.forgot_password,
            EmailTemplateName.forgot_password,
            self.frontend.reset_url,
            "Password reset request",
        )
        logger.info(f"Password reset email sent to {user.email}")

    async def verify_reset_token(self, code: str) -> None:
        token = await self._find(code, TokenType.forgot_password, "Invalid reset token")
        self.token_service.ensure_not_expired(token)
        await self.token_service.mark_validated(token)
        logger.info(f"Reset code verified for user {token.user_id}")

    async def reset_password(self, code: str, new_password: str, confirm_password: str) -> None:
        """
        Replace the password of the account a verified reset code belongs to.

        Guards, first failure wins: confirmation mismatch, unknown code, expired
        code, code not verified yet.
        """
        if new_password != confirm_password:
            logger.warning("Password mismatch on reset")
            raise PasswordMismatchError()
        token = await self._find(code, TokenType.forgot_password, "Invalid reset token")
        self.token_service.ensure_not_expired(token)
        if token.validated_at is None:
            logger.warning(f"Unverified reset code for user {token.user_id}")
            raise CodeNotVerifiedError()
        user = await self._token_user(token)
        user.password = hash_password(new_password)
        await self.repos.users.update(user)
        logger.info(f"Password successfully updated for user: {user.email}")

    async def create_user(
        self, first_name: str, last_name: str, email: str, date_of_birth: Optional[date] = None
    ) -> int:
        """
        Create an enabled account on someone's behalf and email them a set-password code.

        Returns:
            The new user's id
        """
        if await self.repos.users.exists_by_email(email):
            logger.warning(f"Admin user creation rejected, email already in use: {email}")
            raise EmailAlreadyExistsError(email)
        role = await self._default_role()
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            date_of_birth=date_of_birth,
            password=hash_password(""),
            account_locked=False,
            enabled=True,
        )
        user = await self._create_account(user, role)
        await self._issue_and_send(
            user,
            TokenType.set_password,
            EmailTemplateName.set_password,
            self.frontend.add_url,
            "Set your password",
        )
        logger.info(f"User created by admin: {user.email} and password setup email sent")
        return user.id

    async def set_password(self, code: str, new_password: str, confirm_password: str) -> None:
        """Choose the first password of an admin-created account."""
        if new_password != confirm_password:
            raise PasswordMismatchError()
        token = await self._find(code, TokenType.set_password, "Invalid token")
        self.token_service.ensure_not_expired(token)
        user = await self._token_user(token)
        user.password = hash_password(new_password)
        await self.repos.users.update(user)
        await self.token_service.mark_validated(token)
        logger.info(f"Password set for user: {user.email}")

    async def _find(self, code: str, token_type: TokenType, message: str) -> Token:
        return await self.token_service.find_token(code, token_type, message=message)

    async def _token_user(self, token: Token) -> User:
        user = await self.repos.users.get_by_id(token.user_id)
        if user is None:
            raise EntityNotFoundError("user", token.user_id, message="User not found")
        return user
