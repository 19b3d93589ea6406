"""Account self-service for the connected user."""

from __future__ import annotations

import logging

from book_network.core.database.entities import User
from book_network.core.database.utils import SqlRepoBundle
from book_network.core.errors import PasswordMismatchError, WrongPasswordError
from book_network.core.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def change_password(
        self, current_password: str, new_password: str, confirm_password: str, user: User
    ) -> None:
        """
        Replace the caller's password.

        Guards, first failure wins: the current password must verify, the new
        password must differ from it, and the confirmation must match.
        """
        if not verify_password(current_password, user.password):
            logger.warning(f"Wrong current password for user {user.id}")
            raise WrongPasswordError("Wrong password")
        if new_password == current_password:
            raise WrongPasswordError("New password must be different from the current password")
        if new_password != confirm_password:
            raise PasswordMismatchError("Password does not match")
        user.password = hash_password(new_password)
        await self.repos.users.update(user)
        logger.info(f"Password changed for user {user.id}")
