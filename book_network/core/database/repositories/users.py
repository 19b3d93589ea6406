"""
User and role repositories.

Data access for accounts and their authorities. Role names are resolved with
an explicit join on the link table.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import Role, User, UserRole
from .base import SqlRepository


class UserRepository(SqlRepository[User]):
    """Repository for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.first(select(User).where(User.email == email))

    async def exists_by_email(self, email: str) -> bool:
        return await self.exists(select(User.id).where(User.email == email))

    async def create_with_roles(self, user: User, roles: Iterable[Role]) -> User:
        """Persist a new user together with its role links in one commit.

        Args:
            user: Unsaved user entity
            roles: Roles to grant

        Returns:
            The persisted user
        """
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise
        for role in roles:
            self.session.add(UserRole(user_id=user.id, role_id=role.id))
        await self._commit(user)
        return user

    async def get_role_names(self, user_id: int) -> List[str]:
        stmt = (
            select(Role.name)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(Role.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class RoleRepository(SqlRepository[Role]):
    """Repository for authorities."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Role)

    async def get_by_name(self, name: str) -> Optional[Role]:
        return await self.first(select(Role).where(Role.name == name))

    async def ensure_roles(self, names: Iterable[str]) -> List[Role]:
        """Create any of ``names`` that do not exist yet.

        Returns:
            The roles named, existing or newly created
        """
        roles = []
        created = False
        for name in names:
            role = await self.get_by_name(name)
            if role is None:
                role = Role(name=name)
                self.session.add(role)
                created = True
            roles.append(role)
        if created:
            await self._commit()
        return roles
