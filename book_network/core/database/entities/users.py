"""
User and role entity models.

This module contains the account tables: users, the roles they can hold and
the link table between them. Role names are resolved with explicit queries in
the repository layer rather than lazy relationships.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Field

from ..base import AuditedBase, Base


class Role(AuditedBase, table=True):
    """Entity for an authority (``USER`` or ``ADMIN``).

    Table: roles
    """

    __tablename__ = "roles"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=32, unique=True, index=True)

    def __repr__(self) -> str:
        return f"Role(id={self.id}, name={self.name})"


class UserRole(Base, table=True):
    """Link table between users and roles.

    Table: user_roles
    """

    __tablename__ = "user_roles"

    user_id: int = Field(foreign_key="users.id", primary_key=True)
    role_id: int = Field(foreign_key="roles.id", primary_key=True)


class UserBase(AuditedBase):
    """Base fields for user entity."""

    first_name: str = Field(max_length=128)
    last_name: str = Field(max_length=128)
    email: str = Field(max_length=255, unique=True, index=True)
    date_of_birth: Optional[date] = Field(default=None)
    password: str = Field(max_length=255, description="bcrypt hash")
    account_locked: bool = Field(default=False)
    enabled: bool = Field(default=False)


class User(UserBase, table=True):
    """Entity for a registered account.

    New self-registered users start disabled and become enabled once they
    redeem their activation code.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, enabled={self.enabled})"
