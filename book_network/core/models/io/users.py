"""User I/O models."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8)
    confirm_password: str = Field(min_length=8)


class UserRequest(BaseModel):
    """Schema for an administrator creating an account on someone's behalf."""

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    date_of_birth: Optional[date] = None


class IdResponse(BaseModel):
    id: int
