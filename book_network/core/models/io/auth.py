"""
Authentication I/O models.

Request and response schemas for registration, login, account activation and
the password reset / set-password flows.
"""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field


class RegistrationRequest(BaseModel):
    """Schema for self-registration."""

    first_name: str = Field(min_length=1, description="Given name")
    last_name: str = Field(min_length=1, description="Family name")
    email: EmailStr = Field(description="Login email, must be unique")
    password: str = Field(min_length=8, description="Password, at least 8 characters")


class AuthenticationRequest(BaseModel):
    """Schema for login."""

    email: EmailStr
    password: str = Field(min_length=8)


class AuthenticationResponse(BaseModel):
    """Signed session token."""

    token: str


class TokenRequest(BaseModel):
    """Schema carrying an emailed verification code."""

    token: str = Field(min_length=1, description="Verification code")


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Schema for completing a password reset or setting an initial password."""

    token: str = Field(min_length=1, description="Verification code")
    new_password: str = Field(min_length=8)
    confirm_password: str = Field(min_length=8)
