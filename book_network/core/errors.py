"""Error types for the Book Network domain.

Defines a small hierarchy of exceptions raised by services to signal missing
entities, rejected guards, conflicts, token problems and transport failures.
Each client-facing error carries the HTTP status the API layer renders it with.
"""

from __future__ import annotations

from typing import Any, Optional


class BookNetworkError(Exception):
    """Base error for all client-facing domain exceptions."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------
# NotFound
# ---------------------------------------------------------------------


class EntityNotFoundError(BookNetworkError):
    """Raised when a referenced row does not exist."""

    status_code = 404

    def __init__(self, entity: str, identifier: Optional[Any] = None, message: Optional[str] = None) -> None:
        if message is None:
            message = f"No {entity} found" if identifier is None else f"No {entity} found with the ID : {identifier}"
        super().__init__(message)
        self.entity = entity
        self.identifier = identifier


class InvalidTokenError(BookNetworkError):
    """Raised when a verification code does not match any token of the expected type."""

    status_code = 404

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


# ---------------------------------------------------------------------
# Guard rejections
# ---------------------------------------------------------------------


class OperationNotPermittedError(BookNetworkError):
    """Raised when a business rule forbids the requested operation."""

    status_code = 403


# ---------------------------------------------------------------------
# Conflicts
# ---------------------------------------------------------------------


class ConflictError(BookNetworkError):
    """Raised when the request collides with existing state."""

    status_code = 409


class EmailAlreadyExistsError(ConflictError):
    def __init__(self, email: str) -> None:
        super().__init__("The email address already exists. Please use a different one.")
        self.email = email


class ReservationConflictError(ConflictError):
    def __init__(self, message: str = "You already reserved this book") -> None:
        super().__init__(message)


# ---------------------------------------------------------------------
# Token / password problems
# ---------------------------------------------------------------------


class ExpiredTokenError(BookNetworkError):
    """Raised when a verification code is used after its expiry."""

    status_code = 400

    def __init__(self, message: str = "Token expired") -> None:
        super().__init__(message)


class CodeNotVerifiedError(BookNetworkError):
    """Raised when a password reset is attempted before the code was verified."""

    status_code = 400

    def __init__(self, message: str = "Code not verified") -> None:
        super().__init__(message)


class PasswordMismatchError(BookNetworkError):
    status_code = 400

    def __init__(self, message: str = "Passwords do not match") -> None:
        super().__init__(message)


class WrongPasswordError(BookNetworkError):
    status_code = 400

    def __init__(self, message: str = "Wrong password") -> None:
        super().__init__(message)


# ---------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------


class AuthenticationError(BookNetworkError):
    """Base error for rejected credentials or account states."""

    status_code = 401


class BadCredentialsError(AuthenticationError):
    def __init__(self, message: str = "Login and / or password is incorrect") -> None:
        super().__init__(message)


class AccountDisabledError(AuthenticationError):
    def __init__(self, message: str = "User account is disabled") -> None:
        super().__init__(message)


class AccountLockedError(AuthenticationError):
    def __init__(self, message: str = "User account is locked") -> None:
        super().__init__(message)


# ---------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------


class EmailDeliveryError(BookNetworkError):
    """Raised when the mail API rejects or fails to receive a message."""

    status_code = 502

    def __init__(self, recipient: str, reason: str) -> None:
        super().__init__(f"Failed to send email to '{recipient}': {reason}")
        self.recipient = recipient
        self.reason = reason


# ---------------------------------------------------------------------
# Configuration faults (not client-facing)
# ---------------------------------------------------------------------


class MissingDefaultRoleError(RuntimeError):
    """Raised when the default ``USER`` role has not been seeded."""

    def __init__(self, role_name: str = "USER") -> None:
        super().__init__(f"{role_name.capitalize()} Role Not Found")
        self.role_name = role_name
