"""Domain enums for the book network models."""

from __future__ import annotations

from enum import Enum


class RoleName(str, Enum):
    """Authorities granted to users."""

    user = "USER"
    admin = "ADMIN"


class TokenType(str, Enum):
    """
    Purpose of an emailed verification code.

    Lookups are always scoped to a type, so a code issued for one purpose can
    never be redeemed for another.
    """

    account_activation = "ACCOUNT_ACTIVATION"
    forgot_password = "FORGOT_PASSWORD"
    set_password = "SET_PASSWORD"


class NotificationStatus(str, Enum):
    """Lending event a notification reports."""

    borrowed = "BORROWED"
    returned = "RETURNED"
    return_approved = "RETURN_APPROVED"
    reserved = "RESERVED"
    cancelled = "CANCELLED"


class EmailTemplateName(str, Enum):
    """Builtin transactional email templates."""

    activate_account = "activate_account"
    set_password = "set_password"
    forgot_password = "forgot_password"
