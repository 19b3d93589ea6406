"""Domain enums shared by entities, services and API schemas."""

from .enums import EmailTemplateName, NotificationStatus, RoleName, TokenType

__all__ = [
    "EmailTemplateName",
    "NotificationStatus",
    "RoleName",
    "TokenType",
]
