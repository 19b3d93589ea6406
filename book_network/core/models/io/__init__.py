"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- common: Paging envelope
- auth: Registration, login and token flows
- books: Book requests and responses
- feedbacks: Feedback requests and responses
- notifications: Notification payloads
- users: Password change and admin user creation
"""

from .auth import (
    AuthenticationRequest,
    AuthenticationResponse,
    ForgotPasswordRequest,
    RegistrationRequest,
    ResetPasswordRequest,
    TokenRequest,
)
from .books import BookRequest, BookResponse, BorrowedBookResponse
from .common import MessageResponse, PageResponse
from .feedbacks import FeedbackRequest, FeedbackResponse
from .notifications import NotificationResponse
from .users import ChangePasswordRequest, IdResponse, UserRequest

__all__ = [
    "AuthenticationRequest",
    "AuthenticationResponse",
    "BookRequest",
    "BookResponse",
    "BorrowedBookResponse",
    "ChangePasswordRequest",
    "FeedbackRequest",
    "FeedbackResponse",
    "ForgotPasswordRequest",
    "IdResponse",
    "MessageResponse",
    "NotificationResponse",
    "PageResponse",
    "RegistrationRequest",
    "ResetPasswordRequest",
    "TokenRequest",
    "UserRequest",
]
