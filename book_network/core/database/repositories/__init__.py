"""
Database repository layer using SQLModel.

This package contains all repository classes organized by business domain.
Each module provides typed data access operations for its SQLModel entity.

Modules:
- base: BaseRepository interface, SqlRepository CRUD and QueryBuilder utilities
- users: User and role repositories
- books: Catalog queries
- transaction_history: Loan predicates used by the lending guards
- reservations: Reservation lookups
- feedbacks: Feedback listings and notes
- tokens: Verification token lookups and cleanup
- notifications: Notification listings and bulk read
"""

from .base import BaseRepository, QueryBuilder, SqlRepository
from .books import BookRepository
from .feedbacks import FeedbackRepository
from .notifications import NotificationRepository
from .reservations import ReservationRepository
from .tokens import TokenRepository
from .transaction_history import TransactionHistoryRepository
from .users import RoleRepository, UserRepository

__all__ = [
    "BaseRepository",
    "BookRepository",
    "FeedbackRepository",
    "NotificationRepository",
    "QueryBuilder",
    "ReservationRepository",
    "RoleRepository",
    "SqlRepository",
    "TokenRepository",
    "TransactionHistoryRepository",
    "UserRepository",
]
