"""
Database entity models.

This package contains all database entity models organized by business domain.
Importing it registers every table on the shared SQLModel metadata.

Modules:
- users: Users, roles and the user/role link table
- books: Books and their sharing state
- transaction_history: Loans of books to users
- reservations: Reservations of borrowed books
- feedbacks: Notes and comments on books
- tokens: Emailed verification codes
- notifications: Lending event notifications
"""

from .books import Book
from .feedbacks import Feedback
from .notifications import Notification
from .reservations import BookReservation
from .tokens import Token
from .transaction_history import OPEN_LOAN_INDEX, BookTransactionHistory
from .users import Role, User, UserRole

__all__ = [
    "OPEN_LOAN_INDEX",
    "Book",
    "BookReservation",
    "BookTransactionHistory",
    "Feedback",
    "Notification",
    "Role",
    "Token",
    "User",
    "UserRole",
]
