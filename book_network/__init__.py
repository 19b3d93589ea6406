"""Book Network.

This package contains the backend of a book-sharing network: members register,
publish the books they own, lend them to each other and leave feedback.

High-level architecture
-----------------------

The codebase is organized in two layers:

- ``book_network.core``: persistence (SQLModel entities and async
  repositories), the error hierarchy, password hashing and session tokens,
  logging configuration, and the API I/O schemas.
- ``book_network.server``: the FastAPI application, its routers, the services
  that hold the business rules, and the settings.

Lending workflow
----------------

1. An owner publishes a shareable book.
2. Another member borrows it; the owner is notified.
3. The borrower returns it; the owner is notified.
4. The owner approves the return; the borrower is notified.

While a book is out on loan, other members may reserve it. Every transition is
guarded by ownership and state checks implemented in
``book_network.server.services.book_service.BookService``.
"""
