"""
Server database access.

Re-exports the session dependency and startup initialisation of the core
database layer for use by the web application.
"""

from book_network.core.database import async_session_maker, engine, get_session, init_db

__all__ = ["async_session_maker", "engine", "get_session", "init_db"]
