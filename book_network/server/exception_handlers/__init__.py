"""
Exception handlers for the Book Network server.

This package contains custom exception handlers for domain errors and
unexpected failures, and a setup function to register them with FastAPI.
"""

from .domain_handler import domain_exception_handler
from .global_handler import global_exception_handler, setup_exception_handlers

__all__ = ["domain_exception_handler", "global_exception_handler", "setup_exception_handlers"]
