"""
Core utilities and configuration for Book Network.

This package provides core functionality including logging configuration,
database setup, security helpers and the shared error hierarchy.
"""

from book_network.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
