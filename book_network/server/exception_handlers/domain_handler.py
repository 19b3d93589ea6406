"""
Domain Exception Handler.

Renders ``BookNetworkError`` subclasses with the HTTP status they carry.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from book_network.core.errors import AuthenticationError, BookNetworkError
from book_network.core.logging_config import get_logger

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: BookNetworkError) -> JSONResponse:
    """
    Convert a domain error into a JSON response.

    Args:
        request: The HTTP request that caused the exception
        exc: The domain error raised by a service

    Returns:
        JSONResponse with ``detail`` and ``error_type``
    """
    level = logger.error if exc.status_code >= 500 else logger.info
    level(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_type": type(exc).__name__},
        headers=headers,
    )
