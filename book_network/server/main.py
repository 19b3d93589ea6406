"""
Main Application Entry Point.

This module initializes the FastAPI application, sets up Logfire monitoring,
configures middleware (CORS, request logging), registers exception handlers
and includes all API routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from book_network.core.database import engine
from book_network.core.logging_config import get_logger, setup_logging
from book_network.core.monitoring import initialize_logfire

from .api.v1 import auth, books, feedbacks, health, notifications, users
from .core import constant
from .core.config import settings
from .core.database import init_db
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables and seeds the default roles on startup.
    """
    logger.info("Starting up Book Network Server...")
    await init_db()
    logger.info("Database initialized successfully")

    yield

    logger.info("Shutting down Book Network Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Book Network Server API

    Backend of a book-lending network: accounts, a shared catalog, borrowing,
    returns and their approval, reservations, feedback and live notifications.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Initialize Logfire monitoring (no-op unless LOGFIRE_ENABLED)
initialize_logfire(app, engine=engine)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)

app.include_router(health.router, prefix=constant.API_V1_STR, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_V1_STR}/auth", tags=["auth"])
app.include_router(books.router, prefix=f"{constant.API_V1_STR}/books", tags=["books"])
app.include_router(feedbacks.router, prefix=f"{constant.API_V1_STR}/feedbacks", tags=["feedbacks"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users", tags=["users"])
app.include_router(notifications.router, prefix=f"{constant.API_V1_STR}/ws", tags=["notifications"])
