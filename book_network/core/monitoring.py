"""
Monitoring and Tracing Configuration Module.

Integrates Logfire for tracing the Book Network server:
- API endpoint tracing (FastAPI)
- Database operation monitoring (SQLAlchemy)
- Outgoing HTTP calls, such as the transactional email API (HTTPX)
- Per-request performance records

Tracing is opt-in through ``LOGFIRE_ENABLED`` and needs ``LOGFIRE_TOKEN``.
While it is off, ``log_api_request`` does nothing and the request logging
middleware's own log lines are the only record of a request.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import logfire
from fastapi import FastAPI
from logfire import SamplingOptions

if TYPE_CHECKING:
    from book_network.server.core.config import MonitoringConfig

logger = logging.getLogger(__name__)

_logfire_configured = False


def _monitoring_config() -> MonitoringConfig:
    # Deferred so importing this module never bootstraps the settings
    from book_network.server.core.config import settings

    return settings.monitoring


def is_logfire_configured() -> bool:
    return _logfire_configured


def initialize_logfire(
    app: Optional[FastAPI] = None,
    engine: Optional[Any] = None,
    config: Optional[MonitoringConfig] = None,
) -> bool:
    """
    Initialize Logfire for monitoring and tracing.

    Args:
        app: FastAPI application to instrument. FastAPI tracing is skipped without it.
        engine: Async SQLAlchemy engine to instrument. Without it only engines
            created after this call are traced.
        config: Monitoring configuration, read from the settings when omitted

    Returns:
        Whether Logfire was configured
    """
    global _logfire_configured

    config = config or _monitoring_config()
    if not config.enabled:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not config.token:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return False

    logfire.configure(
        token=config.token,
        service_name=config.service_name,
        service_version=config.service_version,
        environment=config.environment,
        sampling=SamplingOptions(head=config.sample_rate),
    )
    _logfire_configured = True

    # Instrumentation failures degrade tracing, never the server
    if config.trace_sqlalchemy:
        try:
            if engine is not None:
                logfire.instrument_sqlalchemy(engine=engine.sync_engine)
            else:
                logfire.instrument_sqlalchemy()
            logger.info("Logfire: SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument SQLAlchemy: {e}")

    if config.trace_httpx:
        try:
            logfire.instrument_httpx()
            logger.info("Logfire: HTTPX instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument HTTPX: {e}")

    if config.trace_fastapi:
        if app is None:
            logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")
        else:
            try:
                logfire.instrument_fastapi(app=app)
                logger.info("Logfire: FastAPI instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument FastAPI: {e}")

    logger.info(
        f"Logfire monitoring initialized: environment={config.environment}, service={config.service_name}"
    )
    return True


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Record an API request with its performance metrics in Logfire.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _logfire_configured:
        return
    try:
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")
