"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Monitoring configuration defaults and environment overrides
- Logfire initialization when disabled, missing a token, or enabled
- Instrumentation feature flags and graceful degradation
- API request records only once Logfire is configured
"""

from unittest.mock import MagicMock, patch

import pytest

from book_network.core import monitoring
from book_network.core.monitoring import initialize_logfire, log_api_request
from book_network.server.core.config import MonitoringConfig, Settings


def _config(**overrides) -> MonitoringConfig:
    values = {"enabled": True, "token": "test-token", "service_name": "test-service", "environment": "test"}
    values.update(overrides)
    return MonitoringConfig(**values)


@pytest.fixture(autouse=True)
def reset_configured(monkeypatch):
    monkeypatch.setattr(monitoring, "_logfire_configured", False)


class TestMonitoringConfiguration:
    """Test environment variable configuration for Logfire."""

    def test_logfire_disabled_by_default(self, monkeypatch):
        monkeypatch.delenv("LOGFIRE_ENABLED", raising=False)

        config = Settings(_env_file=None).monitoring

        assert config.enabled is False
        assert config.token is None
        assert config.trace_sqlalchemy and config.trace_httpx and config.trace_fastapi

    def test_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOGFIRE_ENABLED", "true")
        monkeypatch.setenv("LOGFIRE_TOKEN", "test-token-12345")
        monkeypatch.setenv("LOGFIRE_SERVICE_NAME", "my-custom-service")
        monkeypatch.setenv("LOGFIRE_SAMPLE_RATE", "0.25")
        monkeypatch.setenv("LOGFIRE_TRACE_HTTPX", "false")

        config = Settings(_env_file=None).monitoring

        assert config.enabled is True
        assert config.token == "test-token-12345"
        assert config.service_name == "my-custom-service"
        assert config.sample_rate == 0.25
        assert config.trace_httpx is False


class TestInitializeLogfire:
    """Test Logfire initialization function."""

    @patch("book_network.core.monitoring.logfire")
    @patch("book_network.core.monitoring.logger")
    def test_initialize_logfire_disabled(self, mock_logger, mock_logfire):
        assert initialize_logfire(config=_config(enabled=False)) is False

        mock_logfire.configure.assert_not_called()
        mock_logger.info.assert_called_once()
        assert "disabled" in mock_logger.info.call_args[0][0].lower()
        assert monitoring.is_logfire_configured() is False

    @patch("book_network.core.monitoring.logfire")
    @patch("book_network.core.monitoring.logger")
    def test_initialize_logfire_no_token(self, mock_logger, mock_logfire):
        assert initialize_logfire(config=_config(token=None)) is False

        mock_logfire.configure.assert_not_called()
        mock_logger.warning.assert_called_once()
        assert "token" in mock_logger.warning.call_args[0][0].lower()

    @patch("book_network.core.monitoring.logfire")
    def test_configure_called_with_settings(self, mock_logfire):
        assert initialize_logfire(config=_config(service_version="2.0.0", sample_rate=0.5)) is True

        kwargs = mock_logfire.configure.call_args.kwargs
        assert kwargs["token"] == "test-token"
        assert kwargs["service_name"] == "test-service"
        assert kwargs["service_version"] == "2.0.0"
        assert kwargs["environment"] == "test"
        assert kwargs["sampling"].head == 0.5
        assert monitoring.is_logfire_configured() is True

    @patch("book_network.core.monitoring.logfire")
    def test_instruments_app_engine_and_httpx(self, mock_logfire):
        app = MagicMock()
        engine = MagicMock()

        initialize_logfire(app, engine=engine, config=_config())

        mock_logfire.instrument_fastapi.assert_called_once_with(app=app)
        mock_logfire.instrument_sqlalchemy.assert_called_once_with(engine=engine.sync_engine)
        mock_logfire.instrument_httpx.assert_called_once_with()

    @patch("book_network.core.monitoring.logfire")
    def test_skips_fastapi_without_app(self, mock_logfire):
        initialize_logfire(config=_config())

        mock_logfire.instrument_fastapi.assert_not_called()
        mock_logfire.instrument_sqlalchemy.assert_called_once_with()

    @patch("book_network.core.monitoring.logfire")
    def test_flags_disable_instrumentation(self, mock_logfire):
        config = _config(trace_sqlalchemy=False, trace_httpx=False, trace_fastapi=False)

        initialize_logfire(MagicMock(), engine=MagicMock(), config=config)

        mock_logfire.configure.assert_called_once()
        mock_logfire.instrument_sqlalchemy.assert_not_called()
        mock_logfire.instrument_httpx.assert_not_called()
        mock_logfire.instrument_fastapi.assert_not_called()

    @patch("book_network.core.monitoring.logfire")
    @patch("book_network.core.monitoring.logger")
    def test_instrumentation_failure_is_logged(self, mock_logger, mock_logfire):
        mock_logfire.instrument_httpx.side_effect = RuntimeError("boom")

        assert initialize_logfire(MagicMock(), config=_config()) is True

        warnings = [c.args[0] for c in mock_logger.warning.call_args_list]
        assert any("Failed to instrument HTTPX" in w for w in warnings)
        mock_logfire.instrument_fastapi.assert_called_once()


class TestLogAPIRequest:
    """Test log_api_request function."""

    @patch("book_network.core.monitoring.logfire")
    def test_not_sent_before_configuration(self, mock_logfire):
        log_api_request(method="GET", path="/api/v1/books", status_code=200, duration_ms=12.5)

        mock_logfire.info.assert_not_called()

    @patch("book_network.core.monitoring.logfire")
    def test_sent_once_configured(self, mock_logfire):
        initialize_logfire(config=_config())

        log_api_request(method="POST", path="/api/v1/books/borrow/1", status_code=201, duration_ms=234.5)

        mock_logfire.info.assert_called_once_with(
            "API request completed",
            method="POST",
            path="/api/v1/books/borrow/1",
            status_code=201,
            duration_ms=234.5,
        )

    @patch("book_network.core.monitoring.logfire")
    def test_failures_do_not_propagate(self, mock_logfire, monkeypatch):
        monkeypatch.setattr(monitoring, "_logfire_configured", True)
        mock_logfire.info.side_effect = RuntimeError("exporter down")

        log_api_request(method="GET", path="/api/test", status_code=500, duration_ms=100)
