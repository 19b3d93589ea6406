"""Unit tests for logging configuration module.

Tests verify that ``setup_logging`` applies levels, formats and per-module
levels, and only writes a log file when file logging is switched on.
"""

import logging
from unittest.mock import patch

import pytest

from book_network.core import logging_config
from book_network.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    resolve_format,
    setup_logging,
)


def _console_handler() -> logging.Handler:
    return next(h for h in logging.getLogger().handlers if isinstance(h, logging.StreamHandler))


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)

        assert _console_handler().level == expected_level

    def test_module_levels_applied(self):
        setup_logging(enable_file=False)

        for module_name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(level)


class TestFormats:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("simple", SIMPLE_FORMAT),
            ("DETAILED", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
            ("unknown", DETAILED_FORMAT),
            (None, DETAILED_FORMAT),
        ],
    )
    def test_resolve_format(self, name, expected):
        assert resolve_format(name) == expected

    def test_setup_logging_uses_requested_format(self):
        setup_logging(log_format="simple", enable_file=False)

        assert _console_handler().formatter._fmt == SIMPLE_FORMAT


class TestFileLogging:
    def test_no_file_handler_when_disabled(self):
        setup_logging(enable_file=False)

        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)

    def test_file_handler_written_to_log_dir(self, tmp_path):
        with patch.object(logging_config, "ENABLE_FILE_LOGGING", True), patch.object(
            logging_config, "LOG_FILE_DIR", str(tmp_path)
        ):
            setup_logging(enable_file=True)

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        try:
            assert len(file_handlers) == 1
            assert file_handlers[0].baseFilename == str(tmp_path / "book_network.log")
        finally:
            for handler in file_handlers:
                logging.getLogger().removeHandler(handler)
                handler.close()


def test_get_logger_returns_named_logger():
    assert get_logger("book_network.server.services.book_service").name == "book_network.server.services.book_service"
