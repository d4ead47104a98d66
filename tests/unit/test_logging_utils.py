#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for logging configuration."""

import logging

import pytest

from newsformat.logging_utils import LIBRARY_LOGGER_NAME, configure_logging, resolve_level


@pytest.fixture(autouse=True)
def restore_loggers():
    """Put the root and library loggers back after each test."""
    saved = []
    for name in (None, LIBRARY_LOGGER_NAME):
        logger = logging.getLogger(name)
        saved.append((logger, list(logger.handlers), logger.level, logger.propagate))
    yield
    for logger, handlers, level, propagate in saved:
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.mark.parametrize(
        "value,expected",
        [(logging.DEBUG, logging.DEBUG), ("warning", logging.WARNING), ("ERROR", logging.ERROR), ("loud", logging.INFO)],
    )
    def test_resolve_level(self, value, expected):
        """Test names and numbers resolve to levels."""
        assert resolve_level(value) == expected

    def test_configures_root(self):
        """Test the root logger is configured by default."""
        logger = configure_logging("DEBUG")

        assert logger is logging.getLogger()
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_library_only(self):
        """Test only the library logger is touched in library mode."""
        root = logging.getLogger()
        root_handlers = list(root.handlers)

        logger = configure_logging(logging.WARNING, library_only=True)

        assert logger.name == LIBRARY_LOGGER_NAME
        assert logger.propagate is False
        assert root.handlers == root_handlers

    def test_log_file(self, tmp_path):
        """Test records are teed to the log file."""
        path = tmp_path / "newsformat.log"

        logger = configure_logging("INFO", log_file=str(path), trace_mode=True, library_only=True)
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        text = path.read_text(encoding="utf-8")
        assert "[INFO] [newsformat] hello" in text
        assert "Logging to file" in text
