"""Tests for localeweave.logging setup."""

import importlib
import logging

import pytest

import localeweave.logging.setup as logging_setup
from localeweave.logging import configure_logging, get_module_logger
from localeweave.logging.setup import _is_test_environment

pytestmark = pytest.mark.unit


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_detects_test_environment(self):
        """Running under pytest is detected."""
        assert _is_test_environment() is True

    def test_suppressed_in_tests(self):
        """Logging is silenced while tests run."""
        logger = configure_logging()
        assert logger is not None
        assert logging.root.level > logging.CRITICAL


class TestGetModuleLogger:
    """Tests for get_module_logger()."""

    def test_returns_bound_logger(self):
        """Module loggers can log structured events."""
        logger = get_module_logger()
        assert hasattr(logger, "info")
        assert hasattr(logger, "bind")

    def test_logging_does_not_raise(self):
        """Structured events are accepted while suppressed."""
        logger = get_module_logger()
        logger.info("test_event", locale="de_AT", entry_count=3)
        logger.warning("test_warning", file="missing.yml")


class TestImportSideEffects:
    """Tests that importing the package leaves host logging alone."""

    def test_import_keeps_root_logger(self):
        """Importing the logging module does not reconfigure the root logger."""
        original_level = logging.root.level
        original_handlers = list(logging.root.handlers)
        logging.root.setLevel(logging.WARNING)
        try:
            importlib.reload(logging_setup)

            assert logging.root.level == logging.WARNING
            assert logging.root.handlers == original_handlers
        finally:
            logging.root.setLevel(original_level)
