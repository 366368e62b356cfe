"""Tests for the package logger setup."""

import logging

from sbom_policy.logging_config import logger, set_log_level, setup_logging


class TestLoggingConfig:
    def test_single_stream_handler(self):
        assert logger.name == "sbom_policy"
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_setup_is_idempotent(self):
        assert setup_logging("DEBUG") is logger
        assert len(logger.handlers) == 1

    def test_set_log_level(self):
        try:
            set_log_level("debug")
            assert logger.level == logging.DEBUG
            assert all(handler.level == logging.DEBUG for handler in logger.handlers)
        finally:
            set_log_level("WARNING")
        assert logger.level == logging.WARNING
