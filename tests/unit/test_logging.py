"""Tests for setup_logging and get_logger."""

import logging

import pytest

from ngram_search.shared.telemetry.logging import PACKAGE_LOGGER, get_logger, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestSetupLogging:
    def test_level_from_settings(
        self, package_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEBUG", "true")
        assert setup_logging().level == logging.DEBUG

    def test_info_by_default(
        self, package_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEBUG", "false")
        assert setup_logging().level == logging.INFO

    def test_idempotent(self, package_logger: logging.Logger) -> None:
        setup_logging(logging.WARNING)
        count = len(package_logger.handlers)
        setup_logging(logging.ERROR)
        assert len(package_logger.handlers) == count
        assert package_logger.level == logging.ERROR

    def test_module_loggers_are_children(self) -> None:
        logger = get_logger("ngram_search.application.services.ngram_service")
        assert logger.name.startswith(PACKAGE_LOGGER + ".")
