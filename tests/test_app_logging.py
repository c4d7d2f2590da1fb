"""Tests for logging configuration."""

import logging

from howl2go.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("howl2go")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_debug_level() -> None:
    configure_logging(debug=True)

    assert logging.getLogger("howl2go").level == logging.DEBUG

    configure_logging()

    assert logging.getLogger("howl2go").level == logging.INFO
