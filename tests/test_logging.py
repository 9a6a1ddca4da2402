"""Tests for logging setup."""

import logging
from collections.abc import Iterator

import pytest
import structlog

from advidly.config import Settings
from advidly.logging import HANDLER_NAME, setup_logging


def _our_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    yield
    setup_logging(Settings(log_level="WARNING"))


def test_setup_installs_one_handler() -> None:
    """Test repeated setup replaces its handler instead of stacking them."""
    setup_logging(Settings(log_level="INFO"))
    setup_logging(Settings(log_level="DEBUG", log_format="json"))

    [handler] = _our_handlers()
    assert isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
    assert logging.getLogger().level == logging.DEBUG


def test_setup_keeps_foreign_handlers() -> None:
    """Test handlers installed by others survive setup."""
    foreign = logging.NullHandler()
    logging.getLogger().addHandler(foreign)
    try:
        setup_logging(Settings(log_level="INFO"))

        assert foreign in logging.getLogger().handlers
    finally:
        logging.getLogger().removeHandler(foreign)


def test_setup_quiets_noisy_loggers() -> None:
    """Test access and multipart logs are held to warnings."""
    setup_logging(Settings(log_level="DEBUG"))

    assert logging.getLogger("uvicorn.access").level == logging.WARNING
    assert logging.getLogger("python_multipart").level == logging.WARNING
