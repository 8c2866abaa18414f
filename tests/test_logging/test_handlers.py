"""Tests for logging handlers."""

import io
import logging
from pathlib import Path

import pytest

from manuscript.infrastructure.logging import reset_correlation_id, set_correlation_id
from manuscript.infrastructure.logging.handlers import (
    ManuscriptConsoleHandler,
    RequestContextFilter,
    create_file_handler,
)


@pytest.fixture
def console():
    stream = io.StringIO()
    handler = ManuscriptConsoleHandler(stream=stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    handler.addFilter(RequestContextFilter())

    logger = logging.getLogger("manuscript.tests.handlers")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    yield logger, stream
    logger.removeHandler(handler)


def test_console_tags_lines_with_request_id(console):
    logger, stream = console

    token = set_correlation_id("abcdef1234567890")
    try:
        logger.info("saved chapter")
    finally:
        reset_correlation_id(token)

    assert stream.getvalue() == "INFO saved chapter [req=abcdef12]\n"


def test_console_outside_request(console):
    logger, stream = console

    logger.warning("startup")

    assert stream.getvalue() == "WARNING startup\n"


def test_console_without_tty_has_no_colors():
    handler = ManuscriptConsoleHandler(stream=io.StringIO(), colors=True)

    assert handler.colors is False


def test_file_handler_creates_directory(tmp_path: Path):
    path = tmp_path / "logs" / "nested" / "manuscript.log"

    handler = create_file_handler(str(path), format_type="json")
    try:
        assert path.parent.is_dir()
        assert any(isinstance(f, RequestContextFilter) for f in handler.filters)
    finally:
        handler.close()
