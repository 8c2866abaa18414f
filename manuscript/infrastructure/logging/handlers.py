"""Handlers for console and file output.

Every handler built here can carry the request's correlation ID: the
`RequestContextFilter` stamps it on each record, the structured and JSON
formatters emit it with the other extras, and the console handler appends a
short form of it to the line so interleaved requests can be told apart.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, TextIO

from .context import get_correlation_id
from .formatters import get_formatter

NO_REQUEST = "no-correlation"


class RequestContextFilter(logging.Filter):
    """Stamp the current request's correlation ID on records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_REQUEST
        return True


class ManuscriptConsoleHandler(logging.StreamHandler):
    """Console handler for local development.

    Colors the level name when writing to a terminal and tags lines logged
    inside a request with the first eight characters of its ID.
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, stream: Optional[TextIO] = None, colors: bool = True):
        super().__init__(stream or sys.stdout)
        is_tty = getattr(self.stream, "isatty", lambda: False)()
        self.colors = colors and is_tty and sys.platform != "win32"

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)

        request_id = getattr(record, "correlation_id", NO_REQUEST)
        if request_id != NO_REQUEST:
            line = f"{line} [req={request_id[:8]}]"

        color = self.LEVEL_COLORS.get(record.levelno)
        if self.colors and color:
            line = line.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)
        return line


def _finish(handler: logging.Handler, format_type: str, level: int, correlation_id: bool) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(get_formatter(format_type))
    if correlation_id:
        handler.addFilter(RequestContextFilter())
    return handler


def create_console_handler(
    format_type: str = "detailed", level: int = logging.INFO, colors: bool = True, correlation_id: bool = True
) -> logging.Handler:
    """Create a console handler writing to stdout.

    Args:
        format_type: Formatter name, see get_formatter()
        level: Minimum level for this handler
        colors: Color the level name when stdout is a terminal
        correlation_id: Attach the request correlation ID to each record
    """
    return _finish(ManuscriptConsoleHandler(colors=colors), format_type, level, correlation_id)


def create_file_handler(
    filepath: str,
    format_type: str = "structured",
    level: int = logging.DEBUG,
    max_bytes: int = 10485760,
    backup_count: int = 5,
    correlation_id: bool = True,
) -> logging.Handler:
    """Create a size-rotated log file handler, creating its directory if needed."""
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=filepath, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    return _finish(handler, format_type, level, correlation_id)
