"""Logging configuration module for environment-aware setup.

Sets up the root logger from application settings:
- Development: verbose colored console logging
- Staging: structured console output, optional rotating file
- Production: JSON console output at WARNING, noisy libraries quieted
- Testing: a null handler so test output stays clean
"""

import logging

from ..config.settings import EnvironmentOption, get_settings
from .handlers import create_console_handler, create_file_handler


def setup_logging_configuration() -> None:
    """Set up logging configuration based on application settings.

    Configures the root logger and attaches handlers for the current
    environment. Called once, lazily, by the logger factory.
    """
    settings = get_settings()

    logging.getLogger().handlers.clear()

    if settings.ENVIRONMENT == EnvironmentOption.STAGING:
        handlers = _staging_handlers(settings)
    elif settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        handlers = _production_handlers(settings)
    else:
        handlers = _development_handlers(settings)

    root_logger = logging.getLogger()
    for handler in handlers:
        root_logger.addHandler(handler)

    root_logger.setLevel(settings.LOG_LEVEL_INT)

    if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        _configure_noisy_loggers()


def _development_handlers(settings) -> list[logging.Handler]:
    """Colored, detailed console output plus an optional structured log file."""
    handlers: list[logging.Handler] = []

    if settings.LOG_CONSOLE_ENABLED:
        console_level = logging.DEBUG if settings.LOG_DEVELOPMENT_VERBOSE else settings.LOG_LEVEL_INT
        handlers.append(
            create_console_handler(
                format_type="detailed", level=console_level, colors=True, correlation_id=settings.LOG_CORRELATION_ID
            )
        )

    if settings.LOG_FILE_ENABLED:
        handlers.append(
            create_file_handler(
                filepath=settings.LOG_FILE_PATH,
                format_type="structured",
                level=logging.DEBUG,
                max_bytes=settings.LOG_FILE_MAX_SIZE,
                backup_count=settings.LOG_FILE_BACKUP_COUNT,
                correlation_id=settings.LOG_CORRELATION_ID,
            )
        )

    return handlers


def _staging_handlers(settings) -> list[logging.Handler]:
    """Structured console output for machine parsing."""
    handlers: list[logging.Handler] = []

    if settings.LOG_CONSOLE_ENABLED:
        handlers.append(
            create_console_handler(
                format_type=settings.LOG_FORMAT,
                level=settings.LOG_LEVEL_INT,
                colors=False,
                correlation_id=settings.LOG_CORRELATION_ID,
            )
        )

    if settings.LOG_FILE_ENABLED:
        handlers.append(
            create_file_handler(
                filepath=settings.LOG_FILE_PATH,
                format_type="structured",
                level=logging.DEBUG,
                max_bytes=settings.LOG_FILE_MAX_SIZE,
                backup_count=settings.LOG_FILE_BACKUP_COUNT,
                correlation_id=settings.LOG_CORRELATION_ID,
            )
        )

    return handlers


def _production_handlers(settings) -> list[logging.Handler]:
    """JSON console output for log aggregation."""
    handlers: list[logging.Handler] = []

    if settings.LOG_CONSOLE_ENABLED:
        console_level = logging.WARNING if settings.LOG_PRODUCTION_OPTIMIZE else settings.LOG_LEVEL_INT
        handlers.append(
            create_console_handler(
                format_type="json", level=console_level, colors=False, correlation_id=settings.LOG_CORRELATION_ID
            )
        )

    return handlers


def _configure_noisy_loggers() -> None:
    """Quiet third-party loggers that overwhelm production logs."""
    noisy_loggers = {
        "asyncpg": logging.WARNING,
        "aiosqlite": logging.WARNING,
        "sqlalchemy.engine": logging.WARNING,
        "sqlalchemy.dialects": logging.WARNING,
        "sqlalchemy.pool": logging.WARNING,
        "multipart": logging.WARNING,
    }

    for logger_name, level in noisy_loggers.items():
        logging.getLogger(logger_name).setLevel(level)


def configure_testing_logging() -> None:
    """Configure minimal logging for test runs.

    Replaces all root handlers with a null handler and raises the threshold so
    only errors are processed.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(logging.NullHandler())
    root_logger.setLevel(logging.ERROR)

    for logger_name in ("sqlalchemy.engine", "aiosqlite", "asyncpg"):
        logging.getLogger(logger_name).setLevel(logging.ERROR)


def get_configured_logger(name: str) -> logging.Logger:
    """Get a logger that inherits from the configured root logger."""
    return logging.getLogger(name)

