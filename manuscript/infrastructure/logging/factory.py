"""Logger factory with lazy, settings-driven configuration.

This module is the single entry point for obtaining loggers. The first call
configures the logging system from application settings; later calls just
hand out named loggers, optionally wrapped with bound context.
"""

import inspect
import logging
from threading import Lock
from typing import Any, MutableMapping, Optional, Tuple, Union

from ..config.settings import get_settings
from .config import get_configured_logger, setup_logging_configuration

_logging_configured = False
_configuration_lock = Lock()


def get_logger(name: Optional[str] = None, **extra_context) -> Union[logging.Logger, logging.LoggerAdapter]:
    """Get a properly configured logger with automatic module detection.

    Args:
        name: Logger name. If None, automatically detects from calling module.
        **extra_context: Context merged into every record from this logger.

    Returns:
        Configured logger instance ready for use.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Chapter deleted", extra={"chapter_id": chapter_id})

        export_logger = get_logger(__name__, component="export")
        ```
    """
    _ensure_logging_configured()

    if name is None:
        name = _detect_calling_module()

    base_logger = get_configured_logger(name)

    if extra_context:
        return ContextLoggerAdapter(base_logger, extra_context)
    return base_logger


def configure_logging() -> None:
    """Configure logging now instead of on the first get_logger() call."""
    global _logging_configured

    with _configuration_lock:
        if not _logging_configured:
            setup_logging_configuration()
            _logging_configured = True

            settings = get_settings()
            logging.getLogger(__name__).info(
                f"Logging configured for {settings.ENVIRONMENT.value} environment",
                extra={
                    "log_level": settings.LOG_LEVEL,
                    "log_format": settings.LOG_FORMAT,
                    "file_enabled": settings.LOG_FILE_ENABLED,
                },
            )


def _ensure_logging_configured() -> None:
    """Ensure logging is configured, calling setup if needed."""
    if not _logging_configured:
        configure_logging()


def _detect_calling_module() -> str:
    """Return the module name of the code that called get_logger()."""
    frame = inspect.currentframe()

    try:
        for _ in range(2):
            if frame is None:
                break
            frame = frame.f_back

        if frame is not None:
            return str(frame.f_globals.get("__name__", "unknown"))
        return "unknown"

    finally:
        del frame


class ContextLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges bound context with per-call extra values.

    The standard LoggerAdapter replaces the caller's extra dict; this one
    merges them, with per-call values taking precedence.
    """

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> Tuple[str, MutableMapping[str, Any]]:
        extra = kwargs.get("extra", {})

        adapter_extra = self.extra if isinstance(self.extra, dict) else {}
        if isinstance(extra, dict):
            kwargs["extra"] = {**adapter_extra, **extra}
        else:
            kwargs["extra"] = dict(adapter_extra)

        return msg, kwargs
