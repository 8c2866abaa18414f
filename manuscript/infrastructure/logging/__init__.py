"""Centralized logging infrastructure.

Provides environment-aware logging configured from application settings and
a single factory for obtaining loggers.

Usage:
    ```python
    from manuscript.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Snapshot captured", extra={"version_id": version.id})
    ```
"""

from .config import configure_testing_logging, setup_logging_configuration
from .context import generate_correlation_id, get_correlation_id, reset_correlation_id, set_correlation_id
from .factory import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
    "configure_testing_logging",
    "generate_correlation_id",
    "get_correlation_id",
    "reset_correlation_id",
    "set_correlation_id",
    "setup_logging_configuration",
]
