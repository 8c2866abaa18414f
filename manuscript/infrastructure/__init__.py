"""Infrastructure module for the application."""

from .config import get_settings
from .database.session import async_session, create_tables, init_database

__all__ = [
    "async_session",
    "create_tables",
    "get_settings",
    "init_database",
]
