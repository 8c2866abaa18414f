"""Persistent store: engine, sessions and declarative base."""

from .session import Base, async_session, create_tables, engine, init_database, local_session

__all__ = [
    "Base",
    "async_session",
    "create_tables",
    "engine",
    "init_database",
    "local_session",
]
