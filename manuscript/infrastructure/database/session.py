import asyncio
import json
import os
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

from ..config.settings import DatabaseBackend, Settings, settings
from ..logging import get_logger

logger = get_logger(__name__)


def serialize_json(value: Any) -> str:
    """Serialize JSON columns with non-ASCII text kept readable, so text searches see it."""
    return json.dumps(value, ensure_ascii=False)


def build_engine(app_settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured backend.

    Pool sizing only applies to PostgreSQL; SQLite connections are cheap and
    aiosqlite picks a suitable pool on its own.
    """
    engine_kwargs: Dict[str, Any] = {
        "echo": app_settings.LOG_SQL_QUERIES,
        "future": True,
        "json_serializer": serialize_json,
    }
    if app_settings.DATABASE_BACKEND == DatabaseBackend.POSTGRES:
        engine_kwargs["pool_size"] = app_settings.POSTGRES_POOL_SIZE
        engine_kwargs["max_overflow"] = app_settings.POSTGRES_MAX_OVERFLOW
    return create_async_engine(app_settings.DATABASE_URL, **engine_kwargs)


engine = build_engine(settings)

local_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

_init_lock = asyncio.Lock()
_initialized_engines: set[int] = set()


class Base(DeclarativeBase, MappedAsDataclass):
    """Base class for all database models.

    Combines SQLAlchemy's DeclarativeBase with MappedAsDataclass so every model
    gets dataclass methods (__init__, __repr__, __eq__) generated from its
    mapped columns.

    Example:
        ```python
        class Setting(Base):
            __tablename__ = "settings"

            key: Mapped[str] = mapped_column(String(255), primary_key=True)
            value: Mapped[str] = mapped_column(Text)

        setting = Setting(key="theme", value="light")
        ```
    """

    pass


async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database session management with proper lifecycle.

    Yields:
        AsyncSession: A configured async database session.

    Note:
        Designed to be used as a FastAPI dependency via Depends(async_session).
        Each request gets its own session; a transaction begins on first use and
        is ended by the service that owns the unit of work.
    """
    async_get_db = local_session
    async with async_get_db() as db:
        yield db


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create all tables in the database if they don't exist.

    Idempotent: only missing tables are created, existing ones are left unchanged.
    """
    from ...modules import models  # noqa: F401

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_database(bind: AsyncEngine | None = None, app_settings: Settings | None = None) -> None:
    """Run the one-time startup initialization for the persistent store.

    Creates the SQLite data directory, creates tables and seeds default
    settings. Safe to call more than once; concurrent callers are serialized
    and later calls for an already initialized engine return immediately.
    """
    target = bind or engine
    app_settings = app_settings or settings

    async with _init_lock:
        if id(target) in _initialized_engines:
            return

        if app_settings.DATABASE_BACKEND == DatabaseBackend.SQLITE and bind is None:
            db_dir = os.path.dirname(os.path.abspath(app_settings.SQLITE_URI))
            os.makedirs(db_dir, exist_ok=True)

        await create_tables(target)

        from ...modules.setting.services import seed_default_settings

        session_factory = async_sessionmaker(bind=target, class_=AsyncSession, expire_on_commit=False)
        async with session_factory() as db:
            seeded = await seed_default_settings(db)

        _initialized_engines.add(id(target))
        logger.info("Database initialized", extra={"seeded_settings": seeded, "backend": app_settings.DATABASE_BACKEND.value})


async def is_database_ready(db: AsyncSession) -> bool:
    """Check that the store answers a trivial query."""
    from ...modules.setting.models import Setting

    await db.execute(select(Setting.key).limit(1))
    return True
