"""Test configuration and fixtures for Manuscript Studio."""

import asyncio
import os

# Settings are read at import time, keep the test run away from ./data
os.environ.setdefault("ENVIRONMENT", "local")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")
os.environ.setdefault("LOG_LEVEL", "ERROR")

from pathlib import Path
from typing import Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from manuscript.infrastructure.config.settings import Settings, get_settings
from manuscript.infrastructure.database.session import Base, async_session, serialize_json
from manuscript.infrastructure.logging import configure_testing_logging
from manuscript.infrastructure.storage import LocalBlobStore
from manuscript.interfaces.main import app
from manuscript.modules import models  # noqa: F401
from manuscript.modules.chapter import services as chapter_services
from manuscript.modules.chapter.schemas import ChapterCreate, ChapterRead
from manuscript.modules.chapter.services import ChapterService
from manuscript.modules.common.enums import BookVariant
from manuscript.modules.source.services import SourceService
from manuscript.modules.version import services as version_services


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Only errors reach the log during tests."""
    configure_testing_logging()


@pytest.fixture(autouse=True)
def fresh_order_lock(monkeypatch):
    """Every test runs on its own event loop, so it needs its own ordering lock."""
    lock = asyncio.Lock()
    monkeypatch.setattr(chapter_services, "chapter_order_lock", lock)
    monkeypatch.setattr(version_services, "chapter_order_lock", lock)


@pytest_asyncio.fixture(scope="function")
async def test_db_engine(tmp_path: Path):
    """Create a file-backed SQLite engine with all tables."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'manuscript-test.db'}", echo=False, json_serializer=serialize_json
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Application settings pointing every directory into the test's tmp_path."""
    return get_settings().model_copy(
        update={
            "SOURCES_DIR": str(tmp_path / "sources"),
            "VERSIONS_DIR": str(tmp_path / "versions"),
            "EXPORT_DIR": str(tmp_path / "output"),
            "DEFAULT_BOOK_TITLE": "Test Manuscript",
            "MAX_UPLOAD_SIZE": 1024,
        }
    )


@pytest_asyncio.fixture(scope="function")
async def client(test_db_engine, test_settings: Settings):
    """Create a test client where each request gets its own session on the test engine."""
    app.dependency_overrides = {}

    test_session_factory = async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        """Each request gets its own isolated database session."""
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[async_session] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture
def chapter_service() -> ChapterService:
    return ChapterService()


@pytest.fixture
def blob_store(tmp_path: Path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path / "sources")


@pytest.fixture
def source_service(blob_store: LocalBlobStore) -> SourceService:
    return SourceService(blob_store, max_upload_size=1024)


@pytest.fixture
def make_chapter(
    chapter_service: ChapterService, db_session: AsyncSession
) -> Callable[..., Awaitable[ChapterRead]]:
    """Append a chapter to a variant through the service."""

    async def _make_chapter(
        title: str, content: str = "", book_variant: BookVariant = BookVariant.FULL
    ) -> ChapterRead:
        return await chapter_service.create_chapter(book_variant, ChapterCreate(title=title, content=content), db_session)

    return _make_chapter
