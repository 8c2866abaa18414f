"""Tests for dashboard statistics."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from manuscript.modules.chapter.schemas import ChapterUpdate
from manuscript.modules.chapter.services import ChapterService
from manuscript.modules.common.enums import BookVariant, ChapterStatus, SourceCategory
from manuscript.modules.quote.schemas import QuoteCreate
from manuscript.modules.quote.services import QuoteService
from manuscript.modules.source.services import SourceService
from manuscript.modules.stats.services import StatsService
from manuscript.modules.version.schemas import VersionCreate
from manuscript.modules.version.services import VersionService
from manuscript.modules.writing_session.schemas import WritingSessionCreate
from manuscript.modules.writing_session.services import WritingSessionService


@pytest.fixture
def stats_service() -> StatsService:
    return StatsService()


@pytest.mark.asyncio
async def test_stats_empty(stats_service: StatsService, db_session: AsyncSession):
    result = await stats_service.get_stats(BookVariant.FULL, db_session)

    assert result.chapters.total_chapters == 0
    assert result.chapters.total_words == 0
    assert result.sources.total_sources == 0
    assert result.sources.total_size_label == "0 Bytes"
    assert result.quotes.total_quotes == 0
    assert result.versions.total_versions == 0
    assert result.today.words == 0
    assert result.today.minutes == 0


@pytest.mark.asyncio
async def test_stats_counts(
    stats_service: StatsService,
    chapter_service: ChapterService,
    source_service: SourceService,
    db_session: AsyncSession,
    make_chapter,
):
    """Test chapter figures are per variant while sources and quotes span the project."""
    first = await make_chapter("One", content="a b c")
    await make_chapter("Two", content="d e")
    await make_chapter("Booklet", content="f g h i", book_variant=BookVariant.BOOKLET)
    await chapter_service.update_chapter(first.id, ChapterUpdate(status=ChapterStatus.READY), db_session)

    await source_service.upload_source(b"x" * 512, "a.txt", SourceCategory.NOTES, [], db_session)
    await source_service.upload_source(b"x" * 512, "b.txt", SourceCategory.NOTES, [], db_session)
    await QuoteService().create_quote(QuoteCreate(text="quoted"), db_session)
    await VersionService().capture(BookVariant.FULL, VersionCreate(version_name="v1"), db_session)

    result = await stats_service.get_stats(BookVariant.FULL, db_session)

    assert result.book_variant == BookVariant.FULL
    assert result.chapters.total_chapters == 2
    assert result.chapters.total_words == 5
    assert result.chapters.ready_count == 1
    assert result.chapters.draft_count == 1
    assert result.chapters.editing_count == 0
    assert result.sources.total_sources == 2
    assert result.sources.total_size == 1024
    assert result.sources.total_size_label == "1 KB"
    assert result.quotes.total_quotes == 1
    assert result.versions.total_versions == 1

    booklet = await stats_service.get_stats(BookVariant.BOOKLET, db_session)
    assert booklet.chapters.total_chapters == 1
    assert booklet.chapters.total_words == 4
    assert booklet.versions.total_versions == 0


@pytest.mark.asyncio
async def test_stats_today(stats_service: StatsService, db_session: AsyncSession):
    """Test that only sessions started on the reference day are summed."""
    now = datetime(2026, 5, 10, 15, 30, tzinfo=UTC)
    sessions = WritingSessionService()
    await sessions.record_session(
        WritingSessionCreate(words_written=300, duration_minutes=20, started_at=now.replace(hour=0, minute=5)), db_session
    )
    await sessions.record_session(
        WritingSessionCreate(words_written=200, duration_minutes=10, started_at=now - timedelta(hours=1)), db_session
    )
    await sessions.record_session(
        WritingSessionCreate(words_written=999, duration_minutes=99, started_at=now - timedelta(days=1)), db_session
    )

    result = await stats_service.get_stats(BookVariant.FULL, db_session, now=now)

    assert result.today.words == 500
    assert result.today.minutes == 30
