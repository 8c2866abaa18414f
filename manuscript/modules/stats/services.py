"""Aggregate statistics for the dashboard."""

from datetime import datetime, time, timedelta
from typing import Optional

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.database.models import utc_now
from ..chapter.models import Chapter
from ..common.enums import BookVariant, ChapterStatus
from ..common.utils.text import format_file_size
from ..quote.models import Quote
from ..source.models import Source
from ..version.models import Version
from ..writing_session.models import WritingSession
from .schemas import ChapterStats, QuoteStats, SourceStats, StatsRead, TodayStats, VersionStats


def _status_count(status: ChapterStatus):
    return func.coalesce(func.sum(case((Chapter.status == status.value, 1), else_=0)), 0)


class StatsService:
    """Service computing the dashboard figures with one aggregate query per table."""

    async def get_stats(self, book_variant: BookVariant, db: AsyncSession, now: Optional[datetime] = None) -> StatsRead:
        """Compute statistics for a variant.

        Args:
            book_variant: Variant whose chapters and versions are counted
            db: Database session
            now: Reference time for the "today" figures, defaults to the current UTC time

        Returns:
            Chapter, source, quote, version and today's writing figures
        """
        chapter_row = (
            await db.execute(
                select(
                    func.count(Chapter.id).label("total_chapters"),
                    func.coalesce(func.sum(Chapter.word_count), 0).label("total_words"),
                    _status_count(ChapterStatus.DRAFT).label("draft_count"),
                    _status_count(ChapterStatus.EDITING).label("editing_count"),
                    _status_count(ChapterStatus.READY).label("ready_count"),
                ).where(Chapter.book_variant == book_variant.value)
            )
        ).one()

        source_row = (
            await db.execute(
                select(
                    func.count(Source.id).label("total_sources"),
                    func.coalesce(func.sum(Source.file_size), 0).label("total_size"),
                )
            )
        ).one()

        total_quotes = await db.scalar(select(func.count(Quote.id)))
        total_versions = await db.scalar(
            select(func.count(Version.id)).where(Version.book_variant == book_variant.value)
        )

        reference = now or utc_now()
        day_start = datetime.combine(reference.date(), time.min, tzinfo=reference.tzinfo)
        today_row = (
            await db.execute(
                select(
                    func.coalesce(func.sum(WritingSession.words_written), 0).label("words"),
                    func.coalesce(func.sum(WritingSession.duration_minutes), 0).label("minutes"),
                ).where(WritingSession.started_at >= day_start, WritingSession.started_at < day_start + timedelta(days=1))
            )
        ).one()

        return StatsRead(
            book_variant=book_variant,
            chapters=ChapterStats(**chapter_row._mapping),
            sources=SourceStats(
                total_sources=source_row.total_sources,
                total_size=source_row.total_size,
                total_size_label=format_file_size(source_row.total_size),
            ),
            quotes=QuoteStats(total_quotes=total_quotes or 0),
            versions=VersionStats(total_versions=total_versions or 0),
            today=TodayStats(words=today_row.words, minutes=today_row.minutes),
        )
