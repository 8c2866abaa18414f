"""Pydantic schemas for dashboard statistics."""

from pydantic import BaseModel

from ..common.enums import BookVariant


class ChapterStats(BaseModel):
    total_chapters: int = 0
    total_words: int = 0
    draft_count: int = 0
    editing_count: int = 0
    ready_count: int = 0


class SourceStats(BaseModel):
    total_sources: int = 0
    total_size: int = 0
    total_size_label: str = "0 Bytes"


class QuoteStats(BaseModel):
    total_quotes: int = 0


class VersionStats(BaseModel):
    total_versions: int = 0


class TodayStats(BaseModel):
    words: int = 0
    minutes: int = 0


class StatsRead(BaseModel):
    """Aggregate figures for one variant. Source and quote counts span the whole project."""

    book_variant: BookVariant
    chapters: ChapterStats
    sources: SourceStats
    quotes: QuoteStats
    versions: VersionStats
    today: TodayStats
