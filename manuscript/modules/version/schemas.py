"""Pydantic schemas for version snapshots."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..chapter.schemas import ChapterRead
from ..common.enums import BookVariant
from ..common.schemas import CreatedAtSchema


class VersionCreate(BaseModel):
    version_name: str = Field(default="", max_length=255, description="Human readable name of the snapshot")
    description: str = Field(default="", description="What changed since the previous snapshot")


class VersionRead(CreatedAtSchema):
    """Version metadata without the chapter bodies."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    book_variant: BookVariant
    version_name: str
    description: str
    chapter_count: int
    total_words: int
    archive_path: Optional[str] = None


class VersionDetail(VersionRead):
    """Version metadata together with the captured chapters in reading order."""

    snapshot: List[ChapterRead]
