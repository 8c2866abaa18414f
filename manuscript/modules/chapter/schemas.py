"""Pydantic schemas for chapter entities."""

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..common.enums import BookVariant, ChapterStatus
from ..common.schemas import TimestampSchema


class ChapterCreate(BaseModel):
    """Schema for creating a new chapter at the end of a variant."""

    title: str = Field(default="", max_length=255, description="Chapter title")
    content: str = Field(default="", description="Chapter body in markdown")


class ChapterCreateInternal(BaseModel):
    book_variant: str
    title: str
    slug: str
    order_index: int
    content: str
    word_count: int


class ChapterUpdate(BaseModel):
    """Schema for a partial chapter update. Omitted or null fields are left unchanged."""

    title: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = None
    status: Optional[ChapterStatus] = None
    notes: Optional[str] = None


class ChapterRead(TimestampSchema):
    """Schema for reading chapter data."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    book_variant: BookVariant
    title: str
    slug: str
    content: str
    order_index: int
    status: ChapterStatus
    word_count: int
    notes: str


class ChapterPosition(BaseModel):
    id: str
    order_index: Annotated[int, Field(ge=0, description="Target zero-based position within the variant")]


class ChapterReorderRequest(BaseModel):
    """Schema for moving several chapters at once."""

    chapters: List[ChapterPosition]

    @field_validator("chapters")
    @classmethod
    def validate_unique_ids(cls, v: List[ChapterPosition]) -> List[ChapterPosition]:
        ids = [position.id for position in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Each chapter may appear only once in a reorder request")
        return v
