"""Pydantic schemas for quote entities."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..common.schemas import CreatedAtSchema


class QuoteCreate(BaseModel):
    text: str = Field(default="", description="Quoted text")
    source_id: Optional[str] = Field(default=None, description="Source the quote was taken from")
    tags: List[str] = Field(default_factory=list)


class QuoteRead(CreatedAtSchema):
    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    source_id: Optional[str]
    tags: List[str]
    used_in_chapters: List[str]
