"""Pydantic schemas for source entities."""

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..common.enums import SourceCategory
from ..common.schemas import CreatedAtSchema


class SourceCreate(BaseModel):
    """Schema for registering a source whose bytes are already stored."""

    filename: Annotated[str, Field(max_length=255, description="Stored blob name")] = ""
    original_name: Annotated[str, Field(max_length=255, description="Name of the file as uploaded")] = ""
    file_type: Annotated[str, Field(max_length=32)] = ""
    category: Optional[SourceCategory] = None
    tags: List[str] = Field(default_factory=list)
    file_size: Annotated[int, Field(ge=0)] = 0


class SourceUpdate(BaseModel):
    """Schema for replacing the annotation lists of a source.

    Each supplied list replaces the stored one entirely.
    """

    tags: Optional[List[str]] = None
    highlights: Optional[List[str]] = None
    linked_chapters: Optional[List[str]] = None


class SourceRead(CreatedAtSchema):
    """Schema for reading source data."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    filename: str
    original_name: str
    file_type: str
    category: SourceCategory
    tags: List[str]
    highlights: List[str]
    linked_chapters: List[str]
    file_size: int

    @field_validator("tags", "highlights", "linked_chapters", mode="before")
    @classmethod
    def default_empty_list(cls, v: Optional[List[str]]) -> List[str]:
        return v or []
