"""Pydantic schemas for writing sessions."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class WritingSessionCreate(BaseModel):
    """Schema for recording a writing session."""

    chapter_id: Optional[str] = None
    words_written: Annotated[int, Field(ge=0)] = 0
    duration_minutes: Annotated[int, Field(ge=0)] = 0
    started_at: Optional[datetime] = Field(default=None, description="Defaults to now")
    ended_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_interval(self) -> "WritingSessionCreate":
        if self.started_at is not None and self.ended_at is not None and self.ended_at < self.started_at:
            raise ValueError("ended_at cannot be before started_at")
        return self


class WritingSessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    chapter_id: Optional[str]
    words_written: int
    duration_minutes: int
    started_at: datetime
    ended_at: Optional[datetime]
