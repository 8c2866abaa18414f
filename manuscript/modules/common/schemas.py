"""Shared Pydantic schema mixins."""

from datetime import datetime

from pydantic import BaseModel, Field


class CreatedAtSchema(BaseModel):
    created_at: datetime = Field(description="Creation timestamp (UTC)")


class TimestampSchema(CreatedAtSchema):
    updated_at: datetime = Field(description="Last modification timestamp (UTC)")
