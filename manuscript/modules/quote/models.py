"""SQLAlchemy models for quote entities."""

from typing import List, Optional

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import CreatedAtMixin, IdentifierMixin
from ...infrastructure.database.session import Base


class Quote(Base, IdentifierMixin, CreatedAtMixin):
    """A reference quote, optionally attributed to a source."""

    __tablename__ = "quotes"

    text: Mapped[str] = mapped_column(Text)
    source_id: Mapped[Optional[str]] = mapped_column(String(36), default=None, index=True)
    tags: Mapped[List[str]] = mapped_column(JSON, default_factory=list)
    used_in_chapters: Mapped[List[str]] = mapped_column(JSON, default_factory=list)
