"""SQLAlchemy models for source entities."""

from typing import List

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import CreatedAtMixin, IdentifierMixin
from ...infrastructure.database.session import Base


class Source(Base, IdentifierMixin, CreatedAtMixin):
    """Metadata for a reference file kept alongside the manuscript.

    The file bytes live in the blob store under (category, filename); this
    row only describes them. tags, highlights and linked_chapters are JSON
    arrays.
    """

    __tablename__ = "sources"

    filename: Mapped[str] = mapped_column(String(255))
    original_name: Mapped[str] = mapped_column(String(255), index=True)
    file_type: Mapped[str] = mapped_column(String(32))
    category: Mapped[str] = mapped_column(String(32), index=True)
    tags: Mapped[List[str]] = mapped_column(JSON, default_factory=list)
    highlights: Mapped[List[str]] = mapped_column(JSON, default_factory=list)
    linked_chapters: Mapped[List[str]] = mapped_column(JSON, default_factory=list)
    file_size: Mapped[int] = mapped_column(Integer, default=0)
