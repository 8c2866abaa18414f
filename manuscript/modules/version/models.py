"""SQLAlchemy models for version snapshots."""

from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import CreatedAtMixin, IdentifierMixin
from ...infrastructure.database.session import Base


class Version(Base, IdentifierMixin, CreatedAtMixin):
    """An immutable snapshot of one variant's chapters.

    snapshot holds the serialized chapters by value, so later edits to the
    live chapters never reach a stored version. Rows are only ever inserted.
    """

    __tablename__ = "versions"

    book_variant: Mapped[str] = mapped_column(String(16), index=True)
    version_name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, default="")
    snapshot: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default_factory=list)
    chapter_count: Mapped[int] = mapped_column(Integer, default=0)
    total_words: Mapped[int] = mapped_column(Integer, default=0)
    archive_path: Mapped[Optional[str]] = mapped_column(String(1024), default=None)
