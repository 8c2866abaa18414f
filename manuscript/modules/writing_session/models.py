"""SQLAlchemy models for writing sessions."""

from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import IdentifierMixin, UTCDateTime, utc_now
from ...infrastructure.database.session import Base


class WritingSession(Base, IdentifierMixin):
    """A stretch of writing time, used for the daily progress figures."""

    __tablename__ = "writing_sessions"

    chapter_id: Mapped[Optional[str]] = mapped_column(String(36), default=None, index=True)
    words_written: Mapped[int] = mapped_column(Integer, default=0)
    duration_minutes: Mapped[int] = mapped_column(Integer, default=0)
    started_at: Mapped[datetime] = mapped_column(UTCDateTime(), default_factory=utc_now, index=True)
    ended_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), default=None)
