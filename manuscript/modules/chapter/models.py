"""SQLAlchemy models for chapter entities."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import IdentifierMixin, TimestampMixin
from ...infrastructure.database.session import Base
from ..common.enums import ChapterStatus


class Chapter(Base, IdentifierMixin, TimestampMixin):
    """A chapter of one book variant.

    Within a variant, order_index values always form the dense range 0..N-1.
    slug and word_count are derived from title and content and never set
    directly by clients.
    """

    __tablename__ = "chapters"

    book_variant: Mapped[str] = mapped_column(String(16), index=True)
    title: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255))
    order_index: Mapped[int] = mapped_column(Integer)
    content: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(16), default=ChapterStatus.DRAFT.value)
    word_count: Mapped[int] = mapped_column(Integer, default=0)
    notes: Mapped[str] = mapped_column(Text, default="")
