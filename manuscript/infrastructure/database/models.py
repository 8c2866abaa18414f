import uuid as uuid_pkg
from datetime import UTC, datetime
from typing import Any, Optional

from sqlalchemy import DateTime, String
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import Mapped, MappedAsDataclass, mapped_column
from sqlalchemy.types import TypeDecorator


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def new_identifier() -> str:
    """Generate a new string identifier for a record."""
    return str(uuid_pkg.uuid4())


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime column that always round-trips as UTC.

    SQLite has no native timezone support and hands back naive values, while
    PostgreSQL returns aware ones. Normalizing on the way in and out keeps
    comparisons between freshly created and re-read rows valid on both.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: Any, dialect: Dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


class IdentifierMixin(MappedAsDataclass):
    """Mixin to add a generated string primary key to database models.

    Identifiers are UUID4 values stored as 36 character strings so the same
    schema works on SQLite and PostgreSQL. The field is excluded from dataclass
    initialization to prevent manual assignment during model creation.

    Example:
        ```python
        class Quote(Base, IdentifierMixin, CreatedAtMixin):
            __tablename__ = "quotes"
            text: Mapped[str] = mapped_column(Text)

        quote = Quote(text="...")
        # quote.id is generated on construction
        ```
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default_factory=new_identifier,
        init=False,
    )


class CreatedAtMixin(MappedAsDataclass):
    """Mixin for append-only records that only track their creation time."""

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default_factory=utc_now,
        nullable=False,
        index=True,
        init=False,
    )


class TimestampMixin(MappedAsDataclass):
    """Mixin for adding created_at and updated_at timestamp columns.

    This mixin provides automatic timestamp tracking for database models,
    recording when records are created and last updated with timezone-aware
    UTC values.

    Attributes:
        created_at: Timestamp when the record was created.
        updated_at: Timestamp when the record was last updated.

    Note:
        Both timestamps are excluded from dataclass initialization (init=False)
        to prevent manual timestamp manipulation during model creation.

        updated_at is not maintained by a database trigger; services refresh it
        explicitly on every successful update.
    """

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default_factory=utc_now,
        nullable=False,
        init=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default_factory=utc_now,
        nullable=False,
        init=False,
    )
