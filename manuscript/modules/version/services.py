"""Version snapshotter: immutable, read-consistent captures of a variant."""

import asyncio
from pathlib import Path
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.database.models import utc_now
from ...infrastructure.logging import get_logger
from ..chapter.models import Chapter
from ..chapter.schemas import ChapterRead
from ..chapter.services import chapter_order_lock
from ..common.enums import BookVariant
from ..common.exceptions import StoreError, ValidationError, VersionNotFoundError
from .archive import remove_snapshot_archive, write_snapshot_archive
from .models import Version
from .schemas import VersionCreate, VersionDetail, VersionRead

logger = get_logger(__name__)


class VersionService:
    """Service for capturing and browsing snapshots.

    A capture reads the variant's chapters with a single statement in the same
    transaction that inserts the version, while holding the chapter ordering
    lock, so the snapshot never mixes states from before and after a
    concurrent create, delete or reorder.

    Args:
        archive_root: Directory for the markdown archive. None disables archiving.
    """

    def __init__(self, archive_root: Optional[str | Path] = None):
        self.archive_root = Path(archive_root) if archive_root is not None else None

    async def capture(self, book_variant: BookVariant, version_data: VersionCreate, db: AsyncSession) -> VersionRead:
        """Capture the current chapters of a variant as a new version.

        Args:
            book_variant: Variant to capture
            version_data: Name and description of the snapshot
            db: Database session

        Returns:
            The stored version metadata

        Raises:
            ValidationError: If the version name is empty
            StoreError: If the version or its archive cannot be written
        """
        version_name = version_data.version_name.strip()
        if not version_name:
            raise ValidationError("Version name is required")

        archive_dir: Optional[Path] = None
        async with chapter_order_lock:
            try:
                result = await db.execute(
                    select(Chapter).where(Chapter.book_variant == book_variant.value).order_by(Chapter.order_index)
                )
                chapters = [ChapterRead.model_validate(chapter) for chapter in result.scalars().all()]
                created_at = utc_now()

                if self.archive_root is not None:
                    archive_dir = await asyncio.to_thread(
                        write_snapshot_archive,
                        self.archive_root,
                        book_variant,
                        version_name,
                        version_data.description,
                        created_at,
                        chapters,
                    )

                version = Version(
                    book_variant=book_variant.value,
                    version_name=version_name,
                    description=version_data.description,
                    snapshot=[chapter.model_dump(mode="json") for chapter in chapters],
                    chapter_count=len(chapters),
                    total_words=sum(chapter.word_count for chapter in chapters),
                    archive_path=str(archive_dir) if archive_dir is not None else None,
                )
                version.created_at = created_at
                db.add(version)
                await db.commit()
            except OSError as e:
                await db.rollback()
                raise StoreError(f"Failed to archive version '{version_name}'") from e
            except SQLAlchemyError as e:
                await db.rollback()
                if archive_dir is not None:
                    await asyncio.to_thread(remove_snapshot_archive, archive_dir)
                raise StoreError(f"Failed to save version '{version_name}'") from e

        logger.info(
            "Captured version",
            extra={
                "version_id": version.id,
                "book_variant": book_variant.value,
                "chapter_count": version.chapter_count,
                "total_words": version.total_words,
            },
        )
        return VersionRead.model_validate(version)

    async def list_versions(self, book_variant: BookVariant, db: AsyncSession) -> List[VersionRead]:
        """List the versions of a variant, newest first, without snapshot bodies."""
        stmt = (
            select(
                Version.id,
                Version.book_variant,
                Version.version_name,
                Version.description,
                Version.chapter_count,
                Version.total_words,
                Version.archive_path,
                Version.created_at,
            )
            .where(Version.book_variant == book_variant.value)
            .order_by(Version.created_at.desc())
        )
        result = await db.execute(stmt)
        return [VersionRead(**row) for row in result.mappings().all()]

    async def get_version(self, version_id: str, db: AsyncSession) -> VersionDetail:
        """Get a version including its captured chapters.

        Raises:
            VersionNotFoundError: If no version has this id
        """
        version = await db.get(Version, version_id)
        if version is None:
            raise VersionNotFoundError(f"Version {version_id} not found")
        return VersionDetail.model_validate(version)
