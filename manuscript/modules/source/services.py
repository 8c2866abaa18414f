"""Source catalog service: metadata in the database, bytes in the blob store."""

import asyncio
from pathlib import PurePath
from typing import Any, Dict, List, Optional, cast

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.database.models import new_identifier
from ...infrastructure.logging import get_logger
from ...infrastructure.storage import BlobStore
from ..common.enums import SourceCategory
from ..common.exceptions import BlobStorageError, SourceNotFoundError, StoreError, ValidationError
from ..common.utils.filters import has_tag, matches_search, search_clause
from ..common.utils.text import format_file_size, infer_file_type
from .crud import source_crud
from .models import Source
from .schemas import SourceCreate, SourceRead, SourceUpdate

logger = get_logger(__name__)


class SourceCreateInternal(BaseModel):
    filename: str
    original_name: str
    file_type: str
    category: str
    tags: List[str]
    file_size: int


class SourceService:
    """Service for cataloguing reference files.

    Rows are written first and the blob store is treated as a secondary
    resource: a failed upload removes its blob again, and a blob that cannot
    be deleted after its row is gone is only logged.
    """

    def __init__(self, blob_store: BlobStore, max_upload_size: int = 52428800):
        self.blob_store = blob_store
        self.max_upload_size = max_upload_size

    async def list_sources(
        self,
        db: AsyncSession,
        category: Optional[SourceCategory] = None,
        search: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> List[SourceRead]:
        """List sources, newest first.

        Args:
            db: Database session
            category: Only sources in this category
            search: Case-insensitive substring of the original name or of any single tag
            tag: Only sources carrying exactly this tag

        Returns:
            Matching sources ordered by creation time, descending
        """
        stmt = select(Source).order_by(Source.created_at.desc())
        if category is not None:
            stmt = stmt.where(Source.category == category.value)
        if search:
            stmt = stmt.where(search_clause(search, [Source.original_name], [Source.tags]))

        result = await db.execute(stmt)
        return [
            SourceRead.model_validate(source)
            for source in result.scalars().all()
            if matches_search(search, [source.original_name], source.tags) and has_tag(source.tags, tag)
        ]

    async def get_source(self, source_id: str, db: AsyncSession) -> SourceRead:
        source = await source_crud.get(db=db, id=source_id)
        if not source:
            raise SourceNotFoundError(f"Source {source_id} not found")
        return SourceRead(**source)

    async def create_source(self, source_data: SourceCreate, db: AsyncSession) -> SourceRead:
        """Register source metadata for bytes that are already in the blob store.

        Raises:
            ValidationError: If filename, original_name, file_type or category is missing
        """
        missing = [
            field
            for field in ("filename", "original_name", "file_type")
            if not getattr(source_data, field).strip()
        ]
        if source_data.category is None:
            missing.append("category")
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        source_internal = SourceCreateInternal(
            filename=source_data.filename.strip(),
            original_name=source_data.original_name.strip(),
            file_type=source_data.file_type.strip(),
            category=cast(SourceCategory, source_data.category).value,
            tags=source_data.tags,
            file_size=source_data.file_size,
        )
        return await self._persist(source_internal, db)

    async def upload_source(
        self,
        file_bytes: bytes,
        original_name: str,
        category: SourceCategory,
        tags: List[str],
        db: AsyncSession,
    ) -> SourceRead:
        """Store an uploaded file and register it.

        The blob gets a generated ``<uuid><ext>`` name so uploads never collide.
        If the metadata row cannot be written, the blob is removed again.

        Raises:
            ValidationError: If the name is missing or the file exceeds the upload limit
            BlobStorageError: If the bytes cannot be written
        """
        if not original_name or not original_name.strip():
            raise ValidationError("An uploaded file must have a name")
        if len(file_bytes) > self.max_upload_size:
            raise ValidationError(
                f"File is {format_file_size(len(file_bytes))}, the limit is {format_file_size(self.max_upload_size)}"
            )

        original_name = PurePath(original_name).name
        extension = PurePath(original_name).suffix.lower()
        filename = f"{new_identifier()}{extension}"

        size = await asyncio.to_thread(self.blob_store.save, category.value, filename, file_bytes)

        source_internal = SourceCreateInternal(
            filename=filename,
            original_name=original_name,
            file_type=infer_file_type(original_name),
            category=category.value,
            tags=tags,
            file_size=size,
        )
        try:
            created = await self._persist(source_internal, db)
        except StoreError:
            await self._discard_blob(category.value, filename)
            raise

        logger.info(
            "Uploaded source",
            extra={"source_id": created.id, "category": category.value, "size": format_file_size(size)},
        )
        return created

    async def update_source(self, source_id: str, update_data: SourceUpdate, db: AsyncSession) -> SourceRead:
        """Replace the tags, highlights or linked chapters of a source.

        Raises:
            ValidationError: If no field is supplied
            SourceNotFoundError: If no source has this id
        """
        update_dict: Dict[str, Any] = update_data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_dict:
            raise ValidationError("No updates provided")

        source_exists = await source_crud.exists(db=db, id=source_id)
        if not source_exists:
            raise SourceNotFoundError(f"Source {source_id} not found")

        try:
            await source_crud.update(db=db, object=update_dict, id=source_id)
        except SQLAlchemyError as e:
            await db.rollback()
            raise StoreError(f"Failed to update source {source_id}") from e

        return await self.get_source(source_id, db)

    async def delete_source(self, source_id: str, db: AsyncSession) -> None:
        """Delete a source row, then its blob.

        A blob that cannot be removed is logged and left behind; the metadata
        deletion stands.

        Raises:
            SourceNotFoundError: If no source has this id
        """
        source = await db.get(Source, source_id)
        if source is None:
            raise SourceNotFoundError(f"Source {source_id} not found")

        category, filename = source.category, source.filename
        try:
            await db.delete(source)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise StoreError(f"Failed to delete source {source_id}") from e

        await self._discard_blob(category, filename)
        logger.info("Deleted source", extra={"source_id": source_id, "category": category})

    async def _persist(self, source_internal: SourceCreateInternal, db: AsyncSession) -> SourceRead:
        try:
            created_source = cast(
                SourceRead,
                await source_crud.create(db=db, object=source_internal, schema_to_select=SourceRead, return_as_model=True),
            )
        except SQLAlchemyError as e:
            await db.rollback()
            raise StoreError("Failed to save source metadata") from e
        return SourceRead.model_validate(created_source)

    async def _discard_blob(self, category: str, filename: str) -> None:
        try:
            await asyncio.to_thread(self.blob_store.delete, category, filename)
        except BlobStorageError as e:
            logger.warning(f"Could not remove blob {category}/{filename}: {e}")
