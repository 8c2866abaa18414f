"""Chapter registry: CRUD plus dense ordering per book variant."""

import asyncio
from collections import defaultdict
from typing import Any, Dict, List, Sequence, cast

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.database.models import utc_now
from ...infrastructure.logging import get_logger
from ..common.enums import BookVariant
from ..common.exceptions import ChapterNotFoundError, StoreError, ValidationError
from ..common.utils.text import count_words, generate_slug
from .crud import chapter_crud
from .models import Chapter
from .schemas import ChapterCreate, ChapterCreateInternal, ChapterPosition, ChapterRead, ChapterUpdate

logger = get_logger(__name__)

# Serializes every operation that assigns or moves order_index values.
chapter_order_lock = asyncio.Lock()


class ChapterService:
    """Service for managing the chapters of the book variants.

    Each variant keeps its chapters in a dense sequence: positions are always
    exactly 0..N-1. Creating appends, deleting closes the gap and reorder
    applies a complete new permutation. All three run under a process-wide
    lock and inside a single transaction, so concurrent requests never observe
    or produce a gap or a duplicate position.
    """

    async def list_chapters(self, book_variant: BookVariant, db: AsyncSession) -> List[ChapterRead]:
        """List the chapters of a variant in reading order.

        Args:
            book_variant: Variant to list
            db: Database session

        Returns:
            Chapters ordered by order_index, empty if the variant has none
        """
        stmt = await chapter_crud.select(
            book_variant=book_variant.value, sort_columns="order_index", sort_orders="asc"
        )
        result = await db.execute(stmt)
        return [ChapterRead(**row) for row in result.mappings().all()]

    async def get_chapter(self, chapter_id: str, db: AsyncSession) -> ChapterRead:
        """Get a single chapter.

        Raises:
            ChapterNotFoundError: If no chapter has this id
        """
        chapter = await chapter_crud.get(db=db, id=chapter_id)
        if not chapter:
            raise ChapterNotFoundError(f"Chapter {chapter_id} not found")
        return ChapterRead(**chapter)

    async def create_chapter(
        self,
        book_variant: BookVariant,
        chapter_data: ChapterCreate,
        db: AsyncSession,
    ) -> ChapterRead:
        """Append a new draft chapter to a variant.

        Args:
            book_variant: Variant the chapter belongs to
            chapter_data: Title and optional initial content
            db: Database session

        Returns:
            The created chapter, positioned after the current last chapter

        Raises:
            ValidationError: If the title is empty or only whitespace
        """
        title = chapter_data.title.strip()
        if not title:
            raise ValidationError("Chapter title is required")

        async with chapter_order_lock:
            try:
                max_index = await db.scalar(
                    select(func.max(Chapter.order_index)).where(Chapter.book_variant == book_variant.value)
                )
                chapter_internal = ChapterCreateInternal(
                    book_variant=book_variant.value,
                    title=title,
                    slug=generate_slug(title),
                    order_index=0 if max_index is None else max_index + 1,
                    content=chapter_data.content,
                    word_count=count_words(chapter_data.content),
                )
                created_chapter = cast(
                    ChapterRead,
                    await chapter_crud.create(
                        db=db, object=chapter_internal, schema_to_select=ChapterRead, return_as_model=True
                    ),
                )
            except SQLAlchemyError as e:
                await db.rollback()
                raise StoreError("Failed to create chapter") from e

        logger.info(
            "Created chapter",
            extra={"chapter_id": created_chapter.id, "book_variant": book_variant.value, "order_index": created_chapter.order_index},
        )
        return ChapterRead.model_validate(created_chapter)

    async def update_chapter(self, chapter_id: str, chapter_data: ChapterUpdate, db: AsyncSession) -> ChapterRead:
        """Apply a partial update to a chapter.

        Only supplied, non-null fields change. A new title regenerates the
        slug and new content recomputes the word count. updated_at is refreshed
        on every call.

        Raises:
            ChapterNotFoundError: If no chapter has this id
            ValidationError: If a supplied title is empty
        """
        update_dict: Dict[str, Any] = chapter_data.model_dump(exclude_unset=True, exclude_none=True)

        if "title" in update_dict:
            title = update_dict["title"].strip()
            if not title:
                raise ValidationError("Chapter title cannot be empty")
            update_dict["title"] = title
            update_dict["slug"] = generate_slug(title)

        if "content" in update_dict:
            update_dict["word_count"] = count_words(update_dict["content"])

        if "status" in update_dict:
            update_dict["status"] = update_dict["status"].value

        update_dict["updated_at"] = utc_now()

        chapter_exists = await chapter_crud.exists(db=db, id=chapter_id)
        if not chapter_exists:
            raise ChapterNotFoundError(f"Chapter {chapter_id} not found")

        try:
            await chapter_crud.update(db=db, object=update_dict, id=chapter_id)
        except SQLAlchemyError as e:
            await db.rollback()
            raise StoreError(f"Failed to update chapter {chapter_id}") from e

        return await self.get_chapter(chapter_id, db)

    async def delete_chapter(self, chapter_id: str, db: AsyncSession) -> None:
        """Delete a chapter and close the gap it leaves in its variant.

        The remaining chapters keep their relative order and are renumbered
        0..N-2 in the same transaction as the deletion.

        Raises:
            ChapterNotFoundError: If no chapter has this id
        """
        async with chapter_order_lock:
            try:
                chapter = await db.get(Chapter, chapter_id)
                if chapter is None:
                    raise ChapterNotFoundError(f"Chapter {chapter_id} not found")

                book_variant = chapter.book_variant
                await db.delete(chapter)
                await db.flush()

                result = await db.execute(
                    select(Chapter).where(Chapter.book_variant == book_variant).order_by(Chapter.order_index)
                )
                for position, remaining in enumerate(result.scalars().all()):
                    if remaining.order_index != position:
                        remaining.order_index = position

                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise StoreError(f"Failed to delete chapter {chapter_id}") from e

        logger.info("Deleted chapter", extra={"chapter_id": chapter_id, "book_variant": book_variant})

    async def reorder(self, positions: Sequence[ChapterPosition], db: AsyncSession) -> List[ChapterRead]:
        """Move chapters to new positions atomically.

        Chapters not mentioned keep their position. After applying the request,
        the positions of every affected variant must be exactly 0..N-1;
        otherwise nothing is changed.

        Args:
            positions: Chapter ids with their target order_index
            db: Database session

        Returns:
            The chapters of every affected variant in their new order

        Raises:
            ChapterNotFoundError: If any id does not exist
            ValidationError: If an id repeats or the result would not be dense
        """
        targets = {position.id: position.order_index for position in positions}
        if len(targets) != len(positions):
            raise ValidationError("Each chapter may appear only once in a reorder request")
        if not targets:
            return []

        async with chapter_order_lock:
            try:
                result = await db.execute(select(Chapter).where(Chapter.id.in_(targets.keys())))
                moved = {chapter.id: chapter for chapter in result.scalars().all()}

                missing = [chapter_id for chapter_id in targets if chapter_id not in moved]
                if missing:
                    raise ChapterNotFoundError(f"Chapters not found: {', '.join(missing)}")

                variants = sorted({chapter.book_variant for chapter in moved.values()})
                result = await db.execute(select(Chapter).where(Chapter.book_variant.in_(variants)))

                final_positions: Dict[str, List[int]] = defaultdict(list)
                for chapter in result.scalars().all():
                    final_positions[chapter.book_variant].append(targets.get(chapter.id, chapter.order_index))

                for variant, indexes in final_positions.items():
                    if sorted(indexes) != list(range(len(indexes))):
                        raise ValidationError(
                            f"Reorder would leave {variant} chapters without a dense order 0..{len(indexes) - 1}"
                        )

                now = utc_now()
                for chapter_id, order_index in targets.items():
                    chapter = moved[chapter_id]
                    if chapter.order_index != order_index:
                        chapter.order_index = order_index
                        chapter.updated_at = now

                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise StoreError("Failed to reorder chapters") from e

        logger.info("Reordered chapters", extra={"moved": len(targets), "book_variants": variants})

        reordered: List[ChapterRead] = []
        for variant in variants:
            reordered.extend(await self.list_chapters(BookVariant(variant), db))
        return reordered
