"""Chapter API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ....infrastructure.database.session import async_session
from ....modules.chapter.schemas import ChapterCreate, ChapterRead, ChapterReorderRequest, ChapterUpdate
from ....modules.chapter.services import ChapterService
from ....modules.common.enums import BookVariant
from ....modules.common.utils.error_handler import handle_exception
from ..dependencies import get_chapter_service

router = APIRouter(prefix="/chapters", tags=["Chapters"])


@router.get(
    "",
    summary="List Chapters",
    description="""
    Lists the chapters of a book variant in reading order.

    - **bookType**: `full` (default) or `booklet`
    """,
    responses={200: {"description": "Chapters ordered by position"}},
)
async def list_chapters(
    book_type: BookVariant = Query(default=BookVariant.FULL, alias="bookType"),
    chapter_service: ChapterService = Depends(get_chapter_service),
    db: AsyncSession = Depends(async_session),
) -> List[ChapterRead]:
    """List chapters of a variant."""
    try:
        return await chapter_service.list_chapters(book_type, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Chapter",
    description="""
    Appends a new draft chapter to the end of a book variant.

    The slug and word count are derived from the title and content.

    - **title**: Chapter title (required, not blank)
    - **content**: Initial markdown body
    """,
    responses={
        201: {"description": "Chapter created"},
        400: {"description": "Missing or blank title"},
    },
)
async def create_chapter(
    chapter_data: ChapterCreate,
    book_type: BookVariant = Query(default=BookVariant.FULL, alias="bookType"),
    chapter_service: ChapterService = Depends(get_chapter_service),
    db: AsyncSession = Depends(async_session),
) -> ChapterRead:
    """Create a new chapter."""
    try:
        return await chapter_service.create_chapter(book_type, chapter_data, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post(
    "/reorder",
    summary="Reorder Chapters",
    description="""
    Moves chapters to new positions in one atomic step.

    Every listed chapter must exist and the resulting positions of each affected
    variant must be exactly 0..N-1. Otherwise nothing changes.
    """,
    responses={
        200: {"description": "Chapters of the affected variants in their new order"},
        400: {"description": "Positions would not be dense"},
        404: {"description": "A chapter does not exist"},
    },
)
async def reorder_chapters(
    reorder_data: ChapterReorderRequest,
    chapter_service: ChapterService = Depends(get_chapter_service),
    db: AsyncSession = Depends(async_session),
) -> List[ChapterRead]:
    """Reorder chapters."""
    try:
        return await chapter_service.reorder(reorder_data.chapters, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.get(
    "/{chapter_id}",
    summary="Get Chapter",
    responses={
        200: {"description": "Chapter details"},
        404: {"description": "Chapter not found"},
    },
)
async def get_chapter(
    chapter_id: str,
    chapter_service: ChapterService = Depends(get_chapter_service),
    db: AsyncSession = Depends(async_session),
) -> ChapterRead:
    """Get a specific chapter by ID."""
    try:
        return await chapter_service.get_chapter(chapter_id, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.put(
    "/{chapter_id}",
    summary="Update Chapter",
    description="""
    Partially updates a chapter. Omitted or null fields are left unchanged.

    - **title**: New title, regenerates the slug
    - **content**: New body, recomputes the word count
    - **status**: `draft`, `editing` or `ready`
    - **notes**: Private notes
    """,
    responses={
        200: {"description": "Updated chapter"},
        400: {"description": "Blank title"},
        404: {"description": "Chapter not found"},
    },
)
async def update_chapter(
    chapter_id: str,
    chapter_data: ChapterUpdate,
    chapter_service: ChapterService = Depends(get_chapter_service),
    db: AsyncSession = Depends(async_session),
) -> ChapterRead:
    """Update a chapter."""
    try:
        return await chapter_service.update_chapter(chapter_id, chapter_data, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.delete(
    "/{chapter_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Chapter",
    description="""Deletes a chapter and renumbers the rest of its variant so positions stay 0..N-1.

    The remaining chapters keep their relative order.
    """,
    responses={
        204: {"description": "Chapter deleted"},
        404: {"description": "Chapter not found"},
    },
)
async def delete_chapter(
    chapter_id: str,
    chapter_service: ChapterService = Depends(get_chapter_service),
    db: AsyncSession = Depends(async_session),
):
    """Delete a chapter."""
    try:
        await chapter_service.delete_chapter(chapter_id, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
