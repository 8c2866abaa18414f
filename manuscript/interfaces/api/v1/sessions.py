"""Writing session API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ....infrastructure.database.session import async_session
from ....modules.common.utils.error_handler import handle_exception
from ....modules.writing_session.schemas import WritingSessionCreate, WritingSessionRead
from ....modules.writing_session.services import WritingSessionService
from ..dependencies import get_writing_session_service

router = APIRouter(prefix="/sessions", tags=["Writing Sessions"])


@router.get("", summary="List Writing Sessions", description="Most recent sessions first.")
async def list_sessions(
    limit: int = Query(default=50, ge=1, le=500),
    session_service: WritingSessionService = Depends(get_writing_session_service),
    db: AsyncSession = Depends(async_session),
) -> List[WritingSessionRead]:
    """List writing sessions."""
    try:
        return await session_service.list_sessions(db, limit=limit)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Record Writing Session",
    description="""
    Records a writing session.

    - **chapter_id**: Optional chapter worked on
    - **words_written**, **duration_minutes**: Non-negative totals
    - **started_at**: Defaults to now
    """,
    responses={
        201: {"description": "Session recorded"},
        404: {"description": "Chapter not found"},
    },
)
async def record_session(
    session_data: WritingSessionCreate,
    session_service: WritingSessionService = Depends(get_writing_session_service),
    db: AsyncSession = Depends(async_session),
) -> WritingSessionRead:
    """Record a writing session."""
    try:
        return await session_service.record_session(session_data, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
