"""Writing session log."""

from typing import Any, Dict, List, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.database.models import utc_now
from ..chapter.crud import chapter_crud
from ..common.exceptions import ChapterNotFoundError, StoreError
from .crud import writing_session_crud
from .schemas import WritingSessionCreate, WritingSessionRead


class WritingSessionService:
    """Service for recording writing sessions and listing recent ones."""

    async def record_session(self, session_data: WritingSessionCreate, db: AsyncSession) -> WritingSessionRead:
        """Record a finished or ongoing writing session.

        Raises:
            ChapterNotFoundError: If a chapter_id is given that does not exist
        """
        if session_data.chapter_id is not None:
            chapter_exists = await chapter_crud.exists(db=db, id=session_data.chapter_id)
            if not chapter_exists:
                raise ChapterNotFoundError(f"Chapter {session_data.chapter_id} not found")

        session_dict: Dict[str, Any] = session_data.model_dump()
        if session_dict["started_at"] is None:
            session_dict["started_at"] = utc_now()

        try:
            created_session = cast(
                WritingSessionRead,
                await writing_session_crud.create(
                    db=db,
                    object=WritingSessionCreate(**session_dict),
                    schema_to_select=WritingSessionRead,
                    return_as_model=True,
                ),
            )
        except SQLAlchemyError as e:
            await db.rollback()
            raise StoreError("Failed to record writing session") from e

        return WritingSessionRead.model_validate(created_session)

    async def list_sessions(self, db: AsyncSession, limit: int = 50) -> List[WritingSessionRead]:
        """List the most recent sessions, newest first."""
        stmt = await writing_session_crud.select(sort_columns="started_at", sort_orders="desc")
        result = await db.execute(stmt.limit(limit))
        return [WritingSessionRead(**row) for row in result.mappings().all()]
