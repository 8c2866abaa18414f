"""Dashboard statistics endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ....infrastructure.database.session import async_session
from ....modules.common.enums import BookVariant
from ....modules.common.utils.error_handler import handle_exception
from ....modules.stats.schemas import StatsRead
from ....modules.stats.services import StatsService
from ..dependencies import get_stats_service

router = APIRouter(prefix="/stats", tags=["Statistics"])


@router.get(
    "",
    summary="Get Statistics",
    description="""
    Chapter counts by status and total words for a variant, source, quote and version
    counts, and the words and minutes logged in writing sessions today (UTC).
    """,
)
async def get_stats(
    book_type: BookVariant = Query(default=BookVariant.FULL, alias="bookType"),
    stats_service: StatsService = Depends(get_stats_service),
    db: AsyncSession = Depends(async_session),
) -> StatsRead:
    """Get statistics for a variant."""
    try:
        return await stats_service.get_stats(book_type, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
