from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ....infrastructure.database.session import async_session, is_database_ready
from ....modules.common.utils.error_handler import handle_exception
from .chapters import router as chapters_router
from .export import router as export_router
from .quotes import router as quotes_router
from .sessions import router as sessions_router
from .settings import router as settings_router
from .sources import router as sources_router
from .stats import router as stats_router
from .versions import router as versions_router

router = APIRouter(prefix="/v1")
router.include_router(chapters_router)
router.include_router(sources_router)
router.include_router(versions_router)
router.include_router(quotes_router)
router.include_router(settings_router)
router.include_router(export_router)
router.include_router(stats_router)
router.include_router(sessions_router)


@router.get(
    "/health",
    summary="API Health Check",
    description="Health check for monitoring; also verifies that the store answers queries.",
    responses={
        200: {"description": "API is healthy and the store is reachable"},
        500: {"description": "The store is unreachable"},
    },
)
async def health_check(db: AsyncSession = Depends(async_session)):
    """Health check endpoint for Docker health checks."""
    try:
        await is_database_ready(db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
    return {"status": "healthy", "message": "Manuscript Studio API is running"}
