"""Version snapshot API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ....infrastructure.database.session import async_session
from ....modules.common.enums import BookVariant
from ....modules.common.utils.error_handler import handle_exception
from ....modules.version.schemas import VersionCreate, VersionDetail, VersionRead
from ....modules.version.services import VersionService
from ..dependencies import get_version_service

router = APIRouter(prefix="/versions", tags=["Versions"])


@router.get(
    "",
    summary="List Versions",
    description="Lists the snapshots of a book variant, newest first. Snapshot bodies are omitted.",
    responses={200: {"description": "Version metadata"}},
)
async def list_versions(
    book_type: BookVariant = Query(default=BookVariant.FULL, alias="bookType"),
    version_service: VersionService = Depends(get_version_service),
    db: AsyncSession = Depends(async_session),
) -> List[VersionRead]:
    """List versions of a variant."""
    try:
        return await version_service.list_versions(book_type, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Capture Version",
    description="""
    Captures the current chapters of a book variant as an immutable snapshot.

    - **version_name**: Name of the snapshot (required)
    - **description**: Optional notes
    """,
    responses={
        201: {"description": "Version captured"},
        400: {"description": "Missing version name"},
    },
)
async def capture_version(
    version_data: VersionCreate,
    book_type: BookVariant = Query(default=BookVariant.FULL, alias="bookType"),
    version_service: VersionService = Depends(get_version_service),
    db: AsyncSession = Depends(async_session),
) -> VersionRead:
    """Capture a version."""
    try:
        return await version_service.capture(book_type, version_data, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.get(
    "/{version_id}",
    summary="Get Version",
    description="Returns a version together with the chapters it captured.",
    responses={
        200: {"description": "Version with snapshot"},
        404: {"description": "Version not found"},
    },
)
async def get_version(
    version_id: str,
    version_service: VersionService = Depends(get_version_service),
    db: AsyncSession = Depends(async_session),
) -> VersionDetail:
    """Get a specific version by ID."""
    try:
        return await version_service.get_version(version_id, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
