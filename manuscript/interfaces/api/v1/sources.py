"""Source catalog API endpoints."""

import json
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ....infrastructure.database.session import async_session
from ....modules.common.enums import SourceCategory
from ....modules.common.exceptions import ValidationError
from ....modules.common.utils.error_handler import handle_exception
from ....modules.source.schemas import SourceCreate, SourceRead, SourceUpdate
from ....modules.source.services import SourceService
from ..dependencies import get_source_service

router = APIRouter(prefix="/sources", tags=["Sources"])


def parse_tags(tags: Optional[str]) -> List[str]:
    """Parse the JSON array of tags sent with an upload form."""
    if not tags or not tags.strip():
        return []
    try:
        parsed = json.loads(tags)
    except json.JSONDecodeError as e:
        raise ValidationError("tags must be a JSON array of strings") from e
    if not isinstance(parsed, list) or not all(isinstance(tag, str) for tag in parsed):
        raise ValidationError("tags must be a JSON array of strings")
    return parsed


@router.get(
    "",
    summary="List Sources",
    description="""
    Lists catalogued sources, newest first.

    - **category**: Only sources in this category
    - **search**: Case-insensitive match on the original file name or on any tag
    - **tag**: Only sources carrying exactly this tag
    """,
    responses={200: {"description": "Matching sources"}},
)
async def list_sources(
    category: Optional[SourceCategory] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=255),
    tag: Optional[str] = Query(default=None, max_length=255),
    source_service: SourceService = Depends(get_source_service),
    db: AsyncSession = Depends(async_session),
) -> List[SourceRead]:
    """List sources."""
    try:
        return await source_service.list_sources(db, category=category, search=search, tag=tag)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Register Source",
    description="""
    Registers metadata for a file that is already stored.

    - **filename**, **original_name**, **file_type**, **category** are required
    """,
    responses={
        201: {"description": "Source registered"},
        400: {"description": "Missing required fields"},
    },
)
async def create_source(
    source_data: SourceCreate,
    source_service: SourceService = Depends(get_source_service),
    db: AsyncSession = Depends(async_session),
) -> SourceRead:
    """Register a source."""
    try:
        return await source_service.create_source(source_data, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post(
    "/upload",
    status_code=status.HTTP_201_CREATED,
    summary="Upload Source File",
    description="""
    Uploads a file into the catalog.

    The file is stored under a generated name and its type is inferred from the extension.

    - **file**: The file to store
    - **category**: `notebooklm`, `docs`, `notes`, `website` or `other`
    - **tags**: JSON array of strings, e.g. `["history", "interviews"]`
    """,
    responses={
        201: {"description": "File stored and registered"},
        400: {"description": "Invalid tags or file too large"},
    },
)
async def upload_source(
    file: UploadFile = File(...),
    category: SourceCategory = Form(...),
    tags: Optional[str] = Form(default=None),
    source_service: SourceService = Depends(get_source_service),
    db: AsyncSession = Depends(async_session),
) -> SourceRead:
    """Upload a source file."""
    try:
        parsed_tags = parse_tags(tags)
        file_bytes = await file.read()
        return await source_service.upload_source(file_bytes, file.filename or "", category, parsed_tags, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
    finally:
        await file.close()


@router.get(
    "/{source_id}",
    summary="Get Source",
    responses={
        200: {"description": "Source details"},
        404: {"description": "Source not found"},
    },
)
async def get_source(
    source_id: str,
    source_service: SourceService = Depends(get_source_service),
    db: AsyncSession = Depends(async_session),
) -> SourceRead:
    """Get a specific source by ID."""
    try:
        return await source_service.get_source(source_id, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.put(
    "/{source_id}",
    summary="Update Source Annotations",
    description="""
    Replaces the tags, highlights or linked chapters of a source.

    Each supplied list replaces the stored one. At least one must be given.
    """,
    responses={
        200: {"description": "Updated source"},
        400: {"description": "No updates provided"},
        404: {"description": "Source not found"},
    },
)
async def update_source(
    source_id: str,
    update_data: SourceUpdate,
    source_service: SourceService = Depends(get_source_service),
    db: AsyncSession = Depends(async_session),
) -> SourceRead:
    """Update a source."""
    try:
        return await source_service.update_source(source_id, update_data, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.delete(
    "/{source_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Source",
    description="Deletes a source and then its stored file.",
    responses={
        204: {"description": "Source deleted"},
        404: {"description": "Source not found"},
    },
)
async def delete_source(
    source_id: str,
    source_service: SourceService = Depends(get_source_service),
    db: AsyncSession = Depends(async_session),
):
    """Delete a source."""
    try:
        await source_service.delete_source(source_id, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
