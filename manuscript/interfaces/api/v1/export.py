"""Manuscript export API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ....infrastructure.database.session import async_session
from ....modules.common.enums import ExportFormat
from ....modules.common.utils.error_handler import handle_exception
from ....modules.export.schemas import ExportRequest, ExportResult
from ....modules.export.services import ExportService
from ..dependencies import get_export_service

router = APIRouter(prefix="/export", tags=["Export"])


@router.post(
    "/pdf",
    summary="Export PDF",
    description="""
    Renders a book variant to a paginated PDF: cover page, table of contents and
    one section per chapter, each starting on a new page, with "n / total" footers.

    - **bookType**: `full` (default) or `booklet`
    - **title**: Cover title, defaults to the configured book title
    - **subtitle**: Cover subtitle, defaults by variant
    """,
    responses={
        200: {"description": "Where the PDF was written"},
        400: {"description": "The variant has no chapters"},
    },
)
async def export_pdf(
    export_request: ExportRequest,
    export_service: ExportService = Depends(get_export_service),
    db: AsyncSession = Depends(async_session),
) -> ExportResult:
    """Export a variant as PDF."""
    try:
        return await export_service.render(
            export_request.book_variant,
            ExportFormat.DOCUMENT,
            db,
            title=export_request.title,
            subtitle=export_request.subtitle,
        )
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post(
    "/web",
    summary="Export Static Site",
    description="""
    Writes a book variant as a static site: `index.html`, one `chapter-N.html` per
    chapter with links to its neighbours, and `styles.css`.
    """,
    responses={
        200: {"description": "Where the site was written"},
        400: {"description": "The variant has no chapters"},
    },
)
async def export_web(
    export_request: ExportRequest,
    export_service: ExportService = Depends(get_export_service),
    db: AsyncSession = Depends(async_session),
) -> ExportResult:
    """Export a variant as a static site."""
    try:
        return await export_service.render(
            export_request.book_variant,
            ExportFormat.SITE,
            db,
            title=export_request.title,
            subtitle=export_request.subtitle,
        )
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
