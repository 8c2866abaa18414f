"""Quote bank API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ....infrastructure.database.session import async_session
from ....modules.common.utils.error_handler import handle_exception
from ....modules.quote.schemas import QuoteCreate, QuoteRead
from ....modules.quote.services import QuoteService
from ..dependencies import get_quote_service

router = APIRouter(prefix="/quotes", tags=["Quotes"])


@router.get(
    "",
    summary="List Quotes",
    description="Lists quotes newest first. **search** matches the text or any tag, case-insensitively.",
)
async def list_quotes(
    search: Optional[str] = Query(default=None, max_length=255),
    quote_service: QuoteService = Depends(get_quote_service),
    db: AsyncSession = Depends(async_session),
) -> List[QuoteRead]:
    """List quotes."""
    try:
        return await quote_service.list_quotes(db, search=search)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Quote",
    responses={
        201: {"description": "Quote created"},
        400: {"description": "Missing text"},
    },
)
async def create_quote(
    quote_data: QuoteCreate,
    quote_service: QuoteService = Depends(get_quote_service),
    db: AsyncSession = Depends(async_session),
) -> QuoteRead:
    """Create a quote."""
    try:
        return await quote_service.create_quote(quote_data, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
