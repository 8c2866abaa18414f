"""Quote bank service."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.logging import get_logger
from ..common.exceptions import StoreError, ValidationError
from ..common.utils.filters import matches_search, search_clause
from .models import Quote
from .schemas import QuoteCreate, QuoteRead

logger = get_logger(__name__)


class QuoteService:
    """Service for collecting quotes and finding them again."""

    async def list_quotes(self, db: AsyncSession, search: Optional[str] = None) -> List[QuoteRead]:
        """List quotes newest first, optionally filtered by a substring of the text or of any tag."""
        stmt = select(Quote).order_by(Quote.created_at.desc())
        if search:
            stmt = stmt.where(search_clause(search, [Quote.text], [Quote.tags]))

        result = await db.execute(stmt)
        return [
            QuoteRead.model_validate(quote)
            for quote in result.scalars().all()
            if matches_search(search, [quote.text], quote.tags)
        ]

    async def create_quote(self, quote_data: QuoteCreate, db: AsyncSession) -> QuoteRead:
        """Add a quote to the bank.

        Raises:
            ValidationError: If the text is empty
        """
        text = quote_data.text.strip()
        if not text:
            raise ValidationError("Quote text is required")

        quote = Quote(text=text, source_id=quote_data.source_id, tags=list(quote_data.tags))
        try:
            db.add(quote)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise StoreError("Failed to save quote") from e

        logger.debug("Created quote", extra={"quote_id": quote.id})
        return QuoteRead.model_validate(quote)
