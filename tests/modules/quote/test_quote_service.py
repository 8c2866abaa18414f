"""Tests for quote service."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from manuscript.modules.common.enums import SourceCategory
from manuscript.modules.common.exceptions import ValidationError
from manuscript.modules.quote.schemas import QuoteCreate
from manuscript.modules.quote.services import QuoteService
from manuscript.modules.source.services import SourceService


@pytest.fixture
def quote_service() -> QuoteService:
    return QuoteService()


@pytest.mark.asyncio
async def test_create_quote(quote_service: QuoteService, db_session: AsyncSession):
    result = await quote_service.create_quote(QuoteCreate(text="  Write drunk, edit sober.  ", tags=["craft"]), db_session)

    assert result.text == "Write drunk, edit sober."
    assert result.tags == ["craft"]
    assert result.source_id is None
    assert result.used_in_chapters == []
    assert result.id is not None


@pytest.mark.asyncio
async def test_create_quote_with_source(
    quote_service: QuoteService, source_service: SourceService, db_session: AsyncSession
):
    source = await source_service.upload_source(b"x", "book.pdf", SourceCategory.DOCS, [], db_session)

    result = await quote_service.create_quote(QuoteCreate(text="A line", source_id=source.id), db_session)

    assert result.source_id == source.id


@pytest.mark.asyncio
async def test_create_quote_keeps_unknown_source_reference(quote_service: QuoteService, db_session: AsyncSession):
    """Test that source_id is stored as given, without checking the catalog."""
    result = await quote_service.create_quote(QuoteCreate(text="A line", source_id="missing"), db_session)

    assert result.source_id == "missing"


@pytest.mark.asyncio
async def test_create_quote_requires_text(quote_service: QuoteService, db_session: AsyncSession):
    with pytest.raises(ValidationError):
        await quote_service.create_quote(QuoteCreate(text=""), db_session)


@pytest.mark.asyncio
async def test_list_quotes_search(quote_service: QuoteService, db_session: AsyncSession):
    """Test search over quote text and tags, case-insensitive."""
    await quote_service.create_quote(QuoteCreate(text="The sea was calm", tags=["ocean"]), db_session)
    await quote_service.create_quote(QuoteCreate(text="Mountains rise", tags=["Landscape"]), db_session)

    assert [quote.text for quote in await quote_service.list_quotes(db_session, search="SEA")] == ["The sea was calm"]
    assert [quote.text for quote in await quote_service.list_quotes(db_session, search="landsc")] == ["Mountains rise"]
    assert await quote_service.list_quotes(db_session, search="desert") == []


@pytest.mark.asyncio
async def test_list_quotes_newest_first(quote_service: QuoteService, db_session: AsyncSession):
    await quote_service.create_quote(QuoteCreate(text="first"), db_session)
    await quote_service.create_quote(QuoteCreate(text="second"), db_session)

    result = await quote_service.list_quotes(db_session)

    assert [quote.text for quote in result] == ["second", "first"]


@pytest.mark.asyncio
async def test_list_quotes_search_hebrew(quote_service: QuoteService, db_session: AsyncSession):
    """Test search for non-ASCII text and tags."""
    await quote_service.create_quote(QuoteCreate(text="על האהבה", tags=["אהבה"]), db_session)
    await quote_service.create_quote(QuoteCreate(text="Unrelated", tags=["שלום"]), db_session)
    await quote_service.create_quote(QuoteCreate(text="Déjà vu"), db_session)

    assert [quote.text for quote in await quote_service.list_quotes(db_session, search="אהבה")] == ["על האהבה"]
    assert [quote.text for quote in await quote_service.list_quotes(db_session, search="שלום")] == ["Unrelated"]
    assert [quote.text for quote in await quote_service.list_quotes(db_session, search="DÉJÀ")] == ["Déjà vu"]
