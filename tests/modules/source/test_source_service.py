"""Tests for source service."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from manuscript.infrastructure.storage import LocalBlobStore
from manuscript.modules.common.enums import SourceCategory
from manuscript.modules.common.exceptions import (
    BlobStorageError,
    SourceNotFoundError,
    ValidationError,
)
from manuscript.modules.source.schemas import SourceCreate, SourceUpdate
from manuscript.modules.source.services import SourceService


@pytest.mark.asyncio
async def test_upload_source(source_service: SourceService, blob_store: LocalBlobStore, db_session: AsyncSession):
    """Test an upload stores the bytes under a generated name and registers them."""
    result = await source_service.upload_source(
        b"interview transcript", "Interview 1.PDF", SourceCategory.NOTEBOOKLM, ["history"], db_session
    )

    assert result.original_name == "Interview 1.PDF"
    assert result.file_type == "pdf"
    assert result.category == SourceCategory.NOTEBOOKLM
    assert result.tags == ["history"]
    assert result.file_size == len(b"interview transcript")
    assert result.filename.endswith(".pdf")
    assert result.filename != result.original_name
    assert result.highlights == []
    assert result.linked_chapters == []
    assert blob_store.read("notebooklm", result.filename) == b"interview transcript"


@pytest.mark.asyncio
async def test_upload_source_strips_directories(source_service: SourceService, db_session: AsyncSession):
    """Test that a client-supplied path is reduced to its file name."""
    result = await source_service.upload_source(b"x", "../../notes.md", SourceCategory.NOTES, [], db_session)

    assert result.original_name == "notes.md"
    assert result.file_type == "markdown"


@pytest.mark.asyncio
async def test_upload_source_unknown_extension(source_service: SourceService, db_session: AsyncSession):
    """Test that unknown extensions get the generic type."""
    result = await source_service.upload_source(b"x", "diagram.svg", SourceCategory.OTHER, [], db_session)

    assert result.file_type == "other"


@pytest.mark.asyncio
async def test_upload_source_too_large(source_service: SourceService, blob_store: LocalBlobStore, db_session: AsyncSession):
    """Test the upload limit."""
    with pytest.raises(ValidationError):
        await source_service.upload_source(b"x" * 2048, "big.txt", SourceCategory.DOCS, [], db_session)

    assert await source_service.list_sources(db_session) == []
    assert not (blob_store.root / "docs").exists()


@pytest.mark.asyncio
async def test_create_source_metadata(source_service: SourceService, db_session: AsyncSession):
    """Test registering metadata directly."""
    result = await source_service.create_source(
        SourceCreate(
            filename="abc.docx",
            original_name="Draft plan.docx",
            file_type="word",
            category=SourceCategory.DOCS,
            tags=["plan"],
            file_size=2048,
        ),
        db_session,
    )

    assert result.filename == "abc.docx"
    assert result.file_size == 2048
    assert result.category == SourceCategory.DOCS


@pytest.mark.asyncio
async def test_create_source_missing_fields(source_service: SourceService, db_session: AsyncSession):
    """Test that each required field is reported."""
    with pytest.raises(ValidationError) as exc_info:
        await source_service.create_source(SourceCreate(filename="abc.txt"), db_session)

    assert "original_name" in str(exc_info.value)
    assert "category" in str(exc_info.value)


@pytest.mark.asyncio
async def test_list_sources_filters(source_service: SourceService, db_session: AsyncSession):
    """Test category, search and tag filters."""
    await source_service.upload_source(b"1", "Interview.pdf", SourceCategory.NOTEBOOKLM, ["Oral History"], db_session)
    await source_service.upload_source(b"2", "budget.txt", SourceCategory.DOCS, ["finance"], db_session)
    await source_service.upload_source(b"3", "site.html", SourceCategory.WEBSITE, ["history", "web"], db_session)

    by_category = await source_service.list_sources(db_session, category=SourceCategory.DOCS)
    assert [source.original_name for source in by_category] == ["budget.txt"]

    by_name = await source_service.list_sources(db_session, search="INTERVIEW")
    assert [source.original_name for source in by_name] == ["Interview.pdf"]

    by_tag_text = await source_service.list_sources(db_session, search="histor")
    assert {source.original_name for source in by_tag_text} == {"Interview.pdf", "site.html"}

    by_exact_tag = await source_service.list_sources(db_session, tag="history")
    assert [source.original_name for source in by_exact_tag] == ["site.html"]


@pytest.mark.asyncio
async def test_list_sources_newest_first(source_service: SourceService, db_session: AsyncSession):
    await source_service.upload_source(b"1", "first.txt", SourceCategory.NOTES, [], db_session)
    await source_service.upload_source(b"2", "second.txt", SourceCategory.NOTES, [], db_session)

    result = await source_service.list_sources(db_session)

    assert [source.original_name for source in result] == ["second.txt", "first.txt"]


@pytest.mark.asyncio
async def test_search_does_not_match_across_tags(source_service: SourceService, db_session: AsyncSession):
    """Test that a search term must be inside a single tag."""
    await source_service.upload_source(b"1", "a.txt", SourceCategory.NOTES, ["ab", "cd"], db_session)

    assert await source_service.list_sources(db_session, search='b", "c') == []


@pytest.mark.asyncio
async def test_search_non_ascii(source_service: SourceService, db_session: AsyncSession):
    """Test search for Hebrew tags and accented names."""
    hebrew = await source_service.upload_source(b"1", "notes.md", SourceCategory.NOTES, ["עברית"], db_session)
    accented = await source_service.upload_source(b"2", "École.pdf", SourceCategory.DOCS, [], db_session)
    await source_service.upload_source(b"3", "plain.txt", SourceCategory.NOTES, ["english"], db_session)

    assert [source.id for source in await source_service.list_sources(db_session, search="עברית")] == [hebrew.id]
    assert [source.id for source in await source_service.list_sources(db_session, search="école")] == [accented.id]
    assert [source.id for source in await source_service.list_sources(db_session, tag="עברית")] == [hebrew.id]


@pytest.mark.asyncio
async def test_create_source_returns_stored_row(source_service: SourceService, db_session: AsyncSession):
    result = await source_service.upload_source(b"abc", "draft.md", SourceCategory.NOTES, ["x"], db_session)

    stored = await source_service.get_source(result.id, db_session)
    assert (stored.id, stored.filename, stored.tags, stored.file_size) == (result.id, result.filename, ["x"], 3)
    assert result.created_at is not None


@pytest.mark.asyncio
async def test_update_source_replaces_lists(source_service: SourceService, db_session: AsyncSession):
    """Test that supplied lists replace the stored ones and others stay."""
    source = await source_service.upload_source(b"1", "a.txt", SourceCategory.NOTES, ["old"], db_session)

    result = await source_service.update_source(
        source.id, SourceUpdate(highlights=["key passage"], linked_chapters=["chapter-1"]), db_session
    )

    assert result.tags == ["old"]
    assert result.highlights == ["key passage"]
    assert result.linked_chapters == ["chapter-1"]


@pytest.mark.asyncio
async def test_update_source_requires_changes(source_service: SourceService, db_session: AsyncSession):
    source = await source_service.upload_source(b"1", "a.txt", SourceCategory.NOTES, [], db_session)

    with pytest.raises(ValidationError):
        await source_service.update_source(source.id, SourceUpdate(), db_session)


@pytest.mark.asyncio
async def test_update_source_not_found(source_service: SourceService, db_session: AsyncSession):
    with pytest.raises(SourceNotFoundError):
        await source_service.update_source("missing", SourceUpdate(tags=["x"]), db_session)


@pytest.mark.asyncio
async def test_delete_source_removes_blob(source_service: SourceService, blob_store: LocalBlobStore, db_session: AsyncSession):
    """Test that deleting removes the row and then the stored file."""
    source = await source_service.upload_source(b"1", "a.txt", SourceCategory.NOTES, [], db_session)

    await source_service.delete_source(source.id, db_session)

    with pytest.raises(SourceNotFoundError):
        await source_service.get_source(source.id, db_session)
    assert not blob_store.exists("notes", source.filename)


@pytest.mark.asyncio
async def test_delete_source_with_missing_blob(source_service: SourceService, blob_store: LocalBlobStore, db_session: AsyncSession):
    """Test that a blob already gone does not block the deletion."""
    source = await source_service.upload_source(b"1", "a.txt", SourceCategory.NOTES, [], db_session)
    blob_store.delete("notes", source.filename)

    await source_service.delete_source(source.id, db_session)

    assert await source_service.list_sources(db_session) == []


@pytest.mark.asyncio
async def test_delete_source_blob_failure_is_logged(source_service: SourceService, db_session: AsyncSession, monkeypatch):
    """Test that a failing blob delete leaves the row deletion in place."""
    source = await source_service.upload_source(b"1", "a.txt", SourceCategory.NOTES, [], db_session)

    def failing_delete(category: str, filename: str) -> bool:
        raise BlobStorageError("disk unavailable")

    monkeypatch.setattr(source_service.blob_store, "delete", failing_delete)

    await source_service.delete_source(source.id, db_session)

    assert await source_service.list_sources(db_session) == []


@pytest.mark.asyncio
async def test_delete_source_not_found(source_service: SourceService, db_session: AsyncSession):
    with pytest.raises(SourceNotFoundError):
        await source_service.delete_source("missing", db_session)
