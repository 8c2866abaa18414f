"""Tests for version service."""

import json
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from manuscript.modules.chapter.schemas import ChapterUpdate
from manuscript.modules.chapter.services import ChapterService
from manuscript.modules.common.enums import BookVariant
from manuscript.modules.common.exceptions import ValidationError, VersionNotFoundError
from manuscript.modules.version.schemas import VersionCreate
from manuscript.modules.version.services import VersionService


@pytest.fixture
def version_service(tmp_path: Path) -> VersionService:
    return VersionService(archive_root=tmp_path / "versions")


@pytest.mark.asyncio
async def test_capture_version(version_service: VersionService, db_session: AsyncSession, make_chapter):
    """Test a capture records the chapters in order with totals."""
    await make_chapter("Opening", content="one two three")
    await make_chapter("Closing", content="four five")
    await make_chapter("Elsewhere", content="ignored words", book_variant=BookVariant.BOOKLET)

    result = await version_service.capture(
        BookVariant.FULL, VersionCreate(version_name="First draft", description="Before edits"), db_session
    )

    assert result.version_name == "First draft"
    assert result.description == "Before edits"
    assert result.book_variant == BookVariant.FULL
    assert result.chapter_count == 2
    assert result.total_words == 5

    detail = await version_service.get_version(result.id, db_session)
    assert [chapter.title for chapter in detail.snapshot] == ["Opening", "Closing"]
    assert [chapter.order_index for chapter in detail.snapshot] == [0, 1]


@pytest.mark.asyncio
async def test_capture_requires_name(version_service: VersionService, db_session: AsyncSession):
    with pytest.raises(ValidationError):
        await version_service.capture(BookVariant.FULL, VersionCreate(version_name="  "), db_session)


@pytest.mark.asyncio
async def test_capture_empty_variant(version_service: VersionService, db_session: AsyncSession):
    """Test that capturing a variant without chapters is allowed."""
    result = await version_service.capture(BookVariant.BOOKLET, VersionCreate(version_name="Empty"), db_session)

    assert result.chapter_count == 0
    assert result.total_words == 0


@pytest.mark.asyncio
async def test_snapshot_is_immutable(
    version_service: VersionService, chapter_service: ChapterService, db_session: AsyncSession, make_chapter
):
    """Test that later chapter edits and deletions do not change a snapshot."""
    chapter = await make_chapter("Original", content="first wording")
    other = await make_chapter("Second", content="more")
    version = await version_service.capture(BookVariant.FULL, VersionCreate(version_name="v1"), db_session)

    await chapter_service.update_chapter(chapter.id, ChapterUpdate(title="Rewritten", content="new"), db_session)
    await chapter_service.delete_chapter(other.id, db_session)

    detail = await version_service.get_version(version.id, db_session)
    assert [item.title for item in detail.snapshot] == ["Original", "Second"]
    assert detail.snapshot[0].content == "first wording"
    assert detail.total_words == 3


@pytest.mark.asyncio
async def test_capture_writes_archive(version_service: VersionService, db_session: AsyncSession, make_chapter):
    """Test the markdown archive layout."""
    await make_chapter("The Start", content="Hello there")

    result = await version_service.capture(BookVariant.FULL, VersionCreate(version_name="Beta Read"), db_session)

    archive = Path(result.archive_path)
    assert archive.is_dir()
    assert archive.name.endswith("_beta-read")

    metadata = json.loads((archive / "metadata.json").read_text(encoding="utf-8"))
    assert metadata["version_name"] == "Beta Read"
    assert metadata["chapter_count"] == 1

    chapter_file = archive / "chapters" / "01-the-start.md"
    text = chapter_file.read_text(encoding="utf-8")
    assert text.startswith("---\ntitle: The Start\n")
    assert "word_count: 2" in text
    assert text.rstrip().endswith("Hello there")


@pytest.mark.asyncio
async def test_capture_without_archive(db_session: AsyncSession, make_chapter):
    await make_chapter("Only")

    result = await VersionService().capture(BookVariant.FULL, VersionCreate(version_name="No files"), db_session)

    assert result.archive_path is None


@pytest.mark.asyncio
async def test_list_versions_newest_first(version_service: VersionService, db_session: AsyncSession, make_chapter):
    await make_chapter("A")
    await version_service.capture(BookVariant.FULL, VersionCreate(version_name="one"), db_session)
    await version_service.capture(BookVariant.FULL, VersionCreate(version_name="two"), db_session)
    await version_service.capture(BookVariant.BOOKLET, VersionCreate(version_name="booklet"), db_session)

    result = await version_service.list_versions(BookVariant.FULL, db_session)

    assert [version.version_name for version in result] == ["two", "one"]


@pytest.mark.asyncio
async def test_get_version_not_found(version_service: VersionService, db_session: AsyncSession):
    with pytest.raises(VersionNotFoundError):
        await version_service.get_version("missing", db_session)
