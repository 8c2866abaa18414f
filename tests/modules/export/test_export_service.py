"""Tests for export service."""

from pathlib import Path
from typing import List

import pymupdf
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from manuscript.infrastructure.rendering import DocumentRenderer, PdfRenderer, StaticSiteWriter
from manuscript.modules.chapter.schemas import ChapterPosition
from manuscript.modules.chapter.services import ChapterService
from manuscript.modules.common.enums import BookVariant, ExportFormat
from manuscript.modules.common.exceptions import EmptyInputError, StoreError
from manuscript.modules.export.schemas import Manuscript
from manuscript.modules.export.services import ExportService


class RecordingRenderer(DocumentRenderer):
    """Keeps every manuscript it is asked to render."""

    def __init__(self):
        self.rendered: List[Manuscript] = []

    def render(self, manuscript: Manuscript) -> bytes:
        self.rendered.append(manuscript)
        return b"%PDF-1.7 fake"


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    return tmp_path / "output"


@pytest.fixture
def export_service(export_dir: Path) -> ExportService:
    return ExportService(PdfRenderer(), StaticSiteWriter(), export_dir=export_dir, default_title="My Book")


@pytest.mark.asyncio
async def test_build_manuscript(export_service: ExportService, db_session: AsyncSession, make_chapter):
    await make_chapter("First", content="# Scene\n\nIt **began**.")
    await make_chapter("Second", content="Two words")

    manuscript = await export_service.build_manuscript(BookVariant.FULL, db_session)

    assert manuscript.title == "My Book"
    assert manuscript.subtitle == "The Complete Guide"
    assert manuscript.chapter_count == 2
    assert manuscript.total_words == 5
    assert [(section.number, section.title) for section in manuscript.sections] == [(1, "First"), (2, "Second")]
    assert manuscript.sections[0].body_html == "<h2>Scene</h2>\n<p>It <strong>began</strong>.</p>"


@pytest.mark.asyncio
async def test_build_manuscript_overrides(export_service: ExportService, db_session: AsyncSession, make_chapter):
    await make_chapter("Only", book_variant=BookVariant.BOOKLET)

    manuscript = await export_service.build_manuscript(
        BookVariant.BOOKLET, db_session, title="Pocket Edition", subtitle="  "
    )

    assert manuscript.title == "Pocket Edition"
    assert manuscript.subtitle == "Booklet"


@pytest.mark.asyncio
async def test_export_empty_variant(export_service: ExportService, db_session: AsyncSession, export_dir: Path):
    """Test that an empty variant fails before anything is written."""
    with pytest.raises(EmptyInputError):
        await export_service.render(BookVariant.FULL, ExportFormat.DOCUMENT, db_session)

    assert not export_dir.exists()


@pytest.mark.asyncio
async def test_export_document(export_service: ExportService, db_session: AsyncSession, export_dir: Path, make_chapter):
    """Test a PDF export: cover, contents, one page per short chapter and page footers."""
    await make_chapter("Arrival", content="The train was late.")
    await make_chapter("Departure", content="Nobody waved.")

    result = await export_service.render(BookVariant.FULL, ExportFormat.DOCUMENT, db_session)

    path = Path(result.path)
    assert path.parent == (export_dir / "pdf").resolve()
    assert path.name.startswith("full-") and path.suffix == ".pdf"
    assert result.format == ExportFormat.DOCUMENT
    assert result.chapter_count == 2
    assert result.total_words == 6
    assert result.files == 1

    data = path.read_bytes()
    assert data.startswith(b"%PDF")
    assert result.size_bytes == len(data)

    doc = pymupdf.open(stream=data, filetype="pdf")
    try:
        assert doc.page_count == 4
        assert "My Book" in doc[0].get_text()
        contents = doc[1].get_text()
        assert "Chapter 1: Arrival" in contents
        assert "Chapter 2: Departure" in contents
        assert "The train was late." in doc[2].get_text()
        assert "4 / 4" in doc[3].get_text()
    finally:
        doc.close()


@pytest.mark.asyncio
async def test_export_site(export_service: ExportService, db_session: AsyncSession, export_dir: Path, make_chapter):
    await make_chapter("One", content="First")
    await make_chapter("Two", content="Second")
    await make_chapter("Three", content="Third")

    result = await export_service.render(BookVariant.FULL, ExportFormat.SITE, db_session)

    site = Path(result.path)
    assert site.parent == (export_dir / "web").resolve()
    assert site.name.startswith("full-web-")
    assert result.files == 5
    assert sorted(path.name for path in site.iterdir()) == [
        "chapter-1.html",
        "chapter-2.html",
        "chapter-3.html",
        "index.html",
        "styles.css",
    ]
    middle = (site / "chapter-2.html").read_text(encoding="utf-8")
    assert 'href="chapter-1.html"' in middle
    assert 'href="chapter-3.html"' in middle


@pytest.mark.asyncio
async def test_export_follows_current_order(
    chapter_service: ChapterService, db_session: AsyncSession, export_dir: Path, make_chapter
):
    """Test create A, B, C, delete B, swap, then export numbers C first."""
    renderer = RecordingRenderer()
    export_service = ExportService(renderer, StaticSiteWriter(), export_dir=export_dir)

    a = await make_chapter("A")
    b = await make_chapter("B")
    c = await make_chapter("C")
    await chapter_service.delete_chapter(b.id, db_session)
    await chapter_service.reorder(
        [ChapterPosition(id=c.id, order_index=0), ChapterPosition(id=a.id, order_index=1)], db_session
    )

    await export_service.render(BookVariant.FULL, ExportFormat.DOCUMENT, db_session)

    manuscript = renderer.rendered[0]
    assert [(section.number, section.title) for section in manuscript.sections] == [(1, "C"), (2, "A")]
    toc = PdfRenderer().build_pages(manuscript)[1]
    assert "Chapter 1: C" in toc
    assert "Chapter 2: A" in toc


@pytest.mark.asyncio
async def test_export_write_failure(db_session: AsyncSession, tmp_path: Path, make_chapter):
    """Test that an unwritable export directory surfaces as a store error."""
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("x", encoding="utf-8")
    export_service = ExportService(RecordingRenderer(), StaticSiteWriter(), export_dir=blocker)
    await make_chapter("A")

    with pytest.raises(StoreError):
        await export_service.render(BookVariant.FULL, ExportFormat.DOCUMENT, db_session)
