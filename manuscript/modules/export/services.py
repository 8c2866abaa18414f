"""Export service: compile a variant's chapters and hand them to a renderer."""

import asyncio
from pathlib import Path
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.database.models import utc_now
from ...infrastructure.logging import get_logger
from ...infrastructure.rendering import DocumentRenderer, SiteWriter, render_markdown
from ..chapter.models import Chapter
from ..common.enums import BookVariant, ExportFormat
from ..common.exceptions import EmptyInputError, StoreError
from .schemas import ExportResult, Manuscript, ManuscriptSection

logger = get_logger(__name__)

DEFAULT_SUBTITLES = {
    BookVariant.FULL: "The Complete Guide",
    BookVariant.BOOKLET: "Booklet",
}


class ExportService:
    """Service for compiling and exporting manuscripts.

    The chapters of a variant become numbered sections in stored order. The
    result is written below ``export_dir``: PDFs to ``pdf/`` and sites to
    ``web/<variant>-web-<timestamp>/``.

    Args:
        document_renderer: Produces the PDF bytes
        site_writer: Produces the static site files
        export_dir: Root directory for exported artifacts
        default_title: Cover title used when a request gives none
        language: Language of the fixed labels and of the html lang attribute
        direction: Text direction, "ltr" or "rtl"
    """

    def __init__(
        self,
        document_renderer: DocumentRenderer,
        site_writer: SiteWriter,
        export_dir: str | Path,
        default_title: str = "Untitled Manuscript",
        language: str = "en",
        direction: str = "ltr",
    ):
        self.document_renderer = document_renderer
        self.site_writer = site_writer
        self.export_dir = Path(export_dir)
        self.default_title = default_title
        self.language = language
        self.direction = direction

    async def build_manuscript(
        self,
        book_variant: BookVariant,
        db: AsyncSession,
        title: Optional[str] = None,
        subtitle: Optional[str] = None,
    ) -> Manuscript:
        """Compile the chapters of a variant into a manuscript tree.

        Raises:
            EmptyInputError: If the variant has no chapters
        """
        result = await db.execute(
            select(Chapter).where(Chapter.book_variant == book_variant.value).order_by(Chapter.order_index)
        )
        chapters = result.scalars().all()
        if not chapters:
            raise EmptyInputError(f"No chapters to export for the {book_variant.value} variant")

        sections = [
            ManuscriptSection(
                number=number,
                chapter_id=chapter.id,
                title=chapter.title,
                word_count=chapter.word_count,
                body_html=render_markdown(chapter.content),
            )
            for number, chapter in enumerate(chapters, start=1)
        ]

        return Manuscript(
            book_variant=book_variant,
            title=(title or "").strip() or self.default_title,
            subtitle=(subtitle or "").strip() or DEFAULT_SUBTITLES[book_variant],
            language=self.language,
            direction=self.direction,
            total_words=sum(section.word_count for section in sections),
            sections=sections,
        )

    async def render(
        self,
        book_variant: BookVariant,
        export_format: ExportFormat,
        db: AsyncSession,
        title: Optional[str] = None,
        subtitle: Optional[str] = None,
    ) -> ExportResult:
        """Export a variant as a PDF document or as a static site.

        Args:
            book_variant: Variant to export
            export_format: ExportFormat.DOCUMENT or ExportFormat.SITE
            db: Database session
            title: Cover title override
            subtitle: Subtitle override

        Returns:
            Where the artifact was written and what it contains

        Raises:
            EmptyInputError: If the variant has no chapters
            StoreError: If the artifact cannot be written
        """
        manuscript = await self.build_manuscript(book_variant, db, title=title, subtitle=subtitle)
        timestamp = utc_now().strftime("%Y-%m-%dT%H-%M-%S-%fZ")

        try:
            if export_format == ExportFormat.DOCUMENT:
                export_result = await self._export_document(manuscript, timestamp)
            else:
                export_result = await self._export_site(manuscript, timestamp)
        except OSError as e:
            raise StoreError(f"Failed to write {export_format.value} export") from e

        logger.info(
            "Exported manuscript",
            extra={
                "format": export_format.value,
                "book_variant": book_variant.value,
                "path": export_result.path,
                "chapter_count": export_result.chapter_count,
            },
        )
        return export_result

    async def _export_document(self, manuscript: Manuscript, timestamp: str) -> ExportResult:
        data = await asyncio.to_thread(self.document_renderer.render, manuscript)

        output_dir = self.export_dir / "pdf"
        filename = f"{manuscript.book_variant.value}-{timestamp}.pdf"
        path = output_dir / filename

        def write() -> None:
            output_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)

        await asyncio.to_thread(write)

        return ExportResult(
            format=ExportFormat.DOCUMENT,
            book_variant=manuscript.book_variant,
            path=str(path.resolve()),
            filename=filename,
            size_bytes=len(data),
            files=1,
            chapter_count=manuscript.chapter_count,
            total_words=manuscript.total_words,
        )

    async def _export_site(self, manuscript: Manuscript, timestamp: str) -> ExportResult:
        folder = f"{manuscript.book_variant.value}-web-{timestamp}"
        output_dir = self.export_dir / "web" / folder

        written: List[Path] = await asyncio.to_thread(self.site_writer.write, manuscript, output_dir)
        size = sum(path.stat().st_size for path in written)

        return ExportResult(
            format=ExportFormat.SITE,
            book_variant=manuscript.book_variant,
            path=str(output_dir.resolve()),
            filename=folder,
            size_bytes=size,
            files=len(written),
            chapter_count=manuscript.chapter_count,
            total_words=manuscript.total_words,
        )
