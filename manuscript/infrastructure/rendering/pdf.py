"""PDF rendering of a manuscript with the PyMuPDF Story layout engine.

Every part of the book (cover, table of contents and each chapter) is laid
out as its own Story, so each one starts on a fresh page. Page numbers are
stamped in a second pass once the total page count is known.
"""

import html
import io
from typing import List

import pymupdf

from ...modules.export.schemas import Manuscript, ManuscriptSection
from ..logging import get_logger
from .base import DocumentRenderer
from .labels import labels_for

logger = get_logger(__name__)

PDF_CSS = """
body { font-family: sans-serif; font-size: 11pt; line-height: 1.6; color: #1a1a1a; }
.cover { margin-top: 220px; text-align: center; }
.cover h1 { font-size: 30pt; color: #2563eb; margin-bottom: 18px; }
.cover .subtitle { font-size: 17pt; color: #64748b; margin-bottom: 36px; }
.cover .meta { font-size: 11pt; color: #94a3b8; }
.toc h2 { font-size: 22pt; color: #1e3a5f; margin-bottom: 24px; }
.toc li { margin-bottom: 8px; }
.chapter-number { font-size: 11pt; color: #2563eb; font-weight: bold; margin-bottom: 4px; }
.chapter-title { font-size: 20pt; color: #1e3a5f; margin-bottom: 24px; }
.chapter-content p { margin-bottom: 12px; text-align: justify; }
.chapter-content h2 { font-size: 15pt; color: #334155; margin: 22px 0 12px 0; }
.chapter-content h3 { font-size: 13pt; color: #334155; margin: 20px 0 10px 0; }
.chapter-content h4, .chapter-content h5, .chapter-content h6 { font-size: 11pt; color: #475569; margin: 16px 0 8px 0; }
.chapter-content blockquote { margin: 16px 0; padding: 10px 16px; background-color: #f8fafc; font-style: italic; color: #475569; }
.chapter-content code { font-family: monospace; font-size: 9pt; background-color: #f1f5f9; }
.chapter-content pre { font-family: monospace; font-size: 9pt; background-color: #f1f5f9; padding: 10px; margin: 12px 0; }
.chapter-content a { color: #2563eb; text-decoration: underline; }
"""


class PdfRenderer(DocumentRenderer):
    """Render a manuscript to PDF bytes.

    Args:
        page_size: Paper name understood by ``pymupdf.paper_rect``, e.g. "a4" or "letter"
        margin: Page margin in points
        footer_font_size: Font size of the "n / total" page footer
    """

    def __init__(self, page_size: str = "a4", margin: float = 64, footer_font_size: float = 9):
        self.mediabox = pymupdf.paper_rect(page_size)
        self.margin = margin
        self.footer_font_size = footer_font_size

    def render(self, manuscript: Manuscript) -> bytes:
        buffer = io.BytesIO()
        writer = pymupdf.DocumentWriter(buffer)
        for page_html in self.build_pages(manuscript):
            self._place(writer, page_html)
        writer.close()

        data = self._stamp_page_numbers(buffer.getvalue())
        logger.debug(
            "Rendered PDF",
            extra={"book_variant": manuscript.book_variant.value, "sections": manuscript.chapter_count, "size_bytes": len(data)},
        )
        return data

    def build_pages(self, manuscript: Manuscript) -> List[str]:
        """HTML for every part of the book: cover, contents, then one entry per chapter."""
        labels = labels_for(manuscript.language)
        pages = [self._cover_html(manuscript, labels), self._toc_html(manuscript, labels)]
        pages.extend(self._chapter_html(manuscript, section, labels) for section in manuscript.sections)
        return pages

    def _wrap(self, manuscript: Manuscript, body: str) -> str:
        return (
            f'<html lang="{html.escape(manuscript.language)}" dir="{html.escape(manuscript.direction)}">'
            f"<body>{body}</body></html>"
        )

    def _cover_html(self, manuscript: Manuscript, labels: dict) -> str:
        return self._wrap(
            manuscript,
            '<div class="cover">'
            f"<h1>{html.escape(manuscript.title)}</h1>"
            f'<p class="subtitle">{html.escape(manuscript.subtitle)}</p>'
            f'<p class="meta">{manuscript.chapter_count} {labels["chapters"]} | '
            f'{manuscript.total_words:,} {labels["words"]}</p>'
            "</div>",
        )

    def _toc_html(self, manuscript: Manuscript, labels: dict) -> str:
        entries = "".join(
            f"<li>{labels['chapter']} {section.number}: {html.escape(section.title)}</li>"
            for section in manuscript.sections
        )
        return self._wrap(manuscript, f'<div class="toc"><h2>{labels["contents"]}</h2><ul>{entries}</ul></div>')

    def _chapter_html(self, manuscript: Manuscript, section: ManuscriptSection, labels: dict) -> str:
        return self._wrap(
            manuscript,
            '<div class="chapter">'
            f'<p class="chapter-number">{labels["chapter"]} {section.number}</p>'
            f'<h1 class="chapter-title">{html.escape(section.title)}</h1>'
            f'<div class="chapter-content">{section.body_html}</div>'
            "</div>",
        )

    def _place(self, writer: "pymupdf.DocumentWriter", page_html: str) -> None:
        story = pymupdf.Story(html=page_html, user_css=PDF_CSS)
        where = self.mediabox + (self.margin, self.margin, -self.margin, -self.margin)

        more = 1
        while more:
            device = writer.begin_page(self.mediabox)
            more, _ = story.place(where)
            story.draw(device)
            writer.end_page()

    def _stamp_page_numbers(self, data: bytes) -> bytes:
        doc = pymupdf.open(stream=data, filetype="pdf")
        try:
            total = doc.page_count
            for number, page in enumerate(doc, start=1):
                label = f"{number} / {total}"
                width = pymupdf.get_text_length(label, fontname="helv", fontsize=self.footer_font_size)
                point = pymupdf.Point((page.rect.width - width) / 2, page.rect.height - self.margin / 2)
                page.insert_text(point, label, fontname="helv", fontsize=self.footer_font_size, color=(0.4, 0.4, 0.4))
            return doc.tobytes(garbage=3, deflate=True)
        finally:
            doc.close()
