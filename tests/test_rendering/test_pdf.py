"""Tests for the PDF renderer."""

import pymupdf

from manuscript.infrastructure.rendering import PdfRenderer
from manuscript.modules.common.enums import BookVariant
from manuscript.modules.export.schemas import Manuscript, ManuscriptSection


def manuscript_with(*bodies: str) -> Manuscript:
    sections = [
        ManuscriptSection(number=n, chapter_id=f"id-{n}", title=f"Part {n}", word_count=10, body_html=body)
        for n, body in enumerate(bodies, start=1)
    ]
    return Manuscript(
        book_variant=BookVariant.BOOKLET,
        title="Booklet Title",
        subtitle="Booklet",
        total_words=10 * len(sections),
        sections=sections,
    )


def test_build_pages_structure():
    pages = PdfRenderer().build_pages(manuscript_with("<p>a</p>", "<p>b</p>"))

    assert len(pages) == 4
    assert "Booklet Title" in pages[0]
    assert "Chapter 1: Part 1" in pages[1]
    assert "Chapter 2: Part 2" in pages[1]
    assert 'class="chapter-number">Chapter 2<' in pages[3]


def test_render_pdf_pages_and_footers():
    data = PdfRenderer().render(manuscript_with("<p>opening body</p>", "<p>closing body</p>"))

    assert data.startswith(b"%PDF")
    doc = pymupdf.open(stream=data, filetype="pdf")
    try:
        assert doc.page_count == 4
        assert "opening body" in doc[2].get_text()
        assert "closing body" in doc[3].get_text()
        assert "1 / 4" in doc[0].get_text()
    finally:
        doc.close()


def test_long_chapter_flows_onto_more_pages():
    long_body = "".join(f"<p>Paragraph {n} of a long chapter that keeps going.</p>" for n in range(200))

    data = PdfRenderer().render(manuscript_with(long_body, "<p>short</p>"))

    doc = pymupdf.open(stream=data, filetype="pdf")
    try:
        assert doc.page_count > 4
        assert "short" in doc[doc.page_count - 1].get_text()
    finally:
        doc.close()


def test_letter_page_size():
    data = PdfRenderer(page_size="letter").render(manuscript_with("<p>x</p>"))

    doc = pymupdf.open(stream=data, filetype="pdf")
    try:
        assert round(doc[0].rect.width) == 612
    finally:
        doc.close()
