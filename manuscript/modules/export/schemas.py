"""Pydantic schemas for manuscript export."""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from ..common.enums import BookVariant, ExportFormat


class ManuscriptSection(BaseModel):
    """One chapter as it appears in an exported manuscript."""

    number: int = Field(ge=1, description="1-based chapter number in reading order")
    chapter_id: str
    title: str
    word_count: int
    body_html: str


class Manuscript(BaseModel):
    """The compiled book handed to the document renderer and the site writer."""

    book_variant: BookVariant
    title: str
    subtitle: str
    language: str = "en"
    direction: str = "ltr"
    total_words: int
    sections: List[ManuscriptSection]

    @property
    def chapter_count(self) -> int:
        return len(self.sections)


class ExportRequest(BaseModel):
    book_variant: BookVariant = Field(
        default=BookVariant.FULL,
        validation_alias=AliasChoices("bookType", "book_variant"),
        description="Variant to export",
    )
    title: Optional[str] = Field(default=None, max_length=255, description="Cover title, defaults to the configured book title")
    subtitle: Optional[str] = Field(default=None, max_length=255)


class ExportResult(BaseModel):
    format: ExportFormat
    book_variant: BookVariant
    path: str = Field(description="Absolute path of the PDF file or of the site directory")
    filename: str
    size_bytes: int
    files: int = Field(description="Number of files written")
    chapter_count: int
    total_words: int
