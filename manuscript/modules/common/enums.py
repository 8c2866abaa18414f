"""Enumerations shared by several modules."""

from enum import Enum


class BookVariant(str, Enum):
    """The two manuscripts kept side by side: the full book and a shorter booklet."""

    FULL = "full"
    BOOKLET = "booklet"


class ChapterStatus(str, Enum):
    DRAFT = "draft"
    EDITING = "editing"
    READY = "ready"


class SourceCategory(str, Enum):
    NOTEBOOKLM = "notebooklm"
    DOCS = "docs"
    NOTES = "notes"
    WEBSITE = "website"
    OTHER = "other"


class ExportFormat(str, Enum):
    DOCUMENT = "document"
    SITE = "site"
