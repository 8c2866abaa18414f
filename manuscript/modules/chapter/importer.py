"""Bulk import of markdown files as chapters."""

import re
from pathlib import Path
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.logging import get_logger
from ..common.enums import BookVariant
from .schemas import ChapterCreate, ChapterRead
from .services import ChapterService

logger = get_logger(__name__)

_FIRST_HEADING = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)
_ORDER_PREFIX = re.compile(r"^\d+[-_. ]*")


def chapter_title(text: str, path: Path) -> str:
    """Title from the first level-one heading, else from the file name.

    ``03-two-failures.md`` becomes ``two failures``.
    """
    heading = _FIRST_HEADING.search(text)
    if heading:
        return heading.group(1).strip()
    stem = _ORDER_PREFIX.sub("", path.stem) or path.stem
    return stem.replace("-", " ").replace("_", " ").strip()


def discover_chapter_files(directory: Path) -> List[Path]:
    """Markdown files of a directory sorted by name, which is their reading order."""
    return sorted(path for path in Path(directory).iterdir() if path.is_file() and path.suffix.lower() == ".md")


async def import_chapter_directory(
    directory: Path,
    book_variant: BookVariant,
    db: AsyncSession,
    chapter_service: ChapterService | None = None,
) -> List[ChapterRead]:
    """Append every markdown file of a directory to a variant, in file name order."""
    chapter_service = chapter_service or ChapterService()
    imported: List[ChapterRead] = []

    for path in discover_chapter_files(directory):
        content = path.read_text(encoding="utf-8")
        chapter = await chapter_service.create_chapter(
            book_variant, ChapterCreate(title=chapter_title(content, path)[:255], content=content), db
        )
        logger.info(f"Imported {path.name} as '{chapter.title}'", extra={"chapter_id": chapter.id})
        imported.append(chapter)

    return imported
