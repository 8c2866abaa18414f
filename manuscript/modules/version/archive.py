"""On-disk markdown archive of a version snapshot.

Layout::

    <root>/<timestamp>_<slug>/
        metadata.json
        chapters/01-<chapter-slug>.md
        chapters/02-<chapter-slug>.md
"""

import json
import shutil
from datetime import datetime
from pathlib import Path
from typing import Sequence

from ...infrastructure.logging import get_logger
from ..chapter.schemas import ChapterRead
from ..common.enums import BookVariant
from ..common.utils.text import generate_slug

logger = get_logger(__name__)


def render_chapter_file(chapter: ChapterRead) -> str:
    """Render a chapter as markdown with a front-matter header."""
    notes = "\n".join(f"  {line}" for line in chapter.notes.split("\n"))
    return (
        "---\n"
        f"title: {chapter.title}\n"
        f"status: {chapter.status.value}\n"
        f"word_count: {chapter.word_count}\n"
        "notes: |\n"
        f"{notes}\n"
        "---\n"
        "\n"
        f"{chapter.content}\n"
    )


def write_snapshot_archive(
    root: Path,
    book_variant: BookVariant,
    version_name: str,
    description: str,
    created_at: datetime,
    chapters: Sequence[ChapterRead],
) -> Path:
    """Write a snapshot to a new directory under root and return its path.

    Raises:
        OSError: If the archive cannot be written. A partially written
            directory is removed before the error propagates.
    """
    timestamp = created_at.strftime("%Y-%m-%dT%H-%M-%S-%f")
    version_dir = Path(root) / f"{timestamp}_{generate_slug(version_name) or 'version'}"
    chapters_dir = version_dir / "chapters"

    version_dir.mkdir(parents=True, exist_ok=False)
    try:
        chapters_dir.mkdir()
        for position, chapter in enumerate(chapters, start=1):
            chapter_file = chapters_dir / f"{position:02d}-{chapter.slug or 'chapter'}.md"
            chapter_file.write_text(render_chapter_file(chapter), encoding="utf-8")

        metadata = {
            "book_variant": book_variant.value,
            "version_name": version_name,
            "description": description,
            "created_at": created_at.isoformat(),
            "chapter_count": len(chapters),
            "total_words": sum(chapter.word_count for chapter in chapters),
        }
        (version_dir / "metadata.json").write_text(
            json.dumps(metadata, indent=2, ensure_ascii=False), encoding="utf-8"
        )
    except OSError:
        remove_snapshot_archive(version_dir)
        raise

    return version_dir


def remove_snapshot_archive(version_dir: Path) -> None:
    if version_dir.exists():
        shutil.rmtree(version_dir, ignore_errors=True)
        logger.debug(f"Removed snapshot archive {version_dir}")
