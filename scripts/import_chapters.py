"""Import a directory of markdown files as chapters of a book variant.

Usage:
    python scripts/import_chapters.py content/booklet --book-type booklet
"""

import argparse
import asyncio
import sys
from pathlib import Path

from manuscript.infrastructure.database.session import init_database, local_session
from manuscript.infrastructure.logging import configure_logging, get_logger
from manuscript.modules.chapter.importer import chapter_title, discover_chapter_files, import_chapter_directory
from manuscript.modules.common.enums import BookVariant

logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import markdown files as chapters, in file name order.")
    parser.add_argument("directory", type=Path, help="Directory containing .md files")
    parser.add_argument(
        "--book-type",
        choices=[variant.value for variant in BookVariant],
        default=BookVariant.FULL.value,
        help="Variant to append the chapters to (default: full)",
    )
    parser.add_argument("--dry-run", action="store_true", help="List what would be imported without writing")
    return parser.parse_args()


async def main() -> None:
    args = parse_args()
    configure_logging()

    if not args.directory.is_dir():
        logger.error(f"❌ Not a directory: {args.directory}")
        sys.exit(1)

    if args.dry_run:
        for path in discover_chapter_files(args.directory):
            print(f"{path.name}: {chapter_title(path.read_text(encoding='utf-8'), path)}")
        return

    try:
        await init_database()
        async with local_session() as db:
            imported = await import_chapter_directory(args.directory, BookVariant(args.book_type), db)
        logger.info(f"✅ Imported {len(imported)} chapters into the {args.book_type} variant")
    except Exception as e:
        logger.error(f"❌ Import failed: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
