"""Text helpers for derived chapter and source fields.

Word counting and slug generation are Unicode aware, so Hebrew and English
titles and bodies are treated alike.
"""

import math
import re
from pathlib import PurePath

from ..constants import FILE_TYPES

_NON_WORD_CHARS = re.compile(r"[^\w\s]|_")
_NON_SLUG_CHARS = re.compile(r"[^\w\s-]|_")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def count_words(text: str | None) -> int:
    """Count the words in a text.

    Every character that is not a letter, digit or whitespace becomes a word
    boundary, so "don't" counts as two words and "--" counts as none.

    Example:
        >>> count_words("Hello, world")
        2
        >>> count_words("")
        0
    """
    if not text:
        return 0
    return len(_NON_WORD_CHARS.sub(" ", text).split())


def generate_slug(title: str) -> str:
    """Build a URL slug from a title.

    Example:
        >>> generate_slug("  The Beginning: Part 1 ")
        'the-beginning-part-1'
    """
    slug = _NON_SLUG_CHARS.sub("", title.lower().strip())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def infer_file_type(filename: str) -> str:
    """Map a filename extension to a source file type."""
    return FILE_TYPES.get(PurePath(filename).suffix.lower(), "other")


def format_file_size(size_bytes: int) -> str:
    """Render a byte count for humans, e.g. ``1536 -> '1.5 KB'``."""
    if size_bytes <= 0:
        return "0 Bytes"
    exponent = min(int(math.floor(math.log(size_bytes, 1024))), len(_SIZE_UNITS) - 1)
    value = round(size_bytes / math.pow(1024, exponent), 2)
    return f"{value:g} {_SIZE_UNITS[exponent]}"
