"""Search helpers shared by the source catalog and the quote bank.

Searches run in two passes: a loose SQL prefilter narrows the rows, then the
exact match rules are applied to the loaded records in Python. JSON list
columns are stored as text, so the prefilter alone cannot tell a tag match
from a match on the serialized brackets or quotes.
"""

from typing import Any, Iterable, List, Optional

from sqlalchemy import String, cast, or_, true
from sqlalchemy.sql.elements import ColumnElement


def search_clause(term: str, text_columns: Iterable[Any], list_columns: Iterable[Any] = ()) -> ColumnElement[bool]:
    """Build a case-insensitive substring prefilter over text and JSON list columns.

    SQLite only folds ASCII case, so a term with other characters gets no
    prefilter and is matched entirely by `matches_search`.
    """
    if not term.isascii():
        return true()

    pattern = f"%{term}%"
    clauses = [column.ilike(pattern) for column in text_columns]
    clauses.extend(cast(column, String).ilike(pattern) for column in list_columns)
    return or_(*clauses)


def matches_search(term: Optional[str], texts: Iterable[Optional[str]], items: Optional[Iterable[Any]] = None) -> bool:
    """Check whether a term is a substring of any text or of any individual list item.

    An empty or missing term matches everything.
    """
    if not term:
        return True

    needle = term.casefold()
    for text in texts:
        if text and needle in text.casefold():
            return True

    for item in items or ():
        if isinstance(item, str) and needle in item.casefold():
            return True

    return False


def has_tag(tags: Optional[List[str]], tag: Optional[str]) -> bool:
    """Exact tag membership. A missing tag filter matches everything."""
    if not tag:
        return True
    return tag in (tags or [])
