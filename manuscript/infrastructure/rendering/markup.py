"""Markdown to HTML conversion for chapter bodies.

Supports the subset of markdown used in chapters: headings, paragraphs with
hard line breaks, block quotes, bullet and numbered lists, horizontal rules,
fenced code blocks and the inline forms for bold, italic, code and links.
Raw HTML in the source is escaped, never passed through.

Headings are shifted down one level (``#`` renders as ``<h2>``) because the
chapter title already occupies the top level of every rendered page.
"""

import html
import re
from typing import List, Optional

_FENCE = re.compile(r"^```[^\n]*\n(.*?)^```[ \t]*$", re.MULTILINE | re.DOTALL)
_HEADING = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
_RULE = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")
_QUOTE = re.compile(r"^>\s?(.*)$")
_BULLET = re.compile(r"^[-*+]\s+(.*)$")
_NUMBERED = re.compile(r"^\d+[.)]\s+(.*)$")

_INLINE_TOKEN = re.compile(r"`([^`]+)`|\[([^\]]+)\]\(([^)\s]+)\)")
_BOLD = re.compile(r"\*\*(.+?)\*\*|__(.+?)__")
_ITALIC = re.compile(r"\*(.+?)\*|(?<!\w)_(.+?)_(?!\w)")

_UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:")


def render_markdown(markdown: Optional[str]) -> str:
    """Convert markdown to an HTML fragment.

    Example:
        >>> render_markdown("# Intro\\n\\nSome **bold** text")
        '<h2>Intro</h2>\\n<p>Some <strong>bold</strong> text</p>'
    """
    if not markdown or not markdown.strip():
        return ""

    text = markdown.replace("\r\n", "\n").replace("\r", "\n")
    blocks: List[str] = []
    position = 0
    for match in _FENCE.finditer(text):
        blocks.extend(_render_blocks(text[position : match.start()]))
        code = match.group(1).rstrip("\n")
        blocks.append(f"<pre><code>{html.escape(code, quote=False)}</code></pre>")
        position = match.end()
    blocks.extend(_render_blocks(text[position:]))

    return "\n".join(blocks)


def render_inline(text: str) -> str:
    """Render inline markdown (code spans, links, bold, italic) in a single line."""
    parts: List[str] = []
    position = 0
    for match in _INLINE_TOKEN.finditer(text):
        parts.append(_emphasis(html.escape(text[position : match.start()])))
        code, label, href = match.groups()
        if code is not None:
            parts.append(f"<code>{html.escape(code)}</code>")
        else:
            parts.append(_link(label, href))
        position = match.end()
    parts.append(_emphasis(html.escape(text[position:])))
    return "".join(parts)


def _emphasis(escaped: str) -> str:
    escaped = _BOLD.sub(lambda m: f"<strong>{m.group(1) or m.group(2)}</strong>", escaped)
    return _ITALIC.sub(lambda m: f"<em>{m.group(1) or m.group(2)}</em>", escaped)


def _link(label: str, href: str) -> str:
    rendered_label = _emphasis(html.escape(label))
    if href.strip().lower().startswith(_UNSAFE_SCHEMES):
        return rendered_label
    return f'<a href="{html.escape(href)}">{rendered_label}</a>'


def _render_blocks(text: str) -> List[str]:
    blocks: List[str] = []
    paragraph: List[str] = []
    quote: List[str] = []
    list_items: List[str] = []
    list_tag: Optional[str] = None

    def flush_paragraph() -> None:
        if paragraph:
            blocks.append("<p>" + "<br>".join(render_inline(line) for line in paragraph) + "</p>")
            paragraph.clear()

    def flush_quote() -> None:
        if quote:
            blocks.append("<blockquote>" + "<br>".join(render_inline(line) for line in quote) + "</blockquote>")
            quote.clear()

    def flush_list() -> None:
        nonlocal list_tag
        if list_items:
            items = "".join(f"<li>{render_inline(item)}</li>" for item in list_items)
            blocks.append(f"<{list_tag}>{items}</{list_tag}>")
            list_items.clear()
        list_tag = None

    def flush_all() -> None:
        flush_paragraph()
        flush_quote()
        flush_list()

    def start_list_item(tag: str, item: str) -> None:
        nonlocal list_tag
        flush_paragraph()
        flush_quote()
        if list_tag != tag:
            flush_list()
            list_tag = tag
        list_items.append(item)

    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            flush_all()
            continue

        heading = _HEADING.match(stripped)
        if heading:
            flush_all()
            level = min(len(heading.group(1)) + 1, 6)
            blocks.append(f"<h{level}>{render_inline(heading.group(2))}</h{level}>")
            continue

        if _RULE.match(stripped):
            flush_all()
            blocks.append("<hr>")
            continue

        quoted = _QUOTE.match(stripped)
        if quoted:
            flush_paragraph()
            flush_list()
            quote.append(quoted.group(1))
            continue

        bullet = _BULLET.match(stripped)
        if bullet:
            start_list_item("ul", bullet.group(1))
            continue

        numbered = _NUMBERED.match(stripped)
        if numbered:
            start_list_item("ol", numbered.group(1))
            continue

        flush_quote()
        flush_list()
        paragraph.append(stripped)

    flush_all()
    return blocks
