"""Static web site export: an index page, one page per chapter and a stylesheet."""

import html
from pathlib import Path
from typing import List, Optional

from ...modules.export.schemas import Manuscript, ManuscriptSection
from .base import SiteWriter
from .labels import labels_for

SITE_CSS = """* { margin: 0; padding: 0; box-sizing: border-box; }

:root {
  --primary: #2563eb;
  --text: #1a1a1a;
  --text-light: #64748b;
  --bg: #ffffff;
  --bg-alt: #f8fafc;
  --border: #e2e8f0;
  --accent: #f59e0b;
}

body { font-family: sans-serif; font-size: 18px; line-height: 1.8; color: var(--text); background: var(--bg); }
.container { max-width: 800px; margin: 0 auto; padding: 40px 20px; }

.hero { text-align: center; padding: 60px 20px; margin-bottom: 40px; }
.hero h1 { font-size: 2.5rem; color: var(--primary); margin-bottom: 10px; }
.hero .subtitle { font-size: 1.25rem; color: var(--text-light); margin-bottom: 20px; }
.hero .meta { display: flex; justify-content: center; gap: 15px; color: var(--text-light); font-size: 0.9rem; }

.toc { background: var(--bg-alt); border-radius: 12px; padding: 30px; }
.toc h2 { font-size: 1.5rem; margin-bottom: 20px; }
.toc ol { list-style: none; }
.toc-item { display: flex; align-items: center; gap: 15px; padding: 15px; margin-bottom: 10px; background: var(--bg);
  border: 1px solid var(--border); border-radius: 8px; text-decoration: none; color: var(--text); }
.toc-item:hover { border-color: var(--primary); }
.toc-number { min-width: 35px; text-align: center; background: var(--primary); color: white; border-radius: 8px; font-weight: 600; }
.toc-title { flex: 1; font-weight: 500; }
.toc-words { font-size: 0.85rem; color: var(--text-light); }

.chapter-header { display: flex; justify-content: space-between; margin-bottom: 40px; padding-bottom: 20px;
  border-bottom: 1px solid var(--border); }
.back-link { color: var(--primary); text-decoration: none; font-size: 0.9rem; }
.chapter-number, .chapter-meta { font-size: 0.9rem; color: var(--text-light); }
.chapter h1 { font-size: 2rem; margin-bottom: 10px; }
.chapter-meta { margin-bottom: 30px; }
.chapter-content p { margin-bottom: 20px; }
.chapter-content h2 { font-size: 1.5rem; margin: 40px 0 20px; }
.chapter-content h3 { font-size: 1.25rem; margin: 30px 0 15px; }
.chapter-content ul, .chapter-content ol { margin: 20px 30px; }
.chapter-content blockquote { margin: 25px 0; padding: 20px; background: var(--bg-alt);
  border-inline-start: 4px solid var(--accent); font-style: italic; color: var(--text-light); }
.chapter-content code { background: var(--bg-alt); padding: 2px 6px; border-radius: 4px; font-family: monospace; }
.chapter-content pre { background: #1e293b; color: #e2e8f0; padding: 20px; border-radius: 8px; overflow-x: auto; margin: 20px 0; }
.chapter-content pre code { background: none; color: inherit; }
.chapter-content a { color: var(--primary); }
.chapter-content hr { border: none; border-top: 1px solid var(--border); margin: 40px 0; }

.chapter-nav { display: flex; justify-content: space-between; margin-top: 60px; padding-top: 20px; border-top: 1px solid var(--border); }
.chapter-nav a { color: var(--primary); text-decoration: none; }
"""


def chapter_filename(number: int) -> str:
    return f"chapter-{number}.html"


def _page(manuscript: Manuscript, title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html dir="{html.escape(manuscript.direction)}" lang="{html.escape(manuscript.language)}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(title)}</title>
  <link rel="stylesheet" href="styles.css">
</head>
<body>
  <div class="container">
{body}
  </div>
</body>
</html>
"""


def render_index(manuscript: Manuscript) -> str:
    """The landing page: title block and a linked table of contents."""
    labels = labels_for(manuscript.language)
    entries = "\n".join(
        f'      <li><a href="{chapter_filename(section.number)}" class="toc-item">'
        f'<span class="toc-number">{section.number}</span>'
        f'<span class="toc-title">{html.escape(section.title)}</span>'
        f'<span class="toc-words">{section.word_count:,} {labels["words"]}</span></a></li>'
        for section in manuscript.sections
    )
    body = f"""    <header class="hero">
      <h1>{html.escape(manuscript.title)}</h1>
      <p class="subtitle">{html.escape(manuscript.subtitle)}</p>
      <div class="meta"><span>{manuscript.chapter_count} {labels["chapters"]}</span><span>{manuscript.total_words:,} {labels["words"]}</span></div>
    </header>
    <nav class="toc">
      <h2>{labels["contents"]}</h2>
      <ol>
{entries}
      </ol>
    </nav>"""
    return _page(manuscript, manuscript.title, body)


def render_chapter_page(
    manuscript: Manuscript,
    section: ManuscriptSection,
    previous: Optional[ManuscriptSection],
    following: Optional[ManuscriptSection],
) -> str:
    """A chapter page with links to the adjacent chapters only."""
    labels = labels_for(manuscript.language)
    previous_link = (
        f'<a href="{chapter_filename(previous.number)}" class="nav-prev">&larr; {html.escape(previous.title)}</a>'
        if previous is not None
        else "<span></span>"
    )
    next_link = (
        f'<a href="{chapter_filename(following.number)}" class="nav-next">{html.escape(following.title)} &rarr;</a>'
        if following is not None
        else "<span></span>"
    )
    body = f"""    <header class="chapter-header">
      <a href="index.html" class="back-link">{labels["back"]}</a>
      <span class="chapter-number">{labels["chapter"]} {section.number} {labels["of"]} {manuscript.chapter_count}</span>
    </header>
    <article class="chapter">
      <h1>{html.escape(section.title)}</h1>
      <div class="chapter-meta"><span>{section.word_count:,} {labels["words"]}</span></div>
      <div class="chapter-content">
{section.body_html}
      </div>
    </article>
    <nav class="chapter-nav">
      {previous_link}
      {next_link}
    </nav>"""
    title = f'{labels["chapter"]} {section.number}: {section.title} | {manuscript.title}'
    return _page(manuscript, title, body)


class StaticSiteWriter(SiteWriter):
    """Write ``index.html``, ``chapter-N.html`` for N = 1..count and ``styles.css``."""

    def write(self, manuscript: Manuscript, output_dir: Path) -> List[Path]:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=False)

        written: List[Path] = []

        def emit(name: str, text: str) -> None:
            path = output_dir / name
            path.write_text(text, encoding="utf-8")
            written.append(path)

        emit("index.html", render_index(manuscript))

        sections = manuscript.sections
        for position, section in enumerate(sections):
            previous = sections[position - 1] if position > 0 else None
            following = sections[position + 1] if position + 1 < len(sections) else None
            emit(chapter_filename(section.number), render_chapter_page(manuscript, section, previous, following))

        emit("styles.css", SITE_CSS)
        return written
