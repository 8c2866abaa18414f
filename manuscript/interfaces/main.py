from ..infrastructure.app_factory import create_application
from ..infrastructure.config.settings import get_settings
from .api import router as api_router

settings = get_settings()

app = create_application(
    router=api_router,
    settings=settings,
    title="Manuscript Studio API",
    summary="Draft chapters, catalogue sources, snapshot versions and export books",
    description="""
    # Manuscript Studio API

    A single-author workspace for writing a book and its companion booklet:

    * ✍️ **Chapters**: Ordered drafts per variant with derived slug and word count
    * 📚 **Sources**: Uploaded reference files with tags, highlights and chapter links
    * 🕰️ **Versions**: Immutable snapshots of a variant, optionally archived as markdown
    * 💬 **Quotes**: A searchable quote bank
    * 📄 **Export**: Paginated PDF or a static multi-page web site

    Every list endpoint that concerns chapters takes `bookType` (`full` or `booklet`).
    """,
    version="0.1.0",
)
