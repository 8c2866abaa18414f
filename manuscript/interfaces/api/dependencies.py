"""FastAPI dependencies for use in API endpoints."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.config.settings import Settings, get_settings
from ...infrastructure.database import async_session
from ...infrastructure.rendering import DocumentRenderer, PdfRenderer, SiteWriter, StaticSiteWriter
from ...infrastructure.storage import BlobStore, LocalBlobStore
from ...modules.chapter.services import ChapterService
from ...modules.export.services import ExportService
from ...modules.quote.services import QuoteService
from ...modules.setting.services import SettingService
from ...modules.source.services import SourceService
from ...modules.stats.services import StatsService
from ...modules.version.services import VersionService
from ...modules.writing_session.services import WritingSessionService

DbSession = Annotated[AsyncSession, Depends(async_session)]


def get_chapter_service() -> ChapterService:
    """Dependency for providing a ChapterService instance."""
    return ChapterService()


def get_blob_store(settings: Settings = Depends(get_settings)) -> BlobStore:
    """Dependency for providing the blob store that holds source files."""
    return LocalBlobStore(settings.SOURCES_DIR)


def get_source_service(
    blob_store: BlobStore = Depends(get_blob_store),
    settings: Settings = Depends(get_settings),
) -> SourceService:
    """Dependency for providing a SourceService instance."""
    return SourceService(blob_store, max_upload_size=settings.MAX_UPLOAD_SIZE)


def get_version_service(settings: Settings = Depends(get_settings)) -> VersionService:
    """Dependency for providing a VersionService instance."""
    archive_root = settings.VERSIONS_DIR if settings.VERSION_ARCHIVE_ENABLED else None
    return VersionService(archive_root=archive_root)


def get_quote_service() -> QuoteService:
    """Dependency for providing a QuoteService instance."""
    return QuoteService()


def get_setting_service() -> SettingService:
    """Dependency for providing a SettingService instance."""
    return SettingService()


def get_writing_session_service() -> WritingSessionService:
    """Dependency for providing a WritingSessionService instance."""
    return WritingSessionService()


def get_stats_service() -> StatsService:
    """Dependency for providing a StatsService instance."""
    return StatsService()


def get_document_renderer(settings: Settings = Depends(get_settings)) -> DocumentRenderer:
    """Dependency for providing the PDF renderer."""
    return PdfRenderer(page_size=settings.EXPORT_PAGE_SIZE)


def get_site_writer() -> SiteWriter:
    """Dependency for providing the static site writer."""
    return StaticSiteWriter()


def get_export_service(
    document_renderer: DocumentRenderer = Depends(get_document_renderer),
    site_writer: SiteWriter = Depends(get_site_writer),
    settings: Settings = Depends(get_settings),
) -> ExportService:
    """Dependency for providing an ExportService instance."""
    return ExportService(
        document_renderer,
        site_writer,
        export_dir=settings.EXPORT_DIR,
        default_title=settings.DEFAULT_BOOK_TITLE,
        language=settings.EXPORT_LANGUAGE,
        direction=settings.EXPORT_TEXT_DIRECTION,
    )
