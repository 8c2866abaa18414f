from asyncio import Event
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, Dict, List, Optional

import anyio
import fastapi
from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.openapi.docs import get_redoc_html, get_swagger_ui_html
from fastapi.openapi.utils import get_openapi

from ..modules.common.utils.error_handler import register_exception_handlers
from .config.settings import EnvironmentOption, Settings, get_settings
from .database.session import init_database
from .logging import configure_logging, generate_correlation_id, get_logger, reset_correlation_id, set_correlation_id

logger = get_logger(__name__)

CORRELATION_ID_HEADER = "X-Request-ID"


async def set_threadpool_tokens(number_of_tokens: int = 100) -> None:
    """Configure the number of threadpool tokens for anyio."""
    limiter = anyio.to_thread.current_default_thread_limiter()
    limiter.total_tokens = number_of_tokens


def lifespan_factory(
    settings: Settings,
    initialize_database: bool = True,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Factory to create a lifespan async context manager for a FastAPI app.

    Startup configures logging, sizes the worker thread pool used for file
    I/O and runs the database initialization phase before the first request
    is served.

    Args:
        settings: Application settings
        initialize_database: Whether to create tables and seed defaults on startup

    Returns:
        An async context manager for FastAPI's lifespan
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        initialization_complete = Event()
        app.state.initialization_complete = initialization_complete

        configure_logging()
        await set_threadpool_tokens()

        if initialize_database:
            await init_database(app_settings=settings)

        initialization_complete.set()
        logger.info(f"{settings.APP_NAME} started", extra={"environment": settings.ENVIRONMENT.value})
        yield
        logger.info(f"{settings.APP_NAME} stopped")

    return lifespan


async def correlation_id_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Tag every log record of a request with its X-Request-ID, generating one when absent."""
    correlation_id = request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
    token = set_correlation_id(correlation_id)
    try:
        response = await call_next(request)
    finally:
        reset_correlation_id(token)
    response.headers[CORRELATION_ID_HEADER] = correlation_id
    return response


def create_application(
    router: APIRouter,
    settings: Optional[Settings] = None,
    lifespan: Optional[Callable[[FastAPI], AbstractAsyncContextManager[None]]] = None,
    initialize_database: Optional[bool] = None,
    enable_cors: Optional[bool] = None,
    cors_origins: Optional[List[str]] = None,
    enable_docs_in_production: Optional[bool] = None,
    enable_gzip: Optional[bool] = None,
    title: Optional[str] = None,
    summary: Optional[str] = None,
    description: Optional[str] = None,
    version: Optional[str] = None,
    **kwargs: Any,
) -> FastAPI:
    """Creates and configures a FastAPI application based on the provided settings.

    Args:
        router: The APIRouter containing the routes for the application
        settings: Application settings (uses get_settings() if None)
        lifespan: Optional lifespan function. If None, uses lifespan_factory.
        initialize_database: Whether to run database initialization on startup.
            Defaults to settings.CREATE_TABLES_ON_STARTUP if None.
        enable_cors: Whether to enable CORS middleware.
            Defaults to settings.CORS_ENABLED if None.
        cors_origins: List of allowed origins for CORS.
            Defaults to settings.CORS_ORIGINS_LIST if None.
        enable_docs_in_production: Whether to enable API docs in production.
            Defaults to settings.ENABLE_DOCS_IN_PRODUCTION if None.
        enable_gzip: Whether to enable GZip compression middleware.
            Defaults to settings.GZIP_ENABLED if None.
        title: The title of the API.
        summary: A short summary of the API.
        description: A detailed description of the API (supports Markdown).
        version: The version of the API.
        **kwargs: Additional keyword arguments passed to FastAPI constructor

    Returns:
        A configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    _initialize_database = settings.CREATE_TABLES_ON_STARTUP if initialize_database is None else initialize_database
    _enable_cors = settings.CORS_ENABLED if enable_cors is None else enable_cors
    _cors_origins = settings.CORS_ORIGINS_LIST if cors_origins is None else cors_origins
    _enable_docs_in_production = (
        settings.ENABLE_DOCS_IN_PRODUCTION if enable_docs_in_production is None else enable_docs_in_production
    )
    _enable_gzip = settings.GZIP_ENABLED if enable_gzip is None else enable_gzip

    metadata: Dict[str, Any] = {
        "title": title or settings.API_TITLE or settings.APP_NAME,
        "summary": summary or settings.API_SUMMARY or None,
        "description": description or settings.API_DESCRIPTION or settings.APP_DESCRIPTION,
        "version": version or settings.API_VERSION or settings.VERSION,
    }
    kwargs.update(metadata)

    show_docs = settings.ENVIRONMENT != EnvironmentOption.PRODUCTION or _enable_docs_in_production
    # Docs are served by the custom routes below so they can be switched off as a group.
    kwargs.update({"docs_url": None, "redoc_url": None, "openapi_url": None})

    if lifespan is None:
        lifespan = lifespan_factory(settings, initialize_database=_initialize_database)

    application = FastAPI(lifespan=lifespan, **kwargs)

    application.include_router(router)
    register_exception_handlers(application)

    if settings.LOG_CORRELATION_ID:
        application.middleware("http")(correlation_id_middleware)

    if _enable_cors:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=_cors_origins,
            allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
            allow_methods=settings.CORS_ALLOW_METHODS.split(","),
            allow_headers=settings.CORS_ALLOW_HEADERS.split(","),
        )

    if _enable_gzip:
        application.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MINIMUM_SIZE)

    if show_docs:
        docs_router = APIRouter()

        @docs_router.get(settings.DOCS_URL, include_in_schema=False)
        async def get_swagger_documentation() -> fastapi.responses.HTMLResponse:
            return get_swagger_ui_html(openapi_url=settings.OPENAPI_URL, title=f"{metadata['title']} - docs")

        @docs_router.get(settings.REDOC_URL, include_in_schema=False)
        async def get_redoc_documentation() -> fastapi.responses.HTMLResponse:
            return get_redoc_html(openapi_url=settings.OPENAPI_URL, title=f"{metadata['title']} - redoc")

        @docs_router.get(settings.OPENAPI_URL, include_in_schema=False)
        async def openapi() -> Dict[str, Any]:
            return get_openapi(
                title=metadata["title"],
                version=metadata["version"],
                summary=metadata["summary"],
                description=metadata["description"],
                routes=application.routes,
            )

        application.include_router(docs_router)

    return application
