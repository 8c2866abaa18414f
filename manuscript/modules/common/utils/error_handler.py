"""Utility functions for mapping domain exceptions to HTTP exceptions."""

from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ....infrastructure.logging import get_logger
from ..constants import EXCEPTION_MAPPING, STORE_ERROR_MESSAGE
from ..exceptions import DomainError, StoreError

logger = get_logger(__name__)


def map_exception(error: DomainError) -> HTTPException:
    """Map a domain exception to a corresponding HTTP exception."""
    if isinstance(error, StoreError):
        logger.error(f"Store failure: {error}", exc_info=error)

    for exception_class, mapper in EXCEPTION_MAPPING.items():
        if isinstance(error, exception_class):
            return mapper(str(error))

    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers for domain and store exceptions."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        """Convert domain exceptions to appropriate HTTP responses."""
        http_exception = map_exception(exc)
        return JSONResponse(
            status_code=http_exception.status_code,
            content={"detail": http_exception.detail},
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Hide database failures behind a generic message; the cause goes to the log."""
        logger.error(f"Unhandled database error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": STORE_ERROR_MESSAGE},
        )


def handle_exception(error: Exception) -> Optional[HTTPException]:
    """
    Handle an exception and return an appropriate HTTP exception if possible.

    For use in route handlers when you want to handle exceptions manually.
    Unmapped exceptions are logged with their traceback.

    Args:
        error: The exception to handle

    Returns:
        An HTTPException if the error can be mapped, None otherwise
    """
    if isinstance(error, DomainError):
        return map_exception(error)
    elif isinstance(error, HTTPException):
        return error
    elif isinstance(error, SQLAlchemyError):
        logger.error("Database error while handling request", exc_info=error)
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=STORE_ERROR_MESSAGE)

    logger.error(f"Unexpected error: {error}", exc_info=error)
    return None
