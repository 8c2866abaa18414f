"""Common constants used across the application."""

from typing import Callable, Dict, Type

from fastapi import HTTPException, status

from .exceptions import (
    DomainError,
    EmptyInputError,
    ResourceNotFoundError,
    StoreError,
    ValidationError,
)

STORE_ERROR_MESSAGE = "A storage error occurred. Please try again."

EXCEPTION_MAPPING: Dict[Type[DomainError], Callable[[str], HTTPException]] = {
    ResourceNotFoundError: lambda message: HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message),
    ValidationError: lambda message: HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message),
    EmptyInputError: lambda message: HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message),
    StoreError: lambda message: HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=STORE_ERROR_MESSAGE
    ),
}

FILE_TYPES: Dict[str, str] = {
    ".pdf": "pdf",
    ".doc": "word",
    ".docx": "word",
    ".txt": "text",
    ".md": "markdown",
    ".rtf": "rtf",
    ".odt": "odt",
    ".html": "html",
    ".htm": "html",
}

DEFAULT_SETTINGS: Dict[str, str] = {
    "daily_word_goal": "1000",
    "auto_save_interval": "30",
    "theme": "light",
    "font_size": "16",
    "pomodoro_duration": "25",
}
