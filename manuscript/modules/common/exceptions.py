"""Domain exception classes for business logic errors."""


class DomainError(Exception):
    """Base class for all domain-specific errors."""

    pass


class ResourceNotFoundError(DomainError):
    """Raised when a requested resource cannot be found."""

    pass


NotFoundError = ResourceNotFoundError


class ValidationError(DomainError):
    """Raised when required input is missing or invalid."""

    pass


class EmptyInputError(DomainError):
    """Raised when an operation needs input that does not exist, e.g. exporting a book without chapters."""

    pass


class StoreError(DomainError):
    """Raised when the persistent store or the blob store fails.

    The message is logged with its cause; callers only see a generic failure.
    """

    pass


class BlobStorageError(StoreError):
    """Raised when reading or writing source file bytes fails."""

    pass


class ChapterNotFoundError(ResourceNotFoundError):
    """Raised when a chapter cannot be found."""

    pass


class SourceNotFoundError(ResourceNotFoundError):
    """Raised when a source cannot be found."""

    pass


class VersionNotFoundError(ResourceNotFoundError):
    """Raised when a version cannot be found."""

    pass
