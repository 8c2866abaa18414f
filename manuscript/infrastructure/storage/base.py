"""Blob storage interface for source file bytes."""

from abc import ABC, abstractmethod
from pathlib import Path


class BlobStore(ABC):
    """Byte storage for uploaded source files.

    Blobs are addressed by a category (a namespace partition) and a generated
    filename. Implementations are synchronous; async callers run them in a
    worker thread. Every failure surfaces as BlobStorageError.
    """

    @abstractmethod
    def save(self, category: str, filename: str, data: bytes) -> int:
        """Store bytes under (category, filename) and return the number of bytes written."""
        pass

    @abstractmethod
    def read(self, category: str, filename: str) -> bytes:
        pass

    @abstractmethod
    def delete(self, category: str, filename: str) -> bool:
        """Remove a blob. Returns False when there was nothing to remove."""
        pass

    @abstractmethod
    def exists(self, category: str, filename: str) -> bool:
        pass

    @abstractmethod
    def path_for(self, category: str, filename: str) -> Path:
        pass
