"""Filesystem implementation of the blob store."""

from pathlib import Path

from ...modules.common.exceptions import BlobStorageError
from ..logging import get_logger
from .base import BlobStore

logger = get_logger(__name__)


class LocalBlobStore(BlobStore):
    """Stores blobs as files under ``<root>/<category>/<filename>``.

    Category directories are created on first write.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def path_for(self, category: str, filename: str) -> Path:
        for part in (category, filename):
            if not part or part in (".", "..") or "/" in part or "\\" in part:
                raise BlobStorageError(f"Invalid blob key: {category}/{filename}")
        return self.root / category / filename

    def save(self, category: str, filename: str, data: bytes) -> int:
        path = self.path_for(category, filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise BlobStorageError(f"Failed to write blob {category}/{filename}") from e

        logger.debug("Stored blob", extra={"category": category, "blob_name": filename, "size_bytes": len(data)})
        return len(data)

    def read(self, category: str, filename: str) -> bytes:
        path = self.path_for(category, filename)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise BlobStorageError(f"Blob {category}/{filename} does not exist") from e
        except OSError as e:
            raise BlobStorageError(f"Failed to read blob {category}/{filename}") from e

    def delete(self, category: str, filename: str) -> bool:
        path = self.path_for(category, filename)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise BlobStorageError(f"Failed to delete blob {category}/{filename}") from e
        return True

    def exists(self, category: str, filename: str) -> bool:
        return self.path_for(category, filename).is_file()
