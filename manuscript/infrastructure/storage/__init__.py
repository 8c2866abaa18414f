from .base import BlobStore
from .local import LocalBlobStore

__all__ = ["BlobStore", "LocalBlobStore"]
