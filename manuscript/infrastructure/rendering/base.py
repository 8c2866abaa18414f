"""Renderer interfaces used by the export service."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from ...modules.export.schemas import Manuscript


class DocumentRenderer(ABC):
    """Turns a manuscript into the bytes of a paginated document."""

    @abstractmethod
    def render(self, manuscript: Manuscript) -> bytes:
        pass


class SiteWriter(ABC):
    """Writes a manuscript as a static multi-page web site."""

    @abstractmethod
    def write(self, manuscript: Manuscript, output_dir: Path) -> List[Path]:
        """Write all pages into output_dir and return the paths written."""
        pass
