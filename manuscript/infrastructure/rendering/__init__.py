from .base import DocumentRenderer, SiteWriter
from .markup import render_markdown
from .pdf import PdfRenderer
from .site import StaticSiteWriter

__all__ = ["DocumentRenderer", "PdfRenderer", "SiteWriter", "StaticSiteWriter", "render_markdown"]
