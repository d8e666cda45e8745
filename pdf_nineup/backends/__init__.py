"""Backend abstractions for PDF Nine-Up."""

from .base import DocumentEncoder, ImageHandle, PageHandle, Rasterizer, SourceDocument
from .pypdf_backend import PypdfEncoder
from .pypdfium2_backend import Pypdfium2Document, Pypdfium2Rasterizer

__all__ = [
    "DocumentEncoder",
    "ImageHandle",
    "PageHandle",
    "Rasterizer",
    "SourceDocument",
    "PypdfEncoder",
    "Pypdfium2Document",
    "Pypdfium2Rasterizer",
]
