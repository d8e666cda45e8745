"""Backend protocols for rendering source pages and writing the output PDF."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, Tuple

from ..types import ImageFormat, PageSize, PlacementRect

if TYPE_CHECKING:
    from PIL import Image


@dataclass
class SourceDocument:
    """Represents a loaded source PDF with backend-specific rendering helpers."""

    page_count: int

    def native_size(self, index: int) -> Tuple[float, float]:
        """Return the page size at scale 1.0 as ``(width, height)``."""
        raise NotImplementedError

    def render_page(self, index: int, scale: float) -> "Image.Image":
        """Render page ``index`` at ``scale`` over a white background."""
        raise NotImplementedError

    def close(self) -> None:
        """Release backend resources held by the document."""


class Rasterizer(Protocol):
    """Protocol for source-page renderers."""

    def open(self, data: bytes) -> SourceDocument:
        """Load PDF bytes and return a document wrapper."""


@dataclass
class ImageHandle:
    """An image embedded in the output document's resource table."""

    name: str
    width: int
    height: int
    reference: object = field(default=None, repr=False)


@dataclass
class PageHandle:
    """A page of the output document."""

    number: int
    width: float
    height: float
    obj: object = field(default=None, repr=False)


class DocumentEncoder(Protocol):
    """Protocol defining the operations used to assemble the output PDF."""

    def create_document(self) -> None:
        """Start a new, empty output document."""

    def add_page(self, size: PageSize) -> PageHandle:
        """Append a blank page of ``size`` and return its handle."""

    def embed_image(self, data: bytes, fmt: ImageFormat) -> ImageHandle:
        """Embed encoded image bytes, raising :class:`EmbedError` when rejected."""

    def draw_image(self, page: PageHandle, image: ImageHandle, rect: PlacementRect) -> None:
        """Draw an embedded image onto ``page`` inside ``rect``."""

    def serialize(self) -> bytes:
        """Return the finished document as PDF bytes."""

    @property
    def image_count(self) -> int:
        """Number of images embedded so far."""

    @property
    def page_count(self) -> int:
        """Number of pages added so far."""
