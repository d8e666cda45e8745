"""
Type definitions and dataclasses for PDF Nine-Up.

This module defines data structures used throughout the library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

PageSize = Tuple[float, float]

A4: PageSize = (595.28, 841.89)
"""A4 page size in PDF points (width, height)."""

GRID_ROWS = 3
GRID_COLUMNS = 3
CELLS_PER_PAGE = GRID_ROWS * GRID_COLUMNS


class ImageFormat(str, Enum):
    """Encoding of a raster image payload."""

    JPEG = "jpeg"
    PNG = "png"


@dataclass(frozen=True)
class RasterImage:
    """
    A fixed-resolution encoding of one source page.

    Attributes:
        width: Intrinsic pixel width
        height: Intrinsic pixel height
        data: Encoded image bytes
        format: Encoding of ``data``
        page_index: Zero-based index of the source page
    """

    width: int
    height: int
    data: bytes = field(repr=False)
    format: ImageFormat = ImageFormat.JPEG
    page_index: int = 0


@dataclass(frozen=True)
class GridCell:
    """One of the nine fixed slots on an output page."""

    row: int
    column: int

    def __post_init__(self) -> None:
        if not 0 <= self.row < GRID_ROWS or not 0 <= self.column < GRID_COLUMNS:
            raise ValueError(f"Grid cell out of range: ({self.row}, {self.column})")

    @classmethod
    def from_index(cls, index: int) -> "GridCell":
        """Return the row-major cell for a slot ``index`` counted across pages."""

        slot = index % CELLS_PER_PAGE
        return cls(row=slot // GRID_COLUMNS, column=slot % GRID_COLUMNS)


@dataclass(frozen=True)
class PlacementRect:
    """Drawing rectangle in page space (origin bottom-left)."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class NineUpOptions:
    """
    Options controlling how a PDF is packed nine pages to a sheet.

    Attributes:
        base_scale: Render scale used for normally sized pages
        max_dimension: Maximum raster width in pixels
        jpeg_quality: JPEG quality (1-95) for rendered pages
        padding: Inner padding of every grid cell, in points
        page_size: Output page size in points
        output_suffix: Suffix appended to derived output file names
    """

    base_scale: float = 4.0
    max_dimension: int = 1400
    jpeg_quality: int = 85
    padding: float = 6.0
    page_size: PageSize = A4
    output_suffix: str = "_9in1"

    def __post_init__(self) -> None:
        if self.base_scale <= 0:
            raise ValueError("base_scale must be positive")
        if self.max_dimension <= 0:
            raise ValueError("max_dimension must be positive")
        if not 1 <= self.jpeg_quality <= 95:
            raise ValueError("jpeg_quality must be between 1 and 95")
        if self.padding < 0:
            raise ValueError("padding must not be negative")
        width, height = self.page_size
        if width <= 2 * self.padding * GRID_COLUMNS or height <= 2 * self.padding * GRID_ROWS:
            raise ValueError("page_size is too small for the configured padding")


@dataclass
class Placement:
    """Record of one image drawn onto an output page."""

    page_number: int
    cell: GridCell
    rect: PlacementRect
    source_index: int
    placeholder: bool = False


@dataclass
class NineUpResult:
    """
    Result of a nine-up conversion.

    Attributes:
        data: Serialized output PDF
        source_pages: Number of pages in the source document
        output_pages: Number of pages in the output document
        placeholders: Number of cells filled with a blank placeholder tile
        placements: Geometry of every placed image
        output_path: Destination path when the result was written to disk
    """

    data: bytes = field(repr=False)
    source_pages: int
    output_pages: int
    placeholders: int = 0
    placements: List[Placement] = field(default_factory=list)
    output_path: Optional[Path] = None

    def __str__(self) -> str:
        """String representation of the result."""
        return (
            f"NineUpResult(source_pages={self.source_pages}, "
            f"output_pages={self.output_pages}, placeholders={self.placeholders})"
        )


@dataclass
class PDFInfo:
    """
    Source PDF information shown before a conversion.

    Attributes:
        num_pages: Number of pages in the PDF
        file_size: File size in bytes
        title: PDF title metadata
        author: PDF author metadata
        is_encrypted: Whether the PDF is encrypted
        output_pages: Number of nine-up sheets a conversion would produce
    """

    num_pages: int
    file_size: int
    title: Optional[str] = None
    author: Optional[str] = None
    is_encrypted: bool = False
    output_pages: int = 0
