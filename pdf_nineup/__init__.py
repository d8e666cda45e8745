"""
PDF Nine-Up - pack every nine pages of a PDF onto a single sheet.

Each source page is rendered to a JPEG, and the images are laid out
three by three on A4 output pages.

Quick Start:
    >>> from pdf_nineup import convert_pdf
    >>> result = convert_pdf('lecture.pdf')
    >>> result.output_path.name
    'lecture_9in1.pdf'

Main Classes:
    - NineUpPipeline: Render, pack and serialize one document
    - GridPacker: 3x3 page/cell state machine
    - ImageEmbedder: Embedding with PNG and placeholder fallbacks

For CLI usage, use the 'pdf-nineup' command after installation.
"""

# Core classes
from pdf_nineup.embedder import ImageEmbedder
from pdf_nineup.packer import GridPacker, compute_placement, page_count_for
from pdf_nineup.pipeline import NineUpPipeline, convert_pdf, default_output_path, nine_up_bytes
from pdf_nineup.rasterizer import PageRasterizer
from pdf_nineup.resolution import choose_render_scale

# Data types
from pdf_nineup.types import (
    A4,
    GridCell,
    ImageFormat,
    NineUpOptions,
    NineUpResult,
    PDFInfo,
    PlacementRect,
    RasterImage,
)

# Exceptions
from pdf_nineup.exceptions import (
    DecodeError,
    EmbedError,
    InputMissingError,
    InvalidPDFError,
    NineUpException,
    RasterizationError,
    SerializationError,
)

# Utility functions
from pdf_nineup.info import get_pdf_info, validate_pdf
from pdf_nineup.utils import build_output_filename, format_file_size

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Main classes
    "NineUpPipeline",
    "GridPacker",
    "ImageEmbedder",
    "PageRasterizer",
    "convert_pdf",
    "nine_up_bytes",
    "default_output_path",
    "compute_placement",
    "page_count_for",
    "choose_render_scale",
    # Data types
    "A4",
    "GridCell",
    "ImageFormat",
    "NineUpOptions",
    "NineUpResult",
    "PDFInfo",
    "PlacementRect",
    "RasterImage",
    # Exceptions
    "NineUpException",
    "InputMissingError",
    "InvalidPDFError",
    "RasterizationError",
    "EmbedError",
    "DecodeError",
    "SerializationError",
    # Utility functions
    "get_pdf_info",
    "validate_pdf",
    "build_output_filename",
    "format_file_size",
    # Version info
    "__version__",
]
