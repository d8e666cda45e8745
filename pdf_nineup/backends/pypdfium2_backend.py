"""pypdfium2 backend used to rasterize source pages."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Tuple

import pypdfium2 as pdfium
from PIL import Image
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ..exceptions import InvalidPDFError
from .base import Rasterizer, SourceDocument

WHITE = (255, 255, 255, 255)


@dataclass
class Pypdfium2Document(SourceDocument):
    pdf: pdfium.PdfDocument

    def native_size(self, index: int) -> Tuple[float, float]:
        page = self.pdf[index]
        try:
            width, height = page.get_size()
        finally:
            page.close()
        return float(width), float(height)

    def render_page(self, index: int, scale: float) -> Image.Image:
        page = self.pdf[index]
        try:
            bitmap = page.render(scale=scale, fill_color=WHITE)
            try:
                # to_pil() shares the bitmap buffer, copy before it is freed.
                return bitmap.to_pil().copy()
            finally:
                bitmap.close()
        finally:
            page.close()

    def close(self) -> None:
        self.pdf.close()


class Pypdfium2Rasterizer(Rasterizer):
    """Rasterizer implementation that uses `pypdfium2` under the hood."""

    def open(self, data: bytes) -> SourceDocument:
        try:
            pdf = pdfium.PdfDocument(data)
        except pdfium.PdfiumError as exc:
            # PDFium refuses documents whose page tree is empty.
            if _has_no_pages(data):
                return SourceDocument(page_count=0)
            raise InvalidPDFError(f"Corrupted or invalid PDF file. Error: {exc}") from exc
        except Exception as exc:
            raise InvalidPDFError(f"Unexpected error reading PDF. Error: {exc}") from exc

        return Pypdfium2Document(page_count=len(pdf), pdf=pdf)


def _has_no_pages(data: bytes) -> bool:
    """Return True when pypdf parses ``data`` as a valid PDF with zero pages."""

    try:
        return len(PdfReader(io.BytesIO(data)).pages) == 0
    except (PdfReadError, ValueError, KeyError, TypeError):
        return False
