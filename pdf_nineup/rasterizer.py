"""Render source pages into JPEG raster images."""

from __future__ import annotations

from .backends.base import SourceDocument
from .exceptions import RasterizationError
from .imaging import encode_jpeg, flatten_onto_white
from .resolution import choose_render_scale
from .types import ImageFormat, NineUpOptions, RasterImage
from .utils import get_logger

LOGGER = get_logger("pdf_nineup.rasterizer")


class PageRasterizer:
    """Turns one source page at a time into a :class:`RasterImage`."""

    def __init__(self, options: NineUpOptions | None = None) -> None:
        self.options = options or NineUpOptions()

    def scale_for(self, source: SourceDocument, page_index: int) -> float:
        width, height = source.native_size(page_index)
        return choose_render_scale(
            width,
            height,
            base_scale=self.options.base_scale,
            max_dimension=self.options.max_dimension,
        )

    def rasterize(self, source: SourceDocument, page_index: int) -> RasterImage:
        """Render ``page_index`` of ``source`` as a JPEG over a white background.

        Raises:
            RasterizationError: If the backend fails to size, render or
                encode the page.
        """

        try:
            scale = self.scale_for(source, page_index)
            rendered = source.render_page(page_index, scale)
            flat = flatten_onto_white(rendered)
            try:
                data = encode_jpeg(flat, self.options.jpeg_quality)
                width, height = flat.size
            finally:
                # Drop pixel buffers as soon as the JPEG exists.
                flat.close()
                rendered.close()
        except RasterizationError:
            raise
        except Exception as exc:
            raise RasterizationError(
                page_index, f"Failed to render page {page_index + 1}: {exc}"
            ) from exc

        LOGGER.debug(
            "Rendered page %s at scale %.4f to %sx%s JPEG (%s bytes)",
            page_index + 1,
            scale,
            width,
            height,
            len(data),
        )
        return RasterImage(
            width=width,
            height=height,
            data=data,
            format=ImageFormat.JPEG,
            page_index=page_index,
        )
