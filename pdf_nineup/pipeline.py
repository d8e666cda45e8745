"""Nine-up conversion pipeline: render, pack, embed, serialize."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, List, Optional, Union

from .backends import PypdfEncoder, Pypdfium2Rasterizer
from .backends.base import DocumentEncoder, Rasterizer, SourceDocument
from .embedder import ImageEmbedder
from .exceptions import InputMissingError, NineUpException, SerializationError
from .packer import GridPacker
from .rasterizer import PageRasterizer
from .status import LoggingStatusSink, StatusSink
from .types import NineUpOptions, NineUpResult, RasterImage
from .utils import build_output_filename, get_logger, resolve_path

LOGGER = get_logger("pdf_nineup.pipeline")

EncoderFactory = Callable[[], DocumentEncoder]


class NineUpPipeline:
    """Sequences rasterization, grid packing and serialization for one document.

    Every step runs strictly after the previous one: pages are rendered one
    at a time in source order, then packed nine to a sheet, then written.
    Rasterization and serialization failures abort the run with no output;
    unreadable page images are replaced by blank tiles.
    """

    def __init__(
        self,
        options: Optional[NineUpOptions] = None,
        *,
        rasterizer: Optional[Rasterizer] = None,
        encoder_factory: Optional[EncoderFactory] = None,
        status: Optional[StatusSink] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        self.options = options or NineUpOptions()
        self.rasterizer: Rasterizer = rasterizer or Pypdfium2Rasterizer()
        self.encoder_factory: EncoderFactory = encoder_factory or PypdfEncoder
        self.status: StatusSink = status or LoggingStatusSink()
        self.progress_callback = progress_callback
        self.page_rasterizer = PageRasterizer(self.options)

    def _rasterize_all(self, source: SourceDocument) -> List[RasterImage]:
        total = source.page_count
        self.status.report(f"Rendering {total} pages to images...")
        images: List[RasterImage] = []
        for index in range(total):
            images.append(self.page_rasterizer.rasterize(source, index))
            self.status.report(f"Rendered page {index + 1} / {total}")
            if self.progress_callback:
                self.progress_callback(index + 1, total)
        return images

    def run(self, source: Optional[bytes]) -> NineUpResult:
        if not source:
            raise InputMissingError()

        self.status.report("Loading PDF...")
        document = self.rasterizer.open(source)
        try:
            source_pages = document.page_count
            images = self._rasterize_all(document)
        finally:
            document.close()

        self.status.report("Creating 9-in-1 PDF...")
        encoder = self.encoder_factory()
        embedder = ImageEmbedder()
        packer = GridPacker(
            encoder,
            embedder,
            page_size=self.options.page_size,
            padding=self.options.padding,
        )
        try:
            encoder.create_document()
            placements = packer.pack(images)
        except NineUpException:
            raise
        except Exception as exc:
            raise SerializationError(f"Failed to assemble the output PDF: {exc}") from exc
        del images

        self.status.report("Saving final PDF...")
        try:
            data = encoder.serialize()
        except NineUpException:
            raise
        except Exception as exc:
            raise SerializationError(f"Unexpected error writing PDF. Error: {exc}") from exc

        result = NineUpResult(
            data=data,
            source_pages=source_pages,
            output_pages=encoder.page_count,
            placeholders=embedder.placeholder_count,
            placements=placements,
        )
        if embedder.placeholder_count:
            LOGGER.warning(
                "%s page(s) could not be decoded and were replaced by blank tiles",
                embedder.placeholder_count,
            )
        LOGGER.debug("Packed %s source pages onto %s sheets", source_pages, result.output_pages)
        self.status.report("Done")
        return result


def nine_up_bytes(
    data: Optional[bytes],
    *,
    options: Optional[NineUpOptions] = None,
    status: Optional[StatusSink] = None,
) -> bytes:
    """Convert PDF bytes and return the nine-up PDF bytes."""

    return NineUpPipeline(options, status=status).run(data).data


def default_output_path(input_path: Union[str, Path], suffix: str = "_9in1") -> Path:
    source = resolve_path(input_path)
    return source.parent / build_output_filename(source.name, suffix)


def convert_pdf(
    input_path: Union[str, Path, None],
    output_path: Union[str, Path, None] = None,
    *,
    options: Optional[NineUpOptions] = None,
    status: Optional[StatusSink] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> NineUpResult:
    """Convert a PDF file on disk into a nine-up PDF.

    Args:
        input_path: Source PDF path.
        output_path: Destination file or directory. A path ending in a
            separator is always treated as a directory and created if
            needed. Defaults to the source directory with ``_9in1``
            appended to the file name.
        options: Conversion options.
        status: Sink receiving progress messages.
        progress_callback: Called with (current, total) after each rendered page.

    Raises:
        InputMissingError: If no input was given or the file does not exist.

    Returns:
        The :class:`NineUpResult`, with ``output_path`` set.
    """

    if input_path is None:
        raise InputMissingError()
    options = options or NineUpOptions()
    source = resolve_path(input_path)
    if not source.is_file():
        raise InputMissingError(f"PDF file not found: {source}")

    if output_path is None:
        destination = default_output_path(source, options.output_suffix)
    else:
        wants_directory = str(output_path).endswith((os.sep, "/"))
        destination = resolve_path(output_path)
        if wants_directory or destination.is_dir():
            destination = destination / build_output_filename(source.name, options.output_suffix)

    pipeline = NineUpPipeline(options, status=status, progress_callback=progress_callback)
    result = pipeline.run(source.read_bytes())

    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("wb") as handle:
        handle.write(result.data)
    result.output_path = destination
    LOGGER.debug("Wrote %s bytes to %s", len(result.data), destination)
    return result
