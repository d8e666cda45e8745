"""pypdf backend used to assemble the output PDF."""

from __future__ import annotations

import io
import zlib
from typing import Dict, List

from PIL import Image
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject, NumberObject

from ..exceptions import EmbedError, SerializationError
from ..imaging import IMAGE_ERRORS
from ..types import ImageFormat, PageSize, PlacementRect
from .base import DocumentEncoder, ImageHandle, PageHandle

_COLOR_SPACES = {"L": "/DeviceGray", "RGB": "/DeviceRGB"}
_PIL_FORMATS = {ImageFormat.JPEG: "JPEG", ImageFormat.PNG: "PNG"}


def _fmt(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return text or "0"


class PypdfEncoder(DocumentEncoder):
    """Document encoder implementation that uses `pypdf` under the hood.

    JPEG payloads are embedded verbatim as ``/DCTDecode`` image XObjects.
    PNG payloads are decoded and stored as ``/FlateDecode`` pixel data.
    Only 8-bit grayscale and RGB images are accepted; anything else is
    rejected with :class:`EmbedError` so the caller can re-encode it.
    """

    def __init__(self, *, producer: str = "PDF Nine-Up") -> None:
        self.producer = producer
        self._writer: PdfWriter | None = None
        self._images = 0
        self._operations: Dict[int, List[str]] = {}

    def create_document(self) -> None:
        self._writer = PdfWriter()
        self._writer.add_metadata({"/Producer": self.producer})
        self._images = 0
        self._operations = {}

    @property
    def writer(self) -> PdfWriter:
        if self._writer is None:
            raise RuntimeError("create_document() must be called first")
        return self._writer

    @property
    def image_count(self) -> int:
        return self._images

    @property
    def page_count(self) -> int:
        return len(self.writer.pages)

    def add_page(self, size: PageSize) -> PageHandle:
        writer = self.writer
        width, height = size
        writer.add_blank_page(width=width, height=height)
        page = writer.pages[-1]
        page[NameObject("/Resources")] = DictionaryObject(
            {NameObject("/XObject"): DictionaryObject()}
        )
        number = len(writer.pages)
        self._operations[number] = []
        return PageHandle(number=number, width=width, height=height, obj=page)

    def embed_image(self, data: bytes, fmt: ImageFormat) -> ImageHandle:
        fmt = ImageFormat(fmt)
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                detected = image.format
                mode = image.mode
                width, height = image.size
                pixels = image.tobytes() if fmt is ImageFormat.PNG else b""
        except IMAGE_ERRORS as exc:
            raise EmbedError(f"Unable to read {fmt.value} image: {exc}") from exc

        if detected != _PIL_FORMATS[fmt]:
            raise EmbedError(f"Expected {fmt.value} data, found {detected or 'unknown'}")
        if mode not in _COLOR_SPACES:
            raise EmbedError(f"Unsupported {fmt.value} colour mode: {mode}")

        stream = DecodedStreamObject()
        if fmt is ImageFormat.JPEG:
            stream.set_data(data)
            image_filter = "/DCTDecode"
        else:
            stream.set_data(zlib.compress(pixels))
            image_filter = "/FlateDecode"
        stream.update(
            {
                NameObject("/Type"): NameObject("/XObject"),
                NameObject("/Subtype"): NameObject("/Image"),
                NameObject("/Width"): NumberObject(width),
                NameObject("/Height"): NumberObject(height),
                NameObject("/ColorSpace"): NameObject(_COLOR_SPACES[mode]),
                NameObject("/BitsPerComponent"): NumberObject(8),
                NameObject("/Filter"): NameObject(image_filter),
            }
        )
        reference = self.writer._add_object(stream)  # type: ignore[attr-defined]
        self._images += 1
        return ImageHandle(
            name=f"/Im{self._images}", width=width, height=height, reference=reference
        )

    def draw_image(self, page: PageHandle, image: ImageHandle, rect: PlacementRect) -> None:
        resources = page.obj["/Resources"]  # type: ignore[index]
        resources["/XObject"][NameObject(image.name)] = image.reference
        self._operations[page.number].append(
            f"q {_fmt(rect.width)} 0 0 {_fmt(rect.height)} {_fmt(rect.x)} {_fmt(rect.y)} cm "
            f"{image.name} Do Q"
        )

    def _flush_contents(self) -> None:
        writer = self.writer
        for number, operations in self._operations.items():
            if not operations:
                continue
            content = DecodedStreamObject()
            content.set_data("\n".join(operations).encode("ascii"))
            page = writer.pages[number - 1]
            page[NameObject("/Contents")] = writer._add_object(content)  # type: ignore[attr-defined]
        self._operations = {number: [] for number in self._operations}

    def serialize(self) -> bytes:
        writer = self.writer
        try:
            self._flush_contents()
            buffer = io.BytesIO()
            writer.write(buffer)
        except Exception as exc:
            raise SerializationError(f"Unexpected error writing PDF. Error: {exc}") from exc
        return buffer.getvalue()
