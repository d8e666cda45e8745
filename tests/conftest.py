from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable
import sys

import pytest
from PIL import Image
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_nineup.backends.base import ImageHandle, PageHandle, SourceDocument  # noqa: E402
from pdf_nineup.exceptions import EmbedError  # noqa: E402
from pdf_nineup.types import ImageFormat, RasterImage  # noqa: E402


@dataclass
class FakeSourceDocument(SourceDocument):
    sizes: list = field(default_factory=list)
    mode: str = "RGB"
    color: object = "white"
    fail_on: set = field(default_factory=set)
    rendered: list = field(default_factory=list)
    closed: bool = False

    def native_size(self, index: int):
        return self.sizes[index]

    def render_page(self, index: int, scale: float) -> Image.Image:
        if index in self.fail_on:
            raise RuntimeError(f"renderer crashed on page {index}")
        width, height = self.sizes[index]
        self.rendered.append((index, scale))
        return Image.new(self.mode, (round(width * scale), round(height * scale)), self.color)

    def close(self) -> None:
        self.closed = True


class FakeRasterizer:
    def __init__(self, document: FakeSourceDocument) -> None:
        self.document = document
        self.opened = 0

    def open(self, data: bytes) -> FakeSourceDocument:
        self.opened += 1
        return self.document


class RecordingEncoder:
    """In-memory encoder that records every call."""

    def __init__(self, reject: Callable[[bytes, ImageFormat], bool] | None = None) -> None:
        self.reject = reject or (lambda data, fmt: False)
        self.created = False
        self.serialized = False
        self.pages: list[PageHandle] = []
        self.images: list[tuple[ImageFormat, int, int]] = []
        self.draws: list[tuple[int, ImageHandle, object]] = []

    def create_document(self) -> None:
        self.created = True

    def add_page(self, size) -> PageHandle:
        handle = PageHandle(number=len(self.pages) + 1, width=size[0], height=size[1])
        self.pages.append(handle)
        return handle

    def embed_image(self, data: bytes, fmt: ImageFormat) -> ImageHandle:
        if self.reject(data, fmt):
            raise EmbedError(f"{fmt.value} rejected")
        try:
            with Image.open(io.BytesIO(data)) as image:
                width, height = image.size
        except OSError as exc:
            raise EmbedError(str(exc)) from exc
        self.images.append((fmt, width, height))
        return ImageHandle(name=f"/Im{len(self.images)}", width=width, height=height)

    def draw_image(self, page: PageHandle, image: ImageHandle, rect) -> None:
        self.draws.append((page.number, image, rect))

    def serialize(self) -> bytes:
        self.serialized = True
        return b"%PDF-recorded"

    @property
    def image_count(self) -> int:
        return len(self.images)

    @property
    def page_count(self) -> int:
        return len(self.pages)


def _jpeg_bytes(width: int, height: int, color="white", mode="RGB") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture()
def jpeg_bytes() -> Callable[..., bytes]:
    return _jpeg_bytes


@pytest.fixture()
def raster_factory() -> Callable[..., RasterImage]:
    def _create(index: int = 0, width: int = 140, height: int = 198) -> RasterImage:
        return RasterImage(
            width=width,
            height=height,
            data=_jpeg_bytes(width, height),
            format=ImageFormat.JPEG,
            page_index=index,
        )

    return _create


@pytest.fixture()
def recording_encoder() -> RecordingEncoder:
    return RecordingEncoder()


@pytest.fixture()
def fake_document() -> Callable[..., FakeSourceDocument]:
    def _create(count: int, size=(612, 792), **kwargs) -> FakeSourceDocument:
        return FakeSourceDocument(page_count=count, sizes=[size] * count, **kwargs)

    return _create


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(
        filename: str = "sample.pdf",
        pages: int = 5,
        width: float = 200,
        height: float = 200,
        title: str | None = None,
    ) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=width, height=height)
        if title is not None:
            writer.add_metadata({"/Title": title})
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("sample.pdf", pages=5, title="Sample")


@pytest.fixture()
def make_encoder() -> type[RecordingEncoder]:
    return RecordingEncoder


@pytest.fixture()
def make_rasterizer() -> type[FakeRasterizer]:
    return FakeRasterizer
