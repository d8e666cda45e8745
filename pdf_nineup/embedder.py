"""Embed raster images into the output document, degrading instead of failing.

Embedding runs through three tiers:

1. the encoder's direct JPEG/PNG path;
2. decode with Pillow, flatten onto white and embed as a fresh PNG;
3. embed a blank 100x100 placeholder tile.

A corrupt page therefore shows up as an empty cell in the output rather
than aborting the whole document.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .backends.base import DocumentEncoder, ImageHandle
from .exceptions import DecodeError, EmbedError
from .imaging import decode_image, encode_png, flatten_onto_white, placeholder_png
from .types import ImageFormat, RasterImage
from .utils import get_logger

LOGGER = get_logger("pdf_nineup.embedder")


class EmbedTier(str, Enum):
    DIRECT = "direct"
    REENCODED = "reencoded"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class EmbedOutcome:
    handle: ImageHandle
    tier: EmbedTier


def _embed_direct(encoder: DocumentEncoder, image: RasterImage) -> ImageHandle | None:
    try:
        return encoder.embed_image(image.data, image.format)
    except EmbedError as exc:
        LOGGER.warning(
            "Embedding page %s failed, trying PNG fallback: %s", image.page_index + 1, exc
        )
        return None


def _embed_reencoded(encoder: DocumentEncoder, image: RasterImage) -> ImageHandle | None:
    try:
        decoded = decode_image(image.data)
    except DecodeError as exc:
        LOGGER.warning(
            "Page %s image could not be decoded, using placeholder: %s",
            image.page_index + 1,
            exc,
        )
        return None

    flat = flatten_onto_white(decoded)
    try:
        png = encode_png(flat)
    finally:
        flat.close()
        decoded.close()

    try:
        return encoder.embed_image(png, ImageFormat.PNG)
    except EmbedError as exc:
        LOGGER.warning(
            "Re-encoded page %s was rejected, using placeholder: %s", image.page_index + 1, exc
        )
        return None


class ImageEmbedder:
    """Inserts raster images into a :class:`DocumentEncoder`."""

    def __init__(self) -> None:
        self.fallback_count = 0
        self.placeholder_count = 0
        self._placeholder: bytes | None = None

    def placeholder_bytes(self) -> bytes:
        if self._placeholder is None:
            self._placeholder = placeholder_png()
        return self._placeholder

    def embed_with_outcome(self, encoder: DocumentEncoder, image: RasterImage) -> EmbedOutcome:
        handle = _embed_direct(encoder, image)
        if handle is not None:
            return EmbedOutcome(handle, EmbedTier.DIRECT)

        self.fallback_count += 1
        handle = _embed_reencoded(encoder, image)
        if handle is not None:
            return EmbedOutcome(handle, EmbedTier.REENCODED)

        self.placeholder_count += 1
        handle = encoder.embed_image(self.placeholder_bytes(), ImageFormat.PNG)
        return EmbedOutcome(handle, EmbedTier.PLACEHOLDER)

    def embed(self, encoder: DocumentEncoder, image: RasterImage) -> ImageHandle:
        """Embed ``image`` and return its handle; never raises for bad image data."""

        return self.embed_with_outcome(encoder, image).handle
