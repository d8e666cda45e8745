"""Pillow helpers for flattening, encoding and decoding page images."""

from __future__ import annotations

import io

from PIL import Image

from .exceptions import DecodeError

WHITE = (255, 255, 255)
PLACEHOLDER_SIZE = 100

# Errors Pillow raises for unreadable, truncated or oversized image data.
IMAGE_ERRORS = (OSError, SyntaxError, ValueError, Image.DecompressionBombError)


def flatten_onto_white(image: Image.Image) -> Image.Image:
    """Return an RGB copy of ``image`` composited over a solid white background."""

    has_alpha = image.mode in ("RGBA", "LA", "PA") or (
        image.mode == "P" and "transparency" in image.info
    )
    if has_alpha:
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, WHITE)
        background.paste(rgba, mask=rgba.getchannel("A"))
        rgba.close()
        return background
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


def encode_jpeg(image: Image.Image, quality: int) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def encode_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def decode_image(data: bytes) -> Image.Image:
    """Fully decode ``data`` into a Pillow image.

    Raises:
        DecodeError: If Pillow cannot identify or load the bytes.
    """

    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except IMAGE_ERRORS as exc:
        raise DecodeError(f"Unable to decode image data: {exc}") from exc
    return image


def placeholder_png(size: int = PLACEHOLDER_SIZE) -> bytes:
    """Return a ``size`` x ``size`` solid white PNG."""

    with Image.new("RGB", (size, size), WHITE) as tile:
        return encode_png(tile)
