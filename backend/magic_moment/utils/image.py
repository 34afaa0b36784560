"""Image reference helpers: bytes / data URL / http URL / path → something a model can read."""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from magic_moment.errors import ImageProcessingError

logger = logging.getLogger(__name__)

ImageInput = Union[bytes, str, Path]

_FORMAT_MIME = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
    "BMP": "image/bmp",
    "TIFF": "image/tiff",
}


def sniff_mime(data: bytes) -> str:
    """Detect the MIME type of encoded image bytes with Pillow."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format or ""
    except (UnidentifiedImageError, OSError) as e:
        raise ImageProcessingError(f"Could not decode image: {e}") from e
    return _FORMAT_MIME.get(fmt, "image/jpeg")


def encode_data_url(data: bytes, mime: str | None = None) -> str:
    mime = mime or sniff_mime(data)
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_url(url: str) -> bytes:
    """Return the raw bytes carried by a base64 data URL."""
    header, _, payload = url.partition(",")
    if not header.startswith("data:") or ";base64" not in header or not payload:
        raise ImageProcessingError("Not a base64 data URL", status_code=400)
    try:
        return base64.b64decode(payload, validate=True)
    except ValueError as e:
        raise ImageProcessingError(f"Invalid base64 payload: {e}", status_code=400) from e


def to_data_url(image: ImageInput) -> str:
    """Normalise an image reference into a URL a vision model can fetch.

    bytes → data URL, ``data:`` and ``http(s)://`` strings pass through,
    anything else is treated as a filesystem path and read.
    """
    if isinstance(image, (bytes, bytearray)):
        return encode_data_url(bytes(image))

    ref = str(image)
    if ref.startswith(("data:", "http://", "https://")):
        return ref

    path = Path(ref)
    if not path.is_file():
        raise ImageProcessingError(f"Image file not found: {ref}")
    logger.debug("Reading image from %s", path)
    return encode_data_url(path.read_bytes())


def load_image_bytes(image: ImageInput) -> bytes:
    """Resolve bytes / data URL / path into raw encoded bytes (http URLs are not fetched)."""
    if isinstance(image, (bytes, bytearray)):
        return bytes(image)
    ref = str(image)
    if ref.startswith("data:"):
        return decode_data_url(ref)
    if ref.startswith(("http://", "https://")):
        raise ImageProcessingError("Remote images must be fetched by the caller")
    path = Path(ref)
    if not path.is_file():
        raise ImageProcessingError(f"Image file not found: {ref}")
    return path.read_bytes()
