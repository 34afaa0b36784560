"""Pixel extraction with Pillow, the last step after the crop rectangle is known."""

from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from magic_moment.errors import AnalysisError, ImageProcessingError
from magic_moment.models.crop import CropHints, CropRect, ManualAdjustment
from magic_moment.utils.image import ImageInput, load_image_bytes

logger = logging.getLogger(__name__)


def image_size(data: bytes) -> tuple[int, int]:
    """(width, height) of encoded image bytes."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, OSError) as e:
        raise ImageProcessingError(f"Could not determine image dimensions: {e}") from e


def extract_crop(data: bytes, rect: CropRect, quality: int = 90) -> bytes:
    """Cut ``rect`` out of the image and re-encode it as JPEG."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            if rect.x < 0 or rect.y < 0 or rect.x + rect.w > width or rect.y + rect.h > height:
                raise ImageProcessingError(
                    f"Crop {rect.as_box()} exceeds image bounds {width}x{height}"
                )
            cropped = img.crop(rect.as_box())
            if cropped.mode not in ("RGB", "L"):
                cropped = cropped.convert("RGB")
            out = io.BytesIO()
            cropped.save(out, format="JPEG", quality=quality)
    except (UnidentifiedImageError, OSError) as e:
        raise ImageProcessingError(f"Failed to crop image: {e}") from e

    logger.debug("Extracted %dx%d crop at (%d, %d)", rect.w, rect.h, rect.x, rect.y)
    return out.getvalue()


async def smart_crop(
    engine,
    image: ImageInput,
    manual_adjustment: ManualAdjustment | None = None,
) -> tuple[CropHints, CropRect, bytes]:
    """Analyze, compute the crop rectangle and extract it in one go.

    ``engine`` is a ``CropHintEngine``. The engine's ``latest`` hints may belong to
    a different image, so a superseded analysis is an error, never a fallback.

    Raises:
        AnalysisError: 409 when a newer analysis superseded this one.
    """
    data = load_image_bytes(image)
    hints = await engine.analyze(data)
    if hints is None:
        raise AnalysisError("Analysis superseded by a newer request", status_code=409)

    width, height = image_size(data)
    rect = engine.crop_rect(width, height, hints, manual_adjustment)
    return hints, rect, extract_crop(data, rect)
