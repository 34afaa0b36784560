"""Crop-rectangle and preview-transform math. Pure functions, no I/O.

All pixel rounding goes through ``round_half_away`` so a given input always
lands on the same pixel regardless of banker's-rounding ties.
"""

from __future__ import annotations

from magic_moment.crop.config import POSTCARD_ASPECT_RATIO
from magic_moment.errors import InvalidDimensionsError
from magic_moment.models.crop import CropRect, ManualAdjustment, NormalizedPoint, PreviewTransform
from magic_moment.utils.math_helpers import clamp, is_finite_positive, round_half_away

# Direct manipulation: the photo follows the pointer, so the crop window moves
# opposite to the pointer/arrow direction. Applied by drag, keyboard and the
# preview focal offset alike.
GRAB_DIRECTION = -1

DEFAULT_ADJUSTMENT_CAP = 0.3


def fit_crop_size(image_w: int, image_h: int, aspect_ratio: float) -> tuple[int, int]:
    """Largest (w, h) of the given aspect ratio that fits inside the image."""
    if not (is_finite_positive(image_w) and is_finite_positive(image_h)):
        raise InvalidDimensionsError(f"Image dimensions must be positive, got {image_w}x{image_h}")
    if not is_finite_positive(aspect_ratio):
        raise InvalidDimensionsError(f"Aspect ratio must be a positive number, got {aspect_ratio}")

    if image_w / aspect_ratio <= image_h:
        crop_w = int(image_w)
        crop_h = round_half_away(image_w / aspect_ratio)
    else:
        crop_h = int(image_h)
        crop_w = round_half_away(image_h * aspect_ratio)

    if crop_w <= 0 or crop_h <= 0:
        raise InvalidDimensionsError(
            f"Aspect ratio {aspect_ratio} yields an empty crop for a {image_w}x{image_h} image"
        )
    return crop_w, crop_h


def compute_crop_rect(
    image_w: int,
    image_h: int,
    focal: NormalizedPoint,
    target_aspect_ratio: float = POSTCARD_ASPECT_RATIO,
    manual_adjustment: ManualAdjustment | None = None,
    adjustment_cap: float = DEFAULT_ADJUSTMENT_CAP,
) -> CropRect:
    """Pixel crop of ``target_aspect_ratio`` centred on the focal point.

    The manual adjustment shifts the centre by up to ``adjustment_cap`` of the
    image extent per axis. The rectangle is clamped so it never leaves the image.
    """
    crop_w, crop_h = fit_crop_size(image_w, image_h, target_aspect_ratio)

    cx = round_half_away(focal.x * image_w)
    cy = round_half_away(focal.y * image_h)

    if manual_adjustment is not None:
        cx += round_half_away(manual_adjustment.x * image_w * adjustment_cap)
        cy += round_half_away(manual_adjustment.y * image_h * adjustment_cap)

    x = round_half_away(cx - crop_w / 2)
    y = round_half_away(cy - crop_h / 2)

    x = int(clamp(x, 0, image_w - crop_w))
    y = int(clamp(y, 0, image_h - crop_h))

    return CropRect(x=x, y=y, w=crop_w, h=crop_h)


def preview_transform(
    scale: float,
    focal: NormalizedPoint,
    manual_adjustment: ManualAdjustment | None = None,
) -> PreviewTransform:
    """CSS-style ``scale() translate()`` that previews the crop without committing it.

    Translation is in percent of the element. The image moves opposite to the
    window, so both the focal offset and the adjustment carry ``GRAB_DIRECTION``;
    a positive adjustment therefore reveals content to the right/bottom, the same
    way ``compute_crop_rect`` moves the crop centre.
    Note the adjustment term is negated too: the plain
    ``-(focal - 0.5) * 100 + adj * extra / 2`` translate would pan the preview
    against the direction ``compute_crop_rect`` shifts the crop.
    """
    if not is_finite_positive(scale) or scale < 1:
        raise InvalidDimensionsError(f"Preview scale must be >= 1, got {scale}")

    adj = manual_adjustment or ManualAdjustment()
    extra = (scale - 1) * 100

    window_x = (focal.x - 0.5) * 100 + adj.x * extra / 2
    window_y = (focal.y - 0.5) * 100 + adj.y * extra / 2

    return PreviewTransform(
        scale=scale,
        # + 0.0 folds -0.0 into 0.0
        translate_x_percent=GRAB_DIRECTION * window_x + 0.0,
        translate_y_percent=GRAB_DIRECTION * window_y + 0.0,
    )


def adjusted_focal_point(
    focal: NormalizedPoint,
    manual_adjustment: ManualAdjustment | None,
    adjustment_cap: float = DEFAULT_ADJUSTMENT_CAP,
) -> NormalizedPoint:
    """Focal point shifted by the manual adjustment, clamped to [0, 1]."""
    if manual_adjustment is None:
        return focal
    return NormalizedPoint(
        x=clamp(focal.x + manual_adjustment.x * adjustment_cap, 0.0, 1.0),
        y=clamp(focal.y + manual_adjustment.y * adjustment_cap, 0.0, 1.0),
    )
