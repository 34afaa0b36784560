"""Smart crop: focal-point analysis contract and crop geometry."""

from magic_moment.crop.adjust import CropAdjuster
from magic_moment.crop.config import POSTCARD_ASPECT_RATIO, CropConfig
from magic_moment.crop.engine import CropHintEngine
from magic_moment.crop.geometry import (
    GRAB_DIRECTION,
    adjusted_focal_point,
    compute_crop_rect,
    fit_crop_size,
    preview_transform,
)
from magic_moment.crop.hints import parse_crop_hints

__all__ = [
    "CropAdjuster",
    "CropConfig",
    "CropHintEngine",
    "GRAB_DIRECTION",
    "POSTCARD_ASPECT_RATIO",
    "adjusted_focal_point",
    "compute_crop_rect",
    "fit_crop_size",
    "parse_crop_hints",
    "preview_transform",
]
