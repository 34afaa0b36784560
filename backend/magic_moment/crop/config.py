"""Smart-crop tunables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from magic_moment.config import Settings

# Postcard front (3:2).
POSTCARD_ASPECT_RATIO = 3 / 2


@dataclass(frozen=True)
class CropConfig:
    """Controls crop geometry and the live preview interaction."""

    # Target width / height of the extracted crop
    aspect_ratio: float = POSTCARD_ASPECT_RATIO

    # Preview oversampling: image drawn at scale× so the whole frame can be panned
    preview_scale: float = 2.0

    # Manual adjustment of ±1 shifts the crop center by this fraction of the image extent
    adjustment_cap: float = 0.3

    # Pointer travel (px) that moves the adjustment by one full unit
    drag_sensitivity_px: float = 200.0

    # Arrow-key nudge, in adjustment units
    keyboard_step: float = 0.05

    @classmethod
    def from_settings(cls, settings: Settings) -> CropConfig:
        return cls(
            aspect_ratio=settings.postcard_aspect_ratio,
            preview_scale=settings.preview_scale,
            adjustment_cap=settings.adjustment_cap,
            drag_sensitivity_px=settings.drag_sensitivity_px,
            keyboard_step=settings.keyboard_step,
        )
