"""Interactive crop preview: pointer drag and arrow keys → ManualAdjustment."""

from __future__ import annotations

from magic_moment.crop.config import CropConfig
from magic_moment.crop.geometry import GRAB_DIRECTION, compute_crop_rect, preview_transform
from magic_moment.models.crop import CropRect, ManualAdjustment, NormalizedPoint, PreviewTransform
from magic_moment.utils.keys import arrow_direction
from magic_moment.utils.math_helpers import clamp


class CropAdjuster:
    """Holds the user's manual adjustment for one image.

    Moving the pointer right (or pressing ArrowRight) moves the photo right,
    which moves the crop window left.
    """

    def __init__(self, config: CropConfig | None = None) -> None:
        self.config = config or CropConfig()
        self.adjustment = ManualAdjustment()
        self._drag_origin: tuple[float, float] | None = None

    @property
    def is_dragging(self) -> bool:
        return self._drag_origin is not None

    def reset(self) -> None:
        """Back to the detected focal point (called on re-analyze)."""
        self.adjustment = ManualAdjustment()
        self._drag_origin = None

    def pointer_down(self, client_x: float, client_y: float) -> None:
        self._drag_origin = (client_x, client_y)

    def pointer_move(self, client_x: float, client_y: float) -> ManualAdjustment:
        if self._drag_origin is None:
            return self.adjustment
        ox, oy = self._drag_origin
        sensitivity = self.config.drag_sensitivity_px
        self._nudge((client_x - ox) / sensitivity, (client_y - oy) / sensitivity)
        self._drag_origin = (client_x, client_y)
        return self.adjustment

    def pointer_up(self) -> None:
        self._drag_origin = None

    pointer_leave = pointer_up

    def key_down(self, key: str) -> bool:
        """Apply an arrow key. Returns False for keys this control does not handle."""
        direction = arrow_direction(key)
        if direction is None:
            return False
        step = self.config.keyboard_step
        self._nudge(direction[0] * step, direction[1] * step)
        return True

    def _nudge(self, photo_dx: float, photo_dy: float) -> None:
        self.adjustment = ManualAdjustment(
            x=clamp(self.adjustment.x + GRAB_DIRECTION * photo_dx, -1.0, 1.0),
            y=clamp(self.adjustment.y + GRAB_DIRECTION * photo_dy, -1.0, 1.0),
        )

    def preview(self, focal: NormalizedPoint) -> PreviewTransform:
        return preview_transform(self.config.preview_scale, focal, self.adjustment)

    def crop_rect(self, image_w: int, image_h: int, focal: NormalizedPoint) -> CropRect:
        return compute_crop_rect(
            image_w,
            image_h,
            focal,
            target_aspect_ratio=self.config.aspect_ratio,
            manual_adjustment=self.adjustment,
            adjustment_cap=self.config.adjustment_cap,
        )
