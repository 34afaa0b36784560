"""Drag-session state for repositioning one overlay."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from magic_moment.overlay.constants import VIEWBOX_SIZE
from magic_moment.overlay.debounce import Debouncer
from magic_moment.utils.math_helpers import clamp


class DragState(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class CanvasBounds:
    """Client-space bounding box of the rendered canvas."""

    left: float
    top: float
    width: float
    height: float

    def to_percent(self, client_x: float, client_y: float) -> tuple[float, float]:
        """Pointer position as canvas percent. Unclamped: may fall outside 0-100."""
        if self.width <= 0 or self.height <= 0:
            return (0.0, 0.0)
        return (
            (client_x - self.left) / self.width * VIEWBOX_SIZE,
            (client_y - self.top) / self.height * VIEWBOX_SIZE,
        )


def clamp_position(x: float, y: float) -> tuple[float, float]:
    return (clamp(x, 0.0, VIEWBOX_SIZE), clamp(y, 0.0, VIEWBOX_SIZE))


@dataclass
class DragSession:
    """One active drag. Owns its own debounce timer."""

    overlay_id: str
    drag_start: tuple[float, float]
    original_position: tuple[float, float]
    live_position: tuple[float, float]
    debouncer: Debouncer
