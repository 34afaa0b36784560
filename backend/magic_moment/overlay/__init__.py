"""Overlay compositing: text layout, SVG rendering, editing and drag/keyboard repositioning."""

from magic_moment.overlay.compositor import OverlayCompositor
from magic_moment.overlay.config import OverlayConfig
from magic_moment.overlay.debounce import Debouncer, LoopScheduler
from magic_moment.overlay.editor import (
    OVERLAY_PRESETS,
    add_overlay,
    find_overlay,
    overlay_from_preset,
    remove_overlay,
    update_overlay,
)
from magic_moment.overlay.interaction import CanvasBounds, DragSession, DragState
from magic_moment.overlay.layout import (
    OverlayLayout,
    layout_overlay,
    max_chars_per_line,
    wrap_overlay_text,
)
from magic_moment.overlay.render import render_composite_svg

__all__ = [
    "OVERLAY_PRESETS",
    "CanvasBounds",
    "Debouncer",
    "DragSession",
    "DragState",
    "LoopScheduler",
    "OverlayCompositor",
    "OverlayConfig",
    "OverlayLayout",
    "add_overlay",
    "find_overlay",
    "layout_overlay",
    "max_chars_per_line",
    "overlay_from_preset",
    "remove_overlay",
    "render_composite_svg",
    "update_overlay",
    "wrap_overlay_text",
]
