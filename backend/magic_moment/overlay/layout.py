"""Overlay text wrapping and per-overlay layout. Pure functions."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from magic_moment.models.overlay import Overlay
from magic_moment.overlay.constants import (
    FONT_FAMILY_MAP,
    FONT_SIZE_DIVISOR,
    LINE_HEIGHT_DIVISOR,
    STROKE_WIDTH_DIVISOR,
    TEXT_ANCHOR_MAP,
    WRAP_BASE_CHARS,
    WRAP_BASE_FONT_SIZE,
    WRAP_MIN_CHARS,
)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def max_chars_per_line(font_size: float) -> int:
    """Larger font → fewer characters per line, floor of 8."""
    return max(WRAP_MIN_CHARS, math.floor(WRAP_BASE_CHARS / (font_size / WRAP_BASE_FONT_SIZE)))


def wrap_overlay_text(text: str, font_size: float) -> list[str]:
    """Split on explicit line breaks, then greedily word-wrap long segments.

    Author line breaks are never merged. Words are never split, so a single
    word longer than the limit gets a line of its own.
    """
    limit = max_chars_per_line(font_size)
    lines: list[str] = []

    for segment in _LINE_BREAK_RE.split(text):
        if len(segment) <= limit:
            lines.append(segment)
            continue

        current = ""
        for word in segment.split(" "):
            if len(current) + 1 + len(word) <= limit:
                current = f"{current} {word}" if current else word
            else:
                if current:
                    lines.append(current)
                current = word
        if current:
            lines.append(current)

    return lines


def line_height(font_size: float) -> float:
    return font_size / LINE_HEIGHT_DIVISOR


def line_offsets(line_count: int, font_size: float) -> list[float]:
    """Vertical offset of each line from the anchor, block centred on it."""
    lh = line_height(font_size)
    start = -(line_count - 1) * lh / 2
    return [start + i * lh for i in range(line_count)]


@dataclass(frozen=True)
class OverlayLayout:
    """Everything needed to draw one overlay, in canvas units."""

    overlay_id: str
    x: float
    y: float
    lines: list[str]
    line_dys: list[float]  # relative dy per line: first = start offset, rest = line height
    font_size: float
    font_family: str
    stroke_width: float
    text_anchor: str
    rotation: float

    @property
    def is_multiline(self) -> bool:
        return len(self.lines) > 1

    @property
    def transform(self) -> str:
        return f"rotate({self.rotation:g}, {self.x:g}, {self.y:g})"


def layout_overlay(overlay: Overlay, position: tuple[float, float] | None = None) -> OverlayLayout:
    """Lay out one overlay at ``position`` (defaults to the overlay's own x, y)."""
    x, y = position if position is not None else (overlay.x, overlay.y)
    lines = wrap_overlay_text(overlay.text, overlay.font_size)

    if len(lines) > 1:
        lh = line_height(overlay.font_size)
        offsets = line_offsets(len(lines), overlay.font_size)
        dys = [offsets[0]] + [lh] * (len(lines) - 1)
    else:
        dys = [0.0]

    return OverlayLayout(
        overlay_id=overlay.id,
        x=x,
        y=y,
        lines=lines,
        line_dys=dys,
        font_size=overlay.font_size / FONT_SIZE_DIVISOR,
        font_family=FONT_FAMILY_MAP[overlay.font_family],
        stroke_width=overlay.stroke_width / STROKE_WIDTH_DIVISOR,
        text_anchor=TEXT_ANCHOR_MAP[overlay.text_align],
        rotation=overlay.rotation,
    )
