"""Overlay list editing: add (with a style preset), update, remove.

Functions return new lists and never mutate their input, so the caller can
diff or persist the result as a whole.
"""

from __future__ import annotations

import random
import uuid
from collections.abc import Sequence
from typing import Any

from magic_moment.errors import OverlayNotFoundError
from magic_moment.models.overlay import Overlay

LOCATION_PLACEHOLDER = "{location}"

OVERLAY_PRESETS: tuple[dict[str, Any], ...] = (
    {
        "text": "Greetings from {location}",
        "font_size": 36,
        "font_family": "cursive",
        "color": "#ffffff",
        "stroke_color": "#000000",
        "stroke_width": 3,
        "x": 50,
        "y": 20,
        "rotation": -5,
        "opacity": 0.9,
    },
    {
        "text": "Wish you were here!",
        "font_size": 28,
        "font_family": "sans-serif",
        "color": "#ffcc02",
        "stroke_color": "#000000",
        "stroke_width": 2,
        "x": 50,
        "y": 85,
        "rotation": 0,
        "opacity": 0.95,
    },
    {
        "text": "Having a great time!",
        "font_size": 32,
        "font_family": "display",
        "color": "#ffffff",
        "stroke_color": "#ff0000",
        "stroke_width": 2.5,
        "x": 50,
        "y": 50,
        "rotation": 10,
        "opacity": 1,
    },
    {
        "text": "Memories from {location}",
        "font_size": 24,
        "font_family": "serif",
        "color": "#000000",
        "stroke_color": "#ffffff",
        "stroke_width": 3,
        "x": 50,
        "y": 90,
        "rotation": 0,
        "opacity": 0.85,
    },
    {
        "text": "Hello from {location}!",
        "font_size": 40,
        "font_family": "cursive",
        "color": "#ff69b4",
        "stroke_color": "#ffffff",
        "stroke_width": 4,
        "x": 50,
        "y": 15,
        "rotation": -8,
        "opacity": 0.9,
    },
)

_FIELD_BY_ALIAS = {field.alias: name for name, field in Overlay.model_fields.items() if field.alias}

_STYLE_KEYS = ("font_size", "font_family", "color", "stroke_color", "stroke_width", "opacity")


def new_overlay_id() -> str:
    return uuid.uuid4().hex[:9]


def fill_location(text: str, location_name: str | None) -> str:
    """Substitute ``{location}`` with the city part of the location name."""
    if LOCATION_PLACEHOLDER not in text:
        return text
    city = location_name.split(",")[0].strip() if location_name else ""
    return text.replace(LOCATION_PLACEHOLDER, city or "here")


def overlay_from_preset(
    preset: dict[str, Any],
    location_name: str | None = None,
    overlay_id: str | None = None,
) -> Overlay:
    data = dict(preset)
    data["text"] = fill_location(data["text"], location_name)
    data["id"] = overlay_id or new_overlay_id()
    return Overlay.model_validate(data)


def add_overlay(
    overlays: Sequence[Overlay],
    text: str,
    rng: random.Random | None = None,
    overlay_id: str | None = None,
) -> list[Overlay]:
    """Append an overlay with ``text`` styled by a random preset.

    Position and tilt are jittered around the centre so successive additions
    don't stack exactly on top of each other.
    """
    rng = rng or random.Random()
    preset = rng.choice(OVERLAY_PRESETS)
    style = {key: preset[key] for key in _STYLE_KEYS}

    overlay = Overlay(
        id=overlay_id or new_overlay_id(),
        text=text,
        x=50 + (rng.random() - 0.5) * 30,
        y=20 + rng.random() * 60,
        rotation=(rng.random() - 0.5) * 20,
        text_align="center",
        **style,
    )
    return [*overlays, overlay]


def find_overlay(overlays: Sequence[Overlay], overlay_id: str) -> Overlay:
    for overlay in overlays:
        if overlay.id == overlay_id:
            return overlay
    raise OverlayNotFoundError(overlay_id)


def update_overlay(
    overlays: Sequence[Overlay], overlay_id: str, /, **updates: Any
) -> list[Overlay]:
    """Apply field updates through the clamping validators. camelCase keys are accepted."""
    find_overlay(overlays, overlay_id)
    updates = {_FIELD_BY_ALIAS.get(key, key): value for key, value in updates.items()}
    updates.pop("id", None)
    return [o.with_updates(**updates) if o.id == overlay_id else o for o in overlays]


def remove_overlay(overlays: Sequence[Overlay], overlay_id: str) -> list[Overlay]:
    find_overlay(overlays, overlay_id)
    return [o for o in overlays if o.id != overlay_id]
