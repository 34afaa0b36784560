"""Arrow-key → unit screen direction (x right, y down)."""

from __future__ import annotations

ARROW_KEYS: dict[str, tuple[int, int]] = {
    "ArrowLeft": (-1, 0),
    "ArrowRight": (1, 0),
    "ArrowUp": (0, -1),
    "ArrowDown": (0, 1),
}


def arrow_direction(key: str) -> tuple[int, int] | None:
    return ARROW_KEYS.get(key)
