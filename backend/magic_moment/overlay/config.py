"""Overlay interaction tunables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from magic_moment.config import Settings


@dataclass(frozen=True)
class OverlayConfig:
    # Seconds of pointer inactivity before a drag position is committed
    debounce_delay: float = 0.1

    # Arrow-key nudge as a fraction of the full 0-100 range
    keyboard_step: float = 0.05

    @property
    def keyboard_step_units(self) -> float:
        return self.keyboard_step * 100.0

    @classmethod
    def from_settings(cls, settings: Settings) -> OverlayConfig:
        return cls(
            debounce_delay=settings.debounce_delay_ms / 1000.0,
            keyboard_step=settings.keyboard_step,
        )
