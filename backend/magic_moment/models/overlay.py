"""Text overlay record."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from magic_moment.utils.math_helpers import clamp

FontFamily = Literal["sans-serif", "serif", "cursive", "display"]
TextAlign = Literal["left", "center", "right"]


class Overlay(BaseModel):
    """One text annotation on a postcard. Positions are percentages of the canvas."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    text: str
    font_size: float = Field(gt=0)
    font_family: FontFamily = "sans-serif"
    color: str = "#ffffff"
    stroke_color: str = "#000000"
    stroke_width: float = Field(default=0.0, ge=0)
    x: float = 50.0
    y: float = 50.0
    rotation: float = 0.0
    opacity: float = 1.0
    text_align: TextAlign = "center"

    @field_validator("x", "y")
    @classmethod
    def _clamp_position(cls, v: float) -> float:
        return clamp(v, 0.0, 100.0)

    @field_validator("opacity")
    @classmethod
    def _clamp_opacity(cls, v: float) -> float:
        return clamp(v, 0.0, 1.0)

    def with_updates(self, **updates: object) -> Overlay:
        """Return a re-validated copy (``model_copy`` would skip the clamps)."""
        data = self.model_dump()
        data.update(updates)
        return Overlay.model_validate(data)
