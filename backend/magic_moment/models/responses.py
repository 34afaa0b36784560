"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from magic_moment.models.crop import CropHints, CropRect
from magic_moment.models.overlay import Overlay


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    vision_configured: bool = False


class CropApplyResponse(BaseModel):
    hints: CropHints
    rect: CropRect
    image: str = Field(..., description="Cropped JPEG as a data URL")


class OverlayLayoutResponse(BaseModel):
    lines: list[str]
    max_chars_per_line: int


class OverlayRenderResponse(BaseModel):
    svg: str


class OverlayTextResponse(BaseModel):
    text: str


class OverlayListResponse(BaseModel):
    overlays: list[Overlay]
