"""API request models."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, Field, field_validator

from magic_moment.models.crop import ManualAdjustment, NormalizedPoint
from magic_moment.models.overlay import Overlay


def _require_image_url(value: str) -> str:
    if not value.startswith(("data:", "http://", "https://")):
        raise ValueError("image must be a data: URL or an http(s) URL")
    return value


class CropHintsRequest(BaseModel):
    image: Annotated[str, AfterValidator(_require_image_url)] = Field(
        ..., description="Image as a base64 data URL or http(s) URL"
    )


class CropRectRequest(BaseModel):
    width: int = Field(..., description="Image width in pixels")
    height: int = Field(..., description="Image height in pixels")
    focal_point: NormalizedPoint
    aspect_ratio: float | None = Field(default=None, description="Defaults to the postcard ratio")
    manual_adjustment: ManualAdjustment | None = None


class CropPreviewRequest(BaseModel):
    focal_point: NormalizedPoint
    manual_adjustment: ManualAdjustment | None = None
    scale: float | None = Field(default=None, description="Preview oversampling, defaults to 2x")


class CropApplyRequest(BaseModel):
    image: str = Field(..., description="Image as a base64 data URL")
    manual_adjustment: ManualAdjustment | None = None

    @field_validator("image")
    @classmethod
    def _data_url_only(cls, value: str) -> str:
        if not value.startswith("data:"):
            raise ValueError("image must be a base64 data URL")
        return value


class OverlayLayoutRequest(BaseModel):
    text: str
    font_size: float = Field(..., gt=0)


class OverlayRenderRequest(BaseModel):
    overlays: list[Overlay] = Field(default_factory=list)
    image_url: str | None = None
    selected_overlay_id: str | None = None
    interactive: bool = False


class OverlayTextRequest(BaseModel):
    location_name: str | None = None
    message: str | None = None
    description: str | None = None


class OverlayUpdateRequest(BaseModel):
    overlays: list[Overlay]
    overlay_id: str
    changes: dict[str, Any] = Field(default_factory=dict, description="Overlay fields to change")


class OverlayRemoveRequest(BaseModel):
    overlays: list[Overlay]
    overlay_id: str
