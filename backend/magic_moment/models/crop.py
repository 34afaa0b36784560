"""Crop analysis data contract: CropHints, ManualAdjustment, CropRect, PreviewTransform.

Field names on the wire are camelCase (``focalPoint``, ``primarySubject``) to match
what the vision collaborator is asked to return; Python access is snake_case.
"""

from __future__ import annotations

from typing import Annotated, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, Strict, StrictStr
from pydantic.alias_generators import to_camel

# Normalised [0, 1] coordinate relative to image width/height.
UnitFloat = Annotated[float, Strict(), Field(ge=0.0, le=1.0, allow_inf_nan=False)]
# Importance / confidence score.
ScoreFloat = Annotated[float, Strict(), Field(ge=0.0, le=10.0, allow_inf_nan=False)]
SignedUnitFloat = Annotated[float, Field(ge=-1.0, le=1.0, allow_inf_nan=False)]

RegionType = Literal[
    "face",
    "eyes",
    "upper_body",
    "full_body",
    "object",
    "text",
    "logo",
    "landmark",
]

REGION_TYPES: tuple[str, ...] = get_args(RegionType)

MAX_REGIONS = 10


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class NormalizedPoint(_Frozen):
    x: UnitFloat
    y: UnitFloat


class NormalizedBox(_Frozen):
    """Axis-aligned box; (x, y) is the top-left corner."""

    x: UnitFloat
    y: UnitFloat
    w: UnitFloat
    h: UnitFloat

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)


class PrimarySubject(_Frozen):
    type: StrictStr
    confidence: ScoreFloat
    box: NormalizedBox


class NormalizedRegion(_Frozen):
    label: StrictStr
    type: RegionType
    importance: ScoreFloat
    confidence: ScoreFloat
    box: NormalizedBox


class CropHints(_Frozen):
    """Result of one analysis pass over one image. Immutable once validated."""

    focal_point: NormalizedPoint
    primary_subject: PrimarySubject
    regions: tuple[NormalizedRegion, ...] = Field(max_length=MAX_REGIONS)

    def ranked_regions(self) -> list[NormalizedRegion]:
        """Regions by importance, then confidence, highest first."""
        return sorted(self.regions, key=lambda r: (r.importance, r.confidence), reverse=True)


class ManualAdjustment(_Frozen):
    """User nudge of the focal point; each axis in [-1, 1]."""

    x: SignedUnitFloat = 0.0
    y: SignedUnitFloat = 0.0

    @property
    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0


class CropRect(BaseModel):
    """Pixel-space extraction rectangle."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    w: int
    h: int

    @property
    def aspect_ratio(self) -> float:
        return self.w / self.h

    def as_box(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom), the tuple Pillow's ``Image.crop`` expects."""
        return (self.x, self.y, self.x + self.w, self.y + self.h)


class PreviewTransform(_Frozen):
    scale: float
    translate_x_percent: float
    translate_y_percent: float

    def css(self) -> str:
        return (
            f"scale({self.scale:g}) "
            f"translate({self.translate_x_percent:g}%, {self.translate_y_percent:g}%)"
        )
