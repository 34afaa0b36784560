"""POST /api/crop/*: hints, rectangle, live preview and apply."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from magic_moment.crop.config import CropConfig
from magic_moment.crop.engine import CropHintEngine
from magic_moment.crop.extract import smart_crop
from magic_moment.crop.geometry import compute_crop_rect, preview_transform
from magic_moment.dependencies import get_crop_config, get_crop_engine
from magic_moment.errors import AnalysisError
from magic_moment.models.crop import CropHints, CropRect, PreviewTransform
from magic_moment.models.requests import (
    CropApplyRequest,
    CropHintsRequest,
    CropPreviewRequest,
    CropRectRequest,
)
from magic_moment.models.responses import CropApplyResponse
from magic_moment.utils.image import encode_data_url

router = APIRouter(prefix="/crop")
logger = logging.getLogger(__name__)


@router.post("/hints", response_model=CropHints)
async def crop_hints(
    req: CropHintsRequest,
    engine: CropHintEngine = Depends(get_crop_engine),
) -> CropHints:
    hints = await engine.analyze(req.image)
    if hints is None:
        # A newer request for this engine was issued while this one was in flight.
        raise AnalysisError("Analysis superseded by a newer request", status_code=409)
    return hints


@router.post("/rect", response_model=CropRect)
async def crop_rect(
    req: CropRectRequest,
    config: CropConfig = Depends(get_crop_config),
) -> CropRect:
    return compute_crop_rect(
        req.width,
        req.height,
        req.focal_point,
        target_aspect_ratio=config.aspect_ratio if req.aspect_ratio is None else req.aspect_ratio,
        manual_adjustment=req.manual_adjustment,
        adjustment_cap=config.adjustment_cap,
    )


@router.post("/preview", response_model=PreviewTransform)
async def crop_preview(
    req: CropPreviewRequest,
    config: CropConfig = Depends(get_crop_config),
) -> PreviewTransform:
    scale = config.preview_scale if req.scale is None else req.scale
    return preview_transform(scale, req.focal_point, req.manual_adjustment)


@router.post("/apply", response_model=CropApplyResponse)
async def crop_apply(
    req: CropApplyRequest,
    engine: CropHintEngine = Depends(get_crop_engine),
) -> CropApplyResponse:
    hints, rect, jpeg = await smart_crop(engine, req.image, req.manual_adjustment)
    logger.info("Applied crop %s", rect.as_box())
    return CropApplyResponse(hints=hints, rect=rect, image=encode_data_url(jpeg, "image/jpeg"))
