"""POST /api/overlays/*: text layout, SVG composite, list edits and generated overlay text."""

from __future__ import annotations

from fastapi import APIRouter

from magic_moment.llm.overlay_text import generate_overlay_text
from magic_moment.models.requests import (
    OverlayLayoutRequest,
    OverlayRemoveRequest,
    OverlayRenderRequest,
    OverlayTextRequest,
    OverlayUpdateRequest,
)
from magic_moment.models.responses import (
    OverlayLayoutResponse,
    OverlayListResponse,
    OverlayRenderResponse,
    OverlayTextResponse,
)
from magic_moment.overlay.editor import remove_overlay, update_overlay
from magic_moment.overlay.layout import max_chars_per_line, wrap_overlay_text
from magic_moment.overlay.render import render_composite_svg

router = APIRouter(prefix="/overlays")


@router.post("/layout", response_model=OverlayLayoutResponse)
async def overlay_layout(req: OverlayLayoutRequest) -> OverlayLayoutResponse:
    return OverlayLayoutResponse(
        lines=wrap_overlay_text(req.text, req.font_size),
        max_chars_per_line=max_chars_per_line(req.font_size),
    )


@router.post("/render", response_model=OverlayRenderResponse)
async def overlay_render(req: OverlayRenderRequest) -> OverlayRenderResponse:
    svg = render_composite_svg(
        req.overlays,
        image_href=req.image_url,
        selected_overlay_id=req.selected_overlay_id,
        interactive=req.interactive,
    )
    return OverlayRenderResponse(svg=svg)


@router.post("/text", response_model=OverlayTextResponse)
async def overlay_text(req: OverlayTextRequest) -> OverlayTextResponse:
    text = await generate_overlay_text(
        location_name=req.location_name,
        message=req.message,
        description=req.description,
    )
    return OverlayTextResponse(text=text)


@router.post("/update", response_model=OverlayListResponse)
async def overlay_update(req: OverlayUpdateRequest) -> OverlayListResponse:
    return OverlayListResponse(overlays=update_overlay(req.overlays, req.overlay_id, **req.changes))


@router.post("/remove", response_model=OverlayListResponse)
async def overlay_remove(req: OverlayRemoveRequest) -> OverlayListResponse:
    return OverlayListResponse(overlays=remove_overlay(req.overlays, req.overlay_id))
