"""Master API router, mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from magic_moment.api import crop, health, overlays

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(crop.router)
api_router.include_router(overlays.router)
