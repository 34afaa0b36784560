"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from magic_moment.config import settings
from magic_moment.crop.config import CropConfig
from magic_moment.crop.engine import CropHintEngine
from magic_moment.llm.vision import ChatVisionBackend


def get_crop_config() -> CropConfig:
    return CropConfig.from_settings(settings)


@lru_cache(maxsize=1)
def get_vision_backend() -> ChatVisionBackend:
    return ChatVisionBackend()


def get_crop_engine() -> CropHintEngine:
    """Fresh engine per request: issue tokens only order calls from one client."""
    return CropHintEngine(get_vision_backend(), config=get_crop_config())
