"""Task → model selection. Cheap model for short text, mid-tier for vision analysis."""

from __future__ import annotations

from magic_moment.config import settings

_TASK_MODEL_MAP = {
    "analyze": "mid",
    "overlay_text": "cheap",
}


def get_model_for_task(task: str) -> str:
    tier = _TASK_MODEL_MAP.get(task, "cheap")
    if tier == "mid":
        return settings.model_mid
    return settings.model_cheap
