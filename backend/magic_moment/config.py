"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    magic_moment_env: str = "development"
    magic_moment_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Model routing
    model_cheap: str = "claude-haiku-4-5-20251001"
    model_mid: str = "claude-sonnet-4-5-20250929"

    # Smart crop
    postcard_aspect_ratio: float = 1.5
    preview_scale: float = 2.0
    adjustment_cap: float = 0.3
    drag_sensitivity_px: float = 200.0

    # Overlay interaction
    debounce_delay_ms: float = 100.0
    keyboard_step: float = 0.05

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
