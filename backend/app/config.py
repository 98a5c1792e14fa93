"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    swatchbook_env: str = "development"
    swatchbook_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Token export
    export_suffix: str = "_with_variables"
    lottie_class_field: str = "cl"
    # True: each scanner hit counts, so `fill="#fff"` counts twice (hex + attribute scan)
    svg_count_overlaps: bool = True

    # Video -> GIF
    ffmpeg_binary: str = "ffmpeg"
    gif_timeout_s: float = 300.0

    # Transcripts
    transcript_timeout_s: float = 15.0
    transcript_lang: str = "en"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
