"""FastAPI dependency injection."""

from __future__ import annotations

from app.config import Settings, settings
from app.media.transcript import TranscriptClient


def get_settings() -> Settings:
    return settings


def get_transcript_client() -> TranscriptClient:
    return TranscriptClient()
