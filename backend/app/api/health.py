"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from app.models.responses import HealthResponse

router = APIRouter()

_TOOLS = ["lottie-tokens", "svg-tokens", "video-to-gif", "youtube-transcript"]


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version="0.1.0", tools=_TOOLS)
