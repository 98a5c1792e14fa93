"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from app.api import gif, health, tokens, transcript

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(tokens.router)
api_router.include_router(gif.router)
api_router.include_router(transcript.router)
