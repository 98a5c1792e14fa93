"""POST /api/transcript: YouTube URL in, title + transcript out."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.dependencies import get_transcript_client
from app.media.errors import MediaError
from app.media.transcript import TranscriptClient
from app.models.requests import TranscriptRequest
from app.models.responses import TranscriptData, TranscriptResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/transcript", response_model=TranscriptResponse)
async def transcript(
    req: TranscriptRequest,
    client: TranscriptClient = Depends(get_transcript_client),
):
    if not req.url.strip():
        return JSONResponse(
            status_code=400,
            content=TranscriptResponse(success=False, error="YouTube URL is required").model_dump(),
        )

    try:
        result = await client.fetch_url(req.url)
    except MediaError as e:
        logger.warning("Transcript failed for %s: %s", req.url, e)
        return JSONResponse(
            status_code=e.status_code,
            content=TranscriptResponse(success=False, error=e.user_message).model_dump(),
        )

    return TranscriptResponse(
        data=TranscriptData(title=result.title, transcript=result.transcript, video_id=result.video_id)
    )
