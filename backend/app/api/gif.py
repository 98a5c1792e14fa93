"""POST /api/gif: raw video body in, GIF out."""

from __future__ import annotations

import asyncio
import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import Response

from app.media.errors import TranscodeError
from app.media.gif import GifSettings, convert_video_to_gif, gif_filename

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/gif")
async def video_to_gif(
    request: Request,
    filename: str = Query(default=""),
    start_time: float | None = Query(default=None, ge=0),
    end_time: float | None = Query(default=None, ge=0),
    width: int = Query(default=720, gt=0, le=4096),
    fps: int = Query(default=20, gt=0, le=60),
    quality: Literal["ultra", "high", "medium"] = Query(default="high"),
) -> Response:
    video = await request.body()
    if not video:
        raise HTTPException(status_code=400, detail="No video uploaded")

    gif_settings = GifSettings(
        start_time=start_time, end_time=end_time, width=width, fps=fps, quality=quality
    )
    loop = asyncio.get_running_loop()
    try:
        data = await loop.run_in_executor(None, convert_video_to_gif, video, gif_settings)
    except TranscodeError as e:
        logger.warning("GIF conversion failed: %s", e)
        raise HTTPException(status_code=e.status_code, detail=e.user_message) from e

    return Response(
        content=data,
        media_type="image/gif",
        headers={"Content-Disposition": f'attachment; filename="{gif_filename(filename)}"'},
    )
