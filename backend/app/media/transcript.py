"""YouTube title + caption fetch.

Title comes from the public oEmbed endpoint, captions from the timedtext XML
feed (manual track first, then auto-generated). oEmbed status codes decide
which user-facing failure is raised.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass

import httpx

from app.config import settings
from app.media.errors import (
    AgeRestrictedError,
    InvalidVideoUrlError,
    NoCaptionsError,
    ProviderUnavailableError,
    SignInRequiredError,
    VideoNotFoundError,
)

logger = logging.getLogger(__name__)

OEMBED_URL = "https://www.youtube.com/oembed"
TIMEDTEXT_URL = "https://video.google.com/timedtext"

_VIDEO_ID_RE = re.compile(
    r"""(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^"&?/\s]{11})"""
)
_CAPTION_TEXT_RE = re.compile(r"<text[^>]*>(.*?)</text>", re.DOTALL)
_WS_RE = re.compile(r"\s+")

_HEADERS = {
    "Accept": "text/xml,application/xml,application/xhtml+xml,text/html;q=0.9,text/plain;q=0.8,*/*;q=0.5",
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
}


@dataclass
class Transcript:
    title: str
    transcript: str
    video_id: str


def extract_video_id(url: str) -> str:
    """Pull the 11-character id out of watch?v=, /embed/, /v/ and youtu.be/ URLs."""
    m = _VIDEO_ID_RE.search(url or "")
    if not m:
        raise InvalidVideoUrlError()
    return m.group(1)


def parse_caption_xml(xml: str) -> str:
    """Join every <text> cue into one whitespace-normalised paragraph."""
    cues = (html.unescape(m.group(1)).strip() for m in _CAPTION_TEXT_RE.finditer(xml))
    return _WS_RE.sub(" ", " ".join(c for c in cues if c)).strip()


class TranscriptClient:
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        lang: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._client = client
        self.lang = lang or settings.transcript_lang
        self.timeout = timeout or settings.transcript_timeout_s

    async def fetch(self, video_id: str) -> Transcript:
        if self._client is not None:
            return await self._fetch(self._client, video_id)
        async with httpx.AsyncClient(timeout=self.timeout, headers=_HEADERS) as client:
            return await self._fetch(client, video_id)

    async def fetch_url(self, url: str) -> Transcript:
        return await self.fetch(extract_video_id(url))

    async def _fetch(self, client: httpx.AsyncClient, video_id: str) -> Transcript:
        try:
            title = await self._title(client, video_id)
            transcript = ""
            for kind in (None, "asr"):
                transcript = await self._captions(client, video_id, kind)
                if transcript:
                    break
        except httpx.HTTPError as e:
            logger.warning("Video info request failed for %s: %s", video_id, e)
            raise ProviderUnavailableError(str(e)) from e

        if not transcript:
            raise NoCaptionsError()
        logger.info("Transcript for %s: %r, %d chars", video_id, title, len(transcript))
        return Transcript(title=title, transcript=transcript, video_id=video_id)

    async def _title(self, client: httpx.AsyncClient, video_id: str) -> str:
        resp = await client.get(
            OEMBED_URL,
            params={"url": f"https://www.youtube.com/watch?v={video_id}", "format": "json"},
        )
        if resp.status_code == 401:
            raise SignInRequiredError()
        if resp.status_code == 403:
            raise AgeRestrictedError()
        if resp.status_code != 200:
            logger.warning("oEmbed returned %d for %s", resp.status_code, video_id)
            raise VideoNotFoundError()
        return str(resp.json().get("title", ""))

    async def _captions(self, client: httpx.AsyncClient, video_id: str, kind: str | None) -> str:
        params = {"lang": self.lang, "v": video_id}
        if kind:
            params["kind"] = kind
        resp = await client.get(TIMEDTEXT_URL, params=params)
        if resp.status_code != 200:
            logger.debug("timedtext %s returned %d for %s", kind or "manual", resp.status_code, video_id)
            return ""
        return parse_caption_xml(resp.text)
