"""Video -> GIF via a two-pass ffmpeg run (palettegen, then paletteuse)."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from app.config import settings
from app.media.errors import InvalidTimeRangeError, TranscodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QualityTier:
    max_colors: int
    stats_mode: str | None
    gif_flags: str | None


QUALITY_TIERS: dict[str, QualityTier] = {
    "ultra": QualityTier(max_colors=256, stats_mode="diff", gif_flags="+offsetting"),
    "high": QualityTier(max_colors=224, stats_mode=None, gif_flags="+transdiff"),
    "medium": QualityTier(max_colors=192, stats_mode=None, gif_flags=None),
}

_DITHER = "dither=bayer:bayer_scale=3:diff_mode=rectangle"


class GifSettings(BaseModel):
    start_time: float | None = Field(default=None, ge=0, description="Seconds; None = start of video")
    end_time: float | None = Field(default=None, ge=0, description="Seconds; None = end of video")
    width: int = Field(default=720, gt=0, le=4096)
    fps: int = Field(default=20, gt=0, le=60)
    quality: Literal["ultra", "high", "medium"] = "high"


def _trim_args(s: GifSettings) -> list[str]:
    args: list[str] = []
    if s.start_time is not None:
        args += ["-ss", f"{s.start_time:g}"]
    if s.end_time is not None:
        args += ["-to", f"{s.end_time:g}"]
    return args


def _scale_filter(s: GifSettings) -> str:
    return f"fps={s.fps},scale={s.width}:-1:flags=lanczos"


def build_palette_command(
    s: GifSettings, input_path: str, palette_path: str, binary: str | None = None
) -> list[str]:
    tier = QUALITY_TIERS[s.quality]
    palettegen = f"palettegen=max_colors={tier.max_colors}:reserve_transparent=0"
    if tier.stats_mode:
        palettegen += f":stats_mode={tier.stats_mode}"
    return [
        binary or settings.ffmpeg_binary, "-y",
        "-i", input_path,
        *_trim_args(s),
        "-vf", f"{_scale_filter(s)},{palettegen}",
        palette_path,
    ]


def build_gif_command(
    s: GifSettings, input_path: str, palette_path: str, output_path: str, binary: str | None = None
) -> list[str]:
    tier = QUALITY_TIERS[s.quality]
    cmd = [
        binary or settings.ffmpeg_binary, "-y",
        "-i", input_path,
        "-i", palette_path,
        *_trim_args(s),
        "-lavfi", f"{_scale_filter(s)}[x];[x][1:v]paletteuse={_DITHER}",
        "-f", "gif",
    ]
    if tier.gif_flags:
        cmd += ["-gifflags", tier.gif_flags]
    cmd.append(output_path)
    return cmd


def gif_filename(video_name: str | None) -> str:
    stem = Path(video_name).stem if video_name else ""
    return f"{stem or 'video'}.gif"


def _run(cmd: list[str]) -> None:
    logger.debug("Running %s", " ".join(cmd))
    try:
        subprocess.run(cmd, capture_output=True, check=True, timeout=settings.gif_timeout_s)
    except FileNotFoundError as e:
        raise TranscodeError(f"ffmpeg not found: {cmd[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise TranscodeError("ffmpeg timed out") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b"").decode("utf-8", "replace").strip().splitlines()
        raise TranscodeError(stderr[-1] if stderr else f"ffmpeg exited with {e.returncode}") from e


def convert_video_to_gif(video: bytes, s: GifSettings) -> bytes:
    """Run both passes in a scratch directory and return the GIF bytes."""
    if s.start_time is not None and s.end_time is not None and s.end_time <= s.start_time:
        raise InvalidTimeRangeError(f"end_time {s.end_time:g} <= start_time {s.start_time:g}")

    with tempfile.TemporaryDirectory(prefix="gif-") as tmp:
        work = Path(tmp)
        input_path = work / "input.mp4"
        palette_path = work / "palette.png"
        output_path = work / "output.gif"
        input_path.write_bytes(video)

        _run(build_palette_command(s, str(input_path), str(palette_path)))
        _run(build_gif_command(s, str(input_path), str(palette_path), str(output_path)))

        if not output_path.exists():
            raise TranscodeError("ffmpeg produced no output")
        data = output_path.read_bytes()

    logger.info("GIF conversion complete: %.1f MB (%s quality)", len(data) / (1024 * 1024), s.quality)
    return data
