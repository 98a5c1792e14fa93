"""Errors raised at the external-tool boundaries (ffmpeg, video info provider).

Each carries the message shown to the user; none of them is fatal and the
caller can simply retry.
"""

from __future__ import annotations


class MediaError(Exception):
    user_message = "Something went wrong. Please try again."
    status_code = 500

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(detail or self.user_message)


class TranscodeError(MediaError):
    user_message = "Conversion failed. Please try again."


class InvalidTimeRangeError(TranscodeError):
    user_message = "End time must be after start time"
    status_code = 400


class InvalidVideoUrlError(MediaError):
    user_message = "Invalid YouTube URL format"
    status_code = 400


class VideoNotFoundError(MediaError):
    user_message = "Video not found or unavailable"
    status_code = 404


class SignInRequiredError(MediaError):
    user_message = "This video requires signing in to view"
    status_code = 403


class AgeRestrictedError(MediaError):
    user_message = "This video is age-restricted and its transcript cannot be fetched"
    status_code = 403


class NoCaptionsError(MediaError):
    user_message = "No captions are available for this video"
    status_code = 404


class ProviderUnavailableError(MediaError):
    user_message = "Network error occurred. Please try again."
    status_code = 502
