"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TokenDocumentRequest(BaseModel):
    document: str = Field(..., description="Raw Lottie JSON or SVG markup")
    filename: str = Field(default="", description="Uploaded file name, used for the export name")


class ApplyTokensRequest(TokenDocumentRequest):
    bindings: dict[str, str] = Field(
        default_factory=dict,
        description="Canonical color key (#rrggbb) -> variable name",
    )


class TranscriptRequest(BaseModel):
    url: str = Field(default="", description="YouTube video URL")
