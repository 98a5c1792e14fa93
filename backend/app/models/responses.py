"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.models.tokens import DistinctColor, DocumentKind


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    tools: list[str] = Field(default_factory=list)


class ExtractResponse(BaseModel):
    kind: DocumentKind
    filename: str = ""
    loaded: bool = False
    error: str | None = None
    colors: list[DistinctColor] = Field(default_factory=list)
    total_occurrences: int = 0
    export_filename: str = ""


class ApplyResponse(BaseModel):
    kind: DocumentKind
    filename: str
    document: str
    colors: list[DistinctColor] = Field(default_factory=list)
    applied: bool = True


class TranscriptData(BaseModel):
    title: str
    transcript: str
    video_id: str


class TranscriptResponse(BaseModel):
    success: bool = True
    data: TranscriptData | None = None
    error: str | None = None
