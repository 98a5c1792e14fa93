"""Color token models shared by the Lottie and SVG pipelines."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class DocumentKind(str, enum.Enum):
    LOTTIE = "lottie"
    SVG = "svg"


class DistinctColor(BaseModel):
    """One deduplicated paint color found in a document."""

    key: str = Field(..., description="Canonical #rrggbb key")
    rgb: tuple[int, int, int]
    hex: str = Field(..., description="Display hex")
    name: str = Field(default="", description="User-assigned variable name")
    count: int = Field(default=0, description="Paint sites using this color")

    @property
    def id(self) -> str:
        return f"color_{self.key.lstrip('#')}"

    @property
    def bound_name(self) -> str:
        return self.name.strip()
