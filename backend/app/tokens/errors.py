"""Token engine errors."""

from __future__ import annotations


class TokenError(Exception):
    """Base class for color-token engine failures."""


class ParseError(TokenError):
    """Uploaded document could not be read (bad encoding or malformed Lottie JSON)."""


class RewriteBlockedError(TokenError):
    """Apply requested before the document is ready: nothing loaded, or colors left unnamed."""

    def __init__(self, unnamed: list[str] | None = None) -> None:
        self.unnamed = unnamed or []
        if self.unnamed:
            message = f"{len(self.unnamed)} color(s) still need a variable name: {', '.join(self.unnamed)}"
        else:
            message = "No document loaded"
        super().__init__(message)
