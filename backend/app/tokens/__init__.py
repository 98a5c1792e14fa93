"""Color-token extraction and rewrite for Lottie and SVG documents."""

from app.tokens.errors import ParseError, RewriteBlockedError, TokenError
from app.tokens.lottie import apply_lottie_bindings, extract_lottie_colors
from app.tokens.session import TokenSession
from app.tokens.svg import apply_svg_bindings, extract_svg_colors

__all__ = [
    "ParseError",
    "RewriteBlockedError",
    "TokenError",
    "TokenSession",
    "apply_lottie_bindings",
    "apply_svg_bindings",
    "extract_lottie_colors",
    "extract_svg_colors",
]
