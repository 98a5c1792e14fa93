"""Color canonicalization: every paint value funnels into a lowercase #rrggbb key.

Lottie stores channels as 0-1 floats, SVG as hex / rgb() / rgba() / CSS names.
Both pipelines dedupe on the same key so a name bound to `#ff0000` applies to
`[1, 0, 0]`, `#F00`, `rgb(255,0,0)` and `red` alike.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

import numpy as np

from app.models.tokens import DistinctColor

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_RE = re.compile(r"^rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)$", re.IGNORECASE)
_RGBA_RE = re.compile(
    r"^rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*[\d.]+\s*\)$", re.IGNORECASE
)

# Paint values that are never collected
EXCLUDED_VALUES = frozenset({"none", "transparent"})

NAMED_COLORS: dict[str, str] = {
    "red": "#ff0000", "blue": "#0000ff", "green": "#008000", "yellow": "#ffff00",
    "orange": "#ffa500", "purple": "#800080", "pink": "#ffc0cb", "brown": "#a52a2a",
    "black": "#000000", "white": "#ffffff", "gray": "#808080", "grey": "#808080",
    "cyan": "#00ffff", "magenta": "#ff00ff", "lime": "#00ff00", "navy": "#000080",
    "maroon": "#800000", "olive": "#808000", "teal": "#008080", "silver": "#c0c0c0",
    "aqua": "#00ffff", "fuchsia": "#ff00ff", "darkred": "#8b0000",
    "darkgreen": "#006400", "darkblue": "#00008b", "lightgray": "#d3d3d3",
    "lightgrey": "#d3d3d3",
}


def unit_rgb_to_bytes(channels: Sequence[float]) -> tuple[int, int, int]:
    """Convert the first three 0-1 channels to 0-255 ints.

    Rounds half away from zero (0.5 * 255 = 127.5 -> 128) and clamps, so
    extraction and rewrite always derive the same key from the same floats.
    """
    arr = np.asarray(channels[:3], dtype=np.float64) * 255.0
    rounded = np.sign(arr) * np.floor(np.abs(arr) + 0.5)
    clamped = np.clip(rounded, 0, 255).astype(int)
    return (int(clamped[0]), int(clamped[1]), int(clamped[2]))


def rgb_to_hex(rgb: Sequence[int]) -> str:
    r, g, b = (max(0, min(255, int(c))) for c in rgb[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
    """Parse a canonical or short hex string to (r, g, b)."""
    h = expand_hex(hex_str)[1:]
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def expand_hex(hex_str: str) -> str:
    """`#ABC` -> `#aabbcc`; 6-digit values are just lowercased."""
    h = hex_str.strip().lower()
    if len(h) == 4:
        h = "#" + h[1] * 2 + h[2] * 2 + h[3] * 2
    return h


def normalize_css_color(value: str) -> str | None:
    """Map one SVG paint value to its canonical key, or None if it is not a color to tokenize."""
    if not value:
        return None
    value = value.strip()
    lowered = value.lower()
    if lowered in EXCLUDED_VALUES or "var(" in lowered:
        return None

    if _HEX_RE.match(value):
        return expand_hex(value)

    m = _RGB_RE.match(value) or _RGBA_RE.match(value)
    if m:
        return rgb_to_hex((int(m.group(1)), int(m.group(2)), int(m.group(3))))

    return NAMED_COLORS.get(lowered)


class ColorTally:
    """Insertion-ordered occurrence counter keyed by canonical hex."""

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}

    def add(self, key: str) -> None:
        self._counts[key] = self._counts.get(key, 0) + 1

    def add_rgb(self, rgb: Sequence[int]) -> str:
        key = rgb_to_hex(rgb)
        self.add(key)
        return key

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def __len__(self) -> int:
        return len(self._counts)

    def ranked(self) -> list[DistinctColor]:
        """Most-used first; ties keep first-discovered order (sorted() is stable)."""
        colors = [
            DistinctColor(key=key, rgb=hex_to_rgb(key), hex=key, count=count)
            for key, count in self._counts.items()
        ]
        return sorted(colors, key=lambda c: -c.count)
