"""Lottie color extraction and token rewrite.

Extraction tallies every fill/stroke paint node by canonical hex. Rewrite
copies the baseline tree and labels bound paint nodes with a class field
(`cl`); the numeric color stays as-is so the animation renders unchanged in
players that ignore the label.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from app.config import settings
from app.models.tokens import DistinctColor
from app.tokens.colors import ColorTally, rgb_to_hex, unit_rgb_to_bytes
from app.tokens.tree import PaintNode, copy_tree, walk

logger = logging.getLogger(__name__)


def paint_key(paint: PaintNode) -> str | None:
    """Canonical key for a paint node, or None when its color value is malformed."""
    channels = paint.channels
    if channels is None:
        logger.debug("Skipping %s node with unusable color %r", paint.role, paint.value)
        return None
    return rgb_to_hex(unit_rgb_to_bytes(channels))


def extract_lottie_colors(tree: Any) -> list[DistinctColor]:
    tally = ColorTally()

    def _collect(paint: PaintNode) -> None:
        key = paint_key(paint)
        if key is not None:
            tally.add(key)

    visited = walk(tree, _collect)
    logger.info(
        "Lottie extraction: %d paint nodes, %d resolvable, %d distinct colors",
        visited, tally.total, len(tally),
    )
    return tally.ranked()


def apply_lottie_bindings(
    original: Any,
    bindings: Mapping[str, str],
    class_field: str | None = None,
) -> Any:
    """Return a labelled copy of `original`; `original` itself is never touched.

    `bindings` maps canonical key -> variable name. Blank names are ignored.
    """
    field = class_field or settings.lottie_class_field
    names = {key.lower(): name.strip() for key, name in bindings.items() if name and name.strip()}
    result = copy_tree(original)
    if not names:
        return result

    labelled = 0

    def _label(paint: PaintNode) -> None:
        nonlocal labelled
        key = paint_key(paint)
        if key is not None and key in names:
            paint.node[field] = names[key]
            labelled += 1

    walk(result, _label)
    logger.info("Lottie rewrite: labelled %d paint nodes with %d names", labelled, len(names))
    return result
