"""Tagged-variant walk over a parsed Lottie tree.

Every JSON value is classified once into a NodeKind; paint nodes (shape items
with `ty` of `fl`/`st` and a `c.k` color property) are surfaced to a handler.
Extraction and rewrite share this walk so both see exactly the same sites.
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from numbers import Real
from typing import Any

logger = logging.getLogger(__name__)

PAINT_ROLES = {"fl": "fill", "st": "stroke"}


class NodeKind(enum.Enum):
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    PAINT = "paint"
    SCALAR = "scalar"


@dataclass
class PaintNode:
    """A fill/stroke shape item and the raw value of its color property."""

    role: str
    node: dict[str, Any]
    value: Any

    @property
    def channels(self) -> list[float] | None:
        return resolve_color(self.value)


def classify(value: Any) -> NodeKind:
    if isinstance(value, list):
        return NodeKind.SEQUENCE
    if not isinstance(value, dict):
        return NodeKind.SCALAR
    ty = value.get("ty")
    if isinstance(ty, str) and ty in PAINT_ROLES:
        color = value.get("c")
        if isinstance(color, dict) and color.get("k"):
            return NodeKind.PAINT
    return NodeKind.MAPPING


def _channel(v: Any) -> float | None:
    if not isinstance(v, Real) or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except OverflowError:
        return None
    return f if math.isfinite(f) else None


def resolve_color(raw: Any) -> list[float] | None:
    """Flatten a static or animated color property to its channel list.

    Animated colors use the first keyframe's start value `s`. Anything that
    does not end up as >=3 finite numeric channels is skipped. Trailing
    values (alpha) are kept up to the first unusable one.
    """
    if isinstance(raw, list) and raw and isinstance(raw[0], dict) and "s" in raw[0]:
        raw = raw[0]["s"]
    if not isinstance(raw, list) or len(raw) < 3:
        return None
    channels: list[float] = []
    for v in raw:
        f = _channel(v)
        if f is None:
            break
        channels.append(f)
    return channels if len(channels) >= 3 else None


def walk(tree: Any, on_paint: Callable[[PaintNode], None]) -> int:
    """Depth-first pre-order walk; returns the number of paint nodes visited.

    Iterative so deeply nested precomps do not hit the recursion limit.
    A paint node's own children are still visited after the handler runs.
    """
    visited = 0
    stack: list[Any] = [tree]
    while stack:
        value = stack.pop()
        kind = classify(value)
        if kind is NodeKind.SCALAR:
            continue
        if kind is NodeKind.SEQUENCE:
            stack.extend(reversed(value))
            continue
        if kind is NodeKind.PAINT:
            visited += 1
            on_paint(PaintNode(role=PAINT_ROLES[value["ty"]], node=value, value=value["c"]["k"]))
        stack.extend(reversed(list(value.values())))
    return visited


def copy_tree(tree: Any) -> Any:
    """Copy the dict/list structure of a parsed JSON tree; scalars are shared.

    Iterative like `walk`, so any tree the JSON parser accepted can be copied.
    """
    if not isinstance(tree, (dict, list)):
        return tree
    root: Any = {} if isinstance(tree, dict) else []
    stack: list[tuple[Any, Any]] = [(tree, root)]
    while stack:
        src, dst = stack.pop()
        items = src.items() if isinstance(src, dict) else enumerate(src)
        for key, value in items:
            if isinstance(value, dict):
                child: Any = {}
                stack.append((value, child))
            elif isinstance(value, list):
                child = []
                stack.append((value, child))
            else:
                child = value
            if isinstance(dst, dict):
                dst[key] = child
            else:
                dst.append(child)
    return root
