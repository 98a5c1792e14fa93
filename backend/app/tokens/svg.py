"""SVG color extraction and CSS-variable rewrite over raw markup.

Regex-based, like the rest of the SVG handling here: colors inside <style>
rules or url() references are only seen by the generic hex/rgb scanners, and
only fill/stroke attributes are rewritten.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping

from app.config import settings
from app.models.tokens import DistinctColor
from app.tokens.colors import ColorTally, normalize_css_color

logger = logging.getLogger(__name__)

# Scanners, run in this order; first-seen order of keys follows it
_HEX_SCAN_RE = re.compile(r"#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})\b")
_RGB_SCAN_RE = re.compile(r"rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)")
_RGBA_SCAN_RE = re.compile(r"rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*[\d.]+\s*\)")
_ATTR_QUOTED_RE = re.compile(r"""(?:fill|stroke)\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
_ATTR_BARE_RE = re.compile(r"""(?:fill|stroke)\s*=\s*([^\s>]+?)(?=\s|/?>|$)""", re.IGNORECASE)

_VAR_REF_RE = re.compile(r"var\([^)]*\)", re.IGNORECASE)
# `--name: value` declarations from an earlier export
_CUSTOM_PROP_RE = re.compile(r"--[\w-]+\s*:[^;}]*")

# Rewrite: one fill/stroke attribute value, quoted or bare
_PAINT_ATTR_RE = re.compile(
    r"""(?P<prefix>\b(?:fill|stroke)\s*=\s*)"""
    r"""(?:(?P<q>["'])(?P<quoted>[^"']*)(?P=q)|(?P<bare>[^\s>"']+?)(?=\s|/?>|$))""",
    re.IGNORECASE,
)

_SVG_OPEN_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_DEFS_OPEN_RE = re.compile(r"<defs\b[^>]*?(?<!/)>", re.IGNORECASE)
_STYLE_OPEN_RE = re.compile(r"<style\b[^>]*?(?<!/)>", re.IGNORECASE)
_STYLE_CLOSE_RE = re.compile(r"</style\s*>", re.IGNORECASE)
_ROOT_RULE_RE = re.compile(r"(:root\s*\{[^}]*?)\s*(\})")


def _scan(text: str) -> Iterator[tuple[str, tuple[int, int]]]:
    """Yield (raw value, span) for every hit of every scanner.

    One physical color can be yielded by several scanners, e.g. the hex in
    `fill="#fff"` comes from both the hex and the quoted-attribute scan.
    """
    for pattern in (_HEX_SCAN_RE, _RGB_SCAN_RE, _RGBA_SCAN_RE):
        for m in pattern.finditer(text):
            yield m.group(0), m.span()
    for pattern in (_ATTR_QUOTED_RE, _ATTR_BARE_RE):
        for m in pattern.finditer(text):
            raw = m.group(1)
            value = raw.strip()
            start = m.start(1) + (len(raw) - len(raw.lstrip()))
            yield value, (start, start + len(value))


def _inside(spans: list[tuple[int, int]], pos: int) -> bool:
    return any(start <= pos < end for start, end in spans)


def extract_svg_colors(text: str, count_overlaps: bool | None = None) -> list[DistinctColor]:
    """Collect, dedupe and rank every color in raw SVG text.

    With `count_overlaps` (the default from settings) every scanner hit counts;
    otherwise each text span is counted once however many scanners found it.
    Values inside a `var(...)` reference or a `--name: value` declaration are
    already tokenized and never collected.
    """
    if count_overlaps is None:
        count_overlaps = settings.svg_count_overlaps

    var_spans = [m.span() for m in _VAR_REF_RE.finditer(text)]
    var_spans += [m.span() for m in _CUSTOM_PROP_RE.finditer(text)]
    seen_spans: set[tuple[int, int]] = set()
    tally = ColorTally()
    hits = 0

    for value, span in _scan(text):
        if _inside(var_spans, span[0]):
            continue
        key = normalize_css_color(value)
        if key is None:
            continue
        if not count_overlaps:
            if span in seen_spans:
                continue
            seen_spans.add(span)
        tally.add(key)
        hits += 1

    logger.info("SVG extraction: %d color hits, %d distinct colors", hits, len(tally))
    return tally.ranked()


def variable_name(name: str) -> str:
    """User input -> custom property name without the leading `--`."""
    return name.strip().lstrip("-").strip()


def _declarations(names: Mapping[str, str]) -> str:
    return " ".join(f"--{name}: {key};" for key, name in names.items())


def inject_variables(svg: str, declarations: str) -> str:
    """Insert a `:root { ... }` block exactly once.

    Merges into an existing :root rule, else prepends one to an existing
    <style>, else adds a <style> under <defs>, else creates <defs><style>
    right after the opening <svg> tag. A fragment with no <svg> tag gets the
    block prepended.
    """
    if not declarations:
        return svg

    style = _STYLE_OPEN_RE.search(svg)
    if style:
        close = _STYLE_CLOSE_RE.search(svg, style.end())
        root = _ROOT_RULE_RE.search(svg, style.end(), close.start() if close else len(svg))
        if root:
            return svg[: root.end(1)] + f" {declarations} " + svg[root.start(2):]
        return svg[: style.end()] + f":root {{ {declarations} }}\n" + svg[style.end():]

    block = f"<style>:root {{ {declarations} }}</style>"
    defs = _DEFS_OPEN_RE.search(svg)
    if defs:
        return svg[: defs.end()] + block + svg[defs.end():]

    root_tag = _SVG_OPEN_RE.search(svg)
    if root_tag is None:
        # Bare fragment: declarations go first
        logger.debug("No <svg> element found, prepending variable declarations")
        return f"<defs>{block}</defs>" + svg
    return svg[: root_tag.end()] + f"<defs>{block}</defs>" + svg[root_tag.end():]


def apply_svg_bindings(original: str, bindings: Mapping[str, str]) -> str:
    """Rewrite bound fill/stroke values to `var(--name, #hex)` and declare the variables.

    Any opaque spelling of a bound color is replaced (#abc, #aabbcc, rgb(),
    CSS names), always falling back to the canonical hex. rgba() values keep
    their literal since the variable cannot carry the alpha.
    """
    names: dict[str, str] = {}
    for key, name in bindings.items():
        cleaned = variable_name(name or "")
        if cleaned:
            names[key.lower()] = cleaned
    if not names:
        return original

    replaced = 0

    def _sub(m: re.Match) -> str:
        nonlocal replaced
        quoted = m.group("quoted")
        value = quoted if quoted is not None else m.group("bare")
        key = normalize_css_color(value)
        if key is None or key not in names or value.strip().lower().startswith("rgba("):
            return m.group(0)
        replaced += 1
        quote = m.group("q") or '"'
        return f"{m.group('prefix')}{quote}var(--{names[key]}, {key}){quote}"

    rewritten = _PAINT_ATTR_RE.sub(_sub, original)
    logger.info("SVG rewrite: replaced %d attribute values for %d variables", replaced, len(names))
    return inject_variables(rewritten, _declarations(names))
