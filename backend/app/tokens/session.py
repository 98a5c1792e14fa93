"""TokenSession: the state behind one token-assigner tool.

Holds the current upload, its extracted colors and the applied flag. All
document work is delegated to the pure functions in `lottie` / `svg`; this
class only sequences them the way the tool UI does (load -> name -> apply ->
export) and enforces that every color is named before applying.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from app.models.tokens import DistinctColor, DocumentKind
from app.tokens.errors import ParseError, RewriteBlockedError
from app.tokens.loader import LoadedDocument, export_filename, load_document
from app.tokens.lottie import apply_lottie_bindings, extract_lottie_colors
from app.tokens.svg import apply_svg_bindings, extract_svg_colors

logger = logging.getLogger(__name__)


class TokenSession:
    def __init__(self, kind: DocumentKind) -> None:
        self.kind = kind
        self.document: LoadedDocument | None = None
        self.colors: list[DistinctColor] = []
        self.applied = False
        self.last_error: str | None = None

    @property
    def loaded(self) -> bool:
        return self.document is not None

    def load(self, filename: str, raw: bytes | str) -> list[DistinctColor]:
        """Replace whatever was loaded. A parse failure leaves the session empty."""
        self.remove()
        try:
            document = load_document(self.kind, filename, raw)
        except ParseError as e:
            logger.warning("Failed to load %s %r: %s", self.kind.value, filename, e)
            self.last_error = str(e)
            return []

        if self.kind is DocumentKind.LOTTIE:
            colors = extract_lottie_colors(document.original)
        else:
            colors = extract_svg_colors(document.original)
        self.document, self.colors = document, colors
        return self.colors

    def remove(self) -> None:
        self.document = None
        self.colors = []
        self.applied = False
        self.last_error = None

    def set_name(self, key: str, name: str) -> None:
        key = key.lower()
        for color in self.colors:
            if color.key == key:
                color.name = name
                self.applied = False
                return
        raise KeyError(key)

    def bind(self, names: Mapping[str, str]) -> None:
        """Set several names at once; keys not in the document are ignored."""
        known = {c.key for c in self.colors}
        for key, name in names.items():
            if key.lower() in known:
                self.set_name(key, name)
            else:
                logger.debug("Ignoring binding for unknown color %s", key)

    @property
    def bindings(self) -> dict[str, str]:
        return {c.key: c.bound_name for c in self.colors if c.bound_name}

    @property
    def unnamed(self) -> list[str]:
        return [c.key for c in self.colors if not c.bound_name]

    @property
    def can_apply(self) -> bool:
        return self.loaded and not self.unnamed

    def apply(self) -> Any:
        """Rewrite from the original baseline with the current names."""
        if self.document is None:
            raise RewriteBlockedError()
        if self.unnamed:
            raise RewriteBlockedError(self.unnamed)

        if self.kind is DocumentKind.LOTTIE:
            self.document.working = apply_lottie_bindings(self.document.original, self.bindings)
        else:
            self.document.working = apply_svg_bindings(self.document.original, self.bindings)
        self.applied = True
        return self.document.working

    def serialize(self) -> str:
        if self.document is None:
            return ""
        if self.kind is DocumentKind.LOTTIE:
            return json.dumps(self.document.working, separators=(",", ":"), ensure_ascii=False)
        return self.document.working

    @property
    def export_filename(self) -> str:
        return export_filename(self.document.filename if self.document else None, self.kind)

    def export(self) -> tuple[str, bytes, str]:
        """(filename, payload, media type) for download."""
        if self.document is None:
            raise RewriteBlockedError()
        return self.export_filename, self.serialize().encode("utf-8"), self.document.media_type
