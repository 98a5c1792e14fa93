"""Document loader: decode an upload and keep an untouched baseline beside the working copy."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from app.config import settings
from app.models.tokens import DocumentKind
from app.tokens.errors import ParseError
from app.tokens.tree import copy_tree

logger = logging.getLogger(__name__)

_EXTENSIONS = {DocumentKind.LOTTIE: ".json", DocumentKind.SVG: ".svg"}
_MEDIA_TYPES = {DocumentKind.LOTTIE: "application/json", DocumentKind.SVG: "image/svg+xml"}


@dataclass
class LoadedDocument:
    """A loaded upload.

    `original` is never mutated; every rewrite starts again from it so
    re-binding never compounds earlier substitutions. `working` is what gets
    exported.
    """

    kind: DocumentKind
    filename: str
    original: Any
    working: Any

    @property
    def media_type(self) -> str:
        return _MEDIA_TYPES[self.kind]


def _decode(raw: bytes | str) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"Document is not UTF-8 text: {e}") from e


def load_lottie(filename: str, raw: bytes | str) -> LoadedDocument:
    text = _decode(raw)
    try:
        data = json.loads(text)
    except ValueError as e:
        # JSONDecodeError, or an integer past the interpreter digit limit
        raise ParseError(f"Invalid Lottie JSON: {e}") from e
    except RecursionError as e:
        raise ParseError("Lottie JSON is nested too deeply") from e
    logger.debug("Loaded Lottie %r (%d chars)", filename, len(text))
    return LoadedDocument(
        kind=DocumentKind.LOTTIE,
        filename=filename,
        original=data,
        working=copy_tree(data),
    )


def load_svg(filename: str, raw: bytes | str) -> LoadedDocument:
    # No validation: the color scan is the only consumer
    text = _decode(raw)
    logger.debug("Loaded SVG %r (%d chars)", filename, len(text))
    return LoadedDocument(kind=DocumentKind.SVG, filename=filename, original=text, working=text)


def load_document(kind: DocumentKind, filename: str, raw: bytes | str) -> LoadedDocument:
    if kind is DocumentKind.LOTTIE:
        return load_lottie(filename, raw)
    return load_svg(filename, raw)


def export_filename(filename: str | None, kind: DocumentKind) -> str:
    """`logo.svg` -> `logo_with_variables.svg`; missing names fall back to the kind."""
    ext = _EXTENSIONS[kind]
    stem = (filename or "").strip()
    if stem.lower().endswith(ext):
        stem = stem[: -len(ext)]
    if not stem:
        stem = kind.value
    return f"{stem}{settings.export_suffix}{ext}"
