"""Tests for TokenSession: load, name, apply, export."""

from __future__ import annotations

import json

import pytest

from app.models.tokens import DocumentKind
from app.tokens.errors import RewriteBlockedError
from app.tokens.session import TokenSession


def test_lottie_end_to_end(lottie_text):
    session = TokenSession(DocumentKind.LOTTIE)
    colors = session.load("shapes.json", lottie_text)
    assert [(c.hex, c.count) for c in colors] == [("#ff0000", 2)]
    assert not session.can_apply

    session.set_name("#ff0000", "primary")
    assert session.can_apply
    working = session.apply()
    fills = [item for layer in working["layers"] for item in layer["shapes"][0]["it"] if item["ty"] == "fl"]
    assert [f["cl"] for f in fills] == ["primary", "primary"]
    assert [f["c"]["k"] for f in fills] == [[1, 0, 0, 1], [1, 0, 0, 1]]
    # baseline still pristine
    assert "primary" not in json.dumps(session.document.original)


def test_parse_failure_resets_state(lottie_text):
    session = TokenSession(DocumentKind.LOTTIE)
    session.load("ok.json", lottie_text)
    assert session.colors

    assert session.load("bad.json", "{not json") == []
    assert not session.loaded
    assert session.colors == []
    assert session.last_error
    with pytest.raises(RewriteBlockedError):
        session.apply()


def test_unconvertible_input_leaves_session_consistent():
    session = TokenSession(DocumentKind.LOTTIE)
    colors = session.load("big.json", '{"ty":"fl","c":{"k":[1' + "0" * 400 + ",0,0]}}")
    assert colors == []
    assert session.loaded
    assert session.last_error is None

    session.load("deep.json", "[" * 100_000 + "]" * 100_000)
    assert not session.loaded
    assert session.colors == []
    assert "nested too deeply" in session.last_error


def test_deeply_nested_lottie_round_trip(deep_lottie_text):
    session = TokenSession(DocumentKind.LOTTIE)
    assert [c.key for c in session.load("deep.json", deep_lottie_text)] == ["#ff0000"]
    session.set_name("#ff0000", "primary")
    working = session.apply()
    node = working["layers"][0]["shapes"][0]
    while node["ty"] == "gr":
        node = node["it"][0]
    assert node["cl"] == "primary"


def test_apply_blocked_until_every_color_named(mixed_lottie):
    session = TokenSession(DocumentKind.LOTTIE)
    session.load("mixed.json", json.dumps(mixed_lottie))
    session.set_name("#ff0000", "danger")
    with pytest.raises(RewriteBlockedError) as exc:
        session.apply()
    assert exc.value.unnamed == ["#0000ff"]
    assert session.document.working == session.document.original


def test_renaming_clears_applied_and_reapplies_from_baseline(green_svg):
    session = TokenSession(DocumentKind.SVG)
    session.load("icon.svg", green_svg)
    session.bind({"#00FF00": "accent", "#123456": "unknown"})
    session.apply()
    assert session.applied

    session.set_name("#00ff00", "highlight")
    assert not session.applied
    out = session.apply()
    assert "accent" not in out
    assert out.count("--highlight: #00ff00;") == 1


def test_set_name_unknown_key(green_svg):
    session = TokenSession(DocumentKind.SVG)
    session.load("icon.svg", green_svg)
    with pytest.raises(KeyError):
        session.set_name("#abcdef", "nope")


def test_remove_discards_everything(green_svg):
    session = TokenSession(DocumentKind.SVG)
    session.load("icon.svg", green_svg)
    session.remove()
    assert not session.loaded
    assert session.colors == []
    assert not session.applied


def test_document_without_colors_can_apply():
    session = TokenSession(DocumentKind.SVG)
    session.load("blank.svg", "<svg></svg>")
    assert session.can_apply
    assert session.apply() == "<svg></svg>"


def test_export(green_svg):
    session = TokenSession(DocumentKind.SVG)
    session.load("icon.svg", green_svg)
    session.set_name("#00ff00", "accent")
    session.apply()
    filename, payload, media_type = session.export()
    assert filename == "icon_with_variables.svg"
    assert media_type == "image/svg+xml"
    assert b"var(--accent, #00ff00)" in payload


def test_lottie_export_is_json(lottie_text):
    session = TokenSession(DocumentKind.LOTTIE)
    session.load("shapes.json", lottie_text)
    session.set_name("#ff0000", "primary")
    session.apply()
    filename, payload, media_type = session.export()
    assert filename == "shapes_with_variables.json"
    assert media_type == "application/json"
    assert json.loads(payload)["layers"][0]["shapes"][0]["it"][1]["cl"] == "primary"
