"""Shared test fixtures."""

from __future__ import annotations

import copy
import json

import pytest


def _fill(rgba: list[float]) -> dict:
    return {"ty": "fl", "c": {"a": 0, "k": rgba}, "o": {"a": 0, "k": 100}, "nm": "Fill 1"}


def _stroke(k) -> dict:
    return {"ty": "st", "c": {"a": 0, "k": k}, "o": {"a": 0, "k": 100}, "w": {"a": 0, "k": 2}}


def _shape_layer(name: str, *items: dict) -> dict:
    return {
        "ty": 4,
        "nm": name,
        "ip": 0,
        "op": 60,
        "shapes": [
            {
                "ty": "gr",
                "it": [{"ty": "rc", "s": {"a": 0, "k": [40, 40]}, "p": {"a": 0, "k": [0, 0]}}, *items],
            }
        ],
    }


def _animation(*layers: dict) -> dict:
    return {"v": "5.7.4", "fr": 30, "ip": 0, "op": 60, "w": 100, "h": 100, "layers": list(layers)}


# Two shapes, both filled pure red
TWO_RED_SHAPES = _animation(
    _shape_layer("Shape 1", _fill([1, 0, 0, 1])),
    _shape_layer("Shape 2", _fill([1, 0, 0, 1])),
)

# Blue appears first but red is used more; the stroke is animated
MIXED_LOTTIE = _animation(
    _shape_layer("Badge", _fill([0, 0, 1, 1]), _stroke([{"t": 0, "s": [1, 0, 0, 1]}, {"t": 30, "s": [0, 1, 0, 1]}])),
    _shape_layer("Dot", _fill([1, 0, 0, 1])),
    _shape_layer("Ring", _stroke([1, 0, 0])),
)

# Precomp asset + a malformed two-channel fill that must be skipped
NESTED_LOTTIE = {
    **_animation(_shape_layer("Main", _fill([0.5, 0.5, 0.5, 1]), _fill([1, 1]))),
    "assets": [{"id": "comp_0", "layers": [_shape_layer("Inner", _fill([0.5, 0.5, 0.5, 1]))]}],
}

LOTTIE_TEXT = json.dumps(TWO_RED_SHAPES)


def _deeply_grouped(item: dict, depth: int) -> dict:
    for _ in range(depth):
        item = {"ty": "gr", "it": [item]}
    return item


# One red fill buried under 300 nested groups
DEEP_LOTTIE_TEXT = json.dumps(
    _animation({"ty": 4, "nm": "Deep", "shapes": [_deeply_grouped(_fill([1, 0, 0, 1]), 300)]})
)

GREEN_FRAGMENT = '<rect fill="#00FF00"/><circle fill="rgb(0,255,0)"/>'

GREEN_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<rect fill="#00FF00"/><circle fill="rgb(0,255,0)"/></svg>'
)

# Same shape set as the breakdown fixture: hex fills only
FILLED_COMPLEX_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 256 259">
  <path d="M128 10 L240 80 L240 200 L128 249 L16 200 L16 80 Z" fill="#4ECDC4"/>
  <path d="M128 50 L200 100 L200 180 L128 220 L56 180 L56 100 Z" fill="#45B7D1"/>
  <circle cx="128" cy="130" r="30" fill="#FF6B6B"/>
  <circle cx="100" cy="110" r="10" fill="#FFEAA7"/>
  <circle cx="156" cy="110" r="10" fill="#FFEAA7"/>
</svg>'''

NAMED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none">
  <circle cx="12" cy="12" r="10" stroke="red" fill="transparent"/>
  <path d="M8 14s1.5 2 4 2 4-2 4-2" stroke=#f00 />
  <rect x="2" y="2" width="4" height="4" fill="rgba(255, 0, 0, 0.5)"/>
</svg>'''

STYLED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
  <defs><style>:root { --existing: #123456; } .a { opacity: .5; }</style></defs>
  <rect class="a" fill="#000" width="24" height="24"/>
</svg>'''


@pytest.fixture
def two_red_shapes() -> dict:
    return copy.deepcopy(TWO_RED_SHAPES)


@pytest.fixture
def mixed_lottie() -> dict:
    return copy.deepcopy(MIXED_LOTTIE)


@pytest.fixture
def nested_lottie() -> dict:
    return copy.deepcopy(NESTED_LOTTIE)


@pytest.fixture
def lottie_text() -> str:
    return LOTTIE_TEXT


@pytest.fixture
def deep_lottie_text() -> str:
    return DEEP_LOTTIE_TEXT


@pytest.fixture
def green_fragment() -> str:
    return GREEN_FRAGMENT


@pytest.fixture
def green_svg() -> str:
    return GREEN_SVG


@pytest.fixture
def filled_complex_svg() -> str:
    return FILLED_COMPLEX_SVG


@pytest.fixture
def named_svg() -> str:
    return NAMED_SVG


@pytest.fixture
def styled_svg() -> str:
    return STYLED_SVG
