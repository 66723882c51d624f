"""Shared fixtures for glyphline tests."""

import json
from pathlib import Path

import pytest

from glyphline.domain import FontDefinition

# Square "A" with a square counter, a smaller "?" and a blank space
TEST_FONT: dict = {
    "familyName": "Test Serif",
    "ascender": 800,
    "descender": -200,
    "resolution": 1000,
    "glyphs": {
        "A": {
            "ha": 600,
            "o": "m 0 0 l 0 700 l 500 700 l 500 0 z m 100 100 l 400 100 l 400 600 l 100 600 z",
        },
        "?": {"ha": 400, "o": "m 0 0 l 0 500 l 300 500 l 300 0 z"},
        " ": {"ha": 250, "o": ""},
        "o": {
            "ha": 550,
            "o": "m 250 0 q 0 250 0 0 q 250 500 0 500 q 500 250 500 500 q 250 0 500 0 z",
        },
    },
}


@pytest.fixture
def font_data() -> dict:
    return json.loads(json.dumps(TEST_FONT))


@pytest.fixture
def font_definition(font_data: dict) -> FontDefinition:
    return FontDefinition.from_dict(font_data)


@pytest.fixture
def font_file(tmp_path: Path, font_data: dict) -> Path:
    path = tmp_path / "test_serif.json"
    path.write_text(json.dumps(font_data), encoding="utf-8")
    return path
