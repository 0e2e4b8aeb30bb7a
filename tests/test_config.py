"""
Tests for screen configuration.
"""

import json

import pytest
from pydantic import ValidationError

from dockscreen.config import ConfigurationError, ScreenConfig
from dockscreen.controls import Vec2


def test_defaults():
    config = ScreenConfig()
    assert config.screen_size == Vec2(x=1920, y=1080)
    assert config.click_cooldown_seconds == 0.5
    assert config.allow_unnamed_controls is False
    assert config.font_path("FiraSans-Bold.ttf") == "fonts/FiraSans-Bold.ttf"


def test_empty_fonts_dir():
    assert ScreenConfig(fonts_dir="").font_path("a.ttf") == "a.ttf"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"screen_width": 0},
        {"screen_height": -10},
        {"click_cooldown_seconds": -0.1},
        {"fonts_dir": "/usr/share/fonts"},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ValidationError):
        ScreenConfig(**kwargs)


def test_from_json_file(tmp_path):
    path = tmp_path / "screen.json"
    path.write_text(json.dumps({"screen_width": 1280, "screen_height": 720, "click_cooldown_seconds": 0.25}))

    config = ScreenConfig.from_json_file(path)
    assert config.screen_size == Vec2(x=1280, y=720)
    assert config.click_cooldown_seconds == 0.25


def test_from_json_file_errors(tmp_path):
    with pytest.raises(ConfigurationError, match="Unable to read"):
        ScreenConfig.from_json_file(tmp_path / "missing.json")

    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"screen_width": -1}))
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        ScreenConfig.from_json_file(path)
