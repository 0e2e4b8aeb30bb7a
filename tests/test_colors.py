"""
Tests for color parsing.
"""

import pytest

from dockscreen.controls import NumericParseError
from dockscreen.parser import parse_text
from dockscreen.utils import RGBAColor


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("255;128;0", (255, 128, 0, 255)),
        (" 1 ; 2 ; 3 ; 4 ", (1, 2, 3, 4)),
        ("#FF8000", (255, 128, 0, 255)),
        ("#ff8000c8", (255, 128, 0, 200)),
        ("white", (255, 255, 255, 255)),
        ("Cornflower Blue", (100, 149, 237, 255)),
        ("transparent", (0, 0, 0, 0)),
    ],
)
def test_color_notations(raw, expected):
    color = RGBAColor.from_string(raw)
    assert (color.r, color.g, color.b, color.a) == expected


@pytest.mark.parametrize("raw", ["256;0;0", "1;2", "1;2;3;4;5", "#12345", "#gggggg", "not a color", ""])
def test_invalid_colors(raw):
    with pytest.raises(ValueError):
        RGBAColor.from_string(raw)


def test_conversions():
    color = RGBAColor(r=255, g=0, b=51, a=255)
    assert color.to_unit() == (1.0, 0.0, 0.2, 1.0)
    assert color.to_hex() == "#ff0033"
    assert RGBAColor(r=0, g=0, b=0, a=16).to_hex() == "#00000010"


def test_control_color_accessor():
    control = parse_text("--label--\nname: l\nsize: 1;1\ncolor: red\n--end--")["l"]
    assert control.get_color("color") == RGBAColor(r=255, g=0, b=0)


def test_control_color_accessor_reports_field():
    control = parse_text("--label--\nname: l\nsize: 1;1\ncolor: chartreuse-ish\n--end--")["l"]
    with pytest.raises(NumericParseError) as exc_info:
        control.get_color("color")
    assert exc_info.value.control == "l"
    assert exc_info.value.field == "color"
