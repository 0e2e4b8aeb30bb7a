"""
Tests for anchor docking and position resolution.
"""

import pytest

from dockscreen.controls import ControlSet, MissingFieldError, NumericParseError, UnresolvedReferenceError, Vec2
from dockscreen.docking import (
    Anchor,
    CyclicDockError,
    DockExpressionError,
    DockSpec,
    InvalidAnchorError,
    center_from_top_left,
    point_on_screen,
    resolve_all,
    resolve_position,
    to_ui_space,
)
from dockscreen.parser import parse_text

SCREEN = (1920, 1080)


def single(size: str, dock_with: str = "", extra: str = "") -> ControlSet:
    text = f"--picture_box--\nname: c\nsize: {size}\ndock_with: {dock_with}\n{extra}\n--end--"
    return parse_text(text)


@pytest.mark.parametrize("size", ["100;50", "1;1", "33.5;7.25", "1920;1080"])
def test_center_middle_dock_centres_on_origin(size):
    controls = single(size, "screen.center_middle <-> this.center_middle")
    w, h = controls["c"].size.as_tuple()

    assert resolve_position("c", controls, SCREEN) == Vec2(x=-w / 2, y=h / 2)


def test_offset_moves_docked_control(row_controls):
    a = resolve_position("a", row_controls, SCREEN)
    b = resolve_position("b", row_controls, SCREEN)

    a_right_edge = a.x + row_controls["a"].size.x
    assert b.x - a_right_edge == 10
    assert b.y == a.y


@pytest.mark.parametrize(
    "anchor, expected",
    [
        ("top_left", (-960, 540)),
        ("top_middle", (0, 540)),
        ("top_right", (960, 540)),
        ("center_left", (-960, 0)),
        ("center_middle", (0, 0)),
        ("center_right", (960, 0)),
        ("bottom_left", (-960, -540)),
        ("bottom_middle", (0, -540)),
        ("bottom_right", (960, -540)),
    ],
)
def test_screen_anchor_points(anchor, expected):
    assert point_on_screen(Vec2(x=1920, y=1080), Anchor.parse(anchor)).as_tuple() == expected


@pytest.mark.parametrize(
    "anchor, expected_top_left",
    [
        ("top_left", (0, 0)),
        ("top_right", (-100, 0)),
        ("bottom_left", (0, 50)),
        ("bottom_right", (-100, 50)),
        ("center_right", (-100, 25)),
        ("bottom_middle", (-50, 50)),
    ],
)
def test_control_anchor_backs_out_top_left(anchor, expected_top_left):
    controls = single("100;50", f"screen.center_middle <-> this.{anchor}")
    assert resolve_position("c", controls, SCREEN).as_tuple() == expected_top_left


def test_dock_to_other_control_corners(menu_controls):
    positions = resolve_all(menu_controls, SCREEN)

    assert positions["panel"] == Vec2(x=-300, y=200)
    assert positions["title"] == Vec2(x=-280, y=180)
    assert positions["play"] == Vec2(x=-100, y=-110)
    assert positions["quit"] == Vec2(x=860, y=540)


def test_resolution_independent_of_declaration_order():
    text = """
--picture_box--
name: child
size: 10;10
dock_with: parent.bottom_left <-> this.top_left
--end--
--picture_box--
name: parent
size: 20;20
dock_with: screen.top_left <-> this.top_left
--end--
"""
    assert resolve_position("child", parse_text(text), SCREEN) == Vec2(x=-960, y=520)


def test_screen_size_accepts_vec2(row_controls):
    assert resolve_position("a", row_controls, Vec2(x=1920, y=1080)) == resolve_position("a", row_controls, SCREEN)


def test_undocked_positions():
    assert resolve_position("c", single("10;10"), SCREEN) == Vec2(x=-5, y=5)
    assert resolve_position("c", single("10;10", extra="center_position: 100;100"), SCREEN) == Vec2(x=95, y=105)
    assert resolve_position("c", single("10;10", extra="top_left_position: 1;2"), SCREEN) == Vec2(x=1, y=2)


def test_anchor_tokens_tolerate_case_and_whitespace():
    controls = single("100;50", "screen.Center_Middle  <->  this. center_middle ")
    assert resolve_position("c", controls, SCREEN) == Vec2(x=-50, y=25)


def test_unknown_control():
    with pytest.raises(UnresolvedReferenceError, match=r"\[ghost\]"):
        resolve_position("ghost", single("1;1"), SCREEN)


def test_unknown_dock_reference():
    controls = single("1;1", "ghost.top_left <-> this.top_left")
    with pytest.raises(UnresolvedReferenceError) as exc_info:
        resolve_position("c", controls, SCREEN)
    assert exc_info.value.name == "ghost"


def test_unknown_anchor():
    controls = single("1;1", "screen.middle <-> this.top_left")
    with pytest.raises(InvalidAnchorError) as exc_info:
        resolve_position("c", controls, SCREEN)
    assert exc_info.value.token == "middle"


@pytest.mark.parametrize(
    "expression",
    [
        "screen.top_left",
        "screen.top_left <-> this.top_left <-> x.top_left",
        "screen <-> this.top_left",
        ".top_left <-> this.top_left",
    ],
)
def test_malformed_dock_expressions(expression):
    with pytest.raises(DockExpressionError):
        DockSpec.parse(expression)


def test_dock_cycle_detected():
    text = """
--picture_box--
name: a
size: 1;1
dock_with: b.top_left <-> this.top_left
--end--
--picture_box--
name: b
size: 1;1
dock_with: a.top_left <-> this.top_left
--end--
"""
    with pytest.raises(CyclicDockError) as exc_info:
        resolve_position("a", parse_text(text), SCREEN)
    assert exc_info.value.chain == ["a", "b", "a"]


def test_self_dock_is_a_cycle():
    controls = single("1;1", "c.top_left <-> this.top_left")
    with pytest.raises(CyclicDockError):
        resolve_position("c", controls, SCREEN)


def test_missing_size():
    controls = parse_text("--picture_box--\nname: c\n--end--")
    with pytest.raises(MissingFieldError):
        resolve_position("c", controls, SCREEN)


def test_malformed_offset():
    controls = single("1;1", "screen.top_left <-> this.top_left", "offset: 1;x")
    with pytest.raises(NumericParseError) as exc_info:
        resolve_position("c", controls, SCREEN)
    assert exc_info.value.field == "offset"


def test_center_and_ui_space_helpers():
    top_left = Vec2(x=-300, y=200)
    assert center_from_top_left(top_left, Vec2(x=600, y=400)) == Vec2(x=0, y=0)
    assert to_ui_space(top_left, SCREEN) == Vec2(x=660, y=340)
