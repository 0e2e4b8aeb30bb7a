"""
Tests for hit-test shapes.
"""

import pytest
from pydantic import TypeAdapter

from dockscreen.controls import NumericParseError, Vec2
from dockscreen.geometry import (
    Circle,
    CircleShape,
    DefaultSpriteShape,
    HitShape,
    RectAndCircleShape,
    RectShape,
    circle_from,
    hit_shape_from_control,
    rect_from,
)
from dockscreen.parser import parse_text


def button(extra: str = ""):
    text = f"--button--\nname: b\nsize: 100;40\n{extra}\n--end--"
    return parse_text(text)["b"]


def test_rect_edges_are_inclusive():
    rect = rect_from(Vec2(), 10, 20, Vec2(x=100, y=100))

    assert (rect.left, rect.right, rect.top, rect.bottom) == (95, 105, 110, 90)
    for point in [Vec2(x=95, y=90), Vec2(x=105, y=110), Vec2(x=95, y=110), Vec2(x=105, y=90)]:
        assert rect.contains(point)
    for point in [Vec2(x=94, y=100), Vec2(x=106, y=100), Vec2(x=100, y=111), Vec2(x=100, y=89)]:
        assert not rect.contains(point)


def test_rect_origin_offset_moves_centre():
    rect = rect_from(Vec2(x=5, y=-5), 2, 2, Vec2(x=0, y=0))
    assert rect.contains(Vec2(x=5, y=-5))
    assert not rect.contains(Vec2(x=0, y=0))
    assert (rect.width, rect.height) == (2, 2)


def test_circle_boundary_is_inclusive():
    circle = circle_from(Vec2(x=10, y=10), Vec2(x=0, y=0), 5)

    assert circle.contains(Vec2(x=15, y=10))
    assert circle.contains(Vec2(x=13, y=14))
    assert not circle.contains(Vec2(x=16, y=10))
    assert not circle.contains(Vec2(x=14, y=14))


def test_zero_radius_circle_contains_only_centre():
    circle = Circle(center=Vec2(x=1, y=1), radius=0)
    assert circle.contains(Vec2(x=1, y=1))
    assert not circle.contains(Vec2(x=1, y=1.01))


def test_default_shape_is_sprite_rect():
    shape = hit_shape_from_control(button())
    assert isinstance(shape, DefaultSpriteShape)

    translation = Vec2(x=0, y=0)
    size = Vec2(x=100, y=40)
    assert shape.contains(Vec2(x=50, y=20), translation, size)
    assert not shape.contains(Vec2(x=51, y=0), translation, size)


def test_custom_box_replaces_sprite_rect():
    shape = hit_shape_from_control(button("bounding_box: 10;0;20;20"))
    assert isinstance(shape, RectShape)

    translation = Vec2(x=0, y=0)
    size = Vec2(x=100, y=40)
    assert shape.contains(Vec2(x=20, y=10), translation, size)
    assert not shape.contains(Vec2(x=-20, y=0), translation, size)


def test_custom_circle():
    shape = hit_shape_from_control(button("bounding_circle: 0;0;15"))
    assert isinstance(shape, CircleShape)
    assert shape.contains(Vec2(x=0, y=15), Vec2(), Vec2(x=100, y=40))
    assert not shape.contains(Vec2(x=40, y=0), Vec2(), Vec2(x=100, y=40))


def test_box_and_circle_require_both():
    shape = hit_shape_from_control(button("bounding_box: 0;0;40;40\nbounding_circle: 0;0;20"))
    assert isinstance(shape, RectAndCircleShape)

    translation = Vec2()
    size = Vec2(x=100, y=40)
    # Centre: inside both
    assert shape.contains(Vec2(x=0, y=0), translation, size)
    # Box corner: inside the box, outside the circle
    assert not shape.contains(Vec2(x=19, y=19), translation, size)


def test_zero_sized_declared_shape_is_honoured():
    shape = hit_shape_from_control(button("bounding_box: 0;0;0;0"))
    assert isinstance(shape, RectShape)
    assert shape.contains(Vec2(), Vec2(), Vec2(x=100, y=40))
    assert not shape.contains(Vec2(x=1, y=0), Vec2(), Vec2(x=100, y=40))


@pytest.mark.parametrize(
    "extra",
    [
        "bounding_box: 0;0;-1;5",
        "bounding_circle: 0;0;-3",
        "bounding_box: 0;0;5",
        "bounding_circle: a;b;c",
    ],
)
def test_invalid_shapes(extra):
    with pytest.raises(NumericParseError):
        hit_shape_from_control(button(extra))


def test_hit_shape_union_discriminates_on_kind():
    adapter = TypeAdapter(HitShape)
    shape = adapter.validate_python({"kind": "circle", "offset": {"x": 1, "y": 2}, "radius": 3})
    assert isinstance(shape, CircleShape)
    assert shape.offset == Vec2(x=1, y=2)
