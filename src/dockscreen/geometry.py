"""
Hit-test geometry for interactive widgets.

Rectangles and circles live in the same screen-centred, y-up coordinate system
as resolved control positions. A widget's hit shape is independent from what
it renders: by default it is the sprite rectangle, but a button may declare a
custom box, a custom circle, or both (in which case a point must lie inside
both to count as a hit).
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from dockscreen.controls import Control, NumericParseError, Vec2

BOUNDING_BOX_FIELD = "bounding_box"
BOUNDING_CIRCLE_FIELD = "bounding_circle"


class Rect(BaseModel):
    """Axis-aligned rectangle; containment is inclusive on every edge."""

    left: float
    right: float
    top: float
    bottom: float

    model_config = {"frozen": True}

    def contains(self, point: Vec2) -> bool:
        return self.left <= point.x <= self.right and self.bottom <= point.y <= self.top

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom


class Circle(BaseModel):
    """Circle; containment is Euclidean distance <= radius."""

    center: Vec2
    radius: float = Field(ge=0.0)

    model_config = {"frozen": True}

    def contains(self, point: Vec2) -> bool:
        dx = point.x - self.center.x
        dy = point.y - self.center.y
        return dx * dx + dy * dy <= self.radius * self.radius


def rect_from(origin_offset: Vec2, width: float, height: float, translation: Vec2) -> Rect:
    """
    Build a rectangle centred on translation + origin_offset.

    Args:
        origin_offset: Offset of the rectangle centre from the widget translation
        width: Rectangle width
        height: Rectangle height
        translation: Widget translation (its centre)
    """
    center = translation + origin_offset
    left = center.x - width * 0.5
    top = center.y + height * 0.5
    return Rect(left=left, right=left + width, top=top, bottom=top - height)


def circle_from(translation: Vec2, offset: Vec2, radius: float) -> Circle:
    """Build a circle centred on translation + offset."""
    return Circle(center=translation + offset, radius=radius)


class DefaultSpriteShape(BaseModel):
    """Hit area equals the rendered sprite rectangle."""

    kind: Literal["sprite"] = "sprite"

    def contains(self, point: Vec2, translation: Vec2, sprite_size: Vec2) -> bool:
        return rect_from(Vec2(), sprite_size.x, sprite_size.y, translation).contains(point)


class RectShape(BaseModel):
    """Custom rectangle, declared as bounding_box: dx;dy;w;h."""

    kind: Literal["rect"] = "rect"
    offset: Vec2 = Field(default_factory=Vec2)
    width: float = Field(ge=0.0)
    height: float = Field(ge=0.0)

    def to_rect(self, translation: Vec2) -> Rect:
        return rect_from(self.offset, self.width, self.height, translation)

    def contains(self, point: Vec2, translation: Vec2, sprite_size: Vec2) -> bool:
        return self.to_rect(translation).contains(point)


class CircleShape(BaseModel):
    """Custom circle, declared as bounding_circle: dx;dy;r."""

    kind: Literal["circle"] = "circle"
    offset: Vec2 = Field(default_factory=Vec2)
    radius: float = Field(ge=0.0)

    def to_circle(self, translation: Vec2) -> Circle:
        return circle_from(translation, self.offset, self.radius)

    def contains(self, point: Vec2, translation: Vec2, sprite_size: Vec2) -> bool:
        return self.to_circle(translation).contains(point)


class RectAndCircleShape(BaseModel):
    """Both custom shapes declared: a hit requires containment in both."""

    kind: Literal["rect_and_circle"] = "rect_and_circle"
    rect: RectShape
    circle: CircleShape

    def contains(self, point: Vec2, translation: Vec2, sprite_size: Vec2) -> bool:
        return self.rect.contains(point, translation, sprite_size) and self.circle.contains(
            point, translation, sprite_size
        )


HitShape = Annotated[
    Union[DefaultSpriteShape, RectShape, CircleShape, RectAndCircleShape],
    Field(discriminator="kind"),
]


def hit_shape_from_control(control: Control) -> HitShape:
    """
    Derive a widget's hit shape from its declared fields.

    A shape counts as declared when its field is present and non-empty, so a
    deliberately zero-sized custom shape is honoured rather than ignored.

    Raises:
        NumericParseError: If a declared shape is not a valid vector
    """
    rect = None
    circle = None

    if control.has(BOUNDING_BOX_FIELD):
        dx, dy, width, height = control.get_vec4(BOUNDING_BOX_FIELD)
        if width < 0 or height < 0:
            raise NumericParseError(
                control.name, BOUNDING_BOX_FIELD, control.get_str(BOUNDING_BOX_FIELD), "negative extent"
            )
        rect = RectShape(offset=Vec2(x=dx, y=dy), width=width, height=height)

    if control.has(BOUNDING_CIRCLE_FIELD):
        dx, dy, radius = control.get_vec3(BOUNDING_CIRCLE_FIELD)
        if radius < 0:
            raise NumericParseError(
                control.name, BOUNDING_CIRCLE_FIELD, control.get_str(BOUNDING_CIRCLE_FIELD), "negative radius"
            )
        circle = CircleShape(offset=Vec2(x=dx, y=dy), radius=radius)

    if rect is not None and circle is not None:
        return RectAndCircleShape(rect=rect, circle=circle)
    if rect is not None:
        return rect
    if circle is not None:
        return circle
    return DefaultSpriteShape()
