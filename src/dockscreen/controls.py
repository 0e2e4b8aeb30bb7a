"""
Control data model for dockscreen.

A parsed screen is a ControlSet: a read-only mapping from control name to an
immutable Control. Every Control keeps its fields as raw strings (the field
table) and converts them lazily through the typed accessors defined here, so
numeric problems surface at the point of consumption rather than at parse time.
"""

from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from dockscreen.utils import RGBAColor

# Raw field storage for one control: lower-cased field name -> raw string value
FieldTable = dict[str, str]


class ScreenError(Exception):
    """Base class for every error raised while loading or laying out a screen."""

    pass


class MissingFieldError(ScreenError, KeyError):
    """Raised when a control is asked for a field it never declared."""

    def __init__(self, control: str, field: str):
        self.control = control
        self.field = field
        super().__init__(f"Control [{control}] has no field [{field}]")

    def __str__(self) -> str:
        # KeyError would otherwise quote the message
        return self.args[0]


class NumericParseError(ScreenError, ValueError):
    """Raised when a field expected to hold a number, vector or color does not."""

    def __init__(self, control: str, field: str, value: str, reason: str = ""):
        self.control = control
        self.field = field
        self.value = value
        message = f"Control [{control}] field [{field}] has invalid value [{value}]"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnresolvedReferenceError(ScreenError, LookupError):
    """Raised when a dock chain or lookup names a control that does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Control with name [{name}] not found.")


class ControlKind(str, Enum):
    """The three kinds of control a screen description can declare."""

    PICTURE_BOX = "picture_box"
    LABEL = "label"
    BUTTON = "button"


class Vec2(BaseModel):
    """Immutable 2D vector (x right-positive, y up-positive)."""

    x: float = 0.0
    y: float = 0.0

    model_config = {"frozen": True}

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(x=self.x - other.x, y=self.y - other.y)

    def __mul__(self, factor: float) -> "Vec2":
        return Vec2(x=self.x * factor, y=self.y * factor)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


# Fields every control kind starts with
UNIVERSAL_DEFAULTS: FieldTable = {
    "dock_with": "",
    "offset": "0;0",
}

# Kind-specific seeds applied when a block header opens a control.
# Font settings for labels and buttons come from the active global settings.
KIND_DEFAULTS: dict[ControlKind, FieldTable] = {
    ControlKind.PICTURE_BOX: {
        "texture_name": "",
        "draw_order": "0.0",
    },
    ControlKind.LABEL: {
        "text_string": "",
    },
    ControlKind.BUTTON: {
        "texture_name_normal": "",
        "texture_name_hover": "",
        "texture_name_active": "",
        "texture_name_disabled": "",
        "on_click_sound": "",
        "text_string": "",
        "draw_order": "0.0",
        "initial_state": "normal",
    },
}

# Kinds that inherit font_name/font_size/color from global settings
TEXT_KINDS = frozenset({ControlKind.LABEL, ControlKind.BUTTON})


def parse_float(raw: str) -> float:
    """Parse a single float, tolerating surrounding whitespace."""
    return float(raw.strip())


def parse_vector(raw: str, length: int) -> tuple[float, ...]:
    """
    Parse a ';'-separated vector such as "10;-4.5".

    Args:
        raw: Raw field value
        length: Expected number of components

    Returns:
        Tuple of floats

    Raises:
        ValueError: If the component count differs or a component is not a number
    """
    parts = raw.split(";")
    if len(parts) != length:
        raise ValueError(f"expected {length} ';'-separated components, got {len(parts)}")
    return tuple(float(part.strip()) for part in parts)


class Control(BaseModel):
    """
    One parsed control: its kind, its name and its raw field table.

    Immutable once produced by the parser. Typed accessors convert fields on
    demand and raise MissingFieldError / NumericParseError with the control
    name attached.
    """

    kind: ControlKind
    name: str
    fields: FieldTable = Field(default_factory=dict)

    model_config = {"frozen": True}

    def has(self, field: str) -> bool:
        """True if the field is present and non-empty."""
        return bool(self.fields.get(field, "").strip())

    def get_str(self, field: str, default: Optional[str] = None) -> str:
        """Raw string value of a field (default returned when absent, if given)."""
        if field in self.fields:
            return self.fields[field]
        if default is not None:
            return default
        raise MissingFieldError(self.name, field)

    def get_float(self, field: str) -> float:
        raw = self.get_str(field)
        try:
            return parse_float(raw)
        except ValueError as e:
            raise NumericParseError(self.name, field, raw, str(e)) from e

    def get_vec2(self, field: str) -> Vec2:
        raw = self.get_str(field)
        try:
            x, y = parse_vector(raw, 2)
        except ValueError as e:
            raise NumericParseError(self.name, field, raw, str(e)) from e
        return Vec2(x=x, y=y)

    def get_vec3(self, field: str) -> tuple[float, float, float]:
        raw = self.get_str(field)
        try:
            return parse_vector(raw, 3)  # type: ignore[return-value]
        except ValueError as e:
            raise NumericParseError(self.name, field, raw, str(e)) from e

    def get_vec4(self, field: str) -> tuple[float, float, float, float]:
        raw = self.get_str(field)
        try:
            return parse_vector(raw, 4)  # type: ignore[return-value]
        except ValueError as e:
            raise NumericParseError(self.name, field, raw, str(e)) from e

    def get_color(self, field: str) -> RGBAColor:
        raw = self.get_str(field)
        try:
            return RGBAColor.from_string(raw)
        except ValueError as e:
            raise NumericParseError(self.name, field, raw, str(e)) from e

    # Fields shared by every kind

    @property
    def size(self) -> Vec2:
        return self.get_vec2("size")

    @property
    def offset(self) -> Vec2:
        return self.get_vec2("offset")

    @property
    def dock_with(self) -> str:
        return self.get_str("dock_with", default="").strip()

    @property
    def draw_order(self) -> float:
        return self.get_float("draw_order")


class ControlSet(Mapping):
    """
    Finished, read-only mapping from control name to Control.

    Produced once by the parser and shared by the resolver and the spawn layer.
    Nothing mutates it afterwards, so concurrent read-only resolution needs no
    locking.
    """

    def __init__(self, controls: Optional[Mapping[str, Control]] = None):
        self._controls: dict[str, Control] = dict(controls or {})

    def __getitem__(self, name: str) -> Control:
        return self._controls[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._controls)

    def __len__(self) -> int:
        return len(self._controls)

    def __repr__(self) -> str:
        return f"ControlSet({list(self._controls)})"

    def get_by_name(self, name: str) -> Control:
        """
        Look up a control by name.

        Raises:
            UnresolvedReferenceError: If no control has that name
        """
        control = self._controls.get(name)
        if control is None:
            raise UnresolvedReferenceError(name)
        return control

    def names(self) -> list[str]:
        return list(self._controls)

    def by_kind(self, kind: ControlKind) -> list[Control]:
        """All controls of one kind, in declaration order."""
        return [control for control in self._controls.values() if control.kind == kind]
