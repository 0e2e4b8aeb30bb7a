"""
Anchor-based position resolution.

Controls are laid out in a coordinate system centred on the screen centre,
x growing to the right and y growing upwards. A control either states its own
position or docks one of its nine anchor points onto an anchor point of the
screen or of another control:

    dock_with: panel.bottom_right <-> this.top_right
    offset: 0;-8

The docked position is computed from the reference's resolved top-left, so a
dock chain is resolved recursively. Chains must be acyclic; a cycle raises
CyclicDockError.
"""

from enum import Enum

from pydantic import BaseModel

from dockscreen.controls import Control, ControlSet, ScreenError, Vec2
from dockscreen.logging_config import get_logger

logger = get_logger(__name__)

SCREEN_REFERENCE = "screen"
DOCK_SEPARATOR = "<->"


class InvalidAnchorError(ScreenError, ValueError):
    """Raised for an anchor token outside the nine-point set."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unknown anchor [{token}]")


class DockExpressionError(ScreenError, ValueError):
    """Raised when a dock_with expression does not have the 'a.x <-> b.y' shape."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        super().__init__(f"Invalid dock expression [{expression}]: {reason}")


class CyclicDockError(ScreenError):
    """Raised when a dock chain leads back to a control already being resolved."""

    def __init__(self, chain: list[str]):
        self.chain = chain
        super().__init__(f"Dock cycle detected: {' -> '.join(chain)}")


class Anchor(str, Enum):
    """The nine reference points of a rectangular box."""

    TOP_LEFT = "top_left"
    TOP_MIDDLE = "top_middle"
    TOP_RIGHT = "top_right"
    CENTER_LEFT = "center_left"
    CENTER_MIDDLE = "center_middle"
    CENTER_RIGHT = "center_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_MIDDLE = "bottom_middle"
    BOTTOM_RIGHT = "bottom_right"

    @classmethod
    def parse(cls, token: str) -> "Anchor":
        try:
            return cls(token.strip().lower())
        except ValueError:
            raise InvalidAnchorError(token) from None


# Fraction of (width, height) travelled from a box's top-left to each anchor.
# Horizontal fractions move right, vertical fractions move down (i.e. -y).
ANCHOR_FACTORS: dict[Anchor, tuple[float, float]] = {
    Anchor.TOP_LEFT: (0.0, 0.0),
    Anchor.TOP_MIDDLE: (0.5, 0.0),
    Anchor.TOP_RIGHT: (1.0, 0.0),
    Anchor.CENTER_LEFT: (0.0, 0.5),
    Anchor.CENTER_MIDDLE: (0.5, 0.5),
    Anchor.CENTER_RIGHT: (1.0, 0.5),
    Anchor.BOTTOM_LEFT: (0.0, 1.0),
    Anchor.BOTTOM_MIDDLE: (0.5, 1.0),
    Anchor.BOTTOM_RIGHT: (1.0, 1.0),
}


def anchor_delta(anchor: Anchor, size: Vec2) -> Vec2:
    """Vector from a box's top-left to the given anchor point."""
    fx, fy = ANCHOR_FACTORS[anchor]
    return Vec2(x=size.x * fx, y=-size.y * fy)


def point_on_box(top_left: Vec2, size: Vec2, anchor: Anchor) -> Vec2:
    """Locate an anchor point on a box given its top-left and size."""
    return top_left + anchor_delta(anchor, size)


def top_left_from_anchor(point: Vec2, size: Vec2, anchor: Anchor) -> Vec2:
    """Back out a box's top-left from the position one of its anchors must occupy."""
    return point - anchor_delta(anchor, size)


def screen_top_left(screen_size: Vec2) -> Vec2:
    return Vec2(x=-screen_size.x * 0.5, y=screen_size.y * 0.5)


def point_on_screen(screen_size: Vec2, anchor: Anchor) -> Vec2:
    """Anchor point of the screen itself, e.g. center_middle is (0, 0)."""
    return point_on_box(screen_top_left(screen_size), screen_size, anchor)


class DockSpec(BaseModel):
    """Parsed form of a dock_with expression."""

    reference: str
    reference_anchor: Anchor
    target: str
    target_anchor: Anchor

    model_config = {"frozen": True}

    @property
    def docks_to_screen(self) -> bool:
        return self.reference == SCREEN_REFERENCE

    @classmethod
    def parse(cls, expression: str) -> "DockSpec":
        """
        Parse "<ref>.<anchor_a> <-> <name>.<anchor_b>".

        Raises:
            DockExpressionError: If the expression is not two dotted sides
            InvalidAnchorError: If either anchor token is unknown
        """
        sides = expression.split(DOCK_SEPARATOR)
        if len(sides) != 2:
            raise DockExpressionError(expression, f"expected exactly one '{DOCK_SEPARATOR}'")

        parts = []
        for side in sides:
            pieces = side.strip().split(".")
            if len(pieces) != 2 or not pieces[0].strip():
                raise DockExpressionError(expression, f"side [{side.strip()}] is not '<control>.<anchor>'")
            parts.append((pieces[0].strip(), Anchor.parse(pieces[1])))

        (reference, reference_anchor), (target, target_anchor) = parts
        return cls(
            reference=reference,
            reference_anchor=reference_anchor,
            target=target,
            target_anchor=target_anchor,
        )


def as_vec2(screen_size) -> Vec2:
    """Accept a Vec2 or a (width, height) pair."""
    if isinstance(screen_size, Vec2):
        return screen_size
    width, height = screen_size
    return Vec2(x=float(width), y=float(height))


def undocked_top_left(control: Control) -> Vec2:
    """
    Top-left of a control that is not docked.

    Uses top_left_position when given, else derives it from center_position,
    else centres the box on the origin.
    """
    size = control.size
    if control.has("top_left_position"):
        return control.get_vec2("top_left_position")
    if control.has("center_position"):
        center = control.get_vec2("center_position")
        return Vec2(x=center.x - size.x * 0.5, y=center.y + size.y * 0.5)
    return Vec2(x=-size.x * 0.5, y=size.y * 0.5)


def _resolve(control: Control, controls: ControlSet, screen_size: Vec2, chain: list[str]) -> Vec2:
    if control.name in chain:
        raise CyclicDockError(chain + [control.name])

    expression = control.dock_with
    if not expression:
        return undocked_top_left(control)

    spec = DockSpec.parse(expression)

    if spec.docks_to_screen:
        pixel1 = point_on_screen(screen_size, spec.reference_anchor)
    else:
        reference = controls.get_by_name(spec.reference)
        reference_top_left = _resolve(reference, controls, screen_size, chain + [control.name])
        pixel1 = point_on_box(reference_top_left, reference.size, spec.reference_anchor)

    pixel2 = top_left_from_anchor(pixel1, control.size, spec.target_anchor)
    return pixel2 + control.offset


def resolve_position(name: str, controls: ControlSet, screen_size) -> Vec2:
    """
    Compute the absolute top-left of a control's bounding box.

    Args:
        name: Control name
        controls: Parsed control set
        screen_size: Screen dimensions as Vec2 or (width, height)

    Returns:
        Top-left position in screen-centred coordinates (y up)

    Raises:
        UnresolvedReferenceError: If the control or any dock target is missing
        InvalidAnchorError: If a dock expression names an unknown anchor
        DockExpressionError: If a dock expression is malformed
        CyclicDockError: If the dock chain loops
        MissingFieldError / NumericParseError: If size/offset/position are absent or malformed
    """
    control = controls.get_by_name(name)
    top_left = _resolve(control, controls, as_vec2(screen_size), [])
    logger.debug(f"Resolved [{name}] top-left to ({top_left.x}, {top_left.y})")
    return top_left


def resolve_all(controls: ControlSet, screen_size) -> dict[str, Vec2]:
    """Resolve the top-left of every control in the set."""
    size = as_vec2(screen_size)
    return {name: resolve_position(name, controls, size) for name in controls}


def center_from_top_left(top_left: Vec2, size: Vec2) -> Vec2:
    """Centre of a box, the translation sprites are placed at."""
    return Vec2(x=top_left.x + size.x * 0.5, y=top_left.y - size.y * 0.5)


def to_ui_space(top_left: Vec2, screen_size) -> Vec2:
    """
    Convert a screen-centred position to window UI space.

    UI space has its origin at the window's top-left corner and y growing
    downwards, which is what text layout nodes are positioned in.
    """
    size = as_vec2(screen_size)
    return Vec2(x=top_left.x + size.x * 0.5, y=size.y * 0.5 - top_left.y)
