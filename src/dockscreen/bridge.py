"""
Render bridge: the seam between dockscreen and a rendering engine.

dockscreen never draws anything. A RenderBridge implementation loads textures
and fonts, creates drawable entities and plays sounds in whatever engine the
application uses; spawn_controls() tells it what to create and where, and
returns the ButtonWidgets the interaction system drives afterwards.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, Field

from dockscreen.config import ScreenConfig
from dockscreen.controls import Control, ControlKind, ControlSet, NumericParseError, Vec2
from dockscreen.docking import center_from_top_left, resolve_all, to_ui_space
from dockscreen.geometry import HitShape, hit_shape_from_control
from dockscreen.interaction import ButtonVisuals, ButtonWidget, InteractionState
from dockscreen.logging_config import get_logger
from dockscreen.utils import RGBAColor

logger = get_logger(__name__)

# Button field holding the texture of each interaction state
STATE_TEXTURE_FIELDS: dict[InteractionState, str] = {
    InteractionState.NORMAL: "texture_name_normal",
    InteractionState.HOVER: "texture_name_hover",
    InteractionState.ACTIVE: "texture_name_active",
    InteractionState.DISABLED: "texture_name_disabled",
}

# Values accepted by a button's initial_state field
INITIAL_STATES = {
    "normal": InteractionState.NORMAL,
    "disabled": InteractionState.DISABLED,
}


class SpriteSpec(BaseModel):
    """A textured quad to create, centred on `center`."""

    name: str
    kind: ControlKind
    center: Vec2
    size: Vec2
    draw_order: float = 0.0
    texture: Any = None

    model_config = {"arbitrary_types_allowed": True}


class TextSpec(BaseModel):
    """A text node to create, positioned in window UI space (origin top-left, y down)."""

    name: str
    kind: ControlKind
    position: Vec2
    max_size: Vec2
    text: str
    font: Any = None
    font_size: float = 0.0
    color: RGBAColor = Field(default_factory=lambda: RGBAColor(r=255, g=255, b=255))

    model_config = {"arbitrary_types_allowed": True}


class RenderBridge(ABC):
    """
    Abstract base class for engine-specific render bridges.

    Bridges define:
    - How asset paths become texture/font handles
    - How sprites and text nodes are created
    - Optionally, how sounds are played and visuals swapped at runtime
    """

    @abstractmethod
    def load_texture(self, path: str) -> Any:
        """
        Load a texture (or material) by asset path.

        Returns:
            Opaque handle stored per button state and passed back in SpriteSpec
        """
        pass

    @abstractmethod
    def load_font(self, path: str) -> Any:
        """
        Load a font by asset path (e.g. 'fonts/FiraSans-Bold.ttf').

        Returns:
            Opaque font handle passed back in TextSpec
        """
        pass

    @abstractmethod
    def spawn_sprite(self, spec: SpriteSpec) -> Any:
        """
        Create a sprite entity.

        Returns:
            Opaque entity reference (kept for later visual swaps)
        """
        pass

    @abstractmethod
    def spawn_text(self, spec: TextSpec) -> Any:
        """
        Create a text entity.

        Returns:
            Opaque entity reference
        """
        pass

    def play_sound(self, path: str) -> None:
        """Play a sound effect. Default implementation is silent."""
        logger.debug(f"No audio backend, skipping sound: {path}")

    def apply_visual(self, entity: Any, handle: Any) -> None:
        """Swap the displayed texture/material of an entity. Default does nothing."""
        pass


class SpawnResult(BaseModel):
    """Everything spawn_controls() created."""

    positions: dict[str, Vec2] = Field(default_factory=dict)
    entities: dict[str, list[Any]] = Field(default_factory=dict)
    widgets: list[ButtonWidget] = Field(default_factory=list)

    model_config = {"arbitrary_types_allowed": True}


class ControlPlan(BaseModel):
    """
    Everything needed to spawn one control, computed without touching the bridge.

    Asset references are still paths here: sprite textures live in
    state_textures and text.font holds the font path. spawn_plan() swaps them
    for bridge handles.
    """

    name: str
    kind: ControlKind
    top_left: Vec2
    sprite: Optional[SpriteSpec] = None
    text: Optional[TextSpec] = None
    state_textures: dict[InteractionState, str] = Field(default_factory=dict)
    hit_shape: Optional[HitShape] = None
    initial_state: InteractionState = InteractionState.NORMAL
    on_click_sound: str = ""


def _load_texture(bridge: RenderBridge, path: str) -> Any:
    return bridge.load_texture(path) if path else None


def _text_spec(control: Control, top_left: Vec2, config: ScreenConfig) -> TextSpec:
    font_name = control.get_str("font_name", default="").strip()
    return TextSpec(
        name=control.name,
        kind=control.kind,
        position=to_ui_space(top_left, config.screen_size),
        max_size=control.size,
        text=control.get_str("text_string", default=""),
        font=config.font_path(font_name) if font_name else None,
        font_size=control.get_float("font_size"),
        color=control.get_color("color"),
    )


def _initial_state(control: Control) -> InteractionState:
    raw = control.get_str("initial_state", default="normal")
    state = INITIAL_STATES.get(raw.strip().lower())
    if state is None:
        raise NumericParseError(control.name, "initial_state", raw, "expected 'normal' or 'disabled'")
    return state


def plan_control(control: Control, top_left: Vec2, config: ScreenConfig) -> ControlPlan:
    """
    Convert every field a control needs for spawning.

    Raises:
        MissingFieldError / NumericParseError: If a field is absent or malformed
    """
    plan = ControlPlan(name=control.name, kind=control.kind, top_left=top_left)

    if control.kind == ControlKind.LABEL:
        plan.text = _text_spec(control, top_left, config)
        return plan

    size = control.size
    plan.sprite = SpriteSpec(
        name=control.name,
        kind=control.kind,
        center=center_from_top_left(top_left, size),
        size=size,
        draw_order=control.draw_order,
    )

    if control.kind == ControlKind.PICTURE_BOX:
        plan.state_textures = {InteractionState.NORMAL: control.get_str("texture_name", default="").strip()}
        return plan

    # Unconfigured state textures fall back to the normal texture at display time
    plan.state_textures = {
        state: control.get_str(field, default="").strip() for state, field in STATE_TEXTURE_FIELDS.items()
    }
    plan.hit_shape = hit_shape_from_control(control)
    plan.initial_state = _initial_state(control)
    plan.on_click_sound = control.get_str("on_click_sound", default="").strip()
    if control.has("text_string"):
        plan.text = _text_spec(control, top_left, config)
    return plan


def plan_controls(controls: ControlSet, config: ScreenConfig) -> list[ControlPlan]:
    """Resolve and convert every control; the first failure aborts the whole screen."""
    positions = resolve_all(controls, config.screen_size)
    return [plan_control(control, positions[name], config) for name, control in controls.items()]


def spawn_plan(plan: ControlPlan, bridge: RenderBridge) -> tuple[list[Any], Optional[ButtonWidget]]:
    """
    Load assets and create the entities of one planned control.

    Returns:
        (entities, widget) where widget is None for anything but a button
    """
    handles = {state: _load_texture(bridge, path) for state, path in plan.state_textures.items()}
    visuals = ButtonVisuals(**{state.value: handle for state, handle in handles.items()})
    entities: list[Any] = []

    if plan.sprite is not None:
        texture = visuals.for_state(plan.initial_state)
        entities.append(bridge.spawn_sprite(plan.sprite.model_copy(update={"texture": texture})))

    if plan.text is not None:
        font = bridge.load_font(plan.text.font) if plan.text.font else None
        entities.append(bridge.spawn_text(plan.text.model_copy(update={"font": font})))

    if plan.kind != ControlKind.BUTTON or plan.sprite is None:
        return entities, None

    widget = ButtonWidget(
        name=plan.name,
        translation=plan.sprite.center,
        sprite_size=plan.sprite.size,
        hit_shape=plan.hit_shape,
        visuals=visuals,
        on_click_sound=plan.on_click_sound,
        state=plan.initial_state,
        entity=entities[0],
    )
    return entities, widget


def spawn_controls(
    controls: ControlSet,
    bridge: RenderBridge,
    config: Optional[ScreenConfig] = None,
) -> SpawnResult:
    """
    Resolve every control and ask the bridge to create it.

    All positions and fields are converted before the bridge is called, so a
    screen with a broken control creates no entities at all.

    Args:
        controls: Parsed control set
        bridge: Engine-specific render bridge
        config: Screen configuration (defaults used if None)

    Returns:
        SpawnResult with resolved positions, created entities and button widgets

    Raises:
        ScreenError subclasses from resolution or field conversion, raised
        before any bridge call
    """
    config = config or ScreenConfig()
    plans = plan_controls(controls, config)

    result = SpawnResult()
    for plan in plans:
        entities, widget = spawn_plan(plan, bridge)
        result.positions[plan.name] = plan.top_left
        result.entities[plan.name] = entities
        if widget is not None:
            result.widgets.append(widget)

    logger.info(f"Spawned {len(result.entities)} controls ({len(result.widgets)} buttons)")
    return result
