"""
Pointer-driven interaction state for buttons.

Every tick runs three passes over all registered widgets, in this order:

1. Hover pass: Normal -> Hover when the pointer is over the hit shape,
   Hover -> Normal when it is not.
2. Click pass (only on the tick the primary button goes down): Hover -> Active,
   starting a cooldown and requesting the click sound.
3. Cooldown pass (ticks with elapsed time): count running cooldowns down and
   force the widget back to Normal when one runs out. A cooldown started in
   this tick's click pass is left untouched until the next tick.

Widgets never interact with each other, so passes are independent per widget.
The system does not perform side effects itself; it returns StateChange
records carrying the visual to display and the sound to play, and the caller
(usually dockscreen.screen.Screen) forwards them to the render bridge.
"""

import threading
from collections import deque
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from dockscreen.controls import Vec2
from dockscreen.geometry import DefaultSpriteShape, HitShape
from dockscreen.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_COOLDOWN_SECONDS = 0.5

# Remaining time at or below this counts as expired (absorbs float drift of
# frame times such as 5 x 0.1s)
COOLDOWN_EPSILON = 1e-9


class InteractionState(str, Enum):
    """Visual/interaction state of a button."""

    NORMAL = "normal"
    HOVER = "hover"
    ACTIVE = "active"
    DISABLED = "disabled"  # Only set by external command


class ChangeReason(str, Enum):
    """Why a widget changed state."""

    HOVER = "hover"
    UNHOVER = "unhover"
    CLICK = "click"
    COOLDOWN_EXPIRED = "cooldown_expired"
    DISABLED = "disabled"
    ENABLED = "enabled"


class Cooldown(BaseModel):
    """Timed lockout attached to a widget after an accepted click."""

    remaining_time_in_seconds: float = Field(ge=0.0)


class ButtonVisuals(BaseModel):
    """
    Opaque visual handles (textures/materials) per interaction state.

    Handles come from the render bridge and are never inspected here.
    Unconfigured alternates fall back to the normal handle.
    """

    normal: Any = None
    hover: Any = None
    active: Any = None
    disabled: Any = None

    model_config = {"arbitrary_types_allowed": True}

    def for_state(self, state: InteractionState) -> Any:
        handle = getattr(self, state.value)
        return self.normal if handle is None else handle


class PointerFrame(BaseModel):
    """Input delivered once per tick."""

    pointer: Optional[Vec2] = None  # None when the cursor is outside the window
    just_pressed: bool = False  # Primary button went down this tick
    elapsed_seconds: float = Field(default=0.0, ge=0.0)


class StateChange(BaseModel):
    """One state transition produced by a tick or an external command."""

    widget: str
    previous: InteractionState
    current: InteractionState
    reason: ChangeReason
    visual: Any = None  # Handle to display for the new state
    sound: Optional[str] = None  # Sound path to play, set on accepted clicks only
    timestamp: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


class WidgetSnapshot(BaseModel):
    """Immutable view of a widget's runtime state."""

    name: str
    state: InteractionState
    cooldown_remaining: Optional[float] = None

    model_config = {"frozen": True}


class ButtonWidget:
    """
    Runtime record of one interactive button.

    Holds geometry (translation is the widget centre), the hit shape, the visual
    handles per state, the current state and an optional running cooldown.
    Only the passes below and set_disabled() mutate it.
    """

    def __init__(
        self,
        name: str,
        translation: Vec2,
        sprite_size: Vec2,
        hit_shape: Optional[HitShape] = None,
        visuals: Optional[ButtonVisuals] = None,
        on_click_sound: str = "",
        state: InteractionState = InteractionState.NORMAL,
        entity: Any = None,
    ):
        """
        Initialize a widget.

        Args:
            name: Control name the widget was spawned from
            translation: Widget centre in screen coordinates
            sprite_size: Rendered sprite size (default hit area)
            hit_shape: Custom hit shape (sprite rectangle if None)
            visuals: Visual handles per state
            on_click_sound: Sound path played on accepted clicks ("" for none)
            state: Initial state
            entity: Opaque render-bridge entity the visuals are applied to
        """
        self.name = name
        self.translation = translation
        self.sprite_size = sprite_size
        self.hit_shape: HitShape = hit_shape if hit_shape is not None else DefaultSpriteShape()
        self.visuals = visuals or ButtonVisuals()
        self.on_click_sound = on_click_sound
        self.entity = entity
        self._state = state
        self._cooldown: Optional[Cooldown] = None
        self._lock = threading.RLock()

    @property
    def state(self) -> InteractionState:
        with self._lock:
            return self._state

    @property
    def cooldown(self) -> Optional[Cooldown]:
        with self._lock:
            return self._cooldown

    @property
    def visual(self) -> Any:
        """Handle currently displayed."""
        return self.visuals.for_state(self.state)

    def overlaps(self, pointer: Optional[Vec2]) -> bool:
        if pointer is None:
            return False
        return self.hit_shape.contains(pointer, self.translation, self.sprite_size)

    def snapshot(self) -> WidgetSnapshot:
        with self._lock:
            return WidgetSnapshot(
                name=self.name,
                state=self._state,
                cooldown_remaining=self._cooldown.remaining_time_in_seconds if self._cooldown else None,
            )

    def _transition(
        self,
        new_state: InteractionState,
        reason: ChangeReason,
        sound: Optional[str] = None,
    ) -> StateChange:
        previous = self._state
        self._state = new_state
        change = StateChange(
            widget=self.name,
            previous=previous,
            current=new_state,
            reason=reason,
            visual=self.visuals.for_state(new_state),
            sound=sound,
        )
        logger.debug(f"[{self.name}] {previous.value} -> {new_state.value} ({reason.value})")
        return change

    def hover_pass(self, pointer: Optional[Vec2]) -> Optional[StateChange]:
        with self._lock:
            over = self.overlaps(pointer)
            if over and self._state == InteractionState.NORMAL:
                return self._transition(InteractionState.HOVER, ChangeReason.HOVER)
            if not over and self._state == InteractionState.HOVER:
                return self._transition(InteractionState.NORMAL, ChangeReason.UNHOVER)
            return None

    def click_pass(self, pointer: Optional[Vec2], cooldown_seconds: float) -> Optional[StateChange]:
        """Accept a click only from Hover; anything else ignores it."""
        with self._lock:
            if self._state != InteractionState.HOVER or not self.overlaps(pointer):
                return None
            self._cooldown = Cooldown(remaining_time_in_seconds=cooldown_seconds)
            sound = self.on_click_sound or None
            return self._transition(InteractionState.ACTIVE, ChangeReason.CLICK, sound=sound)

    def cooldown_pass(self, elapsed_seconds: float) -> Optional[StateChange]:
        with self._lock:
            if self._cooldown is None or elapsed_seconds <= 0.0:
                return None
            remaining = self._cooldown.remaining_time_in_seconds - elapsed_seconds
            if remaining > COOLDOWN_EPSILON:
                self._cooldown.remaining_time_in_seconds = remaining
                return None
            self._cooldown = None
            return self._transition(InteractionState.NORMAL, ChangeReason.COOLDOWN_EXPIRED)

    def set_disabled(self, disabled: bool) -> Optional[StateChange]:
        """
        Pin the widget to Disabled, or release it back to Normal.

        Disabling drops a running cooldown so its expiry cannot re-enable the
        widget.
        """
        with self._lock:
            if disabled:
                if self._state == InteractionState.DISABLED:
                    return None
                self._cooldown = None
                return self._transition(InteractionState.DISABLED, ChangeReason.DISABLED)
            if self._state != InteractionState.DISABLED:
                return None
            return self._transition(InteractionState.NORMAL, ChangeReason.ENABLED)


class InteractionSystem:
    """
    Owns every ButtonWidget of a screen and advances them once per tick.

    Keeps a bounded history of state changes for debugging.
    """

    def __init__(self, cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS, history_size: int = 1000):
        """
        Initialize the system.

        Args:
            cooldown_seconds: Lockout started by an accepted click
            history_size: Number of state changes retained in history
        """
        if cooldown_seconds < 0:
            raise ValueError(f"cooldown_seconds must be >= 0, got {cooldown_seconds}")
        self._cooldown_seconds = cooldown_seconds
        self._widgets: dict[str, ButtonWidget] = {}
        self._lock = threading.RLock()
        self._history: deque[StateChange] = deque(maxlen=history_size)

    @property
    def cooldown_seconds(self) -> float:
        return self._cooldown_seconds

    def register_widget(self, widget: ButtonWidget) -> None:
        with self._lock:
            if widget.name in self._widgets:
                logger.warning(f"Widget [{widget.name}] already registered, replacing")
            self._widgets[widget.name] = widget

    def unregister_widget(self, name: str) -> bool:
        with self._lock:
            return self._widgets.pop(name, None) is not None

    def get_widget(self, name: str) -> Optional[ButtonWidget]:
        with self._lock:
            return self._widgets.get(name)

    def widgets(self) -> list[ButtonWidget]:
        with self._lock:
            return list(self._widgets.values())

    def get_state(self, name: str) -> Optional[InteractionState]:
        widget = self.get_widget(name)
        return widget.state if widget else None

    def get_all_states(self) -> dict[str, WidgetSnapshot]:
        return {widget.name: widget.snapshot() for widget in self.widgets()}

    def tick(self, frame: PointerFrame) -> list[StateChange]:
        """
        Advance every widget by one frame.

        Args:
            frame: Pointer position, press edge and elapsed time for this tick

        Returns:
            State changes in the order they happened (hover, click, cooldown)
        """
        widgets = self.widgets()
        changes: list[StateChange] = []

        for widget in widgets:
            change = widget.hover_pass(frame.pointer)
            if change:
                changes.append(change)

        clicked: set[str] = set()
        if frame.just_pressed:
            for widget in widgets:
                change = widget.click_pass(frame.pointer, self._cooldown_seconds)
                if change:
                    clicked.add(widget.name)
                    changes.append(change)

        if frame.elapsed_seconds > 0.0:
            for widget in widgets:
                if widget.name in clicked:
                    continue
                change = widget.cooldown_pass(frame.elapsed_seconds)
                if change:
                    changes.append(change)

        self._record(changes)
        return changes

    def set_disabled(self, name: str, disabled: bool = True) -> Optional[StateChange]:
        """
        Externally disable or re-enable a widget.

        Raises:
            KeyError: If no widget has that name
        """
        widget = self.get_widget(name)
        if widget is None:
            raise KeyError(f"Unknown widget: {name}")
        change = widget.set_disabled(disabled)
        if change:
            self._record([change])
        return change

    def get_history(self, limit: Optional[int] = None) -> list[StateChange]:
        with self._lock:
            history_list = list(self._history)
            if limit:
                return history_list[-limit:]
            return history_list

    def clear_history(self) -> None:
        with self._lock:
            self._history.clear()

    def _record(self, changes: list[StateChange]) -> None:
        if not changes:
            return
        with self._lock:
            self._history.extend(changes)
