"""
Screen API - user-facing entry point of dockscreen.

A Screen ties the pieces together: it parses a description, resolves
positions, spawns controls through a render bridge and drives button
interaction once per frame, forwarding visual swaps and click sounds to the
bridge and state changes to registered callbacks.
"""

from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from dockscreen.bridge import RenderBridge, SpawnResult, spawn_controls
from dockscreen.callbacks import CallbackManager, ClickCallback, StateCallback
from dockscreen.config import ScreenConfig
from dockscreen.controls import ControlSet, Vec2
from dockscreen.docking import resolve_all, resolve_position
from dockscreen.interaction import (
    InteractionState,
    InteractionSystem,
    PointerFrame,
    StateChange,
    WidgetSnapshot,
)
from dockscreen.logging_config import get_logger
from dockscreen.parser import parse_lines, read_ui_file

logger = get_logger(__name__)


class Screen:
    """
    One loaded screen.

    Provides:
    - Loading from a file, lines or text
    - Position resolution for any control
    - Spawning through a RenderBridge
    - Per-frame interaction ticks with callbacks for state changes and clicks
    - External enable/disable of buttons
    """

    def __init__(
        self,
        bridge: Optional[RenderBridge] = None,
        config: Optional[ScreenConfig] = None,
        controls: Optional[ControlSet] = None,
    ):
        """
        Initialize screen.

        Args:
            bridge: Render bridge used by spawn() and for runtime side effects.
                    Optional when the screen is only used for layout.
            config: Screen configuration (defaults if None)
            controls: Already parsed control set, if any
        """
        self._bridge = bridge
        self._config = config or ScreenConfig()
        self._controls = controls
        self._interaction = InteractionSystem(cooldown_seconds=self._config.click_cooldown_seconds)
        self._callbacks = CallbackManager()
        self._spawned: Optional[SpawnResult] = None

    @classmethod
    def from_file(
        cls,
        ui_filename: Union[str, Path],
        bridge: Optional[RenderBridge] = None,
        config: Optional[ScreenConfig] = None,
    ) -> "Screen":
        """Create a screen and load a description from the configured assets directory."""
        screen = cls(bridge=bridge, config=config)
        screen.load_file(ui_filename)
        return screen

    @classmethod
    def from_text(
        cls,
        text: str,
        bridge: Optional[RenderBridge] = None,
        config: Optional[ScreenConfig] = None,
    ) -> "Screen":
        screen = cls(bridge=bridge, config=config)
        screen.load_lines(text.splitlines())
        return screen

    @property
    def config(self) -> ScreenConfig:
        return self._config

    @property
    def controls(self) -> ControlSet:
        """Parsed control set (raises RuntimeError if nothing is loaded)."""
        self._ensure_loaded()
        return self._controls

    @property
    def interaction(self) -> InteractionSystem:
        return self._interaction

    @property
    def is_spawned(self) -> bool:
        return self._spawned is not None

    @property
    def spawn_result(self) -> Optional[SpawnResult]:
        return self._spawned

    # Loading

    def load_file(self, ui_filename: Union[str, Path]) -> ControlSet:
        """
        Read and parse a screen file relative to config.assets_dir.

        Raises:
            ScreenLoadError: If the file cannot be read
            FormatError: If the description is malformed
        """
        lines = read_ui_file(ui_filename, self._config.assets_dir)
        return self.load_lines(lines)

    def load_lines(self, lines: Iterable[str]) -> ControlSet:
        """Parse description lines, replacing any previously loaded controls."""
        if self._spawned is not None:
            raise RuntimeError("Screen already spawned; create a new Screen to load another description")
        self._controls = parse_lines(lines, allow_unnamed_controls=self._config.allow_unnamed_controls)
        logger.info(f"Loaded screen with {len(self._controls)} controls")
        return self._controls

    # Layout

    def resolve(self, name: str) -> Vec2:
        """Absolute top-left of a control (screen-centred, y up)."""
        return resolve_position(name, self.controls, self._config.screen_size)

    def resolve_all(self) -> dict[str, Vec2]:
        return resolve_all(self.controls, self._config.screen_size)

    # Spawning

    def spawn(self) -> SpawnResult:
        """
        Spawn every control through the bridge and register its buttons.

        Raises:
            ValueError: If no bridge is configured
            RuntimeError: If already spawned
        """
        if self._bridge is None:
            raise ValueError("No render bridge configured. Pass bridge to Screen()")
        if self._spawned is not None:
            raise RuntimeError("Screen already spawned")

        result = spawn_controls(self.controls, self._bridge, self._config)
        for widget in result.widgets:
            self._interaction.register_widget(widget)
        self._spawned = result
        return result

    # Runtime

    def tick(
        self,
        pointer: Optional[Vec2],
        just_pressed: bool = False,
        elapsed_seconds: float = 0.0,
    ) -> list[StateChange]:
        """
        Advance interaction by one frame.

        Args:
            pointer: Cursor position in screen coordinates, None if outside the window
            just_pressed: True on the frame the primary button went down
            elapsed_seconds: Time since the previous tick

        Returns:
            State changes of this tick (side effects already applied)
        """
        frame = PointerFrame(pointer=pointer, just_pressed=just_pressed, elapsed_seconds=elapsed_seconds)
        return self.tick_frame(frame)

    def tick_frame(self, frame: PointerFrame) -> list[StateChange]:
        changes = self._interaction.tick(frame)
        for change in changes:
            self._apply(change)
        return changes

    def set_disabled(self, name: str, disabled: bool = True) -> Optional[StateChange]:
        """
        Disable (or re-enable) a button from outside the state machine.

        Raises:
            KeyError: If no button has that name
        """
        change = self._interaction.set_disabled(name, disabled)
        if change:
            self._apply(change)
        return change

    def get_state(self, name: str) -> Optional[InteractionState]:
        return self._interaction.get_state(name)

    def get_all_states(self) -> dict[str, WidgetSnapshot]:
        return self._interaction.get_all_states()

    # Callback registration

    def on_widget(self, name: str, callback: StateCallback) -> None:
        """Register callback(change) for state changes of one button."""
        self._callbacks.register_widget(name, callback)

    def on_click(self, name: str, callback: ClickCallback) -> None:
        """Register callback(widget_name) for accepted clicks of one button."""
        self._callbacks.register_click(name, callback)

    def on_global(self, callback: StateCallback) -> None:
        """Register callback(change) for every state change."""
        self._callbacks.register_global(callback)

    # Internal methods

    def _ensure_loaded(self) -> None:
        if self._controls is None:
            raise RuntimeError("No screen loaded. Call load_file() or load_lines() first")

    def _apply(self, change: StateChange) -> None:
        """
        Forward a state change to the bridge and to callbacks.

        A failing bridge call is logged and skipped so the remaining changes of
        the tick are still applied.
        """
        if self._bridge is not None:
            widget = self._interaction.get_widget(change.widget)
            if widget is not None and widget.entity is not None:
                self._safe_bridge_call(self._bridge.apply_visual, widget.entity, change.visual)
            if change.sound:
                self._safe_bridge_call(self._bridge.play_sound, change.sound)

        self._callbacks.on_state_change(change)

    def _safe_bridge_call(self, method: Callable, *args) -> None:
        """Execute a runtime bridge side effect, logging (not raising) any exception."""
        try:
            method(*args)
        except Exception as e:
            logger.exception(f"Error in bridge call '{method.__name__}': {e}")
