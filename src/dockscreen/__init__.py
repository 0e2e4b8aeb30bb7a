"""
dockscreen: declarative 2D screen layouts with anchor docking

Describe a screen of picture boxes, labels and buttons in a small text format,
resolve each control's position through chains of relative docking anchors,
and drive button states (normal/hover/active/disabled) from pointer input with
click cooldowns and rectangle/circle hit-testing. Rendering, assets and audio
stay in the host engine behind a RenderBridge.
"""

__version__ = "0.1.0"

# Main API
# Render bridge
from .bridge import ControlPlan, RenderBridge, SpawnResult, SpriteSpec, TextSpec, plan_controls, spawn_controls
from .bridges.recording import RecordingBridge

# Configuration
from .config import ConfigurationError, ScreenConfig

# Data model and errors
from .controls import (
    Control,
    ControlKind,
    ControlSet,
    MissingFieldError,
    NumericParseError,
    ScreenError,
    UnresolvedReferenceError,
    Vec2,
)

# Layout
from .docking import (
    Anchor,
    CyclicDockError,
    DockExpressionError,
    DockSpec,
    InvalidAnchorError,
    resolve_all,
    resolve_position,
)

# Hit testing
from .geometry import Circle, HitShape, Rect, circle_from, hit_shape_from_control, rect_from

# Interaction
from .interaction import (
    ButtonVisuals,
    ButtonWidget,
    ChangeReason,
    Cooldown,
    InteractionState,
    InteractionSystem,
    PointerFrame,
    StateChange,
)

# Logging configuration
from .logging_config import get_logger, set_module_level, setup_logging

# Parsing
from .parser import FormatError, ScreenLoadError, load_controls, parse_lines, parse_text, read_ui_file
from .screen import Screen
from .utils import RGBAColor

__all__ = [
    # Version
    "__version__",
    # Main API
    "Screen",
    # Parsing
    "parse_lines",
    "parse_text",
    "read_ui_file",
    "load_controls",
    # Data model
    "Control",
    "ControlKind",
    "ControlSet",
    "Vec2",
    "RGBAColor",
    # Layout
    "Anchor",
    "DockSpec",
    "resolve_position",
    "resolve_all",
    # Hit testing
    "Rect",
    "Circle",
    "HitShape",
    "rect_from",
    "circle_from",
    "hit_shape_from_control",
    # Interaction
    "InteractionState",
    "InteractionSystem",
    "ButtonWidget",
    "ButtonVisuals",
    "Cooldown",
    "PointerFrame",
    "StateChange",
    "ChangeReason",
    # Render bridge
    "RenderBridge",
    "RecordingBridge",
    "SpriteSpec",
    "TextSpec",
    "SpawnResult",
    "spawn_controls",
    "plan_controls",
    "ControlPlan",
    # Configuration
    "ScreenConfig",
    # Logging configuration
    "setup_logging",
    "get_logger",
    "set_module_level",
    # Exceptions
    "ScreenError",
    "ScreenLoadError",
    "FormatError",
    "MissingFieldError",
    "NumericParseError",
    "UnresolvedReferenceError",
    "InvalidAnchorError",
    "DockExpressionError",
    "CyclicDockError",
    "ConfigurationError",
]
