"""
Debug tools for dockscreen layouts.

Usage:
    $ dockscreen-debug assets/screen1.ui --width 1920 --height 1080

    # Or print a plain table without the TUI
    $ dockscreen-debug assets/screen1.ui --plain
"""

from dockscreen.debug.report import ControlRow, build_report, render_table

__all__ = [
    "ControlRow",
    "build_report",
    "render_table",
]

# The TUI requires textual
try:
    from dockscreen.debug.tui import ScreenInspectorApp, run_tui  # noqa: F401

    __all__.extend(
        [
            "ScreenInspectorApp",
            "run_tui",
        ],
    )
except ImportError:
    pass
