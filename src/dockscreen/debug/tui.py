"""
Textual inspector for screen description files.

Parses a .ui file, resolves every control and shows the result in a table.
Press 'r' after editing the file to reload it.
"""

import argparse
from pathlib import Path

from rich.console import Console
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Header, Static

from dockscreen.controls import ScreenError, Vec2
from dockscreen.debug.report import build_report, render_table
from dockscreen.logging_config import get_logger, setup_logging
from dockscreen.parser import parse_lines, read_ui_file

logger = get_logger(__name__)

COLUMNS = ("Name", "Kind", "Size", "Dock", "Top-left", "Error")


class ScreenInspectorApp(App):
    """Shows every control of a screen file with its resolved position."""

    TITLE = "dockscreen inspector"

    CSS = """
    #status {
        height: 1;
        padding: 0 1;
    }
    DataTable {
        height: 1fr;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "reload", "Reload"),
    ]

    def __init__(self, path: Path, screen_size: Vec2):
        super().__init__()
        self.path = path
        self.screen_size = screen_size

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("Loading...", id="status"),
            DataTable(id="controls"),
            id="main",
        )
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#controls", DataTable)
        table.add_columns(*COLUMNS)
        table.cursor_type = "row"
        self._load()

    def action_reload(self) -> None:
        self._load()

    def _load(self) -> None:
        status = self.query_one("#status", Static)
        table = self.query_one("#controls", DataTable)
        table.clear()

        try:
            lines = read_ui_file(self.path.name, self.path.parent)
            controls = parse_lines(lines, allow_unnamed_controls=True)
        except ScreenError as e:
            status.update(Text(str(e), style="red"))
            logger.error(f"Failed to load {self.path}: {e}")
            return

        rows = build_report(controls, self.screen_size)
        for row in rows:
            *cells, error = (Text(cell) for cell in row.cells())
            error.stylize("red")
            table.add_row(*cells, error)

        failures = sum(1 for row in rows if row.error)
        style = "red" if failures else "green"
        status.update(
            Text(
                f"{self.path} - {len(rows)} controls, {failures} unresolved "
                f"({self.screen_size.x:g}x{self.screen_size.y:g})",
                style=style,
            )
        )


def run_tui(path: Path, screen_size: Vec2) -> None:
    """Run the inspector application."""
    app = ScreenInspectorApp(path, screen_size)
    app.run()


def print_report(path: Path, screen_size: Vec2, console: Console) -> int:
    """Print the report as a rich table; returns a process exit code."""
    try:
        controls = parse_lines(read_ui_file(path.name, path.parent), allow_unnamed_controls=True)
    except ScreenError as e:
        console.print(Text(str(e), style="red"))
        return 1

    rows = build_report(controls, screen_size)
    console.print(render_table(rows, title=str(path)))
    return 1 if any(row.error for row in rows) else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Inspect a dockscreen description file")
    parser.add_argument("path", type=Path, help="Screen description (.ui) file")
    parser.add_argument("--width", type=float, default=1920.0, help="Screen width (default: 1920)")
    parser.add_argument("--height", type=float, default=1080.0, help="Screen height (default: 1080)")
    parser.add_argument("--plain", action="store_true", help="Print a table instead of starting the TUI")
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: warning)",
    )
    args = parser.parse_args()

    setup_logging(level=args.log_level)
    screen_size = Vec2(x=args.width, y=args.height)

    if args.plain:
        raise SystemExit(print_report(args.path, screen_size, Console()))
    run_tui(args.path, screen_size)


if __name__ == "__main__":
    main()
