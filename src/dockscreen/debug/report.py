"""
Layout report models for the debug inspector.

A report lists every control of a screen with its resolved position. Problems
in one control (bad dock target, malformed size, ...) are captured per row so
the rest of the screen can still be inspected.
"""

from typing import Optional

from pydantic import BaseModel
from rich.table import Table
from rich.text import Text

from dockscreen.controls import ControlSet, ScreenError, Vec2
from dockscreen.docking import resolve_position


class ControlRow(BaseModel):
    """One control as shown by the inspector."""

    name: str
    kind: str
    size: str
    dock_with: str
    top_left: Optional[Vec2] = None
    error: Optional[str] = None

    def cells(self) -> tuple[str, ...]:
        return (self.name, self.kind, self.size, self.dock_with, self.position_text, self.error or "")

    @property
    def position_text(self) -> str:
        if self.top_left is None:
            return "-"
        return f"{self.top_left.x:g}; {self.top_left.y:g}"


def build_report(controls: ControlSet, screen_size: Vec2) -> list[ControlRow]:
    """Resolve every control, recording failures instead of raising."""
    rows = []
    for name, control in controls.items():
        row = ControlRow(
            name=name,
            kind=control.kind.value,
            size=control.get_str("size", default="-"),
            dock_with=control.dock_with or "-",
        )
        try:
            row.top_left = resolve_position(name, controls, screen_size)
        except ScreenError as e:
            row.error = str(e)
        rows.append(row)
    return rows


def render_table(rows: list[ControlRow], title: str = "Controls") -> Table:
    """Build a rich table of report rows."""
    table = Table(title=title)
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("Size")
    table.add_column("Dock")
    table.add_column("Top-left")
    table.add_column("Error", style="red")
    for row in rows:
        # Plain Text cells, error messages carry [name] brackets
        table.add_row(*(Text(cell) for cell in row.cells()))
    return table
