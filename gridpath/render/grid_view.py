"""Shared helpers for rendering the grid and viewports."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from gridpath.core.contracts import CellState, Coord
from gridpath.core.controller import SessionController
from gridpath.core.grid_store import GridStore


CELL_GLYPHS: dict[CellState, str] = {
    CellState.EMPTY: "·",
    CellState.WALL: "█",
    CellState.START: "S",
    CellState.TARGET: "T",
    CellState.PATH: "•",
}

CELL_STYLES: dict[CellState, str] = {
    CellState.EMPTY: "grey50",
    CellState.WALL: "white",
    CellState.START: "bold bright_green",
    CellState.TARGET: "bold bright_red",
    CellState.PATH: "bold bright_blue",
}

CURSOR_STYLE = "reverse"


@dataclass(frozen=True)
class Viewport:
    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


def compute_viewport(
    grid_width: int,
    grid_height: int,
    view_width: int,
    view_height: int,
    *,
    center: Coord | None = None,
) -> Viewport:
    view_width = max(1, min(grid_width, view_width))
    view_height = max(1, min(grid_height, view_height))

    if center is not None:
        origin_x = center[0] - view_width // 2
        origin_y = center[1] - view_height // 2
    else:
        origin_x, origin_y = 0, 0

    origin_x = _clamp(origin_x, 0, max(0, grid_width - view_width))
    origin_y = _clamp(origin_y, 0, max(0, grid_height - view_height))

    return Viewport(x=origin_x, y=origin_y, width=view_width, height=view_height)


def render_grid_lines(
    grid: GridStore,
    *,
    viewport: Viewport,
    cursor: Coord | None = None,
) -> list[Text]:
    rows = grid.rows()
    lines: list[Text] = []
    for y in range(viewport.y, viewport.y + viewport.height):
        line = Text()
        row = rows[y]
        for x in range(viewport.x, viewport.x + viewport.width):
            state = row[x]
            style = CELL_STYLES[state]
            if cursor == (x, y):
                style = f"{style} {CURSOR_STYLE}"
            line.append(CELL_GLYPHS[state], style=style)
        lines.append(line)
    return lines


def render_legend() -> Text:
    legend = Text()
    for state in CellState:
        legend.append(CELL_GLYPHS[state], style=CELL_STYLES[state])
        legend.append(f" {state.value}  ")
    return legend


def move_cursor(cursor: Coord, key: str, grid: GridStore) -> Coord:
    x, y = cursor
    if key == "UP":
        y -= 1
    elif key == "DOWN":
        y += 1
    elif key == "LEFT":
        x -= 1
    elif key == "RIGHT":
        x += 1
    return (_clamp(x, 0, grid.width - 1), _clamp(y, 0, grid.height - 1))


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def render_search_panel(controller: SessionController, cursor: Coord) -> RenderableType:
    grid = controller.grid
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Grid", f"{grid.width} x {grid.height}")
    table.add_row("Cursor", _format_point(cursor))
    table.add_row("Start", _format_point(grid.find_start()))
    table.add_row("Target", _format_point(grid.find_target()))
    outcome = controller.last_outcome
    if outcome is not None and outcome.search is not None:
        steps = outcome.search.path_length
        table.add_row("Route", "none" if steps is None else f"{steps} steps")
    return Group(table, Text(""), render_legend())


def render_status_text(controller: SessionController, controls: str) -> Text:
    """Latest outcome message first, so a one-line bar never hides it."""
    text = Text()
    outcome = controller.last_outcome
    if outcome is not None and outcome.message:
        style = "bold green" if outcome.accepted else "bold red"
        text.append(outcome.message, style=style)
        text.append(" | ")
    text.append(controls, style="bold")
    return text


def _format_point(point: Coord | None) -> str:
    if point is None:
        return "-"
    return f"{point[0]}, {point[1]}"
