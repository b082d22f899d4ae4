"""Rich Live visualizer: paint walls, place endpoints, run the search."""

from __future__ import annotations

import time
from dataclasses import dataclass

from rich.console import Console, Group, RenderableType
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel

from gridpath.core.contracts import (
    Command,
    Coord,
    PlaceEndpoint,
    Reset,
    RunSearch,
    ToggleWall,
)
from gridpath.core.controller import SessionController
from gridpath.render.grid_view import (
    Viewport,
    compute_viewport,
    move_cursor,
    render_grid_lines,
    render_search_panel,
    render_status_text,
)
from gridpath.render.terminal_input import (
    MOUSE_LEFT,
    MOUSE_RIGHT,
    InputEvent,
    raw_terminal,
    read_event,
)

STATUS_HEIGHT = 3
RIGHT_WIDTH = 36
FRAME_DELAY = 0.01

CONTROLS = (
    "arrows=move | w=wall | s=start/target | space=search | r=reset | q=quit"
    " | mouse: left=wall right=start/target"
)

# Screen position of grid cell (viewport.x, viewport.y): below the status
# bar, inside the grid panel border.
GRID_ORIGIN: Coord = (1, STATUS_HEIGHT + 1)


@dataclass
class VisualizerState:
    cursor: Coord = (0, 0)
    viewport: Viewport | None = None
    should_exit: bool = False


def run_visualizer(controller: SessionController) -> None:
    state = VisualizerState()
    console = Console()

    with raw_terminal():
        with Live(console=console, auto_refresh=False, screen=True) as live:
            try:
                while not state.should_exit:
                    event = read_event()
                    if event is not None:
                        command = handle_event(state, event, controller)
                        if command is not None:
                            controller.dispatch(command)
                    renderable = render_frame(state, controller, frame_size=console.size)
                    live.update(renderable, refresh=True)
                    time.sleep(FRAME_DELAY)
            except KeyboardInterrupt:
                state.should_exit = True


def handle_event(
    state: VisualizerState, event: InputEvent, controller: SessionController
) -> Command | None:
    """Update cursor/exit state and return the command the event asks for."""
    grid = controller.grid
    if event.kind == "mouse":
        point = screen_to_grid(event.x, event.y, state.viewport)
        if point is None or not grid.in_bounds(*point):
            return None
        # Wheel and middle-button events leave the cursor alone.
        if event.button == MOUSE_LEFT:
            state.cursor = point
            return ToggleWall(x=point[0], y=point[1])
        if event.button == MOUSE_RIGHT:
            state.cursor = point
            return PlaceEndpoint(x=point[0], y=point[1])
        return None

    key = event.key or ""
    if key in {"q", "Q", "ESC"}:
        state.should_exit = True
        return None
    if key in {"UP", "DOWN", "LEFT", "RIGHT"}:
        state.cursor = move_cursor(state.cursor, key, grid)
        return None
    x, y = state.cursor
    if key in {"w", "W", "x", "X"}:
        return ToggleWall(x=x, y=y)
    if key in {"s", "S"}:
        return PlaceEndpoint(x=x, y=y)
    if key in {"SPACE", "ENTER"}:
        return RunSearch()
    if key in {"r", "R"}:
        return Reset()
    return None


def screen_to_grid(
    column: int | None, row: int | None, viewport: Viewport | None
) -> Coord | None:
    if column is None or row is None or viewport is None:
        return None
    x = viewport.x + column - GRID_ORIGIN[0]
    y = viewport.y + row - GRID_ORIGIN[1]
    if not viewport.contains(x, y):
        return None
    return (x, y)


def render_frame(
    state: VisualizerState, controller: SessionController, *, frame_size=None
) -> RenderableType:
    grid = controller.grid
    view_width, view_height = _grid_panel_size(frame_size)
    viewport = compute_viewport(
        grid.width, grid.height, view_width, view_height, center=state.cursor
    )
    state.viewport = viewport

    lines = render_grid_lines(grid, viewport=viewport, cursor=state.cursor)
    grid_panel = Panel(Group(*lines), title="Grid", padding=(0, 0))

    body = Layout()
    body.split_row(
        Layout(grid_panel, ratio=1),
        Layout(
            Panel(render_search_panel(controller, state.cursor), title="Search"),
            size=RIGHT_WIDTH,
        ),
    )
    layout = Layout()
    layout.split_column(
        Layout(_render_status_bar(controller), size=STATUS_HEIGHT),
        Layout(body, ratio=1),
    )
    return layout


def _render_status_bar(controller: SessionController) -> Panel:
    return Panel(render_status_text(controller, CONTROLS), padding=(0, 1))


def _grid_panel_size(frame_size) -> tuple[int, int]:
    if frame_size is None:
        return (80, 24)
    width = max(3, frame_size.width - RIGHT_WIDTH)
    height = max(3, frame_size.height - STATUS_HEIGHT)
    return (max(1, width - 2), max(1, height - 2))
