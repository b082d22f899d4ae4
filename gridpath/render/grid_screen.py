"""Textual screen for painting walls and running the search."""

from __future__ import annotations

from rich.panel import Panel
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Static

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
    move_cursor,
    render_search_panel,
    render_status_text,
)
from gridpath.render.textual_widgets import GridClicked, GridWidget

RIGHT_WIDTH = 36

CONTROLS = (
    "arrows=move | w=wall | s=start/target | space=search | r=reset | q=quit"
    " | click: left=wall right=start/target"
)

# Textual mouse buttons
BUTTON_LEFT = 1
BUTTON_RIGHT = 3


def click_command(point: Coord, button: int) -> Command | None:
    x, y = point
    if button == BUTTON_LEFT:
        return ToggleWall(x=x, y=y)
    if button == BUTTON_RIGHT:
        return PlaceEndpoint(x=x, y=y)
    return None


class GridScreen(Screen):
    CSS = """
    Screen {
        layout: vertical;
    }
    #main {
        layout: horizontal;
        height: 1fr;
    }
    #grid {
        border: round white;
        width: 1fr;
    }
    #status-bar {
        height: 3;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("w", "toggle_wall", "Wall"),
        ("x", "toggle_wall", "Wall"),
        ("s", "place_endpoint", "Start/Target"),
        ("space", "run_search", "Search"),
        ("enter", "run_search", "Search"),
        ("r", "reset", "Reset"),
        ("up", "move('UP')", "Up"),
        ("down", "move('DOWN')", "Down"),
        ("left", "move('LEFT')", "Left"),
        ("right", "move('RIGHT')", "Right"),
    ]

    def __init__(self, controller: SessionController) -> None:
        super().__init__()
        self.controller = controller
        self.grid_cursor = (0, 0)
        self._side_panel: Static | None = None
        self._status_bar: Static | None = None
        self._grid_widget: GridWidget | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="root"):
            with Horizontal(id="main"):
                yield GridWidget(
                    self.controller.grid, lambda: self.grid_cursor, id="grid"
                )
                yield Static(id="side-panel")
            yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._grid_widget = self.query_one("#grid", GridWidget)
        self._side_panel = self.query_one("#side-panel", Static)
        self._status_bar = self.query_one("#status-bar", Static)
        self._side_panel.styles.width = RIGHT_WIDTH
        self._refresh_ui()

    def on_grid_clicked(self, message: GridClicked) -> None:
        command = click_command(message.point, message.button)
        if command is None:
            return
        self.grid_cursor = message.point
        self._dispatch(command)

    def action_quit(self) -> None:
        self.app.exit()

    def action_toggle_wall(self) -> None:
        x, y = self.grid_cursor
        self._dispatch(ToggleWall(x=x, y=y))

    def action_place_endpoint(self) -> None:
        x, y = self.grid_cursor
        self._dispatch(PlaceEndpoint(x=x, y=y))

    def action_run_search(self) -> None:
        self._dispatch(RunSearch())

    def action_reset(self) -> None:
        self._dispatch(Reset())

    def action_move(self, direction: str) -> None:
        self.grid_cursor = move_cursor(
            self.grid_cursor, direction, self.controller.grid
        )
        self._refresh_ui()

    def _dispatch(self, command: Command) -> None:
        self.controller.dispatch(command)
        self._refresh_ui()

    def _refresh_ui(self) -> None:
        if self._side_panel:
            self._side_panel.update(
                Panel(
                    render_search_panel(self.controller, self.grid_cursor),
                    title="Search",
                )
            )
        if self._status_bar:
            self._status_bar.update(
                Panel(render_status_text(self.controller, CONTROLS), padding=(0, 1))
            )
        if self._grid_widget:
            self._grid_widget.refresh()


class GridpathApp(App):
    def __init__(self, controller: SessionController) -> None:
        super().__init__()
        self._controller = controller
        self.title = "Gridpath"

    def on_mount(self) -> None:
        self.push_screen(GridScreen(self._controller))


def run_grid_app(controller: SessionController) -> None:
    app = GridpathApp(controller)
    app.run()
