"""Textual widget that draws the grid and reports clicked cells."""

from __future__ import annotations

from typing import Callable

from rich.console import Group, RenderableType
from textual.events import MouseDown
from textual.geometry import Size
from textual.message import Message
from textual.widget import Widget

from gridpath.core.contracts import Coord
from gridpath.core.grid_store import GridStore
from gridpath.render.grid_view import Viewport, compute_viewport, render_grid_lines


class GridClicked(Message):
    """Message emitted when a click lands on a grid cell."""

    def __init__(self, *, point: Coord, button: int) -> None:
        super().__init__()
        self.point = point
        self.button = button


class GridWidget(Widget):
    def __init__(
        self,
        grid: GridStore,
        cursor: Callable[[], Coord],
        *,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self._grid = grid
        self._cursor = cursor
        self._viewport: Viewport | None = None

    def render(self) -> RenderableType:
        self._viewport = self.viewport_for(self.content_size)
        lines = render_grid_lines(
            self._grid, viewport=self._viewport, cursor=self._cursor()
        )
        return Group(*lines)

    def viewport_for(self, size: Size) -> Viewport:
        return compute_viewport(
            self._grid.width,
            self._grid.height,
            size.width,
            size.height,
            center=self._cursor(),
        )

    def on_mouse_down(self, event: MouseDown) -> None:
        if self._viewport is None:
            return
        offset = event.get_content_offset(self)
        if offset is None:
            return
        point = cell_at_offset(self._viewport, offset.x, offset.y)
        if point is None:
            return
        self.post_message(GridClicked(point=point, button=event.button))


def cell_at_offset(viewport: Viewport, x: int, y: int) -> Coord | None:
    point = (viewport.x + x, viewport.y + y)
    if not viewport.contains(*point):
        return None
    return point
