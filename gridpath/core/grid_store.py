"""Fixed-size grid of cell states, stored as one flat row-major buffer."""

from __future__ import annotations

from gridpath.core.contracts import (
    CellState,
    Coord,
    InvalidPlacement,
    OutOfBounds,
)


class GridStore:
    """Single owner of every cell state on the grid.

    Cells live in one list indexed by ``y * width + x``. The Start and Target
    coordinates are tracked alongside the cells so that lookups do not scan.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._cells: list[CellState] = [CellState.EMPTY] * (width * height)
        self._start: Coord | None = None
        self._target: Coord | None = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def is_passable(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return self._cells[y * self._width + x] != CellState.WALL

    def state_at(self, x: int, y: int) -> CellState:
        return self._cells[self._index(x, y)]

    def set_wall(self, x: int, y: int, on: bool) -> None:
        index = self._index(x, y)
        current = self._cells[index]
        if current in (CellState.START, CellState.TARGET):
            return
        if on:
            self._cells[index] = CellState.WALL
        elif current == CellState.WALL:
            self._cells[index] = CellState.EMPTY

    def toggle_wall(self, x: int, y: int) -> CellState:
        self.set_wall(x, y, self.state_at(x, y) != CellState.WALL)
        return self.state_at(x, y)

    def set_start(self, x: int, y: int) -> None:
        index = self._index(x, y)
        if self._start is not None:
            raise InvalidPlacement(f"start is already placed at {self._start}")
        if self._cells[index] == CellState.WALL:
            raise InvalidPlacement(f"cannot place start on a wall at {(x, y)}")
        self._cells[index] = CellState.START
        self._start = (x, y)

    def set_target(self, x: int, y: int) -> None:
        index = self._index(x, y)
        if self._start is None:
            raise InvalidPlacement("place the start before the target")
        if self._target is not None:
            raise InvalidPlacement(f"target is already placed at {self._target}")
        if self._cells[index] == CellState.WALL:
            raise InvalidPlacement(f"cannot place target on a wall at {(x, y)}")
        if (x, y) == self._start:
            raise InvalidPlacement("target cannot share the start cell")
        self._cells[index] = CellState.TARGET
        self._target = (x, y)

    def find_start(self) -> Coord | None:
        return self._start

    def find_target(self) -> Coord | None:
        return self._target

    def clear_path_marks(self) -> None:
        self._replace(CellState.PATH, CellState.EMPTY)

    def mark_path(self, x: int, y: int) -> None:
        index = self._index(x, y)
        if self._cells[index] in (CellState.START, CellState.TARGET):
            return
        self._cells[index] = CellState.PATH

    def reset(self) -> None:
        """Drop endpoints and path marks; walls stay."""
        for state in (CellState.START, CellState.TARGET, CellState.PATH):
            self._replace(state, CellState.EMPTY)
        self._start = None
        self._target = None

    def path_cells(self) -> list[Coord]:
        return [
            (index % self._width, index // self._width)
            for index, state in enumerate(self._cells)
            if state == CellState.PATH
        ]

    def rows(self) -> list[list[CellState]]:
        width = self._width
        return [
            self._cells[y * width : (y + 1) * width] for y in range(self._height)
        ]

    def _replace(self, old: CellState, new: CellState) -> None:
        cells = self._cells
        for index, state in enumerate(cells):
            if state == old:
                cells[index] = new

    def _index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self._width, self._height)
        return y * self._width + x
