"""Apply discrete user commands to a grid and run searches on request."""

from __future__ import annotations

import threading
from typing import Callable

from gridpath.core.contracts import (
    CellState,
    Command,
    CommandOutcome,
    GridError,
    InvalidEndpoints,
    InvalidPlacement,
    PathResult,
    PlaceEndpoint,
    PlaceStart,
    PlaceTarget,
    Reset,
    RunSearch,
    SearchReport,
    ToggleWall,
)
from gridpath.core.grid_store import GridStore
from gridpath.core.pathfinding import solve

OutcomeHook = Callable[[CommandOutcome], None]


class SessionController:
    """Single writer for one GridStore.

    Recoverable grid errors are reported as rejected outcomes instead of
    propagating, so a shell can drop a bad click and carry on. The
    ``on_record`` hook runs while the lock is held and must not dispatch.
    """

    def __init__(self, grid: GridStore, *, on_record: OutcomeHook | None = None) -> None:
        self._grid = grid
        self._on_record = on_record
        self._lock = threading.Lock()
        self.last_outcome: CommandOutcome | None = None

    @property
    def grid(self) -> GridStore:
        return self._grid

    def dispatch(self, command: Command) -> CommandOutcome:
        with self._lock:
            try:
                search = self._apply(command)
            except GridError as exc:
                outcome = CommandOutcome(
                    command=command,
                    accepted=False,
                    error=exc.kind,
                    message=str(exc),
                )
            else:
                outcome = CommandOutcome(
                    command=command,
                    accepted=True,
                    message=_describe(command, search, self._grid),
                    search=search,
                )
            # Recorded under the lock so record order is mutation order.
            self.last_outcome = outcome
            if self._on_record is not None:
                self._on_record(outcome)
        return outcome

    def _apply(self, command: Command) -> SearchReport | None:
        grid = self._grid
        if isinstance(command, ToggleWall):
            grid.toggle_wall(command.x, command.y)
        elif isinstance(command, PlaceStart):
            grid.set_start(command.x, command.y)
        elif isinstance(command, PlaceTarget):
            grid.set_target(command.x, command.y)
        elif isinstance(command, PlaceEndpoint):
            if grid.find_start() is None:
                grid.set_start(command.x, command.y)
            elif grid.find_target() is None:
                grid.set_target(command.x, command.y)
            else:
                raise InvalidPlacement("start and target are already placed; reset first")
        elif isinstance(command, RunSearch):
            return self._run_search()
        elif isinstance(command, Reset):
            grid.reset()
        return None

    def _run_search(self) -> SearchReport:
        start = self._grid.find_start()
        target = self._grid.find_target()
        if start is None or target is None:
            raise InvalidEndpoints("place both start and target before searching")
        result = solve(self._grid, start, target)
        if result == PathResult.NO_ROUTE:
            return SearchReport(result=result)
        cells = self._grid.path_cells()
        return SearchReport(
            result=result, path_length=len(cells) + 1, path_cells=cells
        )


def _describe(
    command: Command, search: SearchReport | None, grid: GridStore
) -> str:
    if search is not None:
        if search.result == PathResult.NO_ROUTE:
            return "No route to target."
        return f"Route found: {search.path_length} steps."
    if isinstance(command, Reset):
        return "Endpoints and path cleared."
    state = grid.state_at(command.x, command.y)
    if isinstance(command, ToggleWall) and state == CellState.EMPTY:
        return f"Cleared {command.x}, {command.y}."
    return f"{state.value.capitalize()} at {command.x}, {command.y}."
