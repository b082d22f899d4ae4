"""Grid model, shortest-path search and command handling."""

from gridpath.core.contracts import (
    CellState,
    CommandOutcome,
    Coord,
    GridError,
    InvalidEndpoints,
    InvalidPlacement,
    OutOfBounds,
    PathResult,
    PlaceEndpoint,
    PlaceStart,
    PlaceTarget,
    Reset,
    RunSearch,
    SearchReport,
    ToggleWall,
    coerce_command,
)
from gridpath.core.controller import SessionController
from gridpath.core.grid_store import GridStore
from gridpath.core.pathfinding import find_route, solve

__all__ = [
    "CellState",
    "CommandOutcome",
    "Coord",
    "GridError",
    "GridStore",
    "InvalidEndpoints",
    "InvalidPlacement",
    "OutOfBounds",
    "PathResult",
    "PlaceEndpoint",
    "PlaceStart",
    "PlaceTarget",
    "Reset",
    "RunSearch",
    "SearchReport",
    "SessionController",
    "ToggleWall",
    "coerce_command",
    "find_route",
    "solve",
]
