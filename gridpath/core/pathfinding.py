"""Unweighted shortest paths on the grid (breadth-first search)."""

from __future__ import annotations

from collections import deque

from gridpath.core.contracts import Coord, InvalidEndpoints, PathResult
from gridpath.core.grid_store import GridStore

# left, right, up, down
NEIGHBOR_OFFSETS: tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def solve(grid: GridStore, start: Coord, target: Coord) -> PathResult:
    """Mark the shortest start-to-target route on the grid.

    Old path marks are cleared first. Cells strictly between the endpoints
    become PATH; the endpoint cells keep their states.
    """
    _check_endpoints(grid, start, target)
    grid.clear_path_marks()
    route = _search(grid, start, target)
    if route is None:
        return PathResult.NO_ROUTE
    for x, y in route[1:-1]:
        grid.mark_path(x, y)
    return PathResult.FOUND


def find_route(
    grid: GridStore, start: Coord, target: Coord
) -> list[Coord] | None:
    """Return the route from start to target (both included) without marking it."""
    _check_endpoints(grid, start, target)
    return _search(grid, start, target)


def _search(grid: GridStore, start: Coord, target: Coord) -> list[Coord] | None:
    width = grid.width
    visited = [False] * (width * grid.height)
    parent: list[int | None] = [None] * (width * grid.height)

    start_index = start[1] * width + start[0]
    target_index = target[1] * width + target[0]
    visited[start_index] = True
    frontier: deque[int] = deque([start_index])

    while frontier:
        current = frontier.popleft()
        if current == target_index:
            return _reconstruct_route(parent, current, width)
        x, y = current % width, current // width
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if not grid.is_passable(nx, ny):
                continue
            neighbor = ny * width + nx
            if visited[neighbor]:
                continue
            visited[neighbor] = True
            parent[neighbor] = current
            frontier.append(neighbor)

    return None


def _reconstruct_route(
    parent: list[int | None], current: int, width: int
) -> list[Coord]:
    route: list[Coord] = []
    step: int | None = current
    while step is not None:
        route.append((step % width, step // width))
        step = parent[step]
    route.reverse()
    return route


def _check_endpoints(grid: GridStore, start: Coord, target: Coord) -> None:
    for label, (x, y) in (("start", start), ("target", target)):
        if not grid.in_bounds(x, y):
            raise InvalidEndpoints(f"{label} {(x, y)} is outside the grid")
        if not grid.is_passable(x, y):
            raise InvalidEndpoints(f"{label} {(x, y)} is a wall")
