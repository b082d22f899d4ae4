import pytest

from gridpath.core.contracts import CellState, InvalidEndpoints, PathResult
from gridpath.core.grid_store import GridStore
from gridpath.core.pathfinding import find_route, solve


def build_grid(
    width: int,
    height: int,
    *,
    walls: set[tuple[int, int]] = frozenset(),
    start: tuple[int, int] | None = None,
    target: tuple[int, int] | None = None,
) -> GridStore:
    grid = GridStore(width, height)
    for x, y in walls:
        grid.set_wall(x, y, True)
    if start is not None:
        grid.set_start(*start)
    if target is not None:
        grid.set_target(*target)
    return grid


def route_length(grid: GridStore, start, target) -> int | None:
    route = find_route(grid, start, target)
    return None if route is None else len(route) - 1


def test_open_grid_route_matches_manhattan_distance() -> None:
    pairs = [((0, 0), (5, 3)), ((5, 0), (0, 3)), ((2, 1), (2, 3)), ((4, 2), (1, 2))]
    for start, target in pairs:
        grid = build_grid(6, 4, start=start, target=target)

        assert solve(grid, start, target) == PathResult.FOUND
        manhattan = abs(start[0] - target[0]) + abs(start[1] - target[1])
        assert len(grid.path_cells()) + 1 == manhattan


def test_path_cells_form_a_connected_route() -> None:
    grid = build_grid(6, 6, walls={(2, 0), (2, 1), (2, 2), (4, 3), (4, 4), (4, 5)})

    route = find_route(grid, (0, 0), (5, 5))

    assert route is not None
    assert route[0] == (0, 0)
    assert route[-1] == (5, 5)
    for (ax, ay), (bx, by) in zip(route, route[1:]):
        assert abs(ax - bx) + abs(ay - by) == 1
        assert grid.is_passable(bx, by)


def test_detour_around_blocked_column() -> None:
    start, target = (0, 0), (4, 0)
    grid = build_grid(5, 5, walls={(2, 0), (2, 1)}, start=start, target=target)

    result = solve(grid, start, target)

    assert result == PathResult.FOUND
    path = grid.path_cells()
    assert len(path) == 7
    assert (2, 2) in path
    assert grid.state_at(*start) == CellState.START
    assert grid.state_at(*target) == CellState.TARGET


def test_equal_length_routes_break_ties_deterministically() -> None:
    grid = build_grid(3, 3, start=(0, 0), target=(1, 1))

    solve(grid, (0, 0), (1, 1))

    assert grid.path_cells() == [(1, 0)]


def test_adjacent_endpoints_have_no_path_cells() -> None:
    grid = build_grid(3, 3, start=(0, 0), target=(1, 0))

    assert solve(grid, (0, 0), (1, 0)) == PathResult.FOUND
    assert grid.path_cells() == []


def test_same_start_and_target_is_a_trivial_route() -> None:
    grid = build_grid(3, 3)

    assert solve(grid, (1, 1), (1, 1)) == PathResult.FOUND
    assert grid.path_cells() == []
    assert find_route(grid, (1, 1), (1, 1)) == [(1, 1)]


def test_repeated_solve_is_idempotent() -> None:
    start, target = (0, 0), (4, 3)
    grid = build_grid(5, 4, walls={(1, 1), (2, 1), (3, 2)}, start=start, target=target)

    solve(grid, start, target)
    first = grid.rows()
    solve(grid, start, target)

    assert grid.rows() == first


def test_stale_path_marks_are_cleared_before_search() -> None:
    start, target = (0, 0), (4, 0)
    grid = build_grid(5, 3, start=start, target=target)
    solve(grid, start, target)
    assert grid.path_cells() == [(1, 0), (2, 0), (3, 0)]

    grid.set_wall(2, 0, True)
    solve(grid, start, target)

    assert grid.path_cells() == [(1, 0), (1, 1), (2, 1), (3, 1), (4, 1)]
    assert grid.state_at(2, 0) == CellState.WALL
    assert grid.state_at(3, 0) == CellState.EMPTY


def test_adding_walls_never_shortens_the_route() -> None:
    start, target = (0, 0), (4, 0)
    grid = build_grid(5, 3)
    lengths = [route_length(grid, start, target)]

    for wall in [(2, 0), (2, 1)]:
        grid.set_wall(*wall, True)
        lengths.append(route_length(grid, start, target))

    assert lengths == [4, 6, 8]

    grid.set_wall(2, 2, True)
    assert route_length(grid, start, target) is None
    assert solve(grid, start, target) == PathResult.NO_ROUTE


def test_enclosed_target_has_no_route() -> None:
    start, target = (0, 0), (2, 2)
    grid = build_grid(5, 5, start=start, target=target)
    solve(grid, start, target)
    assert grid.path_cells()

    for wall in [(1, 2), (3, 2), (2, 1), (2, 3)]:
        grid.set_wall(*wall, True)

    assert solve(grid, start, target) == PathResult.NO_ROUTE
    assert grid.path_cells() == []


def test_enclosed_start_has_no_route() -> None:
    grid = build_grid(3, 3, walls={(1, 0), (0, 1)})

    assert solve(grid, (0, 0), (2, 2)) == PathResult.NO_ROUTE


def test_grid_without_free_cells_only_connects_adjacent_endpoints() -> None:
    walls = {(x, y) for x in range(3) for y in range(2)} - {(0, 0), (1, 0), (2, 1)}
    grid = build_grid(3, 2, walls=walls)

    assert solve(grid, (0, 0), (1, 0)) == PathResult.FOUND
    assert solve(grid, (0, 0), (2, 1)) == PathResult.NO_ROUTE


@pytest.mark.parametrize(
    "start,target",
    [((-1, 0), (2, 2)), ((0, 0), (3, 0)), ((1, 1), (2, 2))],
)
def test_invalid_endpoints_are_rejected_before_mutation(start, target) -> None:
    grid = build_grid(3, 3, walls={(1, 1)})
    grid.mark_path(0, 2)

    with pytest.raises(InvalidEndpoints):
        solve(grid, start, target)
    with pytest.raises(InvalidEndpoints):
        find_route(grid, start, target)

    assert grid.path_cells() == [(0, 2)]
