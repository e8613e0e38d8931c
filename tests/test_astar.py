import pytest

from terrainroute.astar import (
    find_path,
    movement_cost,
    optimise_path,
    remove_collinear,
    remove_redundant,
)
from terrainroute.obstacle import Obstacle

WALL = Obstacle([(4, -2), (6, -2), (6, 12), (4, 12)], 100)
BLOCK = Obstacle([(4, 0), (6, 0), (6, 6), (4, 6)], 100)


def _is_connected(path):
    return all(
        max(abs(a[0] - b[0]), abs(a[1] - b[1])) == 1 for a, b in zip(path, path[1:])
    )


def _is_subsequence(small, big):
    it = iter(big)
    return all(p in it for p in small)


def test_movement_cost_open_ground():
    assert movement_cost((3, 3), []) == 1.0


def test_movement_cost_impassable():
    assert movement_cost((5, 5), [WALL]) == float("inf")


def test_movement_cost_grows_with_obstruction():
    square = [(0, 0), (10, 0), (10, 10), (0, 10)]
    costs = [movement_cost((5, 5), [Obstacle(square, t)]) for t in (0, 25, 50, 75)]
    assert costs[0] == 1.0
    assert costs == sorted(costs)
    assert costs[-1] > costs[1]


def test_movement_cost_outside_obstacle_unaffected():
    assert movement_cost((50, 50), [Obstacle(BLOCK.points, 60)]) == 1.0


def test_find_path_straight_line():
    path = find_path((0, 0), (5, 0), 10, 10, [])
    assert path[0] == (0, 0)
    assert path[-1] == (5, 0)
    assert len(path) == 6
    assert all(y == 0 for _, y in path)


def test_find_path_start_equals_end():
    assert find_path((3, 3), (3, 3), 10, 10, []) == [(3, 3)]


def test_find_path_blocked_returns_empty():
    assert find_path((0, 5), (9, 5), 10, 10, [WALL]) == []


def test_find_path_outside_grid_unreachable():
    assert find_path((0, 0), (15, 0), 10, 10, []) == []


def test_find_path_avoids_impassable():
    path = find_path((0, 2), (10, 2), 12, 12, [BLOCK])
    assert path[0] == (0, 2)
    assert path[-1] == (10, 2)
    assert _is_connected(path)
    assert not any(BLOCK.contains(p) for p in path)
    assert all(0 <= x < 12 and 0 <= y < 12 for x, y in path)


def test_find_path_through_partial_obstacle():
    partial = Obstacle(WALL.points, 50)
    path = find_path((0, 5), (9, 5), 10, 10, [partial])
    assert path[0] == (0, 5)
    assert path[-1] == (9, 5)
    assert _is_connected(path)


def test_remove_collinear_straight_line():
    line = [(i, 0) for i in range(6)]
    assert remove_collinear(line) == [(0, 0), (5, 0)]


def test_remove_collinear_corner():
    path = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]
    assert remove_collinear(path) == [(0, 0), (2, 0), (2, 2)]


def test_remove_collinear_empty_raises():
    with pytest.raises(ValueError):
        remove_collinear([])


def test_remove_redundant_without_obstacles():
    assert remove_redundant([(0, 0), (2, 0), (2, 2)], []) == [(0, 0), (2, 2)]


def test_remove_redundant_empty_raises():
    with pytest.raises(ValueError):
        remove_redundant([], [])


def test_optimise_open_route_keeps_endpoints_only():
    path = find_path((0, 0), (5, 0), 10, 10, [])
    assert optimise_path(path, []) == [(0, 0), (5, 0)]


def test_optimise_route_around_obstacle_keeps_order():
    path = find_path((0, 2), (10, 2), 12, 12, [BLOCK])
    optimised = optimise_path(path, [BLOCK])
    assert optimised[0] == path[0]
    assert optimised[-1] == path[-1]
    assert _is_subsequence(optimised[:-1], path)
    assert len(optimised) < len(path)


def test_optimise_empty_raises():
    with pytest.raises(ValueError):
        optimise_path([], [])