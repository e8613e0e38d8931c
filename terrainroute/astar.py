"""A* route search over an integer grid and route simplification."""

from __future__ import annotations

import heapq
import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from terrainroute.obstacle import MAX_ALPHA, Obstacle

logger = logging.getLogger(__name__)

GridPoint = Tuple[int, int]

_DIRECTIONS = (
    (-1, 0), (1, 0), (0, -1), (0, 1),
    (-1, -1), (-1, 1), (1, -1), (1, 1),
)
DIAGONAL_FACTOR = 1.4


@dataclass(slots=True)
class _Node:
    pos: GridPoint
    cost: float
    heuristic: float
    parent: Optional["_Node"] = None


def movement_cost(to: Sequence[float], obstacles: Iterable[Obstacle]) -> float:
    """Cost factor of stepping onto ``to``; ``math.inf`` if it is impassable."""
    total = 1.0
    for obstacle in obstacles:
        if obstacle.contains(to):
            obstruction = obstacle.alpha() / MAX_ALPHA
            if obstruction >= 1.0:
                return math.inf
            total /= 1 - obstruction
    return total


def _trace(node: Optional[_Node]) -> List[GridPoint]:
    path: List[GridPoint] = []
    while node is not None:
        path.append(node.pos)
        node = node.parent
    path.reverse()
    return path


def find_path(
    start: Sequence[int],
    end: Sequence[int],
    width: float,
    height: float,
    obstacles: Iterable[Obstacle],
) -> List[GridPoint]:
    """Search an 8-connected grid of the given size; return [] if unreachable."""
    start_pos: GridPoint = (int(start[0]), int(start[1]))
    end_pos: GridPoint = (int(end[0]), int(end[1]))
    obstacles = list(obstacles)

    nodes: Dict[GridPoint, _Node] = {}
    # Open nodes are indexed by their score alone; a later node with the same
    # score replaces the earlier one.
    by_score: Dict[float, _Node] = {}
    open_scores: List[float] = []
    closed = set()
    step_costs: Dict[GridPoint, float] = {}

    first = _Node(start_pos, 0.0, math.dist(start_pos, end_pos))
    nodes[start_pos] = first
    score = first.cost + first.heuristic
    by_score[score] = first
    heapq.heappush(open_scores, score)

    while open_scores:
        current = by_score[heapq.heappop(open_scores)]
        if current.pos == end_pos:
            return _trace(current)
        closed.add(current.pos)

        cx, cy = current.pos
        for dx, dy in _DIRECTIONS:
            pos = (cx + dx, cy + dy)
            if pos[0] < 0 or pos[0] >= width or pos[1] < 0 or pos[1] >= height:
                continue
            step = step_costs.get(pos)
            if step is None:
                step = step_costs[pos] = movement_cost(pos, obstacles)
            if math.isinf(step):
                continue
            new_cost = current.cost + step * (DIAGONAL_FACTOR if dx and dy else 1.0)

            neighbour = nodes.get(pos)
            if neighbour is None:
                neighbour = _Node(pos, math.inf, math.dist(pos, end_pos))
                nodes[pos] = neighbour

            if new_cost < neighbour.cost:
                neighbour.cost = new_cost
                neighbour.parent = current
                if pos not in closed:
                    score = neighbour.cost + neighbour.heuristic
                    heapq.heappush(open_scores, score)
                    by_score[score] = neighbour
    return []


def _require_points(path: Sequence[GridPoint]) -> List[GridPoint]:
    points = [tuple(p) for p in path]
    if not points:
        raise ValueError("route has no points")
    return points


def remove_collinear(path: Sequence[GridPoint]) -> List[GridPoint]:
    """Drop intermediate points lying on straight or diagonal runs."""
    points = _require_points(path)
    result = [points[0]]
    for i in range(len(points) - 2):
        if points[i] != result[-1]:
            continue
        ox, oy = points[i]
        for j in range(i + 1, len(points) - 1):
            dx, dy = points[j][0] - ox, points[j][1] - oy
            if not (abs(dx) == abs(dy) or dx == 0 or dy == 0):
                result.append(points[j - 1])
                break
    result.append(points[-1])
    return result


def remove_redundant(
    path: Sequence[GridPoint], obstacles: Iterable[Obstacle]
) -> List[GridPoint]:
    """Keep only the turning points needed to skirt obstacle boundaries."""
    points = _require_points(path)
    obstacles = list(obstacles)

    levels: Dict[GridPoint, int] = {}
    for point in points:
        for obstacle in obstacles:
            if obstacle.contains(point):
                levels[point] = obstacle.alpha()
        levels.setdefault(point, 0)

    result = [points[0]]
    i = 0
    while i < len(points) - 2:
        if points[i] == result[-1]:
            k = i + 1
            while k < len(points) - 1:
                for obstacle in obstacles:
                    if not obstacle.segment_touches(points[i], points[k]):
                        continue
                    alpha = obstacle.alpha()
                    if levels[points[i]] != alpha and levels[points[k]] != alpha:
                        if k - 1 != i:
                            result.append(points[k - 1])
                            i = k - 2
                        else:
                            result.append(points[k])
                            i = k - 1
                        break
                k += 1
        i += 1
    result.append(points[-1])
    return result


def optimise_path(
    path: Sequence[GridPoint], obstacles: Iterable[Obstacle]
) -> List[GridPoint]:
    """Simplify a grid route to its essential waypoints."""
    obstacles = list(obstacles)
    logger.debug("route points in: %d", len(path))
    path = remove_collinear(path)
    logger.debug("after collinear removal: %d", len(path))
    path = remove_redundant(path, obstacles)
    logger.debug("after redundant removal: %d", len(path))
    return path