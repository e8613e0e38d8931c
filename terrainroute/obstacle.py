"""Polygonal terrain obstacles with a partial or total obstruction level."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

Point = Tuple[float, float]

# Width of the outline an obstacle is drawn with; its shape extends half of it
# beyond the polygon edges.
OUTLINE_WIDTH = 3.0
# Width of the probe line used when testing whether a straight segment
# crosses an obstacle.
PROBE_WIDTH = 1.0
MAX_ALPHA = 255


def _orientation(a: Point, b: Point, c: Point) -> float:
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def _on_segment(a: Point, b: Point, p: Point) -> bool:
    return (
        min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
        and min(a[1], b[1]) <= p[1] <= max(a[1], b[1])
    )


def _segments_cross(a: Point, b: Point, c: Point, d: Point) -> bool:
    o1 = _orientation(a, b, c)
    o2 = _orientation(a, b, d)
    o3 = _orientation(c, d, a)
    o4 = _orientation(c, d, b)
    if ((o1 > 0 > o2) or (o1 < 0 < o2)) and ((o3 > 0 > o4) or (o3 < 0 < o4)):
        return True
    return (
        (o1 == 0 and _on_segment(a, b, c))
        or (o2 == 0 and _on_segment(a, b, d))
        or (o3 == 0 and _on_segment(c, d, a))
        or (o4 == 0 and _on_segment(c, d, b))
    )


def _point_segment_distance(p: Point, a: Point, b: Point) -> float:
    dx, dy = b[0] - a[0], b[1] - a[1]
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.dist(p, a)
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.dist(p, (a[0] + t * dx, a[1] + t * dy))


def _segment_distance(a: Point, b: Point, c: Point, d: Point) -> float:
    if _segments_cross(a, b, c, d):
        return 0.0
    return min(
        _point_segment_distance(a, c, d),
        _point_segment_distance(b, c, d),
        _point_segment_distance(c, a, b),
        _point_segment_distance(d, a, b),
    )


@dataclass(frozen=True)
class Obstacle:
    """A polygon on the map; ``transparency`` is its obstruction in percent."""

    points: Tuple[Tuple[int, int], ...]
    transparency: int

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "points", tuple((int(x), int(y)) for x, y in self.points)
        )
        object.__setattr__(self, "transparency", int(self.transparency))

    @property
    def _drawable(self) -> bool:
        return len(self.points) >= 3

    def _edges(self) -> Iterator[Tuple[Point, Point]]:
        yield from zip(self.points, self.points[1:] + self.points[:1])

    def _fill_contains(self, point: Sequence[float]) -> bool:
        px, py = point[0], point[1]
        inside = False
        for (x1, y1), (x2, y2) in self._edges():
            if (y1 > py) != (y2 > py):
                cross_x = x1 + (py - y1) * (x2 - x1) / (y2 - y1)
                if px < cross_x:
                    inside = not inside
        return inside

    def alpha(self) -> int:
        """Fill opacity in 0..255 derived from the obstruction percentage."""
        value = int(self.transparency * MAX_ALPHA / 100)
        return max(0, min(MAX_ALPHA, value))

    def contains(self, point: Sequence[float]) -> bool:
        """True when the point lies in the filled polygon or under its outline."""
        if not self._drawable:
            return False
        p = (float(point[0]), float(point[1]))
        if self._fill_contains(p):
            return True
        half = OUTLINE_WIDTH / 2
        return any(_point_segment_distance(p, a, b) <= half for a, b in self._edges())

    def segment_touches(self, start: Sequence[float], end: Sequence[float]) -> bool:
        """True when a thin probe line from start to end overlaps the polygon."""
        if not self._drawable:
            return False
        a = (float(start[0]), float(start[1]))
        b = (float(end[0]), float(end[1]))
        if self._fill_contains(a) or self._fill_contains(b):
            return True
        half = PROBE_WIDTH / 2
        return any(_segment_distance(a, b, c, d) <= half for c, d in self._edges())