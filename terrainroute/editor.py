"""Interactive map editing: placing obstacles, deleting them and planning routes."""

from __future__ import annotations

import enum
import math
from typing import List, Optional, Tuple

from terrainroute.astar import find_path, optimise_path
from terrainroute.mapfile import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    MapDocument,
    RouteReport,
    measure_route,
)
from terrainroute.obstacle import MAX_ALPHA, Obstacle

GridPoint = Tuple[int, int]

ZOOM_STEP = 0.2
OBSTACLE_POINTS = 3
ROUTE_POINTS = 2


class Mode(enum.Enum):
    """What the user is currently doing on the map."""

    IDLE = 0
    ADD = 1
    DELETE = 2
    ROUTE = 3


def _round(value: float) -> int:
    return math.floor(value + 0.5)


def _fmt(value: float) -> str:
    text = f"{value:.6g}"
    return "0" if text == "-0" else text


class MapEditor:
    """The state of a map being edited and the actions a user can take on it."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        scale: float = 1.0,
    ) -> None:
        self.width = width
        self.height = height
        self.scale = scale
        self.view_width = DEFAULT_WIDTH
        self.view_height = DEFAULT_HEIGHT
        self.mode = Mode.IDLE
        self.obstacles: List[Obstacle] = []
        self.route: Tuple[GridPoint, ...] = ()
        self._pending: List[GridPoint] = []

    @property
    def points(self) -> Tuple[GridPoint, ...]:
        """Points placed so far for the current action."""
        return tuple(self._pending)

    @property
    def ready(self) -> bool:
        """True once enough points are placed to confirm the current action."""
        count = len(self._pending)
        if self.mode is Mode.ADD:
            return count >= OBSTACLE_POINTS
        if self.mode is Mode.DELETE:
            return count >= 1
        if self.mode is Mode.ROUTE:
            return count == ROUTE_POINTS
        return False

    def _scene_obstacles(self) -> List[Obstacle]:
        # Most recently added obstacles come first, as on the drawing surface.
        return list(reversed(self.obstacles))

    def _begin(self, mode: Mode) -> None:
        if self.mode is not Mode.IDLE:
            raise RuntimeError(f"another action is in progress: {self.mode.name}")
        self._pending.clear()
        self.route = ()
        self.mode = mode

    def begin_add(self) -> None:
        """Start placing the corners of a new obstacle."""
        self._begin(Mode.ADD)

    def begin_delete(self) -> None:
        """Start picking obstacles to remove."""
        self._begin(Mode.DELETE)

    def begin_route(self) -> None:
        """Start choosing the two ends of a route."""
        self._begin(Mode.ROUTE)

    def click(self, x: float, y: float) -> bool:
        """Place a point at (x, y); return whether it was accepted."""
        if self.mode is Mode.IDLE:
            return False
        if self.mode is Mode.ROUTE:
            if len(self._pending) >= ROUTE_POINTS:
                return False
            for obstacle in self._scene_obstacles():
                if obstacle.contains((x, y)) and obstacle.alpha() == MAX_ALPHA:
                    return False
        self._pending.append((_round(x), _round(y)))
        return True

    def confirm(self, transparency: int = 0) -> None:
        """Finish the current action; ``transparency`` applies to a new obstacle."""
        if not self.ready:
            raise RuntimeError("not enough points to confirm")
        try:
            if self.mode is Mode.ADD:
                self.obstacles.append(Obstacle(tuple(self._pending), transparency))
            elif self.mode is Mode.DELETE:
                picked = list(self._pending)
                self.obstacles = [
                    obstacle
                    for obstacle in self.obstacles
                    if not any(obstacle.contains(p) for p in picked)
                ]
            elif self.mode is Mode.ROUTE:
                scene = self._scene_obstacles()
                start, end = self._pending
                path = find_path(start, end, self.width, self.height, scene)
                if not path:
                    raise ValueError("no route between the chosen points")
                self.route = tuple(optimise_path(path, scene))
        finally:
            self._pending.clear()
            self.mode = Mode.IDLE

    def cancel(self) -> None:
        """Abandon the current action and its placed points."""
        self._pending.clear()
        self.mode = Mode.IDLE

    def set_width(self, width: int) -> None:
        """Change the map width in pixels."""
        self.width = width
        if width < DEFAULT_WIDTH:
            self.view_width = width
        elif self.view_width < DEFAULT_WIDTH:
            self.view_width = DEFAULT_WIDTH

    def set_height(self, height: int) -> None:
        """Change the map height in pixels."""
        self.height = height
        if height < DEFAULT_HEIGHT:
            self.view_height = height
        elif self.view_height < DEFAULT_HEIGHT:
            self.view_height = DEFAULT_HEIGHT

    def zoom_in(self) -> None:
        """Increase the pixels-per-metre scale by one step."""
        self.scale += ZOOM_STEP

    def zoom_out(self) -> None:
        """Decrease the pixels-per-metre scale by one step."""
        self.scale -= ZOOM_STEP

    def status_message(self, x: float, y: float) -> str:
        """Status line text for the cursor at (x, y)."""
        return f"Масштаб: {_fmt(self.scale)}px/m  |  Координаты: ({_fmt(x)}, {_fmt(y)})"

    def load(self, document: MapDocument) -> None:
        """Replace the map with the contents of a document."""
        if self.mode is not Mode.IDLE:
            raise RuntimeError(f"another action is in progress: {self.mode.name}")
        self.obstacles = list(document.obstacles)
        self.route = ()
        self._pending.clear()
        if document.width is not None and document.height is not None:
            self.width = document.width
            self.height = document.height
            if self.width < DEFAULT_WIDTH or self.height < DEFAULT_HEIGHT:
                self.view_width = self.width
                self.view_height = self.height
        if document.scale is not None:
            self.scale = document.scale

    def document(self) -> MapDocument:
        """The map as a document ready to be saved."""
        return MapDocument(self.width, self.height, self.scale, tuple(self.obstacles))

    def route_report(self, speed: float) -> RouteReport:
        """Measure the current route travelled at ``speed``."""
        if not self.route:
            raise RuntimeError("no route has been planned")
        return measure_route(self.route, self._scene_obstacles(), speed, self.scale)

    def __repr__(self) -> str:
        return (
            f"MapEditor(width={self.width}, height={self.height}, "
            f"scale={self.scale}, mode={self.mode.name}, "
            f"obstacles={len(self.obstacles)})"
        )


def _optional(value: Optional[int]) -> Optional[int]:
    return value