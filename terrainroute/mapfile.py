"""Reading and writing map and route documents in XML."""

from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from os import PathLike
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple, Union

from terrainroute.obstacle import MAX_ALPHA, Obstacle

GridPoint = Tuple[int, int]
FileName = Union[str, "PathLike[str]"]

DEFAULT_WIDTH = 1090
DEFAULT_HEIGHT = 670
_INDENT = "    "
_INT_RE = re.compile(r"[+-]?\d+")


def _format_number(value: float) -> str:
    """Shortest general form with six significant digits."""
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if math.isnan(value):
        return "nan"
    text = f"{value:.6g}"
    return "0" if text == "-0" else text


def _to_int(text: Optional[str]) -> int:
    """Parse a whole decimal integer; anything else reads as 0."""
    if text is None:
        return 0
    text = text.strip()
    return int(text) if _INT_RE.fullmatch(text) else 0


def _descendants(element: ET.Element, tag: str) -> Iterator[ET.Element]:
    return (child for child in element.iter(tag) if child is not element)


def _serialise(root: ET.Element) -> str:
    ET.indent(root, space=_INDENT)
    return ET.tostring(root, encoding="unicode") + "\n"


@dataclass
class MapDocument:
    """Map size in pixels, pixels-per-metre scale and its obstacles.

    ``width``, ``height`` or ``scale`` are ``None`` when a loaded file
    does not state them.
    """

    width: Optional[int] = DEFAULT_WIDTH
    height: Optional[int] = DEFAULT_HEIGHT
    scale: Optional[float] = 1.0
    obstacles: Tuple[Obstacle, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.obstacles = tuple(self.obstacles)


@dataclass(frozen=True)
class RouteReport:
    """A finished route with its length, travel speed and travel time."""

    points: Tuple[GridPoint, ...]
    length: float
    speed: float
    time: float

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "points", tuple((int(x), int(y)) for x, y in self.points)
        )


def measure_route(
    path: Sequence[GridPoint],
    obstacles: Iterable[Obstacle],
    speed: float,
    scale: float,
) -> RouteReport:
    """Length in metres and time taken, slowed down inside obstacles.

    Each segment is travelled at ``speed`` reduced by the obstruction of the
    obstacle containing its starting point.
    """
    if speed <= 0:
        raise ValueError("speed must be positive")
    if scale == 0:
        raise ValueError("scale must not be zero")
    points = [(int(x), int(y)) for x, y in path]
    obstacles = list(obstacles)

    levels: Dict[GridPoint, int] = {}
    for point in points:
        for obstacle in obstacles:
            if obstacle.contains(point):
                levels[point] = obstacle.alpha()
        levels.setdefault(point, 0)

    length = 0.0
    time = 0.0
    for start, end in zip(points, points[1:]):
        segment = math.dist(start, end)
        length += segment
        passability = 1.0 - levels[start] / MAX_ALPHA
        if passability <= 0:
            time = math.inf
        else:
            time += segment / speed / passability
    return RouteReport(tuple(points), length / scale, speed, time)


def map_to_xml(document: MapDocument) -> str:
    """Serialise a map to its XML text."""
    root = ET.Element("map")
    if document.width is not None and document.height is not None:
        ET.SubElement(
            root,
            "resolution",
            {"x": _format_number(document.width), "y": _format_number(document.height)},
        )
    if document.scale is not None:
        ET.SubElement(root, "scale").text = _format_number(document.scale)
    objects = ET.SubElement(root, "objects")
    for number, obstacle in enumerate(document.obstacles, start=1):
        element = ET.SubElement(objects, "object", {"id": str(number)})
        ET.SubElement(element, "durability").text = f"{obstacle.transparency}%"
        points = ET.SubElement(element, "points")
        for x, y in obstacle.points:
            ET.SubElement(points, "point", {"x": str(x), "y": str(y)})
    return _serialise(root)


def map_from_xml(text: str) -> MapDocument:
    """Parse map XML; malformed numbers read as 0, missing parts as None."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ValueError(f"malformed map document: {exc}") from exc

    width: Optional[int] = None
    height: Optional[int] = None
    resolution = root.find("resolution")
    if resolution is not None:
        width = _to_int(resolution.get("x"))
        height = _to_int(resolution.get("y"))

    scale: Optional[float] = None
    scale_element = root.find("scale")
    if scale_element is not None:
        scale = float(_to_int("".join(scale_element.itertext())))

    obstacles = []
    for element in _descendants(root, "object"):
        durability = element.find("durability")
        raw = "" if durability is None else "".join(durability.itertext())
        transparency = _to_int(raw.replace("%", ""))
        points = []
        container = element.find("points")
        if container is not None:
            for point in _descendants(container, "point"):
                points.append((_to_int(point.get("x")), _to_int(point.get("y"))))
        obstacles.append(Obstacle(tuple(points), transparency))

    return MapDocument(width, height, scale, tuple(obstacles))


def route_to_xml(report: RouteReport) -> str:
    """Serialise a route report to its XML text."""
    root = ET.Element("path")
    ET.SubElement(root, "length").text = _format_number(report.length) + "м"
    ET.SubElement(root, "speed").text = _format_number(report.speed) + "м/ч"
    ET.SubElement(root, "time").text = _format_number(report.time) + "ч"
    points = ET.SubElement(root, "points")
    for number, (x, y) in enumerate(report.points, start=1):
        ET.SubElement(points, "point", {"id": str(number), "x": str(x), "y": str(y)})
    return _serialise(root)


def read_map(filename: FileName) -> MapDocument:
    """Load a map from an XML file."""
    with open(filename, encoding="utf-8") as stream:
        return map_from_xml(stream.read())


def write_map(filename: FileName, document: MapDocument) -> None:
    """Save a map to an XML file."""
    with open(filename, "w", encoding="utf-8") as stream:
        stream.write(map_to_xml(document))


def write_route(filename: FileName, report: RouteReport) -> None:
    """Save a route report to an XML file."""
    with open(filename, "w", encoding="utf-8") as stream:
        stream.write(route_to_xml(report))