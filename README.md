# terrainroute

Plan routes across a rectangular terrain map that holds polygon obstacles.
Each obstacle has a transparency in percent: a fully opaque obstacle cannot
be crossed, a partly transparent one can be crossed at a higher cost.
Routes are found with A* on an 8-connected integer grid and then thinned to
their turning points. Maps and measured routes are stored as XML files.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

The package installs the `terrainroute` command, which has two subcommands.

Describe a map file (size, scale and number of obstacles):

```
terrainroute info terrain.xml
```

Plan a route between two points and print the route XML:

```
terrainroute route terrain.xml 10 10 400 300 --speed 5
terrainroute route terrain.xml 10 10 400 300 --speed 5 --output route.xml
```

`--speed` is the travel speed in m/h (default 1). With `--output` the route
is written to that file instead of standard output. The command exits with
status 1 and a message on standard error if a start or end point lies in a
fully opaque obstacle, if no route exists, or if the map file cannot be
read or parsed.

## Library use

### Obstacles

`terrainroute.obstacle.Obstacle(points, transparency)` is a frozen
dataclass: a polygon given by integer corner points and an obstruction
level in percent.

- `alpha()` gives the opacity on a 0–255 scale (`transparency * 255 / 100`,
  truncated and clamped).
- `contains(point)` is true when the point lies inside the polygon or within
  1.5 units of its edges (the drawn outline).
- `segment_touches(start, end)` is true when a probe line of width 1 from
  `start` to `end` overlaps the polygon.

An obstacle with fewer than three points contains nothing and touches
nothing.

### Finding a route

```python
from terrainroute.astar import find_path, optimise_path
from terrainroute.obstacle import Obstacle

obstacles = [Obstacle(((20, 0), (30, 0), (30, 60), (20, 60)), 100)]
path = find_path((0, 0), (50, 10), 100, 100, obstacles)
route = optimise_path(path, obstacles)
```

- `find_path(start, end, width, height, obstacles)` searches cells with
  `0 <= x < width` and `0 <= y < height`. Straight steps cost 1, diagonal
  steps 1.4, each multiplied by the cost factor of the cell entered. It
  returns a list of `(x, y)` tuples from start to end, or `[]` if the end
  cannot be reached.
- `movement_cost(to, obstacles)` is that cost factor: 1 divided by
  `1 - alpha/255` for every obstacle containing the cell, or `math.inf` if
  any of them is fully opaque.
- `remove_collinear(path)` drops points lying on straight or diagonal runs.
- `remove_redundant(path, obstacles)` keeps only the points needed where a
  straight segment would cross into an obstacle that neither of its ends
  lies in.
- `optimise_path(path, obstacles)` applies both in turn.

The simplification functions raise `ValueError` for an empty path.

### Map and route files

```python
from terrainroute.mapfile import read_map, write_map, measure_route, write_route

document = read_map("terrain.xml")        # a MapDocument
write_map("copy.xml", document)

report = measure_route(route, document.obstacles, speed=5, scale=1)
write_route("route.xml", report)          # a RouteReport
```

- `MapDocument(width, height, scale, obstacles)` holds the map size in
  pixels (default 1090×670), the scale in pixels per metre (default 1) and
  the obstacles. A loaded file that lacks the resolution or scale gives
  `None` for those fields.
- `RouteReport(points, length, speed, time)` holds a measured route.
- `measure_route(path, obstacles, speed, scale)` sums segment lengths and
  divides the total by `scale` to give metres. Time is the sum of each
  segment length divided by `speed` and by the passability
  (`1 - alpha/255`) at the segment's starting point; a segment starting in a
  fully opaque obstacle makes the time infinite. It raises `ValueError` for
  a speed that is not positive or a zero scale.
- `map_to_xml`, `map_from_xml` and `route_to_xml` work on strings;
  `read_map`, `write_map` and `write_route` work on files (UTF-8).
  `map_from_xml` reads malformed numbers as 0 and raises `ValueError` for
  text that is not well-formed XML.

A map file has a `<map>` root with `<resolution x=".." y=".."/>`,
`<scale>`, and `<objects>` holding numbered `<object>` elements, each with a
`<durability>` such as `40%` and `<points>` of `<point x=".." y=".."/>`.
A route file has a `<path>` root with `<length>` (in м), `<speed>` (in м/ч),
`<time>` (in ч) and numbered `<point>` elements.

### Editor state

`terrainroute.editor.MapEditor(width, height, scale)` keeps the editing
state of a map. Its `mode` is a `Mode` (`IDLE`, `ADD`, `DELETE`, `ROUTE`).

- `begin_add()`, `begin_delete()` and `begin_route()` start an action; they
  raise `RuntimeError` if another one is in progress.
- `click(x, y)` places a point (rounded to integers) and returns whether it
  was accepted. In route mode at most two points are taken, and points inside
  a fully opaque obstacle are refused.
- `points` lists the placed points and `ready` tells whether the action can
  be confirmed: three or more points to add an obstacle, one or more to
  delete, exactly two for a route.
- `confirm(transparency)` finishes the action: adds an obstacle with that
  transparency, removes every obstacle containing a placed point, or plans
  and simplifies a route into `route`. It raises `RuntimeError` when not
  ready and `ValueError` when no route exists.
- `cancel()` abandons the action.
- `set_width`, `set_height`, `zoom_in` and `zoom_out` (scale ±0.2) change
  the map; `status_message(x, y)` gives the status-line text for a cursor
  position.
- `load(document)` replaces the map, `document()` returns it as a
  `MapDocument`, and `route_report(speed)` measures the current route
  (`RuntimeError` if none has been planned).

## What the package does not do

There is no graphical editor: `MapEditor` holds the editing state and
applies the actions, but nothing draws the map or takes mouse input. The
command line only describes maps and plans routes; creating or changing
obstacles is done through the library.