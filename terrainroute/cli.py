"""Command line for inspecting maps and planning routes across them."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from terrainroute.editor import MapEditor
from terrainroute.mapfile import read_map, route_to_xml, write_route


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terrainroute", description="Plan routes across terrain maps."
    )
    commands = parser.add_subparsers(dest="command", required=True)

    info = commands.add_parser("info", help="describe a map file")
    info.add_argument("map", help="map XML file")

    route = commands.add_parser("route", help="plan a route across a map")
    route.add_argument("map", help="map XML file")
    route.add_argument("start_x", type=float)
    route.add_argument("start_y", type=float)
    route.add_argument("end_x", type=float)
    route.add_argument("end_y", type=float)
    route.add_argument("--speed", type=float, default=1.0, help="travel speed in m/h")
    route.add_argument("--output", help="write the route XML to this file")
    return parser


def _load(path: str) -> MapEditor:
    editor = MapEditor()
    editor.load(read_map(path))
    return editor


def _info(args: argparse.Namespace) -> int:
    editor = _load(args.map)
    print(
        f"{editor.width}x{editor.height}, scale {editor.scale:g}, "
        f"{len(editor.obstacles)} obstacles"
    )
    return 0


def _route(args: argparse.Namespace) -> int:
    editor = _load(args.map)
    editor.begin_route()
    for x, y in ((args.start_x, args.start_y), (args.end_x, args.end_y)):
        if not editor.click(x, y):
            editor.cancel()
            print(f"error: point ({x:g}, {y:g}) is impassable", file=sys.stderr)
            return 1
    editor.confirm()
    report = editor.route_report(args.speed)
    if args.output:
        write_route(args.output, report)
    else:
        sys.stdout.write(route_to_xml(report))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line; return the exit status."""
    args = _build_parser().parse_args(argv)
    handler = _info if args.command == "info" else _route
    try:
        return handler(args)
    except (OSError, ValueError, RuntimeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())