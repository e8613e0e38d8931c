"""Terrain maps with weighted polygon obstacles, A* route search, editing state and XML map and route files."""

__version__ = "0.1.0"

__all__ = ["astar", "cli", "editor", "mapfile", "obstacle"]