[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "terrainroute"
version = "0.1.0"
description = "Terrain maps with weighted polygon obstacles, A* route search and XML map and route files"
requires-python = ">=3.10"
dependencies = []
keywords = ["a-star", "pathfinding", "route", "terrain", "map", "obstacles", "xml"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
terrainroute = "terrainroute.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["terrainroute"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
