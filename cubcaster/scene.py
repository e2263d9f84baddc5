"""Scene description files: texture paths, colours and the map."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from .errors import CubError
from .grid import Grid, parse_grid

SCENE_EXTENSION = ".cub"

_TEXTURE_KEYS = {"NO ": "north", "SO ": "south", "WE ": "west", "EA ": "east"}
_COLOR_KEYS = {"F ": "floor", "C ": "ceiling"}
_DIGITS = frozenset("0123456789")
_LEADING_DIGITS = re.compile(r"[0-9]*")


@dataclass(frozen=True)
class Scene:
    """Everything a scene file describes."""

    grid: Grid
    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    floor: int = 0
    ceiling: int = 0

    @property
    def texture_paths(self) -> tuple[str | None, str | None, str | None, str | None]:
        """Texture paths in north, south, west, east order."""
        return (self.north, self.south, self.west, self.east)


def parse_color(text: str) -> int:
    """Parse ``R,G,B`` into a packed 0xRRGGBB integer."""
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3 or any(not set(part) <= _DIGITS for part in parts):
        raise CubError("Invalid RGB Format")
    channels = []
    pos = 0
    for _ in range(3):
        digits = _LEADING_DIGITS.match(text, pos).group()
        channels.append(int(digits) if digits else 0)
        pos += len(digits) + 1
    if any(not 0 <= value <= 255 for value in channels):
        raise CubError("Invalid RGB Format")
    red, green, blue = channels
    return (red << 16) | (green << 8) | blue


def _check_texture(path: str) -> str:
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError as exc:
        raise CubError("Invalid .xpm File") from exc
    os.close(fd)
    return path


def parse_scene(text: str) -> Scene:
    """Parse the contents of a scene file."""
    fields: dict[str, object] = {}
    map_lines: list[str] = []
    for line in (line for line in text.split("\n") if line):
        texture = next((f for k, f in _TEXTURE_KEYS.items() if line.startswith(k)), None)
        if texture is not None:
            fields[texture] = _check_texture(line[3:])
            continue
        color = next((f for k, f in _COLOR_KEYS.items() if line.startswith(k)), None)
        if color is not None:
            fields[color] = parse_color(line[2:])
            continue
        if line[0] in "1 ":
            map_lines.append(line)
            continue
        raise CubError("Invalid File Data")
    grid = parse_grid("\n".join(map_lines))
    return Scene(grid=grid, **fields)


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and parse a ``.cub`` scene file."""
    path = os.fspath(path)
    if not path.endswith(SCENE_EXTENSION):
        raise CubError("Invalid scene file extension")
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as fh:
            text = fh.read()
    except OSError as exc:
        raise CubError("Cannot open scene file") from exc
    return parse_scene(text)