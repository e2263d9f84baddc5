"""The map grid: parsing, player spawn and wall enclosure checks."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .errors import CubError

PLAYER_CHARS = "NSEW"
MAP_CHARS = "01NSWE "
FLOOR_CHARS = "0NESW"
PLANE_LENGTH = 0.66

_FACING_ANGLES = {
    "N": math.pi,
    "E": math.pi / 2,
    "S": 0.0,
    "W": -(math.pi / 2),
}


@dataclass(frozen=True)
class Player:
    """Starting position, view direction and camera plane of the player.

    ``x`` runs along rows and ``y`` along columns of the map.
    """

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    facing: str

    @classmethod
    def spawn(cls, row: int, col: int, facing: str) -> "Player":
        """Place a player in the centre of a cell, looking towards ``facing``."""
        angle = _FACING_ANGLES[facing]
        plane_angle = angle - math.pi / 2
        return cls(
            x=row + 0.5,
            y=col + 0.5,
            dir_x=math.cos(angle),
            dir_y=math.sin(angle),
            plane_x=PLANE_LENGTH * math.cos(plane_angle),
            plane_y=PLANE_LENGTH * math.sin(plane_angle),
            facing=facing,
        )


@dataclass(frozen=True)
class Grid:
    """A validated, enclosed map together with its player."""

    rows: tuple[str, ...]
    player: Player

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def cell(self, x: int, y: int) -> str:
        """Return the character at row ``x``, column ``y``; outside the map is void."""
        if 0 <= x < len(self.rows):
            row = self.rows[x]
            if 0 <= y < len(row):
                return row[y]
        return " "

    def is_wall(self, x: int, y: int) -> bool:
        return self.cell(x, y) == "1"


def parse_grid(text: str) -> Grid:
    """Parse map text into a grid, validating characters, player and walls."""
    rows = tuple(line for line in text.split("\n") if line)
    player: Player | None = None
    for x, row in enumerate(rows):
        for y, char in enumerate(row):
            if char in PLAYER_CHARS:
                if player is not None:
                    raise CubError("Invalid Player Data")
                player = Player.spawn(x, y, char)
            elif char not in MAP_CHARS:
                raise CubError("Invalid data")
    if player is None:
        raise CubError("Invalid Player Data")
    check_enclosed(rows)
    return Grid(rows=rows, player=player)


def check_enclosed(rows: Iterable[str]) -> None:
    """Raise CubError unless every walkable cell is shut in by walls."""
    rows = list(rows)
    height = len(rows)
    width = max((len(row) for row in rows), default=0)
    visited: set[tuple[int, int]] = set()
    for x, row in enumerate(rows):
        for y, char in enumerate(row):
            if char in FLOOR_CHARS and (x, y) not in visited:
                _flood(rows, height, width, (x, y), visited)


def _flood(
    rows: list[str],
    height: int,
    width: int,
    start: tuple[int, int],
    visited: set[tuple[int, int]],
) -> None:
    stack = [start]
    while stack:
        x, y = stack.pop()
        if x < 0 or y < 0 or x >= height or y >= width:
            raise CubError("invalid cover wall")
        row = rows[x]
        char = row[y] if y < len(row) else ""
        if char == "1" or (x, y) in visited:
            continue
        if char in ("", " ", "\n"):
            raise CubError("invalid wall")
        visited.add((x, y))
        # Pushed in reverse so cells are explored down, up, right, left.
        stack.extend(((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)))