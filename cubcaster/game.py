"""Player state, keyboard input, movement with collision, and texture loading."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Sequence

from .errors import CubError
from .grid import Grid
from .raycast import TEX_HEIGHT, TEX_WIDTH, Camera, Frame, render_frame
from .scene import Scene
from .xpm import load_xpm

ROTATE_SPEED = 0.1
WALK_SPEED = 0.1
RUN_SPEED = 0.25
COLLISION_MARGIN = 0.05
DIRECTION_NUDGE = 0.0001
TEXTURE_COUNT = 4


class Key(IntEnum):
    """Key codes understood by the game."""

    A = 0
    S = 1
    D = 2
    W = 13
    ESC = 53
    LEFT = 123
    RIGHT = 124
    DOWN = 125
    UP = 126
    SHIFT = 257


_ALIASES = {Key.UP: Key.W, Key.DOWN: Key.S}
_HOLDABLE = frozenset({Key.W, Key.S, Key.A, Key.D, Key.LEFT, Key.RIGHT, Key.SHIFT})
_MOVE_KEYS = frozenset({Key.W, Key.A, Key.S, Key.D})

_M = COLLISION_MARGIN
# Sample points around the target position that must all be free of walls.
_PROBES = (
    (0.0, 0.0),
    (_M, 0.0),
    (0.0, _M),
    (_M, _M),
    (-_M, 0.0),
    (0.0, -_M),
    (-_M, _M),
    (_M, -_M),
)


def _canonical(key: int) -> Key | None:
    try:
        key = Key(key)
    except ValueError:
        return None
    return _ALIASES.get(key, key)


@dataclass
class Game:
    """The running game: map, textures, colours and the moving viewer."""

    grid: Grid
    textures: tuple[Sequence[int], ...]
    floor: int
    ceiling: int
    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    speed: float = WALK_SPEED
    held: set[Key] = field(default_factory=set)
    running: bool = True

    @classmethod
    def from_scene(cls, scene: Scene, textures: Iterable[Sequence[int]]) -> "Game":
        """Start a game at the scene's player spawn."""
        player = scene.grid.player
        return cls(
            grid=scene.grid,
            textures=tuple(textures),
            floor=scene.floor,
            ceiling=scene.ceiling,
            x=player.x,
            y=player.y,
            dir_x=player.dir_x + DIRECTION_NUDGE,
            dir_y=player.dir_y,
            plane_x=player.plane_x,
            plane_y=player.plane_y,
        )

    def press(self, key: int) -> None:
        """Handle a key going down; Escape stops the game."""
        canonical = _canonical(key)
        if canonical is Key.ESC:
            self.running = False
        elif canonical in _HOLDABLE:
            self.held.add(canonical)

    def release(self, key: int) -> None:
        """Handle a key coming up."""
        canonical = _canonical(key)
        if canonical in _HOLDABLE:
            self.held.discard(canonical)

    def update(self) -> None:
        """Apply one frame of movement and rotation for the held keys."""
        if self.held & _MOVE_KEYS:
            if Key.W in self.held:
                self.move_forward()
            if Key.A in self.held:
                self.strafe_left()
            if Key.S in self.held:
                self.move_back()
            if Key.D in self.held:
                self.strafe_right()
            self.speed = RUN_SPEED if Key.SHIFT in self.held else WALK_SPEED
        if Key.LEFT in self.held:
            self.rotate(ROTATE_SPEED)
        if Key.RIGHT in self.held:
            self.rotate(-ROTATE_SPEED)

    def rotate(self, angle: float) -> None:
        """Turn the view direction and camera plane by ``angle`` radians."""
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def can_move(self, x: float, y: float) -> bool:
        """Whether the viewer fits at ``(x, y)`` without touching a wall."""
        return not any(
            self.grid.is_wall(int(x + dx), int(y + dy)) for dx, dy in _PROBES
        )

    def _step(self, dx: float, dy: float) -> None:
        if self.can_move(self.x + dx, self.y):
            self.x += dx
        if self.can_move(self.x, self.y + dy):
            self.y += dy

    def _side(self) -> tuple[float, float]:
        quarter = math.acos(-1) / 2
        return (
            self.dir_x * math.cos(quarter) - self.dir_y * math.sin(quarter),
            self.dir_x * math.sin(quarter) + self.dir_y * math.cos(quarter),
        )

    def move_forward(self) -> None:
        self._step(self.dir_x * self.speed, self.dir_y * self.speed)

    def move_back(self) -> None:
        self._step(-self.dir_x * self.speed, -self.dir_y * self.speed)

    def strafe_left(self) -> None:
        side_x, side_y = self._side()
        self._step(side_x * self.speed, side_y * self.speed)

    def strafe_right(self) -> None:
        side_x, side_y = self._side()
        self._step(-side_x * self.speed, -side_y * self.speed)

    @property
    def camera(self) -> Camera:
        return Camera(
            x=self.x,
            y=self.y,
            dir_x=self.dir_x,
            dir_y=self.dir_y,
            plane_x=self.plane_x,
            plane_y=self.plane_y,
        )

    def render(self) -> Frame:
        """Render the current view as rows of 0xRRGGBB colours."""
        return render_frame(
            self.grid, self.camera, self.textures, self.floor, self.ceiling
        )


def load_textures(
    paths: Iterable[str | os.PathLike[str] | None],
) -> list[list[int]]:
    """Load the north, south, west and east wall textures into 64x64 buffers."""
    paths = list(paths)
    if len(paths) != TEXTURE_COUNT:
        raise CubError("Invalid texture count")
    size = TEX_WIDTH * TEX_HEIGHT
    textures = []
    for path in paths:
        if path is None:
            raise CubError("Invalid xpm file image")
        image = load_xpm(path)
        if image.width * image.height > size:
            raise CubError("Invalid xpm file image")
        buffer = list(image.pixels)
        buffer.extend([0] * (size - len(buffer)))
        textures.append(buffer)
    return textures