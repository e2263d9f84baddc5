"""Grid ray casting and textured column drawing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import MutableSequence, Sequence

from .grid import Grid

SCREEN_WIDTH = 640
SCREEN_HEIGHT = 480
TEX_WIDTH = 64
TEX_HEIGHT = 64

NORTH, SOUTH, WEST, EAST = range(4)

_SHADE_MASK = 8355711
_MAX_LINE = 2**31 - 1

Frame = list[list[int]]


@dataclass(frozen=True)
class Camera:
    """Viewer position, view direction and camera plane."""

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float


@dataclass(frozen=True)
class RayHit:
    """Where one screen column's ray met a wall and how to draw it."""

    map_x: int
    map_y: int
    side: int
    distance: float
    line_height: int
    draw_start: int
    draw_end: int
    texture: int
    tex_x: int
    tex_step: float
    tex_pos: float


def _delta(component: float) -> float:
    return abs(1 / component) if component else math.inf


def _half(value: int) -> int:
    return int(value / 2)


def _inside(grid: Grid, x: int, y: int) -> bool:
    return 0 <= x < grid.height and 0 <= y < grid.width


def cast_ray(grid: Grid, camera: Camera, column: int) -> RayHit:
    """Cast the ray for one screen column and work out its wall slice."""
    camera_x = 2 * column / SCREEN_WIDTH - 1
    ray_x = camera.dir_x + camera.plane_x * camera_x
    ray_y = camera.dir_y + camera.plane_y * camera_x
    map_x, map_y = int(camera.x), int(camera.y)
    delta_x, delta_y = _delta(ray_x), _delta(ray_y)

    if ray_x < 0:
        step_x, side_x = -1, (camera.x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - camera.x) * delta_x
    if ray_y < 0:
        step_y, side_y = -1, (camera.y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - camera.y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if not _inside(grid, map_x, map_y) or grid.is_wall(map_x, map_y):
            break

    if side == 0:
        distance = (map_x - camera.x + (1 - step_x) // 2) / ray_x
        texture = NORTH if step_x == -1 else SOUTH
    else:
        distance = (map_y - camera.y + (1 - step_y) // 2) / ray_y
        texture = WEST if step_y == -1 else EAST

    ratio = SCREEN_HEIGHT / distance if distance else math.inf
    if not math.isfinite(ratio) or abs(ratio) >= _MAX_LINE:
        line_height = _MAX_LINE
    else:
        line_height = int(ratio)
    draw_start = max(-_half(line_height) + SCREEN_HEIGHT // 2, 0)
    draw_end = min(_half(line_height) + SCREEN_HEIGHT // 2, SCREEN_HEIGHT - 1)

    if side == 0:
        wall_x = camera.y + distance * ray_y
    else:
        wall_x = camera.x + distance * ray_x
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * TEX_WIDTH)
    if (side == 0 and ray_x > 0) or (side == 1 and ray_y < 0):
        tex_x = TEX_WIDTH - tex_x - 1

    tex_step = TEX_HEIGHT / line_height if line_height else 0.0
    tex_pos = (draw_start - SCREEN_HEIGHT // 2 + _half(line_height)) * tex_step
    return RayHit(
        map_x=map_x,
        map_y=map_y,
        side=side,
        distance=distance,
        line_height=line_height,
        draw_start=draw_start,
        draw_end=draw_end,
        texture=texture,
        tex_x=tex_x,
        tex_step=tex_step,
        tex_pos=tex_pos,
    )


def draw_column(
    frame: Sequence[MutableSequence[int]],
    hit: RayHit,
    column: int,
    textures: Sequence[Sequence[int]],
    floor: int,
    ceiling: int,
) -> None:
    """Paint ceiling, textured wall and floor of one column into ``frame``.

    The rows at ``draw_start`` and ``draw_end`` themselves are left untouched.
    """
    for y in range(hit.draw_start):
        frame[y][column] = ceiling
    texture = textures[hit.texture]
    pos = hit.tex_pos
    for y in range(hit.draw_start + 1, hit.draw_end):
        tex_y = int(pos) & (TEX_HEIGHT - 1)
        pos += hit.tex_step
        color = texture[TEX_WIDTH * tex_y + hit.tex_x]
        if hit.side == 1:
            color = (color >> 1) & _SHADE_MASK
        frame[y][column] = color
    for y in range(hit.draw_end + 1, SCREEN_HEIGHT):
        frame[y][column] = floor


def render_frame(
    grid: Grid,
    camera: Camera,
    textures: Sequence[Sequence[int]],
    floor: int,
    ceiling: int,
) -> Frame:
    """Render a whole screen as rows of 0xRRGGBB colours."""
    frame = [[0] * SCREEN_WIDTH for _ in range(SCREEN_HEIGHT)]
    for column in range(SCREEN_WIDTH):
        hit = cast_ray(grid, camera, column)
        draw_column(frame, hit, column, textures, floor, ceiling)
    return frame