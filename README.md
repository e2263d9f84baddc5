# cubcaster

A small first-person maze explorer. It reads a `.cub` scene file that names
four wall textures (XPM images), a floor colour, a ceiling colour and a grid
map, then draws the walls with textured raycasting in a 640×480 pygame window.

## Installing

```
pip install .
```

## Running

```
cubcaster maps/example.cub
```

Exactly one argument is expected, and it must end in `.cub`. Any problem with
the scene or its textures is reported as `Error: <reason>` on standard error,
and the command exits with status 1. Leaving the game prints `EXIT CUB3D`;
the command also exits with status 1 then.

### Controls

| Key                | Action          |
|--------------------|-----------------|
| W / Up             | move forward    |
| S / Down           | move back       |
| A                  | strafe left     |
| D                  | strafe right    |
| Left / Right       | turn            |
| Shift (held)       | move faster     |
| Esc / close window | quit            |

Moving checks a small margin around the viewer, so walls cannot be walked
into.

## Scene files

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

111111
100101
101001
1100N1
111111
```

* `NO`, `SO`, `WE`, `EA` give the path of each wall texture; each file must
  exist and be an XPM image of at most 64×64 pixels.
* `F` and `C` give the floor and ceiling colours as three comma-separated
  decimal values from 0 to 255. A colour that is not given is black.
* Map rows begin with `1` or a space; blank lines are skipped. The map may
  hold only `0`, `1`, spaces and exactly one player start, `N`, `S`, `E` or
  `W`. Every open cell must be closed in by walls.

## Library use

The pieces work on their own as well:

```python
from cubcaster.scene import load_scene, parse_color
from cubcaster.game import Game, load_textures

scene = load_scene("maps/example.cub")
textures = load_textures(scene.texture_paths)
game = Game.from_scene(scene, textures)
game.update()
frame = game.render()   # 480 rows of 640 0xRRGGBB pixels

parse_color("255,128,0")   # 0xFF8000
```

* `cubcaster.scene` — `parse_scene`, `load_scene` and the `Scene` dataclass.
* `cubcaster.grid` — `parse_grid`, `check_enclosed`, `Grid` and `Player`.
* `cubcaster.xpm` — `parse_xpm`, `load_xpm` and `XpmImage`, plus the helpers
  `strip_comments` and `split_words`.
* `cubcaster.colors.lookup_color` — resolves X11 colour names used in XPM
  files (`"none"` gives -1, unknown names give `None`).
* `cubcaster.raycast` — `cast_ray`, `draw_column` and `render_frame`, which
  draw from a `Grid` and a `Camera`.
* `cubcaster.game` — `Game`, the `Key` codes it accepts in `press` and
  `release`, and `load_textures`.
* `cubcaster.app` — `main`, `run` and `check_arguments`.

Invalid input raises `cubcaster.errors.CubError`.

## What it does not do

There is no minimap, no sprites, no doors and no mouse look. Textures are
read only from XPM files, and floor and ceiling are flat colours.

## Tests

```
pip install .[test]
pytest
```