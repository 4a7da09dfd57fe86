# cubcaster

A small first-person raycasting renderer. It reads a `.cub` scene file that
names four wall textures, a floor colour, a ceiling colour and a grid map,
checks it, and opens a pygame window in which you can walk around the maze.

## Installing

```
pip install .
```

## Running

```
cubcaster path/to/level.cub
```

The command takes exactly one argument, a file whose name ends in `.cub`.
A problem with the arguments, the scene file or a texture is written to
standard error as `Error` followed by a message, and the command exits with
status 1. The command also exits with status 1 after the window is closed.

### Controls

| Key             | Action              |
|-----------------|---------------------|
| `W` / `S`       | walk forward / back |
| `A` / `D`       | strafe left / right |
| `Left` / `Right`| turn                |
| `Esc`           | quit                |

Closing the window also quits. Movement is blocked when the new position
would bring the player too close to a wall.

## Scene files

A scene file starts with six header lines, in any order, with any number of
blank lines between them:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png

F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE` and `EA` each give the image file (PNG) used for walls
  seen from that side. Each line holds the identifier and one path,
  separated by a space.
- `F` and `C` give the floor and ceiling colours as three comma-separated
  whole numbers from 0 to 255.

The map follows the header. It uses `1` for walls, `0` for open floor,
spaces for empty space, and exactly one of `N`, `S`, `E` or `W` for the
player's starting cell and the direction the player faces. The map must be
closed: no `0` or player cell may touch empty space or the edge of the map,
the first and last rows and the ends of every row may not hold them, and the
map may not contain empty lines. The file must not end with a newline.

```
111111
100001
1000N1
111111
```

## Using it as a library

Parsing, raycasting and drawing work without opening a window:

```python
from cubcaster.scene import load_scene, SceneError
from cubcaster.raycast import find_player, cast_rays

scene = load_scene("level.cub")          # raises SceneError if invalid
player = find_player(scene.game_map)
rays = cast_rays(player, scene.game_map) # one Ray per screen column

player = player.moved(scene.game_map, 1, 0.0)  # one step forward
```

The modules:

- `cubcaster.geometry` — constants (`TILE_SIZE`, `WINDOW_WIDTH`,
  `WINDOW_HEIGHT`, `FOV`, …), the `Colour`, `Ray` and `GameMap` types and
  small helpers such as `normalize_angle`, `ray_distance` and `closer_ray`.
- `cubcaster.textutils` — text helpers used while reading scene files
  (`parse_colour_component`, `split_fields`, `strip_chars`, `is_blank`,
  `read_raw_lines`).
- `cubcaster.scene` — `load_scene`, `parse_scene` and the individual checks
  (`select_header`, `validate_colour`, `validate_map`, `check_layout`, …),
  producing a `Scene` or raising `SceneError`.
- `cubcaster.raycast` — `Player`, `find_player`, `blocked`,
  `vertical_ray`, `horizontal_ray` and `cast_rays`.
- `cubcaster.render` — `Texture`, `Frame` (pixels as `0xRRGGBBAA` in a
  numpy array indexed `[y, x]`), `render_walls`, `render_column`,
  `draw_floor_ceiling` and the shape helpers `draw_line`, `draw_circle` and
  `draw_square`.
- `cubcaster.app` — `load_texture`, `check_extension`, `key_intent`, the
  `Game` class (`step`, `render`, `run`) and `main`.

## What it does not do

There is no minimap, no doors, no sprites and no mouse look; the view is
walls, floor and ceiling only, steered with the keyboard.

## Tests

```
pip install .[test]
pytest
```