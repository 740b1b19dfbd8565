# cubraycast

A small first-person raycaster in the classic grid style. It reads a `.cub`
scene file that names four wall textures (XPM images) and the floor and
ceiling colours, checks the map, and opens a 640×480 window titled `cub3d`
where you can walk around the maze.

## Installing

```
pip install .
```

This installs the `cubraycast` command and its one dependency, `pygame`.

## Running

```
cubraycast maps/level.cub
```

The command takes exactly one argument, and the file's last extension must
start with `.cub`. If anything is wrong with the arguments, the scene, the map
or a texture, it prints `Error` followed by a short reason on the next line
and exits with status 1.

The same entry point can be reached with `python -m cubraycast.app`.

### Controls

| Key          | Action              |
|--------------|---------------------|
| W / S        | move forward / back |
| A / D        | step left / right   |
| Left / Right | turn                |
| Esc          | quit                |

Closing the window also quits. Movement is blocked by walls one axis at a
time, so you slide along a wall rather than stopping dead.

## The `.cub` format

The file begins with six identifier lines, in any order, each given exactly
once. Lines holding no letter or digit are skipped before and between them,
and the identifier may be indented with spaces or tabs.

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE` and `EA` give the path to an XPM texture. The file must be
  readable; relative paths are taken from the current directory.
- `F` (floor) and `C` (ceiling) give three colour components. Each must be
  written plainly (no sign, no leading zeros) and lie between 0 and 255.
- Any other identifier is rejected (`Wrong ID`), as is a missing or repeated
  one (`Duplicate IDs`).

Textures are applied to the opposite face: walls seen from the south show the
`SO` image, walls seen from the west show the `WE` image, and so on.

The map follows, after any number of blank lines:

```
        1111111111111
        1000000000001
        1011000001101
111111111001000000001
100000000011000001101
11110111111111011100001
1111011111111101110N001
11000000110101011100001
1001000000000000000001
1111111111111111111111
```

- `0` is empty floor and `1` is wall. A space is outside the map. No other
  characters are allowed besides the player marker.
- `N`, `S`, `E` or `W` marks where the player starts and which way they face.
  There must be exactly one.
- The map must be closed: every run of non-space cells, across each row and
  down each column, must begin and end with a wall. Short rows are treated as
  padded with spaces.
- The map must be at least 3 rows and 3 columns.
- Empty lines inside the map are dropped; a row made only of spaces or tabs
  is an error.

## XPM textures

`cubraycast.xpm` reads XPM files: C-style comments are removed, the quoted
strings are taken in order as the header, colour table and pixel rows.
Colours may be `#RRGGBB` or a name from the built-in X11 colour table
(`cubraycast.colors.lookup_color`); unknown names give black, and `None`
gives a transparent marker value (`0xFF000000`).

## Using it as a library

```python
from cubraycast.scene import load_scene
from cubraycast.map import store_map, store_midmap, check_map_walls, find_player
from cubraycast.render import Player, render_frame
from cubraycast.image import Image
from cubraycast.app import load_textures

scene = load_scene("maps/level.cub")
check_map_walls(store_midmap(scene.map_lines))
grid = store_map(scene.map_lines)
row, col, marker = find_player(scene.map_lines)
player = Player.from_char(marker, row, col)

frame = render_frame(Image(640, 480), grid, player, load_textures(scene),
                     scene.floor_color, scene.ceiling_color)
frame.get_pixel(320, 470)   # a floor pixel, 0x00RRGGBB
```

- `cubraycast.scene` reads and checks the identifier section (`Scene`,
  `load_scene`, `check_argument`).
- `cubraycast.map` measures the map, finds the player, builds grids and checks
  characters, size, players and walls.
- `cubraycast.text` holds the small character and number helpers.
- `cubraycast.colors` and `cubraycast.xpm` decode XPM images.
- `cubraycast.image` provides `Image`, a grid of 32-bit pixels, and
  `convert_color` for displays shallower than 24 bits.
- `cubraycast.render` provides `Player`, `cast_ray` and the drawing functions.
- `cubraycast.app` loads textures (`TextureSet`, `load_textures`), maps keys
  to moves (`handle_key`), runs the window loop (`run`) and holds `main`.

Errors are raised as exceptions: `ParseError`, `MapError` and `XpmError`, all
subclasses of `ValueError`.

## What it does not do

There are no sprites, doors, minimap, mouse look or sound, and textures are
read only from XPM files. Only the wall faces are textured; floor and ceiling
are flat colours.

## Running the tests

```
pip install .[test]
pytest
```