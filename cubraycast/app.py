"""Game window, texture loading, key handling and the command entry point."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum

from .image import Image
from .map import (
    MapError,
    check_map_character,
    check_map_line,
    check_map_players,
    check_map_size,
    check_map_walls,
    find_player,
    measure_map,
    store_map,
    store_midmap,
)
from .render import Grid, Player, render_frame
from .scene import ParseError, Scene, check_argument, load_scene
from .xpm import XpmError, xpm_from_file

SCREEN_WIDTH = 640
SCREEN_HEIGHT = 480
WINDOW_TITLE = "cub3d"
FRAMES_PER_SECOND = 60


class Key(IntEnum):
    """Key codes understood by :func:`handle_key` (X keysym values)."""

    A = 0x61
    D = 0x64
    S = 0x73
    W = 0x77
    LEFT = 0xFF51
    RIGHT = 0xFF53
    ESCAPE = 0xFF1B


@dataclass(frozen=True)
class TextureSet:
    """One wall texture per face, as used by the renderer."""

    north: Image
    south: Image
    east: Image
    west: Image


def load_textures(scene: Scene) -> TextureSet:
    """Read the four wall textures named in ``scene``.

    Each face is drawn with the image of the opposite identifier: the north
    face shows the ``SO`` texture, the east face the ``WE`` texture, and so on.
    """
    return TextureSet(
        north=xpm_from_file(scene.path_south),
        east=xpm_from_file(scene.path_west),
        west=xpm_from_file(scene.path_east),
        south=xpm_from_file(scene.path_north),
    )


def handle_key(player: Player, grid: Grid, key: int) -> bool:
    """Apply a key press to ``player``.

    Returns False when the key asks to quit, True otherwise. Unknown keys
    leave the player as it is.
    """
    try:
        code = Key(key)
    except ValueError:
        return True
    if code is Key.ESCAPE:
        return False
    actions = {
        Key.W: player.move_forward,
        Key.S: player.move_backward,
        Key.A: player.strafe_left,
        Key.D: player.strafe_right,
    }
    if code in actions:
        actions[code](grid)
    elif code is Key.RIGHT:
        player.rotate_right()
    elif code is Key.LEFT:
        player.rotate_left()
    return True


def _to_rgb_bytes(image: Image) -> bytes:
    data = image.to_bytes()
    rgb = bytearray(image.width * image.height * 3)
    rgb[0::3] = data[2::4]
    rgb[1::3] = data[1::4]
    rgb[2::3] = data[0::4]
    return bytes(rgb)


def run(scene: Scene, grid: Grid, player: Player) -> int:
    """Open the game window and run the render loop until the player quits."""
    textures = load_textures(scene)

    import pygame

    key_map = {
        pygame.K_w: Key.W,
        pygame.K_s: Key.S,
        pygame.K_a: Key.A,
        pygame.K_d: Key.D,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_ESCAPE: Key.ESCAPE,
    }
    size = (SCREEN_WIDTH, SCREEN_HEIGHT)
    pygame.init()
    try:
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        image = Image(*size)
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    code = key_map.get(event.key)
                    if code is None:
                        continue
                    if not handle_key(player, grid, code):
                        running = False
                        break
                    image = Image(*size)
            if not running:
                break
            render_frame(
                image, grid, player, textures, scene.floor_color, scene.ceiling_color
            )
            surface = pygame.image.frombuffer(_to_rgb_bytes(image), size, "RGB")
            screen.blit(surface, (0, 0))
            pygame.display.flip()
            clock.tick(FRAMES_PER_SECOND)
    finally:
        pygame.quit()
    return 0


def _prepare(filename: str) -> tuple[Scene, Grid, Player]:
    scene = load_scene(filename)
    rows = scene.map_lines
    check_map_line(rows)
    check_map_character(rows)
    check_map_players(rows)
    width, height = measure_map(rows)
    check_map_size(width, height)
    check_map_walls(store_midmap(rows))
    grid = store_map(rows)
    found = find_player(rows)
    if found is None:
        raise MapError("Number of players incorrect")
    row, col, marker = found
    return scene, grid, Player.from_char(marker, row, col)


def main(argv: Sequence[str] | None = None) -> int:
    """Validate a .cub scene given on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        filename = check_argument(args)
        scene, grid, player = _prepare(filename)
        return run(scene, grid, player)
    except (ParseError, MapError, XpmError) as exc:
        print(f"Error\n{exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())