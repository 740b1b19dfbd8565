"""Player movement and the raycasting renderer for walls, floor and ceiling."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .image import Image

Grid = Sequence[Sequence[int]]

_DIRECTIONS: dict[str, tuple[float, float, float, float]] = {
    "N": (-1.0, 0.0, 0.0, 0.66),
    "S": (1.0, 0.0, 0.0, -0.66),
    "E": (0.0, 1.0, 0.66, 0.0),
    "W": (0.0, -1.0, -0.66, 0.0),
}


class TextureFaces(Protocol):
    """Anything carrying one wall texture per face."""

    north: Image
    south: Image
    east: Image
    west: Image


def _is_open(grid: Grid, fx: float, fy: float) -> bool:
    row, col = int(fx), int(fy)
    if row < 0 or row >= len(grid):
        return False
    cells = grid[row]
    if col < 0 or col >= len(cells):
        return False
    return cells[col] == 0


@dataclass
class Player:
    """Position, view direction and camera plane of the player.

    ``x`` is the map row and ``y`` the map column.
    """

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    move_speed: float = 1.0
    rot_speed: float = 0.5

    @classmethod
    def from_char(cls, ch: str, x: float, y: float) -> Player:
        """Create a player standing at (x, y) facing the way marker ``ch`` says."""
        try:
            dir_x, dir_y, plane_x, plane_y = _DIRECTIONS[ch]
        except KeyError:
            raise ValueError(f"not a player marker: {ch!r}") from None
        return cls(float(x), float(y), dir_x, dir_y, plane_x, plane_y)

    def _rotate(self, angle: float) -> None:
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        old_dir_x = self.dir_x
        self.dir_x = self.dir_x * cos_a - self.dir_y * sin_a
        self.dir_y = old_dir_x * sin_a + self.dir_y * cos_a
        old_plane_x = self.plane_x
        self.plane_x = self.plane_x * cos_a - self.plane_y * sin_a
        self.plane_y = old_plane_x * sin_a + self.plane_y * cos_a

    def rotate_left(self) -> None:
        """Turn the view by ``rot_speed`` radians."""
        self._rotate(self.rot_speed)

    def rotate_right(self) -> None:
        """Turn the view by ``-rot_speed`` radians."""
        self._rotate(-self.rot_speed)

    def _walk(self, grid: Grid, dx: float, dy: float, check_dx: float | None = None) -> None:
        probe_dx = dx if check_dx is None else check_dx
        if _is_open(grid, self.x + probe_dx, self.y):
            self.x += dx
        if _is_open(grid, self.x, self.y + dy):
            self.y += dy

    def move_forward(self, grid: Grid) -> None:
        """Step along the view direction, axis by axis, unless a wall is in the way."""
        step = self.move_speed
        self._walk(grid, self.dir_x * step, self.dir_y * step)

    def move_backward(self, grid: Grid) -> None:
        """Step against the view direction, axis by axis, unless a wall is in the way."""
        step = self.move_speed
        self._walk(grid, -self.dir_x * step, -self.dir_y * step)

    def strafe_left(self, grid: Grid) -> None:
        """Step sideways to the left.

        The row is checked on the side the player would reach when strafing
        right, as the movement rules of the game have always done.
        """
        step = self.move_speed
        self._walk(grid, -self.dir_y * step, self.dir_x * step, check_dx=self.dir_y * step)

    def strafe_right(self, grid: Grid) -> None:
        """Step sideways to the right unless a wall is in the way."""
        step = self.move_speed
        self._walk(grid, self.dir_y * step, -self.dir_x * step)


@dataclass(frozen=True)
class RayHit:
    """Where one screen column's ray met a wall.

    ``side`` is 0 when a row boundary was crossed last and 1 for a column
    boundary. ``map_x``/``map_y`` may lie outside the grid when the ray left
    it without meeting a wall.
    """

    map_x: int
    map_y: int
    side: int
    perp_wall_dist: float
    ray_dir_x: float
    ray_dir_y: float


def _delta(ray_dir: float) -> float:
    return math.inf if ray_dir == 0 else abs(1 / ray_dir)


def _in_grid(grid: Grid, row: int, col: int) -> bool:
    return 0 <= row < len(grid) and 0 <= col < len(grid[row])


def cast_ray(grid: Grid, player: Player, column: int, screen_width: int) -> RayHit:
    """Trace the ray for ``column`` of a screen ``screen_width`` pixels wide."""
    camera_x = 2 * column / screen_width - 1
    ray_dir_x = player.dir_x + player.plane_x * camera_x
    ray_dir_y = player.dir_y + player.plane_y * camera_x
    map_x, map_y = int(player.x), int(player.y)
    delta_x, delta_y = _delta(ray_dir_x), _delta(ray_dir_y)

    if ray_dir_x < 0:
        step_x, side_x = -1, (player.x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - player.x) * delta_x
    if ray_dir_y < 0:
        step_y, side_y = -1, (player.y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - player.y) * delta_y

    side = 0
    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        if not _in_grid(grid, map_x, map_y) or grid[map_x][map_y] > 0:
            break

    perp = side_x - delta_x if side == 0 else side_y - delta_y
    return RayHit(map_x, map_y, side, perp, ray_dir_x, ray_dir_y)


def draw_floor_ceiling(image: Image, floor_color: int, ceiling_color: int) -> None:
    """Paint the lower half of ``image`` with the floor and the upper half with the ceiling.

    The rows just around the horizon are left as they are.
    """
    width, height = image.width, image.height
    for y in range(height // 2 + 1, height):
        mirrored = height - y - 1
        for x in range(width):
            image.put_pixel(x, y, floor_color)
            image.put_pixel(x, mirrored, ceiling_color)


def _select_texture(hit: RayHit, textures: TextureFaces) -> Image:
    if hit.side == 0:
        return textures.north if hit.ray_dir_x < 0 else textures.south
    return textures.west if hit.ray_dir_y < 0 else textures.east


def _draw_column(
    image: Image, hit: RayHit, player: Player, textures: TextureFaces, column: int
) -> None:
    dist = hit.perp_wall_dist
    if not math.isfinite(dist) or dist <= 0:
        # A wall at zero distance leaves the column untouched.
        return
    height = image.height
    line_height = int(height / dist)
    if line_height <= 0:
        return
    draw_start = max(0, -(line_height // 2) + height // 2)
    draw_end = min(height - 1, line_height // 2 + height // 2)

    texture = _select_texture(hit, textures)
    tex_w, tex_h = texture.width, texture.height
    if hit.side == 0:
        wall_x = player.y + dist * hit.ray_dir_y
    else:
        wall_x = player.x + dist * hit.ray_dir_x
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * tex_w)
    if (hit.side == 0 and hit.ray_dir_x > 0) or (hit.side == 1 and hit.ray_dir_y < 0):
        tex_x = tex_w - tex_x - 1
    tex_x %= tex_w

    step = tex_h / line_height
    tex_pos = (draw_start - height // 2 + line_height // 2) * step
    for y in range(draw_start, draw_end):
        tex_y = int(tex_pos) % tex_h
        tex_pos += step
        image.put_pixel(column, y, texture.get_pixel(tex_x, tex_y))


def draw_walls(image: Image, grid: Grid, player: Player, textures: TextureFaces) -> None:
    """Cast one ray per column of ``image`` and draw the textured wall slices."""
    for column in range(image.width):
        hit = cast_ray(grid, player, column, image.width)
        _draw_column(image, hit, player, textures, column)


def render_frame(
    image: Image,
    grid: Grid,
    player: Player,
    textures: TextureFaces,
    floor_color: int,
    ceiling_color: int,
) -> Image:
    """Draw floor, ceiling and walls into ``image`` and return it."""
    draw_floor_ceiling(image, floor_color, ceiling_color)
    draw_walls(image, grid, player, textures)
    return image