import math
from types import SimpleNamespace

import pytest

from cubraycast.image import Image
from cubraycast.render import (
    Player,
    RayHit,
    cast_ray,
    draw_floor_ceiling,
    draw_walls,
    render_frame,
)

NORTH, SOUTH, EAST, WEST = 0x110000, 0x002200, 0x000033, 0x444444
FLOOR, CEILING = 0x00AA00, 0x0000BB


def boxed_grid(size=5):
    return [
        [1 if r in (0, size - 1) or c in (0, size - 1) else 0 for c in range(size)]
        for r in range(size)
    ]


def solid(color):
    image = Image(4, 4)
    image.fill(color)
    return image


def faces():
    return SimpleNamespace(
        north=solid(NORTH), south=solid(SOUTH), east=solid(EAST), west=solid(WEST)
    )


@pytest.mark.parametrize(
    "ch, expected",
    [
        ("N", (-1.0, 0.0, 0.0, 0.66)),
        ("S", (1.0, 0.0, 0.0, -0.66)),
        ("E", (0.0, 1.0, 0.66, 0.0)),
        ("W", (0.0, -1.0, -0.66, 0.0)),
    ],
)
def test_from_char_sets_direction_and_plane(ch, expected):
    player = Player.from_char(ch, 2, 3)
    assert (player.dir_x, player.dir_y, player.plane_x, player.plane_y) == expected
    assert (player.x, player.y) == (2.0, 3.0)
    assert player.move_speed == 1
    assert player.rot_speed == 0.5


def test_from_char_rejects_unknown_marker():
    with pytest.raises(ValueError):
        Player.from_char("X", 1, 1)


def test_rotate_left_then_right_restores_view():
    player = Player.from_char("E", 2, 2)
    player.rotate_left()
    player.rotate_right()
    assert player.dir_x == pytest.approx(0.0, abs=1e-12)
    assert player.dir_y == pytest.approx(1.0)
    assert player.plane_x == pytest.approx(0.66)
    assert player.plane_y == pytest.approx(0.0, abs=1e-12)


def test_rotation_keeps_lengths_and_right_angle():
    player = Player.from_char("N", 2, 2)
    for _ in range(5):
        player.rotate_left()
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)
    assert math.hypot(player.plane_x, player.plane_y) == pytest.approx(0.66)
    dot = player.dir_x * player.plane_x + player.dir_y * player.plane_y
    assert dot == pytest.approx(0.0, abs=1e-12)


def test_rotate_left_turns_by_rot_speed():
    player = Player.from_char("S", 2, 2)
    before = math.atan2(player.dir_y, player.dir_x)
    player.rotate_left()
    after = math.atan2(player.dir_y, player.dir_x)
    assert after - before == pytest.approx(player.rot_speed)


def test_move_forward_and_backward_round_trip():
    grid = boxed_grid()
    player = Player.from_char("N", 2, 2)
    player.move_forward(grid)
    assert player.x == pytest.approx(2 + player.dir_x * player.move_speed)
    assert player.y == 2.0
    player.move_backward(grid)
    assert (player.x, player.y) == (2.0, 2.0)


def test_move_forward_blocked_by_wall():
    grid = boxed_grid()
    player = Player.from_char("N", 1, 2)
    player.move_forward(grid)
    assert (player.x, player.y) == (1.0, 2.0)


def test_strafe_right_then_left_round_trip():
    grid = boxed_grid()
    player = Player.from_char("N", 2, 2)
    player.strafe_right(grid)
    assert player.y == pytest.approx(2 - player.dir_x * player.move_speed)
    assert player.x == 2.0
    player.strafe_left(grid)
    assert (player.x, player.y) == (2.0, 2.0)


def test_strafe_blocked_by_wall():
    grid = boxed_grid()
    player = Player.from_char("N", 2, 3)
    player.strafe_right(grid)
    assert (player.x, player.y) == (2.0, 3.0)


def test_cast_ray_centre_column_hits_wall_ahead():
    grid = boxed_grid()
    player = Player.from_char("N", 2, 2)
    hit = cast_ray(grid, player, 2, 4)
    assert isinstance(hit, RayHit)
    assert grid[hit.map_x][hit.map_y] == 1
    assert hit.map_y == 2
    assert hit.side == 0
    assert hit.perp_wall_dist == pytest.approx(1.0)
    assert (hit.ray_dir_x, hit.ray_dir_y) == (player.dir_x, player.dir_y)


def test_cast_ray_every_column_hits_a_wall():
    grid = boxed_grid(7)
    player = Player.from_char("W", 3, 3)
    for column in range(16):
        hit = cast_ray(grid, player, column, 16)
        assert grid[hit.map_x][hit.map_y] == 1
        assert hit.perp_wall_dist > 0


def test_cast_ray_stops_when_leaving_grid():
    grid = [[0, 0, 0], [0, 0, 0], [0, 0, 0]]
    player = Player.from_char("N", 1, 1)
    hit = cast_ray(grid, player, 2, 4)
    assert hit.map_x < 0


def test_draw_floor_ceiling_fills_halves():
    image = Image(4, 6)
    draw_floor_ceiling(image, FLOOR, CEILING)
    height = image.height
    for x in range(image.width):
        for y in range(height // 2 + 1, height):
            assert image.get_pixel(x, y) == FLOOR
            assert image.get_pixel(x, height - y - 1) == CEILING
        for y in range(height - (height // 2 + 1), height // 2 + 1):
            assert image.get_pixel(x, y) == 0


@pytest.mark.parametrize(
    "ch, color", [("N", NORTH), ("S", SOUTH), ("E", EAST), ("W", WEST)]
)
def test_draw_walls_uses_face_texture(ch, color):
    image = Image(8, 8)
    draw_walls(image, boxed_grid(), Player.from_char(ch, 2, 2), faces())
    assert image.get_pixel(image.width // 2, image.height // 2) == color


def test_draw_walls_only_paints_wall_colours():
    image = Image(8, 8)
    draw_walls(image, boxed_grid(), Player.from_char("N", 2, 2), faces())
    allowed = {0, NORTH, SOUTH, EAST, WEST}
    assert {image.get_pixel(x, y) for x in range(8) for y in range(8)} <= allowed


def test_render_frame_bottom_row_is_floor():
    image = Image(8, 8)
    result = render_frame(
        image, boxed_grid(), Player.from_char("E", 2, 2), faces(), FLOOR, CEILING
    )
    assert result is image
    assert all(image.get_pixel(x, image.height - 1) == FLOOR for x in range(8))
    colours = {image.get_pixel(x, y) for x in range(8) for y in range(8)}
    assert colours <= {0, FLOOR, CEILING, NORTH, SOUTH, EAST, WEST}
    assert EAST in colours