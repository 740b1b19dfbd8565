import math

import pytest

from cubraycast.app import Key, TextureSet, handle_key, load_textures, main
from cubraycast.render import Player
from cubraycast.scene import Scene
from cubraycast.xpm import XpmError

GRID = [
    [1, 1, 1, 1, 1],
    [1, 0, 0, 0, 1],
    [1, 0, 0, 0, 1],
    [1, 0, 0, 0, 1],
    [1, 1, 1, 1, 1],
]


def _write_xpm(path, color_hex):
    path.write_text(
        "static char *x[] = {\n"
        '"1 1 1 1",\n'
        f'"a c #{color_hex}",\n'
        '"a"\n'
        "};\n"
    )
    return str(path)


def _player():
    return Player.from_char("N", 2, 2)


def test_load_textures_swaps_opposite_faces(tmp_path):
    scene = Scene(
        path_north=_write_xpm(tmp_path / "no.xpm", "000011"),
        path_south=_write_xpm(tmp_path / "so.xpm", "000022"),
        path_east=_write_xpm(tmp_path / "ea.xpm", "000033"),
        path_west=_write_xpm(tmp_path / "we.xpm", "000044"),
    )
    textures = load_textures(scene)
    assert isinstance(textures, TextureSet)
    assert textures.north.get_pixel(0, 0) == 0x22
    assert textures.south.get_pixel(0, 0) == 0x11
    assert textures.east.get_pixel(0, 0) == 0x44
    assert textures.west.get_pixel(0, 0) == 0x33


def test_load_textures_missing_file(tmp_path):
    scene = Scene(
        path_north=str(tmp_path / "missing.xpm"),
        path_south=str(tmp_path / "missing.xpm"),
        path_east=str(tmp_path / "missing.xpm"),
        path_west=str(tmp_path / "missing.xpm"),
    )
    with pytest.raises(XpmError):
        load_textures(scene)


def test_escape_quits_without_moving():
    player = _player()
    assert handle_key(player, GRID, Key.ESCAPE) is False
    assert (player.x, player.y) == (2.0, 2.0)


def test_escape_keysym_value():
    assert handle_key(_player(), GRID, 65307) is False


def test_forward_moves_along_view():
    player = _player()
    assert handle_key(player, GRID, Key.W) is True
    assert (player.x, player.y) == (1.0, 2.0)


def test_backward_moves_against_view():
    player = _player()
    assert handle_key(player, GRID, Key.S) is True
    assert (player.x, player.y) == (3.0, 2.0)


def test_forward_blocked_by_wall():
    player = Player.from_char("N", 1, 2)
    handle_key(player, GRID, Key.W)
    assert (player.x, player.y) == (1.0, 2.0)


def test_strafe_right_matches_player_method():
    player = _player()
    expected = _player()
    expected.strafe_right(GRID)
    handle_key(player, GRID, Key.D)
    assert (player.x, player.y) == (expected.x, expected.y)


def test_rotation_keys_are_inverse():
    player = _player()
    handle_key(player, GRID, Key.LEFT)
    assert player.dir_x != -1.0
    assert math.hypot(player.dir_x, player.dir_y) == pytest.approx(1.0)
    handle_key(player, GRID, Key.RIGHT)
    assert player.dir_x == pytest.approx(-1.0)
    assert player.dir_y == pytest.approx(0.0)
    assert player.plane_y == pytest.approx(0.66)


def test_unknown_key_is_ignored():
    player = _player()
    assert handle_key(player, GRID, 12345) is True
    assert (player.x, player.y, player.dir_x) == (2.0, 2.0, -1.0)


def test_main_wrong_argument_count(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out == "Error\nNumber of arguments incorrect\n"


def test_main_wrong_extension(capsys):
    assert main(["map.txt"]) == 1
    assert capsys.readouterr().out == "Error\nFile name incorrect\n"


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.cub")]) == 1
    assert capsys.readouterr().out == "Error\nFile not found\n"


def _scene_file(tmp_path, map_text, xpm_text):
    (tmp_path / "t.xpm").write_text(xpm_text)
    scene = tmp_path / "level.cub"
    scene.write_text(
        "NO ./t.xpm\nSO ./t.xpm\nWE ./t.xpm\nEA ./t.xpm\n"
        "F 10,20,30\nC 40,50,60\n\n" + map_text
    )
    return str(scene)


def test_main_rejects_map_without_player(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = _scene_file(tmp_path, "111\n101\n111\n", "x")
    assert main([path]) == 1
    assert capsys.readouterr().out == "Error\nNumber of players incorrect\n"


def test_main_rejects_bad_texture(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = _scene_file(tmp_path, "111\n1N1\n111\n", "not an image")
    assert main([path]) == 1
    assert capsys.readouterr().out.startswith("Error\n")