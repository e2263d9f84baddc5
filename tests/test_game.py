import math

import pytest

from cubcaster.errors import CubError
from cubcaster.game import RUN_SPEED, WALK_SPEED, Game, Key, load_textures
from cubcaster.grid import parse_grid
from cubcaster.raycast import SCREEN_HEIGHT, SCREEN_WIDTH, TEX_HEIGHT, TEX_WIDTH
from cubcaster.scene import Scene

MAP = "111111\n100001\n10N001\n100001\n111111"
TEXTURE = [0x123456] * (TEX_WIDTH * TEX_HEIGHT)
FLOOR = 0x00FF00
CEILING = 0x0000FF


def make_game(text=MAP):
    scene = Scene(grid=parse_grid(text), floor=FLOOR, ceiling=CEILING)
    return Game.from_scene(scene, [TEXTURE] * 4)


def test_from_scene_takes_spawn():
    game = make_game()
    player = parse_grid(MAP).player
    assert game.x == player.x
    assert game.y == player.y
    assert game.dir_x == pytest.approx(player.dir_x + 0.0001)
    assert game.plane_y == player.plane_y
    assert game.speed == WALK_SPEED
    assert game.running is True


def test_forward_and_back():
    game = make_game()
    game.press(Key.W)
    game.update()
    assert game.x < 2.5
    assert game.y == pytest.approx(2.5, abs=1e-6)
    game.release(Key.W)
    game.press(Key.S)
    game.update()
    assert game.x == pytest.approx(2.5)


def test_arrow_alias_matches_letter():
    a, b = make_game(), make_game()
    a.press(Key.W)
    b.press(Key.UP)
    a.update()
    b.update()
    assert a.x == b.x
    b.release(Key.UP)
    assert b.held == set()


def test_release_stops_movement():
    game = make_game()
    game.press(Key.W)
    game.release(Key.W)
    game.update()
    assert (game.x, game.y) == (2.5, 2.5)


def test_strafe_directions():
    left, right = make_game(), make_game()
    left.press(Key.A)
    right.press(Key.D)
    left.update()
    right.update()
    assert left.y < 2.5 < right.y
    assert left.x == pytest.approx(2.5, abs=1e-6)


def test_wall_blocks_movement():
    game = make_game()
    game.press(Key.W)
    for _ in range(50):
        game.update()
    assert 1.05 <= game.x < 1.2


def test_can_move():
    game = make_game()
    assert game.can_move(1.5, 1.5)
    assert not game.can_move(0.5, 0.5)
    assert not game.can_move(1.02, 1.5)


def test_sprint_changes_speed_after_move():
    game = make_game()
    game.press(Key.SHIFT)
    game.press(Key.W)
    start = game.x
    game.update()
    first = start - game.x
    assert game.speed == RUN_SPEED
    before = game.x
    game.update()
    assert before - game.x > first
    game.release(Key.SHIFT)
    game.update()
    assert game.speed == WALK_SPEED


def test_shift_alone_keeps_speed():
    game = make_game()
    game.press(Key.SHIFT)
    game.update()
    assert game.speed == WALK_SPEED


def test_rotation_keys_turn_opposite_ways():
    for key, sign in ((Key.LEFT, 1), (Key.RIGHT, -1)):
        game = make_game()
        old = (game.dir_x, game.dir_y)
        length = math.hypot(*old)
        game.press(key)
        game.update()
        cross = old[0] * game.dir_y - old[1] * game.dir_x
        assert cross * sign > 0
        assert math.hypot(game.dir_x, game.dir_y) == pytest.approx(length)


def test_full_turn_is_identity():
    game = make_game()
    before = (game.dir_x, game.dir_y, game.plane_x, game.plane_y)
    game.rotate(2 * math.pi)
    after = (game.dir_x, game.dir_y, game.plane_x, game.plane_y)
    assert after == pytest.approx(before, abs=1e-9)


def test_escape_stops_and_unknown_key_ignored():
    game = make_game()
    game.press(999)
    assert game.held == set()
    game.press(Key.ESC)
    assert game.running is False


def test_render_shows_ceiling_and_floor():
    frame = make_game().render()
    assert len(frame) == SCREEN_HEIGHT
    assert all(len(row) == SCREEN_WIDTH for row in frame)
    assert frame[0][SCREEN_WIDTH // 2] == CEILING
    assert frame[SCREEN_HEIGHT - 1][SCREEN_WIDTH // 2] == FLOOR


SMALL_XPM = (
    '/* XPM */\nstatic char *x[] = {\n"2 2 2 1",\n'
    '"a c #FF0000",\n"b c #0000FF",\n"ab",\n"ba"\n};\n'
)


def test_load_textures_pads_buffers(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(SMALL_XPM)
    textures = load_textures([path] * 4)
    assert len(textures) == 4
    assert all(len(t) == TEX_WIDTH * TEX_HEIGHT for t in textures)
    assert textures[0][:4] == [0xFF0000, 0x0000FF, 0x0000FF, 0xFF0000]
    assert set(textures[0][4:]) == {0}


def test_load_textures_rejects_oversized(tmp_path):
    rows = ",\n".join(['"' + "a" * 65 + '"'] * 64)
    path = tmp_path / "big.xpm"
    path.write_text('static char *x[] = {\n"65 64 1 1",\n"a c #000000",\n' + rows + "\n};\n")
    with pytest.raises(CubError, match="Invalid xpm file image"):
        load_textures([path] * 4)


def test_load_textures_rejects_missing_path(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(SMALL_XPM)
    with pytest.raises(CubError, match="Invalid xpm file image"):
        load_textures([path, path, None, path])