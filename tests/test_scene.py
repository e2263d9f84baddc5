import pytest

from cubcaster.errors import CubError
from cubcaster.grid import parse_grid
from cubcaster.scene import load_scene, parse_color, parse_scene

GRID = "111\n1N1\n111"


@pytest.fixture
def textures(tmp_path):
    paths = {}
    for name in ("north", "south", "west", "east"):
        path = tmp_path / f"{name}.xpm"
        path.write_text("/* XPM */\n")
        paths[name] = str(path)
    return paths


def _config_lines(t, floor="220,100,0", ceiling="225,30,0"):
    return [
        f"NO {t['north']}",
        f"SO {t['south']}",
        f"WE {t['west']}",
        f"EA {t['east']}",
        f"F {floor}",
        f"C {ceiling}",
    ]


def _scene_text(t, **kwargs):
    return "\n".join(_config_lines(t, **kwargs)) + "\n\n" + GRID + "\n"


def test_pinned_color():
    assert parse_color("255,0,0") == 0xFF0000


@pytest.mark.parametrize("rgb", [(0, 0, 0), (255, 255, 255), (220, 100, 0), (1, 2, 3)])
def test_color_channels_round_trip(rgb):
    red, green, blue = rgb
    color = parse_color(f"{red},{green},{blue}")
    assert (color >> 16, (color >> 8) & 0xFF, color & 0xFF) == rgb


def test_empty_components_read_as_zero():
    assert parse_color("1,,2,3") == parse_color("1,0,2")
    assert parse_color(",1,2,3") == parse_color("0,1,2")


@pytest.mark.parametrize(
    "text", ["256,0,0", "1,2", "1,2,3,4", " 1,2,3", "1, 2,3", "a,0,0", "", "-1,0,0"]
)
def test_invalid_colors(text):
    with pytest.raises(CubError, match="Invalid RGB Format"):
        parse_color(text)


def test_parse_scene(textures):
    scene = parse_scene(_scene_text(textures))
    assert scene.texture_paths == (
        textures["north"],
        textures["south"],
        textures["west"],
        textures["east"],
    )
    assert scene.floor == parse_color("220,100,0")
    assert scene.ceiling == parse_color("225,30,0")
    assert scene.grid == parse_grid(GRID)


def test_blank_lines_do_not_matter(textures):
    spaced = "\n\n\n".join(_config_lines(textures)) + "\n\n\n" + GRID
    assert parse_scene(spaced) == parse_scene(_scene_text(textures))


def test_map_may_come_first(textures):
    text = GRID + "\n" + "\n".join(_config_lines(textures))
    assert parse_scene(text) == parse_scene(_scene_text(textures))


def test_later_identifier_wins(textures):
    text = _scene_text(textures) + "F 1,2,3\n"
    assert parse_scene(text).floor == parse_color("1,2,3")


def test_missing_colors_default_to_black(textures):
    lines = _config_lines(textures)[:4]
    scene = parse_scene("\n".join(lines) + "\n" + GRID)
    assert (scene.floor, scene.ceiling) == (0, 0)


def test_missing_texture_file(textures, tmp_path):
    textures["west"] = str(tmp_path / "missing.xpm")
    with pytest.raises(CubError, match="Invalid .xpm File"):
        parse_scene(_scene_text(textures))


@pytest.mark.parametrize("line", ["X foo", "0111", "N1", "R 1,2,3"])
def test_unknown_lines(textures, line):
    with pytest.raises(CubError, match="Invalid File Data"):
        parse_scene(_scene_text(textures) + line + "\n")


def test_bad_map_in_scene(textures):
    with pytest.raises(CubError, match="Invalid data"):
        parse_scene(_scene_text(textures) + "1Z1\n")


def test_bad_color_in_scene(textures):
    with pytest.raises(CubError, match="Invalid RGB Format"):
        parse_scene(_scene_text(textures, floor="300,0,0"))


def test_load_scene(textures, tmp_path):
    text = _scene_text(textures)
    path = tmp_path / "level.cub"
    path.write_text(text)
    assert load_scene(path) == parse_scene(text)
    assert load_scene(str(path)) == parse_scene(text)


def test_load_scene_wrong_extension(textures, tmp_path):
    path = tmp_path / "level.txt"
    path.write_text(_scene_text(textures))
    with pytest.raises(CubError, match="extension"):
        load_scene(path)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(CubError, match="Cannot open"):
        load_scene(tmp_path / "absent.cub")