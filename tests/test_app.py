import pytest

from solong.app import (
    BASE_TEXTURES,
    BONUS_TEXTURES,
    TILE_SIZE,
    Renderer,
    build_parser,
    load_textures,
    main,
)
from solong.game import TEX_COLLECTIBLE, TEX_EXIT, TEX_FLOOR, TEX_PLAYER, TEX_WALL, Game
from solong.mapfile import parse_map
from solong.xpm import XpmError

import pygame

COLORS = {
    TEX_FLOOR: 0x000000,
    TEX_WALL: 0x0000FF,
    TEX_EXIT: 0x00FF00,
    TEX_COLLECTIBLE: 0xFFFF00,
    TEX_PLAYER: 0xFF0000,
}


def write_xpm(path, rgb):
    path.write_text(
        'static char *img[] = {\n"2 2 1 1",\n'
        f'"a c #{rgb:06X}",\n"aa",\n"aa"\n}};\n'
    )


def write_textures(directory, files, colors):
    for name, filename in files.items():
        write_xpm(directory / filename, colors.get(name, 0x808080))


def rgb_tuple(value):
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def test_parser_reads_options():
    args = build_parser().parse_args(["level.ber", "--maps-dir", "m", "--bonus"])
    assert args.map_files == ["level.ber"]
    assert args.maps_dir == "m"
    assert args.bonus is True


def test_parser_defaults():
    args = build_parser().parse_args(["level.ber"])
    assert args.maps_dir == "maps"
    assert args.textures_dir == "textures"
    assert args.bonus is False


@pytest.mark.parametrize("argv", [[], ["a.ber", "b.ber"]])
def test_main_wrong_argument_count(argv, capsys):
    assert main(argv) == 1
    assert capsys.readouterr().out == "Error:\nWrong number of arguments!\n"


def test_main_rejects_wrong_extension(capsys):
    assert main(["level.txt"]) == 1
    assert "Map format is not .ber" in capsys.readouterr().out


def test_main_reports_missing_map(tmp_path, capsys):
    assert main(["missing.ber", "--maps-dir", str(tmp_path)]) == 1
    assert "Error reading map!" in capsys.readouterr().out


def test_main_reports_unplayable_map(tmp_path, capsys):
    (tmp_path / "closed.ber").write_text("11111\n1P1C1\n1E111\n11111\n")
    assert main(["closed.ber", "--maps-dir", str(tmp_path)]) == 1
    assert "The map is not playable!" in capsys.readouterr().out


def test_main_reports_missing_textures(tmp_path, capsys):
    (tmp_path / "ok.ber").write_text("1111111\n1P0C0E1\n1111111\n")
    code = main(
        ["ok.ber", "--maps-dir", str(tmp_path), "--textures-dir", str(tmp_path / "none")]
    )
    assert code == 1
    assert "Error loading images!" in capsys.readouterr().out


def test_load_textures_base(tmp_path):
    write_textures(tmp_path, BASE_TEXTURES, COLORS)
    textures = load_textures(tmp_path, False)
    assert set(textures) == set(BASE_TEXTURES)
    assert textures[TEX_WALL].pixel(1, 1) == COLORS[TEX_WALL]


def test_load_textures_bonus(tmp_path):
    write_textures(tmp_path, BONUS_TEXTURES, COLORS)
    textures = load_textures(tmp_path, True)
    assert set(textures) == set(BONUS_TEXTURES)
    assert textures[TEX_PLAYER].pixel(0, 0) == COLORS[TEX_PLAYER]


def test_load_textures_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_textures(tmp_path, False)


def make_renderer(tmp_path, files, bonus):
    write_textures(tmp_path, files, COLORS)
    game = Game(parse_map("1111111\n1P0C0E1\n1111111\n"))
    screen = pygame.Surface((7 * TILE_SIZE, 3 * TILE_SIZE))
    return Renderer(screen, load_textures(tmp_path, bonus), bonus), game, screen


def color_at(screen, x, y):
    return tuple(screen.get_at((x * TILE_SIZE, y * TILE_SIZE)))[:3]


def test_renderer_draws_tiles_and_player(tmp_path):
    renderer, game, screen = make_renderer(tmp_path, BASE_TEXTURES, False)
    renderer.draw(game)
    assert color_at(screen, 0, 0) == rgb_tuple(COLORS[TEX_WALL])
    assert color_at(screen, 1, 1) == rgb_tuple(COLORS[TEX_PLAYER])
    assert color_at(screen, 2, 1) == rgb_tuple(COLORS[TEX_FLOOR])
    assert color_at(screen, 3, 1) == rgb_tuple(COLORS[TEX_COLLECTIBLE])
    assert color_at(screen, 5, 1) == rgb_tuple(COLORS[TEX_EXIT])


def test_renderer_follows_player(tmp_path, capsys):
    renderer, game, screen = make_renderer(tmp_path, BASE_TEXTURES, False)
    game.move_to(2, 1)
    renderer.draw(game)
    assert color_at(screen, 2, 1) == rgb_tuple(COLORS[TEX_PLAYER])
    assert color_at(screen, 1, 1) == rgb_tuple(COLORS[TEX_FLOOR])


def test_bonus_renderer_starts_with_closed_player(tmp_path):
    renderer, game, screen = make_renderer(tmp_path, BONUS_TEXTURES, True)
    renderer.draw(game)
    assert color_at(screen, 1, 1) == rgb_tuple(COLORS[TEX_PLAYER])
    assert color_at(screen, 5, 1) == rgb_tuple(COLORS[TEX_EXIT])