import pytest

from solong.app import App, Textures, load_textures, main
from solong.game import GameState, Outcome
from solong.gamemap import parse_map_text
from solong.xpm import TRANSPARENT, XpmError, XpmImage

XPM_TEXT = (
    "static char *img[] = {\n"
    '"2 2 2 1",\n'
    '"a c #FF0000",\n'
    '"b c None",\n'
    '"ab",\n'
    '"ba"\n'
    "};\n"
)

MAP_TEXT = "1111111\n1P0C0E1\n10A0001\n1111111\n"

NAMES = ("wall.xpm", "dalle.xpm", "player.xpm", "item.xpm", "exit.xpm", "enemy.xpm")


def _write_textures(directory):
    for name in NAMES:
        (directory / name).write_text(XPM_TEXT)


def _image():
    return XpmImage(1, 1, (0x123456,))


def _textures():
    image = _image()
    return Textures(image, image, image, image, image, image)


def _app():
    state = GameState.from_map(parse_map_text(MAP_TEXT))
    return App(state, _textures(), music_path=None)


def test_load_textures_reads_every_file(tmp_path):
    _write_textures(tmp_path)
    textures = load_textures(tmp_path)
    assert textures.wall.width == 2
    assert textures.floor.pixel(0, 0) == 0xFF0000
    assert textures.enemy.pixel(1, 0) == TRANSPARENT
    assert textures.exit.pixels == textures.player.pixels


def test_load_textures_missing_file(tmp_path):
    _write_textures(tmp_path)
    (tmp_path / "enemy.xpm").unlink()
    with pytest.raises(XpmError):
        load_textures(tmp_path)


def test_render_draws_floor_under_every_tile_and_sprite():
    app = _app()
    ops = app.render()
    floors = [op for op in ops if op[:2] == ("image", "floor")]
    rows = app.state.rows
    assert len(floors) == len(rows) * len(rows[0]) + 1 + len(app.state.enemies)
    assert ops[0] == ("image", "floor", 0, 0)


def test_render_places_player_and_enemy():
    app = _app()
    ops = app.render()
    player_op = [op for op in ops if op[:2] == ("image", "player")]
    enemy_op = [op for op in ops if op[:2] == ("image", "enemy")]
    assert len(player_op) == 1
    assert len(enemy_op) == 1
    _, _, px, py = player_op[0]
    _, _, ex, ey = enemy_op[0]
    assert px * app.state.player_y == py * app.state.player_x
    assert (px, py) != (ex, ey)


def test_render_overlays_items_and_exit():
    app = _app()
    kinds = [op[1] for op in app.render() if op[0] == "image"]
    assert kinds.count("item") == 1
    assert kinds.count("exit") == 1
    assert kinds.count("wall") == sum(row.count("1") for row in app.state.rows)


def test_render_ends_with_move_counter():
    app = _app()
    last = app.render()[-1]
    assert last[0] == "text"
    assert last[1] == "MOVES: 0"


def test_render_game_over_screen():
    app = _app()
    app.state.outcome = Outcome.LOST
    ops = app.render()
    texts = [op[1] for op in ops]
    assert texts == ["GAME OVER!", "Caught by enemy!"]
    assert all(op[0] == "text" for op in ops)


def test_close_is_idempotent():
    app = _app()
    app.close()
    app.close()
    assert app.closed is True


def test_main_without_arguments():
    assert main([]) == 1


def test_main_reports_missing_map(tmp_path, capsys):
    assert main([str(tmp_path / "absent.ber")]) == 1
    out = capsys.readouterr().out
    assert out.startswith("Error\n")
    assert "Failed to open map file." in out


def test_main_reports_missing_textures(tmp_path, monkeypatch, capsys):
    map_file = tmp_path / "level.ber"
    map_file.write_text(MAP_TEXT)
    monkeypatch.chdir(tmp_path)
    assert main([str(map_file)]) == 1
    assert "Error: Failed to load textures." in capsys.readouterr().out