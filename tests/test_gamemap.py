import pytest

from solong.gamemap import (
    GameMap,
    MapError,
    check_elements,
    check_valid_path,
    flood_fill,
    has_wall_contour,
    is_rectangular,
    parse_map,
    parse_map_text,
    read_map_lines,
)

VALID = "11111\n1PC01\n10AE1\n11111\n"
VALID_ROWS = VALID.split("\n")[:-1]


def _find(rows, char):
    for y, row in enumerate(rows):
        if char in row:
            return row.index(char), y
    raise AssertionError(char)


def test_parse_valid_map():
    game_map = parse_map_text(VALID)
    assert isinstance(game_map, GameMap)
    assert game_map.player == _find(VALID_ROWS, "P")
    assert game_map.collectibles == VALID.count("C")
    assert game_map.tile(*game_map.player) == "0"
    assert "P" not in "".join(game_map.rows)
    assert game_map.height == len(VALID_ROWS)
    assert game_map.width == len(VALID_ROWS[0])


def test_parse_keeps_other_tiles():
    game_map = parse_map_text(VALID)
    assert game_map.tile(*_find(VALID_ROWS, "E")) == "E"
    assert game_map.tile(*_find(VALID_ROWS, "A")) == "A"


def test_tile_out_of_range():
    game_map = parse_map_text(VALID)
    with pytest.raises(IndexError):
        game_map.tile(len(VALID_ROWS[0]), 0)


def test_parse_map_file(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text(VALID)
    assert parse_map(path) == parse_map_text(VALID)


def test_read_map_lines(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text("111\n1P1")
    assert read_map_lines(path) == ["111", "1P1"]


def test_read_map_lines_blank_line_kept(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text("111\n\n")
    assert read_map_lines(path) == ["111", ""]


def test_missing_file(tmp_path):
    with pytest.raises(MapError, match="Failed to open"):
        parse_map(tmp_path / "absent.ber")


def test_empty_map():
    with pytest.raises(MapError, match="empty"):
        parse_map_text("")


@pytest.mark.parametrize(
    "text, message",
    [
        ("11111\n1PCX1\n10E01\n11111\n", "Invalid character in map: X"),
        ("11111\n1PCP1\n10E01\n11111\n", "exactly one player"),
        ("11111\n10C01\n10E01\n11111\n", "exactly one player"),
        ("11111\n1PCE1\n10E01\n11111\n", "exactly one exit"),
        ("11111\n1P001\n10E01\n11111\n", "at least one collectible"),
    ],
)
def test_element_errors(text, message):
    with pytest.raises(MapError, match=message):
        parse_map_text(text)


def test_check_elements_result():
    player, collectibles = check_elements(VALID_ROWS)
    assert player == _find(VALID_ROWS, "P")
    assert collectibles == VALID.count("C")


def test_not_rectangular():
    with pytest.raises(MapError, match="not rectangular"):
        parse_map_text("11111\n1PCE1\n1111\n")


def test_not_walled():
    with pytest.raises(MapError, match="not surrounded by walls"):
        parse_map_text("11111\n1PCE0\n11111\n")


def test_is_rectangular():
    assert is_rectangular(VALID_ROWS)
    assert not is_rectangular(["111", "11"])
    assert not is_rectangular([])


def test_has_wall_contour():
    assert has_wall_contour(VALID_ROWS)
    assert not has_wall_contour(["111", "0P1", "111"])
    assert not has_wall_contour(["111", "1P1", "101"])
    assert not has_wall_contour([])


def test_flood_fill_reaches_everything():
    start = _find(VALID_ROWS, "P")
    found, exit_found = flood_fill(VALID_ROWS, start)
    assert found == VALID.count("C")
    assert exit_found is True


def test_flood_fill_does_not_modify_rows():
    rows = list(VALID_ROWS)
    flood_fill(rows, _find(rows, "P"))
    assert rows == VALID_ROWS


def test_unreachable_collectible():
    text = "1111111\n1P0E1C1\n1111111\n"
    rows = text.split("\n")[:-1]
    found, exit_found = flood_fill(rows, _find(rows, "P"))
    assert found < text.count("C")
    assert exit_found is True
    with pytest.raises(MapError, match="not all collectibles"):
        parse_map_text(text)


def test_unreachable_exit():
    text = "1111111\n1PC01E1\n1111111\n"
    rows = text.split("\n")[:-1]
    with pytest.raises(MapError, match="exit is not reachable"):
        check_valid_path(rows, _find(rows, "P"), text.count("C"))
    with pytest.raises(MapError, match="exit is not reachable"):
        parse_map_text(text)


def test_check_valid_path_accepts_valid():
    start = _find(VALID_ROWS, "P")
    check_valid_path(VALID_ROWS, start, VALID.count("C"))
    assert flood_fill(VALID_ROWS, start)[1] is True


def test_crlf_line_is_invalid():
    with pytest.raises(MapError, match="Invalid character"):
        parse_map_text("11111\r\n1PCE1\r\n11111\r\n")