import pytest

from tankbattle.board import Board, Tile, TileType
from tankbattle.geometry import Position


def test_new_board_is_all_empty():
    board = Board(4, 3)
    assert board.to_lines() == ["    "] * 3
    assert all(t.tile_type is TileType.EMPTY for row in board.tiles for t in row)


def test_tiles_know_their_positions():
    board = Board(5, 4)
    for y in range(4):
        for x in range(5):
            assert board.tile_at(x, y).position == Position(x, y)


def test_tile_and_tile_at_agree():
    board = Board(3, 3)
    board.place_wall(Position(2, 1))
    assert board.tile(Position(2, 1)) is board.tile_at(2, 1)
    assert board.tile_at(2, 1).is_wall()


def test_out_of_range_tile_raises():
    board = Board(3, 3)
    with pytest.raises(IndexError):
        board.tile_at(3, 0)
    with pytest.raises(IndexError):
        board.tile(Position(-1, 0))


def test_placements_show_in_lines():
    board = Board(4, 2)
    board.place_wall(Position(0, 0))
    board.place_mine(Position(1, 0))
    board.place_tank(Position(2, 0), 1)
    board.place_tank(Position(3, 1), 2)
    assert board.to_lines() == ["#@1 ", "   2"]


def test_place_tank_ignores_unknown_player():
    board = Board(2, 2)
    board.place_tank(Position(0, 0), 3)
    assert board.tile_at(0, 0).tile_type is TileType.EMPTY


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (5, 3), (-5, -3), (7, 2), (12, -8)])
def test_wrap_lands_on_board_and_is_periodic(x, y):
    board = Board(5, 3)
    wrapped = board.wrap(Position(x, y))
    assert 0 <= wrapped.x < 5 and 0 <= wrapped.y < 3
    assert board.wrap(Position(x + 5, y - 3)) == wrapped
    assert board.wrap(wrapped) == wrapped


def test_wrap_left_edge_goes_to_right_edge():
    board = Board(5, 3)
    assert board.wrap(Position(-1, 0)) == Position(4, 0)


def test_render_has_border():
    board = Board(3, 2)
    board.place_wall(Position(1, 1))
    lines = board.render().splitlines()
    assert lines[0] == "+---+"
    assert lines[-1] == "+---+"
    assert lines[1:-1] == ["|" + line + "|" for line in board.to_lines()]


def test_load_from_file_round_trip(tmp_path):
    rows = ["#1 @", " # 2", "@@  "]
    path = tmp_path / "map.txt"
    path.write_text("\n".join(rows) + "\n", encoding="utf-8")
    board = Board(4, 3)
    tanks1, tanks2 = board.load_from_file(path)
    assert board.to_lines() == rows
    assert tanks1 == [Position(1, 0)]
    assert tanks2 == [Position(3, 1)]


def test_load_from_file_ignores_overflow(tmp_path):
    path = tmp_path / "map.txt"
    path.write_text("##xyz\n#\n1\n2\n", encoding="utf-8")
    board = Board(2, 2)
    tanks1, tanks2 = board.load_from_file(path)
    assert board.to_lines() == ["##", "# "]
    assert tanks1 == [] and tanks2 == []


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Board(2, 2).load_from_file(tmp_path / "absent.txt")


def test_wall_takes_two_hits():
    tile = Tile(TileType.WALL, Position(0, 0))
    assert tile.wall_health == 2
    tile.hit_wall()
    assert tile.is_wall()
    tile.hit_wall()
    assert tile.tile_type is TileType.EMPTY


def test_hit_on_non_wall_does_nothing():
    tile = Tile(TileType.MINE)
    tile.hit_wall()
    assert tile.is_mine()


def test_set_type_restores_wall_health():
    tile = Tile(TileType.WALL)
    tile.hit_wall()
    tile.set_type(TileType.WALL)
    assert tile.wall_health == 2


@pytest.mark.parametrize(
    "tile_type, occupied",
    [
        (TileType.EMPTY, False),
        (TileType.WALL, False),
        (TileType.MINE, False),
        (TileType.SHELL, False),
        (TileType.TANK1, True),
        (TileType.TANK2, True),
    ],
)
def test_is_occupied(tile_type, occupied):
    tile = Tile(tile_type)
    assert tile.is_occupied() is occupied
    assert tile.is_shell() is (tile_type is TileType.SHELL)
    assert tile.is_tank1() is (tile_type is TileType.TANK1)
    assert tile.is_tank2() is (tile_type is TileType.TANK2)