"""The game board: a wrapping grid of tiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from os import PathLike

from tankbattle.geometry import Position

WALL_HEALTH = 2


class TileType(Enum):
    """What occupies a board cell."""

    EMPTY = auto()
    WALL = auto()
    MINE = auto()
    TANK1 = auto()
    TANK2 = auto()
    SHELL = auto()


_SYMBOLS = {
    TileType.WALL: "#",
    TileType.MINE: "@",
    TileType.TANK1: "1",
    TileType.TANK2: "2",
}

_FROM_SYMBOL = {symbol: tile_type for tile_type, symbol in _SYMBOLS.items()}


@dataclass
class Tile:
    """A single board cell."""

    tile_type: TileType = TileType.EMPTY
    position: Position = field(default_factory=Position)
    wall_health: int = WALL_HEALTH

    def set_type(self, tile_type: TileType) -> None:
        """Change the tile's content; a new wall starts at full health."""
        self.tile_type = tile_type
        if tile_type is TileType.WALL:
            self.wall_health = WALL_HEALTH

    def is_wall(self) -> bool:
        return self.tile_type is TileType.WALL

    def is_mine(self) -> bool:
        return self.tile_type is TileType.MINE

    def is_shell(self) -> bool:
        return self.tile_type is TileType.SHELL

    def is_tank1(self) -> bool:
        return self.tile_type is TileType.TANK1

    def is_tank2(self) -> bool:
        return self.tile_type is TileType.TANK2

    def is_occupied(self) -> bool:
        """True when a tank of either player stands here."""
        return self.tile_type in (TileType.TANK1, TileType.TANK2)

    def hit_wall(self) -> None:
        """Damage a wall; it crumbles to empty ground when out of health."""
        if self.is_wall():
            self.wall_health -= 1
            if self.wall_health <= 0:
                self.tile_type = TileType.EMPTY

    @property
    def symbol(self) -> str:
        return _SYMBOLS.get(self.tile_type, " ")


class Board:
    """A ``width`` by ``height`` grid whose edges wrap around."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.tiles = [
            [Tile(TileType.EMPTY, Position(x, y)) for x in range(width)]
            for y in range(height)
        ]

    def load_from_file(
        self, filename: str | PathLike[str]
    ) -> tuple[list[Position], list[Position]]:
        """Fill the board from a map file; return player 1 and player 2 tank positions."""
        tanks1: list[Position] = []
        tanks2: list[Position] = []
        with open(filename, encoding="utf-8") as handle:
            for row, line in zip(range(self.height), handle):
                line = line.rstrip("\n")
                for col, char in enumerate(line[: self.width]):
                    pos = Position(col, row)
                    tile_type = _FROM_SYMBOL.get(char, TileType.EMPTY)
                    self.tiles[row][col] = Tile(tile_type, pos)
                    if tile_type is TileType.TANK1:
                        tanks1.append(pos)
                    elif tile_type is TileType.TANK2:
                        tanks2.append(pos)
        return tanks1, tanks2

    def _replace(self, pos: Position, tile_type: TileType) -> None:
        self._check(pos.x, pos.y)
        self.tiles[pos.y][pos.x] = Tile(tile_type, pos)

    def place_wall(self, pos: Position) -> None:
        self._replace(pos, TileType.WALL)

    def place_mine(self, pos: Position) -> None:
        self._replace(pos, TileType.MINE)

    def place_tank(self, pos: Position, player_id: int) -> None:
        """Mark a tank of player 1 or 2; other player ids are ignored."""
        if player_id == 1:
            self._replace(pos, TileType.TANK1)
        elif player_id == 2:
            self._replace(pos, TileType.TANK2)

    def wrap(self, pos: Position) -> Position:
        """Bring a position back onto the board across its edges."""
        return Position(pos.x % self.width, pos.y % self.height)

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"position ({x},{y}) is outside the board")

    def tile(self, pos: Position) -> Tile:
        return self.tile_at(pos.x, pos.y)

    def tile_at(self, x: int, y: int) -> Tile:
        self._check(x, y)
        return self.tiles[y][x]

    def to_lines(self) -> list[str]:
        """One string per row, using the map-file symbols."""
        return ["".join(tile.symbol for tile in row) for row in self.tiles]

    def render(self) -> str:
        """The board framed by a border, ready for printing."""
        edge = "+" + "-" * self.width + "+"
        body = ["|" + line + "|" for line in self.to_lines()]
        return "\n".join([edge, *body, edge])