"""Directions, grid positions and the actions a tank may request."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Direction(IntEnum):
    """The eight compass directions, numbered clockwise from up."""

    U = 0
    UR = 1
    R = 2
    DR = 3
    D = 4
    DL = 5
    L = 6
    UL = 7

    def _turn(self, steps: int) -> Direction:
        return Direction((self.value + steps) % 8)

    def rotate_left8(self) -> Direction:
        """Turn one eighth counter-clockwise."""
        return self._turn(7)

    def rotate_right8(self) -> Direction:
        """Turn one eighth clockwise."""
        return self._turn(1)

    def rotate_left4(self) -> Direction:
        """Turn a quarter counter-clockwise."""
        return self._turn(6)

    def rotate_right4(self) -> Direction:
        """Turn a quarter clockwise."""
        return self._turn(2)

    def opposite(self) -> Direction:
        """The direction pointing the other way."""
        return self._turn(4)

    def dx(self) -> int:
        """Column change for one step in this direction."""
        return _DX[self]

    def dy(self) -> int:
        """Row change for one step in this direction (rows grow downwards)."""
        return _DY[self]


_DX = {
    Direction.U: 0,
    Direction.UR: 1,
    Direction.R: 1,
    Direction.DR: 1,
    Direction.D: 0,
    Direction.DL: -1,
    Direction.L: -1,
    Direction.UL: -1,
}

_DY = {
    Direction.U: -1,
    Direction.UR: -1,
    Direction.R: 0,
    Direction.DR: 1,
    Direction.D: 1,
    Direction.DL: 1,
    Direction.L: 0,
    Direction.UL: -1,
}


@dataclass(frozen=True)
class Position:
    """A cell coordinate on the board."""

    x: int = 0
    y: int = 0

    def move(self, direction: Direction, steps: int = 1) -> Position:
        """Return the position reached after moving ``steps`` cells."""
        return Position(self.x + direction.dx() * steps, self.y + direction.dy() * steps)


class ActionRequest(Enum):
    """An action a tank may ask to perform during a game step."""

    DO_NOTHING = 0
    GET_BATTLE_INFO = 1
    MOVE_FORWARD = 2
    MOVE_BACKWARD = 3
    ROTATE_LEFT_90 = 4
    ROTATE_RIGHT_90 = 5
    ROTATE_LEFT_45 = 6
    ROTATE_RIGHT_45 = 7
    SHOOT = 8

    def label(self) -> str:
        """Human-readable name used in game logs."""
        return _LABELS[self]

    def __str__(self) -> str:
        return self.label()


_LABELS = {
    ActionRequest.DO_NOTHING: "None",
    ActionRequest.GET_BATTLE_INFO: "Get Battle Info",
    ActionRequest.MOVE_FORWARD: "Move Forward",
    ActionRequest.MOVE_BACKWARD: "Move Backward",
    ActionRequest.ROTATE_LEFT_90: "Rotate Left 90 degrees",
    ActionRequest.ROTATE_RIGHT_90: "Rotate Right 90 degrees",
    ActionRequest.ROTATE_LEFT_45: "Rotate Left 45 degrees",
    ActionRequest.ROTATE_RIGHT_45: "Rotate Right 45 degrees",
    ActionRequest.SHOOT: "Shoot",
}