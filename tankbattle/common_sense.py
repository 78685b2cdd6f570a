"""Safety checks that can veto or replace an algorithm's proposed action."""

from __future__ import annotations

import math
from collections.abc import Iterable

from tankbattle.board import Board, Tile
from tankbattle.geometry import ActionRequest, Direction, Position
from tankbattle.units import Shell, Tank

SHELL_LOOKAHEAD = 4
CLOSE_RANGE = 2

_STATIONARY = frozenset(
    {
        ActionRequest.DO_NOTHING,
        ActionRequest.ROTATE_LEFT_45,
        ActionRequest.ROTATE_RIGHT_45,
        ActionRequest.ROTATE_LEFT_90,
        ActionRequest.ROTATE_RIGHT_90,
    }
)


def _is_enemy(tank: Tank, tile: Tile) -> bool:
    return (tank.player_id == 1 and tile.is_tank2()) or (
        tank.player_id == 2 and tile.is_tank1()
    )


def _wrap_distance(a: Position, b: Position, width: int, height: int) -> int:
    dx = abs(b.x - a.x)
    dy = abs(b.y - a.y)
    return max(min(dx, width - dx), min(dy, height - dy))


def _shortest_delta(delta: int, size: int) -> int:
    if abs(delta) <= size // 2:
        return delta
    return -int(math.copysign(size - abs(delta), delta))


def is_dangerous_position(
    pos: Position, board: Board, shells: Iterable[Shell], tank: Tank
) -> bool:
    """True if a shell may reach ``pos`` soon, or it holds a mine or another tank."""
    for shell in shells:
        for step in range(1, SHELL_LOOKAHEAD + 1):
            ahead = board.wrap(shell.position.move(shell.direction, step))
            if ahead == pos:
                return True
            if board.tile(ahead).is_wall():
                break

    tile = board.tile(board.wrap(pos))
    if tile.is_mine():
        return True
    if tile.is_tank1() and tank.player_id == 1:
        return False
    if tile.is_tank2() and tank.player_id == 2:
        return False
    return tile.is_occupied()


def direction_to(source: Position, target: Position, width: int, height: int) -> Direction:
    """The compass direction from ``source`` towards ``target`` the short way round."""
    dx = _shortest_delta(target.x - source.x, width)
    dy = _shortest_delta(target.y - source.y, height)

    if dx > 0 and dy > 0:
        return Direction.DR
    if dx > 0 and dy < 0:
        return Direction.UR
    if dx < 0 and dy > 0:
        return Direction.DL
    if dx < 0 and dy < 0:
        return Direction.UL
    if dx > 0:
        return Direction.R
    if dx < 0:
        return Direction.L
    if dy > 0:
        return Direction.D
    return Direction.U


def rotate_toward(current: Direction, target: Direction) -> ActionRequest:
    """The rotation that brings ``current`` closer to ``target``."""
    diff = (target - current + 8) % 8
    if diff == 0:
        return ActionRequest.DO_NOTHING
    if diff in (1, 2):
        return ActionRequest.ROTATE_RIGHT_45
    if diff in (6, 7):
        return ActionRequest.ROTATE_LEFT_45
    return ActionRequest.ROTATE_RIGHT_90 if diff <= 4 else ActionRequest.ROTATE_LEFT_90


def apply_common_sense(
    tank: Tank, board: Board, shells: list[Shell], proposed: ActionRequest
) -> tuple[ActionRequest, str]:
    """Review ``proposed`` and return the action to take with the reason for it."""
    pos = tank.position
    facing = tank.direction
    forward = pos.move(facing)
    backward = pos.move(facing.opposite())

    danger_here = is_dangerous_position(pos, board, shells, tank)
    danger_forward = is_dangerous_position(forward, board, shells, tank)
    danger_backward = is_dangerous_position(backward, board, shells, tank)

    if proposed in _STATIONARY and danger_here:
        if not danger_forward:
            return (
                ActionRequest.MOVE_FORWARD,
                "Rotating/standing still is fatal, moving forward is safe",
            )
        return ActionRequest.SHOOT, "Rotating/standing still is fatal, shooting as last resort"

    moving_forward = proposed is ActionRequest.MOVE_FORWARD
    if (moving_forward and danger_forward) or (
        proposed is ActionRequest.MOVE_BACKWARD and danger_backward
    ):
        obstacle = board.tile(board.wrap(forward if moving_forward else backward))
        if not _is_enemy(tank, obstacle):
            if not danger_here:
                return (
                    ActionRequest.DO_NOTHING,
                    "Proposed move is dangerous, staying put is safer",
                )
            return ActionRequest.SHOOT, "Move leads to death, shooting as last resort"

    if proposed is ActionRequest.SHOOT and danger_here:
        if not danger_forward:
            return (
                ActionRequest.MOVE_FORWARD,
                "Shooting while staying here is fatal, moving forward instead",
            )
        return (
            ActionRequest.ROTATE_RIGHT_45,
            "Shooting while staying here is fatal, rotate to reposition",
        )

    if proposed is not ActionRequest.SHOOT and tank.can_shoot():
        for y in range(board.height):
            for x in range(board.width):
                if not _is_enemy(tank, board.tile_at(x, y)):
                    continue
                enemy = Position(x, y)
                if _wrap_distance(pos, enemy, board.width, board.height) <= CLOSE_RANGE:
                    toward = direction_to(pos, enemy, board.width, board.height)
                    if facing == toward:
                        return (
                            ActionRequest.SHOOT,
                            "Enemy is in range and aligned, override to shoot",
                        )
                    return (
                        rotate_toward(facing, toward),
                        "Enemy is close but not aligned, rotate toward them",
                    )

    return proposed, "Proposed action deemed safe and reasonable"