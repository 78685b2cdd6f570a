"""Decision-making algorithms that steer a tank."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections import deque
from typing import TextIO

from tankbattle.board import Board, Tile
from tankbattle.common_sense import direction_to, rotate_toward
from tankbattle.geometry import ActionRequest, Direction, Position
from tankbattle.units import Shell, Tank


def _is_enemy(tank: Tank, tile: Tile) -> bool:
    return (tank.player_id == 1 and tile.is_tank2()) or (
        tank.player_id == 2 and tile.is_tank1()
    )


class Algorithm(ABC):
    """Chooses the next action for a tank."""

    @abstractmethod
    def decide_action(self, tank: Tank, board: Board, shells: list[Shell]) -> ActionRequest:
        """Return the action the tank should request this step."""


class ChasingAlgorithm(Algorithm):
    """Follows a breadth-first shortest path towards the enemy tank."""

    def __init__(self) -> None:
        self.last_target = Position(-1, -1)
        self.map_changed = True
        self.cached_direction = Direction.U

    def notify_map_changed(self) -> None:
        """Force the path to be recomputed on the next decision."""
        self.map_changed = True

    @staticmethod
    def _find_target(tank: Tank, board: Board) -> Position | None:
        # The first enemy of the last row that holds one.
        target = None
        for y in range(board.height):
            target = next(
                (
                    Position(x, y)
                    for x in range(board.width)
                    if _is_enemy(tank, board.tile_at(x, y))
                ),
                target,
            )
        return target

    @staticmethod
    def _search(start: Position, target: Position, board: Board) -> dict[Position, Position] | None:
        visited = {start}
        parents: dict[Position, Position] = {}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            if current == target:
                break
            for direction in Direction:
                nxt = board.wrap(current.move(direction))
                if nxt in visited:
                    continue
                tile = board.tile(nxt)
                blocked = tile.is_wall() or tile.is_mine() or tile.is_occupied()
                if blocked and nxt != target:
                    continue
                visited.add(nxt)
                parents[nxt] = current
                queue.append(nxt)
        return parents if target in visited else None

    def decide_action(self, tank: Tank, board: Board, shells: list[Shell]) -> ActionRequest:
        start = tank.position
        facing = tank.direction

        target = self._find_target(tank, board)
        if target is None:
            return ActionRequest.DO_NOTHING

        if target != self.last_target or self.map_changed:
            self.last_target = target
            self.map_changed = False

            parents = self._search(start, target, board)
            if parents is None:
                self.cached_direction = Direction.U
                return ActionRequest.DO_NOTHING

            path = []
            at = target
            while at != start and at in parents:
                path.append(at)
                at = parents[at]

            if not path:
                toward = direction_to(start, target, board.width, board.height)
                self.cached_direction = toward
                if toward != facing:
                    return rotate_toward(facing, toward)
                return ActionRequest.DO_NOTHING

            step = path[-1]
            self.cached_direction = next(
                (d for d in Direction if board.wrap(start.move(d)) == step),
                self.cached_direction,
            )

        if self.cached_direction == facing:
            return ActionRequest.MOVE_FORWARD
        return rotate_toward(facing, self.cached_direction)


class ShootingAlgorithm(Algorithm):
    """Turns towards the nearest enemy and fires when lined up."""

    def decide_action(self, tank: Tank, board: Board, shells: list[Shell]) -> ActionRequest:
        here = tank.position
        facing = tank.direction

        closest = None
        best = board.width + board.height
        for y in range(board.height):
            for x in range(board.width):
                if not _is_enemy(tank, board.tile_at(x, y)):
                    continue
                dx = abs(x - here.x)
                dy = abs(y - here.y)
                dist = max(min(dx, board.width - dx), min(dy, board.height - dy))
                if dist < best:
                    best = dist
                    closest = Position(x, y)

        if closest is not None:
            toward = direction_to(here, closest, board.width, board.height)
            if facing == toward and tank.can_shoot():
                return ActionRequest.SHOOT
            if facing != toward:
                return rotate_toward(facing, toward)

        return ActionRequest.DO_NOTHING


_KEYS = {
    "f": ActionRequest.MOVE_FORWARD,
    "b": ActionRequest.MOVE_BACKWARD,
    "l": ActionRequest.ROTATE_LEFT_45,
    "r": ActionRequest.ROTATE_RIGHT_45,
    "L": ActionRequest.ROTATE_LEFT_90,
    "R": ActionRequest.ROTATE_RIGHT_90,
    "s": ActionRequest.SHOOT,
    "n": ActionRequest.DO_NOTHING,
}

_PROMPT = (
    "Enter action (f=forward, b=backward, l=left8, r=right8, "
    "L=left4, R=right4, s=shoot, n=none): "
)


class UserInputAlgorithm(Algorithm):
    """Asks a person for each action, one key character per decision."""

    def __init__(self, stream: TextIO | None = None, out: TextIO | None = None) -> None:
        self._stream = stream
        self._out = out
        self._pending = ""

    def _next_char(self) -> str | None:
        stream = self._stream if self._stream is not None else sys.stdin
        while not self._pending:
            line = stream.readline()
            if not line:
                return None
            self._pending = "".join(line.split())
        char, self._pending = self._pending[0], self._pending[1:]
        return char

    def decide_action(self, tank: Tank, board: Board, shells: list[Shell]) -> ActionRequest:
        out = self._out if self._out is not None else sys.stdout
        print(file=out)
        print(f"Current direction: {tank.direction.name}", file=out)
        print(
            f"\n[UserInput] Tank P{tank.player_id} ID {tank.tank_id}: {_PROMPT}",
            end="",
            file=out,
            flush=True,
        )
        char = self._next_char()
        if char in _KEYS:
            return _KEYS[char]
        print("Invalid input, doing nothing.", file=out)
        return ActionRequest.DO_NOTHING


def test_next_action(tank: Tank) -> ActionRequest:
    """Scripted behaviour: player 1 keeps backing up, everyone else waits."""
    if tank.player_id == 1:
        return ActionRequest.MOVE_BACKWARD
    return ActionRequest.DO_NOTHING


test_next_action.__test__ = False  # type: ignore[attr-defined]