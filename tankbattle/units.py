"""Tanks and the shells they fire."""

from __future__ import annotations

from dataclasses import dataclass, field

from tankbattle.board import Board
from tankbattle.geometry import Direction, Position

STARTING_SHELLS = 16
SHOOT_COOLDOWN = 4
BACKWARD_WAIT = 2
_NO_BACKWARD = -1


@dataclass(eq=False)
class Tank:
    """A player's tank with its ammunition, cooldown and backward-move timer."""

    player_id: int
    tank_id: int
    position: Position
    direction: Direction
    previous_position: Position = field(default_factory=Position, init=False)
    shells_left: int = field(default=STARTING_SHELLS, init=False)
    shoot_cooldown: int = field(default=0, init=False)
    destroyed: bool = field(default=False, init=False)
    backward_step_counter: int = field(default=_NO_BACKWARD, init=False)
    in_backward_mode: bool = field(default=False, init=False)
    just_moved_backward: bool = field(default=False, init=False)

    @property
    def alive(self) -> bool:
        return not self.destroyed

    def can_shoot(self) -> bool:
        return self.shoot_cooldown == 0 and self.shells_left > 0

    def on_shoot(self) -> None:
        """Spend a shell and start the cooldown, if a shot is possible."""
        if self.can_shoot():
            self.shoot_cooldown = SHOOT_COOLDOWN
            self.shells_left -= 1

    def move_forward(self, board: Board) -> None:
        self.previous_position = self.position
        self.position = board.wrap(self.position.move(self.direction))

    def move_backward(self, board: Board) -> None:
        self.previous_position = self.position
        self.position = board.wrap(self.position.move(self.direction.opposite()))
        self.just_moved_backward = True

    def rotate_right4(self) -> None:
        self.direction = self.direction.rotate_right4()

    def rotate_right8(self) -> None:
        self.direction = self.direction.rotate_right8()

    def rotate_left4(self) -> None:
        self.direction = self.direction.rotate_left4()

    def rotate_left8(self) -> None:
        self.direction = self.direction.rotate_left8()

    def set_position(self, pos: Position) -> None:
        self.previous_position = self.position
        self.position = pos

    def request_backward(self) -> None:
        """Ask to reverse: immediate after a backward move, otherwise after a wait."""
        if self.just_moved_backward:
            self.backward_step_counter = BACKWARD_WAIT
        elif self.backward_step_counter == _NO_BACKWARD:
            self.backward_step_counter = 0
            self.in_backward_mode = True

    def cancel_backward(self) -> None:
        self.backward_step_counter = _NO_BACKWARD
        self.in_backward_mode = False

    def is_waiting_for_backward(self) -> bool:
        return 0 <= self.backward_step_counter < BACKWARD_WAIT

    def is_ready_to_move_backward(self) -> bool:
        return self.backward_step_counter >= BACKWARD_WAIT

    def step_backward_timer(self) -> None:
        if self.is_waiting_for_backward():
            self.backward_step_counter += 1

    def reset_backward_state(self) -> None:
        self.backward_step_counter = _NO_BACKWARD
        self.in_backward_mode = False
        self.just_moved_backward = False

    def clear_just_moved_backward(self) -> None:
        self.just_moved_backward = False

    def cancel_move(self) -> None:
        """Return to the position held before the last move."""
        self.position = self.previous_position

    def tick_cooldown(self) -> None:
        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1

    def destroy(self) -> None:
        self.destroyed = True

    def __str__(self) -> str:
        return (
            f"Tank(P{self.player_id}, ID {self.tank_id}) "
            f"at ({self.position.x},{self.position.y})"
        )


@dataclass
class Shell:
    """A projectile travelling one cell per advance in a fixed direction."""

    position: Position
    direction: Direction
    active: bool = True

    def advance(self, board: Board) -> None:
        if self.active:
            self.position = board.wrap(self.position.move(self.direction))