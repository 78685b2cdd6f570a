import pytest

from tankbattle.board import Board
from tankbattle.common_sense import (
    apply_common_sense,
    direction_to,
    is_dangerous_position,
    rotate_toward,
)
from tankbattle.geometry import ActionRequest, Direction, Position
from tankbattle.units import Shell, Tank

_ROTATIONS = {
    ActionRequest.ROTATE_LEFT_45: Direction.rotate_left8,
    ActionRequest.ROTATE_RIGHT_45: Direction.rotate_right8,
    ActionRequest.ROTATE_LEFT_90: Direction.rotate_left4,
    ActionRequest.ROTATE_RIGHT_90: Direction.rotate_right4,
}


def _setup(direction=Direction.U, player=1, pos=Position(5, 5)):
    board = Board(10, 10)
    tank = Tank(player, 0, pos, direction)
    board.place_tank(pos, player)
    return board, tank


def test_mine_is_dangerous():
    board, tank = _setup()
    board.place_mine(Position(2, 2))
    assert is_dangerous_position(Position(2, 2), board, [], tank)


def test_empty_cell_is_safe():
    board, tank = _setup()
    assert not is_dangerous_position(Position(2, 2), board, [], tank)


def test_own_tile_is_safe_but_enemy_tile_is_not():
    board, tank = _setup()
    board.place_tank(Position(1, 1), 2)
    assert not is_dangerous_position(tank.position, board, [], tank)
    assert is_dangerous_position(Position(1, 1), board, [], tank)


def test_incoming_shell_within_lookahead_is_dangerous():
    board, tank = _setup()
    shells = [Shell(Position(1, 2), Direction.R)]
    assert is_dangerous_position(Position(5, 2), board, shells, tank)
    assert not is_dangerous_position(Position(6, 2), board, shells, tank)


def test_wall_blocks_shell_threat():
    board, tank = _setup()
    board.place_wall(Position(3, 2))
    shells = [Shell(Position(1, 2), Direction.R)]
    assert not is_dangerous_position(Position(4, 2), board, shells, tank)


@pytest.mark.parametrize("start", [Position(4, 4), Position(0, 0), Position(8, 0)])
@pytest.mark.parametrize("direction", list(Direction))
def test_direction_to_neighbour_recovers_direction(start, direction):
    board = Board(9, 9)
    neighbour = board.wrap(start.move(direction))
    assert direction_to(start, neighbour, 9, 9) == direction


def test_direction_to_same_cell_falls_back_to_up():
    assert direction_to(Position(3, 3), Position(3, 3), 9, 9) == Direction.U


@pytest.mark.parametrize("current", list(Direction))
@pytest.mark.parametrize("target", list(Direction))
def test_rotate_toward_reaches_target(current, target):
    direction = current
    for _ in range(4):
        action = rotate_toward(direction, target)
        if action is ActionRequest.DO_NOTHING:
            break
        direction = _ROTATIONS[action](direction)
    assert direction == target
    assert (rotate_toward(current, target) is ActionRequest.DO_NOTHING) == (current == target)


def test_safe_proposal_passes_through():
    board, tank = _setup()
    action, reason = apply_common_sense(tank, board, [], ActionRequest.MOVE_FORWARD)
    assert action is ActionRequest.MOVE_FORWARD
    assert reason == "Proposed action deemed safe and reasonable"


def test_standing_in_danger_moves_forward_when_safe():
    board, tank = _setup()
    shells = [Shell(Position(3, 5), Direction.R)]
    action, reason = apply_common_sense(tank, board, shells, ActionRequest.DO_NOTHING)
    assert reason == "Rotating/standing still is fatal, moving forward is safe"
    assert action is ActionRequest.MOVE_FORWARD


def test_standing_in_danger_with_forward_blocked_shoots():
    board, tank = _setup()
    shells = [Shell(Position(5, 7), Direction.U)]
    action, reason = apply_common_sense(tank, board, shells, ActionRequest.ROTATE_LEFT_90)
    assert reason == "Rotating/standing still is fatal, shooting as last resort"
    assert action is ActionRequest.SHOOT


def test_move_onto_mine_is_replaced_by_waiting():
    board, tank = _setup()
    board.place_mine(Position(5, 4))
    action, reason = apply_common_sense(tank, board, [], ActionRequest.MOVE_FORWARD)
    assert reason == "Proposed move is dangerous, staying put is safer"
    assert action is ActionRequest.DO_NOTHING


def test_deadly_backward_move_shoots():
    board, tank = _setup()
    board.place_mine(Position(5, 6))
    shells = [Shell(Position(3, 5), Direction.R)]
    action, reason = apply_common_sense(tank, board, shells, ActionRequest.MOVE_BACKWARD)
    assert reason == "Move leads to death, shooting as last resort"
    assert action is ActionRequest.SHOOT


def test_shooting_in_danger_moves_forward_or_rotates():
    board, tank = _setup()
    side = [Shell(Position(3, 5), Direction.R)]
    action, reason = apply_common_sense(tank, board, side, ActionRequest.SHOOT)
    assert action is ActionRequest.MOVE_FORWARD
    assert reason == "Shooting while staying here is fatal, moving forward instead"

    behind = [Shell(Position(5, 7), Direction.U)]
    action, reason = apply_common_sense(tank, board, behind, ActionRequest.SHOOT)
    assert reason == "Shooting while staying here is fatal, rotate to reposition"
    assert action is ActionRequest.ROTATE_RIGHT_45


def test_adjacent_aligned_enemy_is_shot_instead_of_rammed():
    board, tank = _setup()
    board.place_tank(Position(5, 4), 2)
    action, reason = apply_common_sense(tank, board, [], ActionRequest.MOVE_FORWARD)
    assert action is ActionRequest.SHOOT
    assert reason == "Enemy is in range and aligned, override to shoot"


def test_close_enemy_not_aligned_triggers_rotation():
    board, tank = _setup()
    enemy = Position(7, 5)
    board.place_tank(enemy, 2)
    action, reason = apply_common_sense(tank, board, [], ActionRequest.DO_NOTHING)
    toward = direction_to(tank.position, enemy, 10, 10)
    assert action is rotate_toward(tank.direction, toward)
    assert reason == "Enemy is close but not aligned, rotate toward them"


def test_enemy_out_of_range_leaves_proposal():
    board, tank = _setup()
    board.place_tank(Position(8, 5), 2)
    action, reason = apply_common_sense(tank, board, [], ActionRequest.ROTATE_LEFT_45)
    assert action is ActionRequest.ROTATE_LEFT_45
    assert reason == "Proposed action deemed safe and reasonable"


def test_close_enemy_ignored_while_reloading():
    board, tank = _setup()
    board.place_tank(Position(5, 4), 2)
    tank.on_shoot()
    action, reason = apply_common_sense(tank, board, [], ActionRequest.ROTATE_LEFT_45)
    assert action is ActionRequest.ROTATE_LEFT_45
    assert reason == "Proposed action deemed safe and reasonable"