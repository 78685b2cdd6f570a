"""The game loop: moving shells, applying tank actions and resolving collisions."""

from __future__ import annotations

from os import PathLike

from tankbattle.board import Board, Tile, TileType
from tankbattle.geometry import ActionRequest, Position
from tankbattle.strategy import StrategyManager
from tankbattle.units import Shell, Tank

_ROTATIONS = {
    ActionRequest.ROTATE_LEFT_45: Tank.rotate_left8,
    ActionRequest.ROTATE_RIGHT_45: Tank.rotate_right8,
    ActionRequest.ROTATE_LEFT_90: Tank.rotate_left4,
    ActionRequest.ROTATE_RIGHT_90: Tank.rotate_right4,
}


class GameManager:
    """Runs a two-player tank battle on a board and keeps a log of every action."""

    def __init__(
        self,
        board: Board,
        strategy_p1: StrategyManager,
        strategy_p2: StrategyManager,
        player1_tanks: list[Tank],
        player2_tanks: list[Tank],
        verbose: bool = False,
    ) -> None:
        self.board = board
        self.strategy_p1 = strategy_p1
        self.strategy_p2 = strategy_p2
        self.player1_tanks = player1_tanks
        self.player2_tanks = player2_tanks
        self.verbose = verbose
        self.shells: list[Shell] = []
        self.log: list[str] = []
        self.step_counter = 0
        self.game_over = False
        self.result_message = ""

    def run(self, max_steps: int = 1000) -> str:
        """Play until one side is destroyed or ``max_steps`` game steps pass."""
        # Shells move twice per game step; tanks act on every other shell step.
        while not self.game_over and self.step_counter < max_steps * 2:
            self._move_shells()
            self._check_collisions()
            if self.step_counter % 2 == 0:
                if self.verbose:
                    print(f"Step {self.step_counter // 2}")
                    print(self.render())
                    print("----------------------")
                self._tick()
                self._check_collisions()
            self._update_board()

            any_alive1 = any(tank.alive for tank in self.player1_tanks)
            any_alive2 = any(tank.alive for tank in self.player2_tanks)
            if not any_alive1 and not any_alive2:
                self.game_over = True
                self.result_message = "Tie: Both tanks destroyed."
            elif not any_alive1:
                self.game_over = True
                self.result_message = "Player 2 wins!"
            elif not any_alive2:
                self.game_over = True
                self.result_message = "Player 1 wins!"
            self.step_counter += 1

        if not self.game_over:
            self.result_message = "Tie: Max steps reached."
        return self.result_message

    def write_log(self, output_file: str | PathLike[str]) -> None:
        """Write every recorded action followed by the result line."""
        with open(output_file, "w", encoding="utf-8") as out:
            out.writelines(f"{entry}\n" for entry in self.log)
            out.write(f"Result: {self.result_message}\n")

    def render(self) -> str:
        """The board rows with shells drawn as ``*``."""
        rows = [list(line) for line in self.board.to_lines()]
        for shell in self.shells:
            p = shell.position
            if 0 <= p.y < self.board.height and 0 <= p.x < self.board.width:
                rows[p.y][p.x] = "*"
        return "\n".join("".join(row) for row in rows)

    def _tick(self) -> None:
        for tanks, strategy in (
            (self.player1_tanks, self.strategy_p1),
            (self.player2_tanks, self.strategy_p2),
        ):
            for tank in tanks:
                if tank.alive:
                    self._act(tank, strategy)

    def _blocked_behind(self, tank: Tank) -> bool:
        behind = self.board.wrap(tank.position.move(tank.direction.opposite()))
        return self.board.tile(behind).is_wall()

    def _act(self, tank: Tank, strategy: StrategyManager) -> None:
        action = strategy.get_action(tank.tank_id, tank, self.board, self.shells)

        if tank.is_waiting_for_backward():
            if action is ActionRequest.MOVE_FORWARD:
                tank.cancel_backward()
            else:
                self._record(tank, action, False)
                tank.step_backward_timer()
                tank.clear_just_moved_backward()
                return

        if tank.is_ready_to_move_backward():
            success = not self._blocked_behind(tank)
            if success:
                tank.move_backward(self.board)
            self._record(tank, action, success)
            tank.tick_cooldown()
            return

        if action is ActionRequest.MOVE_BACKWARD:
            tank.request_backward()
            self._record(tank, action, True)
            tank.tick_cooldown()
            return

        self._handle_action(tank, action)
        if tank.just_moved_backward:
            tank.reset_backward_state()

    def _handle_action(self, tank: Tank, action: ActionRequest) -> None:
        if not tank.alive:
            return

        success = True
        if action is ActionRequest.SHOOT:
            if tank.can_shoot():
                tank.on_shoot()
                spawn = self.board.wrap(tank.position.move(tank.direction))
                self.shells.append(Shell(spawn, tank.direction))
            else:
                success = False
        elif action is ActionRequest.MOVE_FORWARD:
            ahead = self.board.wrap(tank.position.move(tank.direction))
            if self.board.tile(ahead).is_wall():
                success = False
            else:
                tank.move_forward(self.board)
        elif action is ActionRequest.MOVE_BACKWARD:
            if tank.is_waiting_for_backward():
                success = False
            elif tank.is_ready_to_move_backward():
                if self._blocked_behind(tank):
                    success = False
                else:
                    tank.move_backward(self.board)
                tank.reset_backward_state()
            else:
                tank.request_backward()
        elif action in _ROTATIONS:
            _ROTATIONS[action](tank)
        elif action is not ActionRequest.DO_NOTHING:
            success = False

        self._record(tank, action, success)
        tank.tick_cooldown()

    def _move_shells(self) -> None:
        for shell in self.shells:
            shell.advance(self.board)

    def _update_board(self) -> None:
        for row in self.board.tiles:
            for tile in row:
                if tile.tile_type in (TileType.TANK1, TileType.TANK2):
                    tile.set_type(TileType.EMPTY)
        for tanks, tile_type in (
            (self.player1_tanks, TileType.TANK1),
            (self.player2_tanks, TileType.TANK2),
        ):
            for tank in tanks:
                if tank.alive:
                    self.board.tile(tank.position).set_type(tile_type)

    def _notify_map_changed(self) -> None:
        for strategy in (self.strategy_p1, self.strategy_p2):
            if strategy is not None:
                strategy.notify_map_changed_all()

    @staticmethod
    def _hit_tank(tanks: list[Tank], pos: Position, tile: Tile) -> bool:
        for tank in tanks:
            if tank.alive and tank.position == pos:
                tank.destroy()
                tile.set_type(TileType.EMPTY)
                return True
        return False

    def _check_collisions(self) -> None:
        doomed: set[int] = set()

        for i, shell in enumerate(self.shells):
            pos = shell.position
            tile = self.board.tile(pos)

            partner = next(
                (
                    j
                    for j, other in enumerate(self.shells[i + 1 :], start=i + 1)
                    if other.position == pos
                ),
                None,
            )
            if partner is not None:
                doomed.update((i, partner))
                continue

            if tile.is_wall():
                tile.hit_wall()
                doomed.add(i)
                self._notify_map_changed()
                continue

            if tile.is_tank1() and self._hit_tank(self.player1_tanks, pos, tile):
                doomed.add(i)
                continue
            if tile.is_tank2() and self._hit_tank(self.player2_tanks, pos, tile):
                doomed.add(i)

        for tank in self.player1_tanks:
            self._collide_tank(tank, self.player2_tanks)
        for tank in self.player2_tanks:
            self._collide_tank(tank, self.player1_tanks)

        self.shells = [shell for i, shell in enumerate(self.shells) if i not in doomed]

    def _collide_tank(self, tank: Tank, enemies: list[Tank]) -> None:
        if not tank.alive:
            return
        pos = tank.position
        tile = self.board.tile(pos)

        if tile.is_wall():
            tank.cancel_move()
            return
        if tile.is_mine():
            tank.destroy()
            tile.set_type(TileType.EMPTY)
            return

        if any(shell.position == pos for shell in self.shells):
            tank.destroy()
            tile.set_type(TileType.EMPTY)

        enemy = next((e for e in enemies if e.alive and e.position == pos), None)
        if enemy is not None:
            tank.destroy()
            enemy.destroy()
            tile.set_type(TileType.EMPTY)

    def _record(self, tank: Tank, action: ActionRequest, success: bool) -> None:
        entry = f"P{tank.player_id}-T{tank.tank_id}: {action.label()}"
        if not success:
            entry += " (BAD STEP)"
        self.log.append(entry)