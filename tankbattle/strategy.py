"""Per-player mapping from tanks to the algorithms that drive them."""

from __future__ import annotations

from tankbattle.algorithms import Algorithm, ChasingAlgorithm
from tankbattle.board import Board
from tankbattle.common_sense import apply_common_sense
from tankbattle.geometry import ActionRequest
from tankbattle.units import Shell, Tank


class StrategyManager:
    """Routes each tank to its algorithm, optionally filtered by common sense."""

    def __init__(self, use_common_sense: bool = True, verbose: bool = False) -> None:
        self.use_common_sense = use_common_sense
        self.verbose = verbose
        self.strategies: dict[int, Algorithm] = {}

    def assign_algorithm(self, tank_id: int, algorithm: Algorithm) -> None:
        self.strategies[tank_id] = algorithm

    def notify_map_changed_all(self) -> None:
        """Tell every path-finding algorithm that the map has changed."""
        for algorithm in self.strategies.values():
            if isinstance(algorithm, ChasingAlgorithm):
                algorithm.notify_map_changed()

    def get_action(
        self, tank_id: int, tank: Tank, board: Board, shells: list[Shell]
    ) -> ActionRequest:
        """The action for a tank; tanks with no algorithm do nothing."""
        algorithm = self.strategies.get(tank_id)
        if algorithm is None:
            return ActionRequest.DO_NOTHING

        if self.verbose:
            print(tank)
        raw = algorithm.decide_action(tank, board, shells)
        if self.verbose:
            print(raw.label())

        if not self.use_common_sense:
            return raw

        adjusted, _reason = apply_common_sense(tank, board, shells, raw)
        if self.verbose:
            print(adjusted.label())
        return adjusted