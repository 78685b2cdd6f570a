"""Abstract interfaces for players, tank algorithms and the views they receive."""

from __future__ import annotations

from abc import ABC, abstractmethod

from tankbattle.geometry import ActionRequest


class BattleInfo:
    """Information handed to a tank algorithm about the ongoing battle."""


class SatelliteView(ABC):
    """A read-only snapshot of the board, one character per cell."""

    @abstractmethod
    def object_at(self, x: int, y: int) -> str:
        """The character describing what occupies cell ``(x, y)``."""


class TankAlgorithm(ABC):
    """Drives a single tank, possibly using battle information it asked for."""

    @abstractmethod
    def get_action(self) -> ActionRequest:
        """The next action this tank requests."""

    @abstractmethod
    def update_battle_info(self, info: BattleInfo) -> None:
        """Receive fresh battle information."""


class TankAlgorithmFactory(ABC):
    """Creates tank algorithms for a player's tanks."""

    @abstractmethod
    def create(self, player_index: int, tank_index: int) -> TankAlgorithm:
        """A new algorithm for tank ``tank_index`` of player ``player_index``."""


class Player(ABC):
    """A player who answers its tanks' requests for battle information."""

    def __init__(
        self, player_index: int, x: int, y: int, max_steps: int, num_shells: int
    ) -> None:
        self.player_index = player_index
        self.x = x
        self.y = y
        self.max_steps = max_steps
        self.num_shells = num_shells

    @abstractmethod
    def update_tank_with_battle_info(
        self, tank: TankAlgorithm, satellite_view: SatelliteView
    ) -> None:
        """Give ``tank`` battle information derived from ``satellite_view``."""


class PlayerFactory(ABC):
    """Creates players for a game."""

    @abstractmethod
    def create(
        self, player_index: int, x: int, y: int, max_steps: int, num_shells: int
    ) -> Player:
        """A new player for the given board size and game limits."""