from __future__ import annotations

import logging

import numpy as np

from game.constants import Side
from game.cube_game import GameState
from game.players.cube_player import CubePlayer
from learner.minimax.difficulty import Difficulty, get_best_move, get_think_delay
from learner.minimax.search import SearchStats

logger = logging.getLogger(__name__)


class ComputerCubePlayer(CubePlayer):
    """Minimax-based player at a selectable difficulty.

    The chosen move comes from ``get_best_move``; the player only owns the
    random source and the statistics of its last completed move.
    """

    def __init__(
        self,
        side: Side,
        difficulty: Difficulty = Difficulty.MEDIUM,
        name: str | None = None,
        rng_seed: int | None = None,
        think_time: bool = False,
    ):
        """Initialize computer player.

        Args:
            side: Side this player moves for
            difficulty: Difficulty level (default: medium)
            name: Display name (default: "Computer <n> (<difficulty>)")
            rng_seed: Optional integer seed for reproducible play
            think_time: Whether the controller should add a thinking delay
        """
        n = 1 if side == Side.FIRST else 2
        super().__init__(side, name if name is not None else f"Computer {n} ({difficulty.value})")
        self.difficulty = difficulty
        self.rng_seed = rng_seed
        self.rng = np.random.default_rng(rng_seed)
        self.think_time = think_time
        self.last_stats = SearchStats()

    def get_action(self, state: GameState) -> int:
        """Select a move with the difficulty policy.

        Raises:
            MoveError: If the board has no empty cell
        """
        stats = SearchStats()
        index = self.select_move(state, stats)
        self.record_stats(stats)
        return index

    def select_move(self, state: GameState, stats: SearchStats | None = None) -> int:
        """Select a move, counting the search into ``stats`` instead of ``last_stats``."""
        choice = get_best_move(state.board, self.side, self.difficulty, self.rng, stats)
        index = choice.unwrap()
        logger.debug(
            "%s chose %d after %d nodes", self.name, index, 0 if stats is None else stats.nodes
        )
        return index

    def record_stats(self, stats: SearchStats) -> None:
        self.last_stats = stats

    def think_delay(self) -> float:
        """Artificial delay in seconds the controller should spend on this move."""
        if not self.think_time:
            return 0.0
        return get_think_delay(self.difficulty, self.rng)
