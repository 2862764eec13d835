from __future__ import annotations

import numpy as np

from game.constants import Side
from game.cube_game import GameState
from game.cube_logic import empty_cells
from game.players.cube_player import CubePlayer


class RandomCubePlayer(CubePlayer):

    def __init__(self, side: Side, name: str | None = None, rng_seed: int | None = None):
        super().__init__(side, name if name is not None else f"Random {1 if side == Side.FIRST else 2}")
        self.rng = np.random.default_rng(rng_seed)

    def get_action(self, state: GameState) -> int:
        """Select a uniformly random empty cell.

        Raises:
            ValueError: If the board has no empty cell
        """
        cells = empty_cells(state.board)
        if not cells:
            raise ValueError("No empty cell to play")
        return cells[int(self.rng.integers(len(cells)))]
