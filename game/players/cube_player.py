from __future__ import annotations

from game.constants import Side
from game.cube_game import GameState


class CubePlayer:
    """Base player with shared state and lifecycle hooks."""

    def __init__(self, side: Side, name: str | None = None):
        self.side = Side(side)
        self.n = 1 if self.side is Side.FIRST else 2
        self.name = name if name is not None else f"Player {self.n}"

    def get_action(self, state: GameState) -> int:
        """Return the cell index this player wants to play in ``state``."""
        raise NotImplementedError

    def select_move(self, state: GameState, stats=None) -> int:
        """Choose a move without changing the player's recorded state.

        Used when the move is computed on a worker thread; the caller
        publishes ``stats`` through ``record_stats`` once the move is known.
        """
        return self.get_action(state)

    def record_stats(self, stats) -> None:
        """Accept the search counters of a completed ``select_move``."""
        return None

    #
    # Lifecycle hooks
    #
    def on_turn_start(self, state: GameState) -> None:
        """Inform the player that its turn has begun."""
        return None

    def on_move_rejected(self, index: int, reason: str) -> None:
        """Inform the player that its last move was rejected."""
        return None

    def clear_context(self) -> None:
        """Signal that the current turn is complete."""
        return None
