from __future__ import annotations

import queue

from game.constants import Side
from game.cube_game import GameState
from game.players.cube_player import CubePlayer


class HumanCubePlayer(CubePlayer):
    """Player whose moves are submitted from outside (UI, console).

    Moves arrive through a thread-safe queue; ``get_action`` blocks until one
    is available.
    """

    def __init__(self, side: Side, name: str | None = None):
        super().__init__(side, name)
        self._action_queue: queue.Queue = queue.Queue()
        self.last_rejection: str | None = None

    def get_action(self, state: GameState) -> int:
        return self._action_queue.get()

    def submit_action(self, index: int) -> None:
        self._action_queue.put(index)

    def cancel_pending_action(self) -> None:
        try:
            while True:
                self._action_queue.get_nowait()
        except queue.Empty:
            pass

    def pending_actions_empty(self) -> bool:
        return self._action_queue.empty()

    def on_move_rejected(self, index: int, reason: str) -> None:
        self.last_rejection = reason

    def clear_context(self) -> None:
        self.last_rejection = None
