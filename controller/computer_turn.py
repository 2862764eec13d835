"""Background execution of computer moves.

The search runs on a worker thread so the controller can bound how long a
move may take. A failed or timed-out search falls back to a random legal move.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError

import numpy as np

from game.cube_game import GameState
from game.cube_logic import empty_cells
from learner.minimax.search import SearchStats

logger = logging.getLogger(__name__)


class ComputerTurnRunner:
    """Runs ``player.select_move`` off the calling thread with an optional timeout.

    One worker thread serves every move, so an abandoned search can never run
    alongside the next one. Each move gets fresh search counters; they reach
    the player only when the move completes in time.
    """

    def __init__(self, timeout: float | None = None, rng_seed: int | None = None):
        """
        Args:
            timeout: Seconds to wait for a move (None waits indefinitely)
            rng_seed: Seed for the fallback move generator
        """
        self.timeout = timeout
        self.rng = np.random.default_rng(rng_seed)
        self.fallbacks = 0
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="computer-turn")

    def run(self, player, state: GameState) -> int:
        """Return the player's move, padded to its think delay if it has one."""
        delay = player.think_delay() if hasattr(player, "think_delay") else 0.0
        start = time.perf_counter()
        index = self._compute(player, state)
        remaining = delay - (time.perf_counter() - start)
        if remaining > 0:
            time.sleep(remaining)
        return index

    def close(self) -> None:
        """Release the worker thread without waiting for a running search."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _compute(self, player, state):
        stats = SearchStats()
        future = self._executor.submit(player.select_move, state, stats)
        try:
            index = future.result(timeout=self.timeout)
        except FutureTimeoutError:
            # The search stops at its next node; its result is discarded
            stats.cancel()
            future.cancel()
            logger.warning(
                "%s did not move within %.2fs, playing a random move", player.name, self.timeout
            )
        except Exception:
            logger.warning("%s failed to choose a move, playing a random move", player.name, exc_info=True)
        else:
            player.record_stats(stats)
            return index
        return self._fallback_move(state)

    def _fallback_move(self, state):
        cells = empty_cells(state.board)
        if not cells:
            raise ValueError("No legal moves available")
        self.fallbacks += 1
        return int(self.rng.choice(cells))
