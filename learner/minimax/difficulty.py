"""Difficulty levels for the computer opponent.

``get_best_move`` wraps the search with the per-level shortcuts, in order:

1. a single empty cell is returned without search
2. a one-move win for the mover is always taken
3. with probability ``error_rate`` a weaker fallback move is played
4. the opening book (center first, then a corner) for the first two plies
5. a block of the opponent's one-move win
6. minimax search at the configured depth

Randomness always comes from the caller's numpy Generator.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple

import numpy as np

from game.constants import EMPTY, Side
from game.cube_logic import empty_cells, find_immediate_move
from game.move_result import MoveChoice, MoveError, MoveErrorKind
from shared.constants import CENTER_CELL, CORNER_CELLS, TOTAL_CELLS
from .search import SearchStats, search_best_move

logger = logging.getLogger(__name__)

# Easy-level chance of blocking a threat when playing a fallback move
EASY_BLOCK_CHANCE = 0.3


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    IMPOSSIBLE = "impossible"

    @classmethod
    def parse(cls, value: str) -> "Difficulty":
        try:
            return cls(value.strip().lower())
        except ValueError:
            names = ", ".join(level.value for level in cls)
            raise ValueError(f"Invalid difficulty: {value}. Must be one of {names}") from None


class DifficultyConfig(NamedTuple):
    """Search and imperfection settings for one difficulty level.

    Attributes:
        max_depth: Plies searched below the root move before the heuristic
        error_rate: Probability of playing a fallback move instead of searching
        use_opening_book: Use the center/corner opening book
        use_move_ordering: Order moves by position value before recursing
        think_time_ms: (min, max) artificial thinking delay for the UI
    """

    max_depth: int
    error_rate: float
    use_opening_book: bool
    use_move_ordering: bool = True
    think_time_ms: Tuple[int, int] = (0, 0)


DIFFICULTY_CONFIG: Dict[Difficulty, DifficultyConfig] = {
    Difficulty.EASY: DifficultyConfig(
        max_depth=1, error_rate=0.7, use_opening_book=False, think_time_ms=(200, 400)
    ),
    Difficulty.MEDIUM: DifficultyConfig(
        max_depth=2, error_rate=0.2, use_opening_book=True, think_time_ms=(300, 500)
    ),
    Difficulty.HARD: DifficultyConfig(
        max_depth=3, error_rate=0.05, use_opening_book=True, think_time_ms=(400, 700)
    ),
    Difficulty.IMPOSSIBLE: DifficultyConfig(
        max_depth=4, error_rate=0.0, use_opening_book=True, think_time_ms=(500, 1500)
    ),
}


def get_think_delay(difficulty: Difficulty, rng: np.random.Generator) -> float:
    """Draw an artificial thinking delay in seconds for ``difficulty``."""
    low, high = DIFFICULTY_CONFIG[difficulty].think_time_ms
    return float(rng.uniform(low, high)) / 1000.0


def get_opening_move(board: np.ndarray, move_count: int, rng: np.random.Generator) -> Optional[int]:
    """Opening book for the first two plies.

    First move: the center. Second move: a random free corner, whoever holds
    the center.
    """
    if move_count == 0 and board[CENTER_CELL] == EMPTY:
        return CENTER_CELL
    if move_count == 1:
        corners = [cell for cell in CORNER_CELLS if board[cell] == EMPTY]
        if corners:
            return int(rng.choice(corners))
    return None


def get_random_move(
    board: np.ndarray, side: Side, difficulty: Difficulty, rng: np.random.Generator
) -> int:
    """A weak move: uniformly random, except that Easy sometimes blocks a threat."""
    if difficulty is Difficulty.EASY and rng.random() < EASY_BLOCK_CHANCE:
        blocking_move = find_immediate_move(board, side.opponent)
        if blocking_move is not None:
            return blocking_move

    cells = empty_cells(board)
    return cells[int(rng.integers(len(cells)))]


def get_best_move(
    board: np.ndarray,
    side: Side,
    difficulty: Difficulty,
    rng: Optional[np.random.Generator] = None,
    stats: Optional[SearchStats] = None,
) -> MoveChoice:
    """Choose a move for ``side`` at the given difficulty.

    Args:
        board: Current position
        side: Side to move
        difficulty: Difficulty level
        rng: Random source for imperfection and opening choices
            (a fresh unseeded Generator when omitted)
        stats: Optional search counters, updated when a search runs

    Returns:
        MoveChoice with the chosen index, or a NO_LEGAL_MOVES error on a full board
    """
    config = DIFFICULTY_CONFIG[difficulty]
    if rng is None:
        rng = np.random.default_rng()

    cells = empty_cells(board)
    if not cells:
        return MoveChoice(
            error=MoveError(MoveErrorKind.NO_LEGAL_MOVES, "No valid moves available")
        )
    if len(cells) == 1:
        return MoveChoice(index=cells[0])

    winning_move = find_immediate_move(board, side)
    if winning_move is not None:
        logger.debug("%s: immediate win at %d", difficulty.value, winning_move)
        return MoveChoice(index=winning_move)

    if rng.random() < config.error_rate:
        move = get_random_move(board, side, difficulty, rng)
        logger.debug("%s: fallback move %d", difficulty.value, move)
        return MoveChoice(index=move)

    move_count = TOTAL_CELLS - len(cells)
    if config.use_opening_book and move_count < 2:
        opening_move = get_opening_move(board, move_count, rng)
        if opening_move is not None:
            logger.debug("%s: opening book move %d", difficulty.value, opening_move)
            return MoveChoice(index=opening_move)

    blocking_move = find_immediate_move(board, side.opponent)
    if blocking_move is not None:
        logger.debug("%s: blocking at %d", difficulty.value, blocking_move)
        return MoveChoice(index=blocking_move)

    result = search_best_move(
        board, side, config.max_depth, use_move_ordering=config.use_move_ordering, stats=stats
    )
    if stats is not None:
        logger.debug(
            "%s: searched %d nodes (%d cutoffs), move %d score %.2f",
            difficulty.value, stats.nodes, stats.cutoffs, result.move, result.score,
        )
    return MoveChoice(index=result.move)
