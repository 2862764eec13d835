"""Depth-limited minimax search with alpha-beta pruning.

Scores are from the root side's perspective:
    root side has won       100 - depth   (prefer quicker wins)
    opponent has won        depth - 100   (prefer slower losses)
    board full              0
    depth limit reached     evaluate_board(...) * HEURISTIC_SCALE

``depth`` counts plies below the root move, so a search with max_depth d
looks at the root move plus d replies before falling back to the heuristic.
The scaled heuristic is at most 4.95 in size (49 lines of 10 plus the
center bonus, times 0.01), far below the smallest terminal score of about
96 at the depths the difficulty levels search, so it never outranks a
win or a loss.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np

from game.constants import Side
from game.cube_logic import check_win, check_win_all_lines, empty_cells, is_board_full, place
from .evaluation import evaluate_board, order_moves

WIN_SCORE = 100
HEURISTIC_SCALE = 0.01


@dataclass
class SearchStats:
    """Counters collected during one search."""

    nodes: int = 0
    cutoffs: int = 0
    cancelled: bool = False

    def reset(self) -> None:
        self.nodes = 0
        self.cutoffs = 0
        self.cancelled = False

    def cancel(self) -> None:
        """Ask a search running with these counters to stop at its next node."""
        self.cancelled = True


class SearchCancelled(Exception):
    """Raised inside a search whose stats were cancelled."""


class SearchResult(NamedTuple):
    move: int
    score: float


def _winner(board: np.ndarray, last_move: Optional[int]) -> Optional[Side]:
    if last_move is None:
        found = check_win_all_lines(board)
        return None if found is None else found[1]
    if check_win(board, last_move) is None:
        return None
    return Side(int(board[last_move]))


def minimax(
    board: np.ndarray,
    depth: int,
    maximizing: bool,
    alpha: float,
    beta: float,
    root_side: Side,
    max_depth: int,
    last_move: Optional[int] = None,
    use_move_ordering: bool = True,
    stats: Optional[SearchStats] = None,
) -> float:
    """Score a position by minimax with alpha-beta pruning.

    Args:
        board: Position to score
        depth: Plies already played below the root move
        maximizing: True if ``root_side`` is to move
        alpha: Best score the maximizer can already guarantee
        beta: Best score the minimizer can already guarantee
        root_side: Side the scores are computed for
        max_depth: Depth at which the heuristic replaces further search
        last_move: Cell played to reach this position; restricts the win
            check to lines through it. None scans all lines.
        use_move_ordering: Order children by static position value
        stats: Optional counters updated in place

    Raises:
        SearchCancelled: If ``stats.cancel()`` was called during the search
    """
    if stats is not None:
        if stats.cancelled:
            raise SearchCancelled()
        stats.nodes += 1

    winner = _winner(board, last_move)
    if winner is not None:
        return WIN_SCORE - depth if winner == root_side else depth - WIN_SCORE
    if is_board_full(board):
        return 0
    if depth >= max_depth:
        return evaluate_board(board, root_side) * HEURISTIC_SCALE

    moves = empty_cells(board)
    if use_move_ordering:
        moves = order_moves(moves)
    mover = root_side if maximizing else root_side.opponent

    if maximizing:
        best = -math.inf
        for index in moves:
            value = minimax(
                place(board, index, mover), depth + 1, False, alpha, beta,
                root_side, max_depth, index, use_move_ordering, stats,
            )
            best = max(best, value)
            alpha = max(alpha, value)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break  # Beta cutoff
        return best

    best = math.inf
    for index in moves:
        value = minimax(
            place(board, index, mover), depth + 1, True, alpha, beta,
            root_side, max_depth, index, use_move_ordering, stats,
        )
        best = min(best, value)
        beta = min(beta, value)
        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break  # Alpha cutoff
    return best


def search_best_move(
    board: np.ndarray,
    side: Side,
    max_depth: int,
    use_move_ordering: bool = True,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    """Pick the move with the highest minimax score for ``side``.

    Ties go to the first move in the (ordered) move list.

    Raises:
        ValueError: If the board has no empty cell
        SearchCancelled: If ``stats.cancel()`` was called during the search
    """
    moves = empty_cells(board)
    if not moves:
        raise ValueError("No legal moves to search")
    if use_move_ordering:
        moves = order_moves(moves)

    best_move = moves[0]
    best_score = -math.inf
    alpha = -math.inf
    for index in moves:
        score = minimax(
            place(board, index, side), 0, False, alpha, math.inf,
            side, max_depth, index, use_move_ordering, stats,
        )
        if score > best_score:
            best_score = score
            best_move = index
        alpha = max(alpha, score)

    return SearchResult(move=best_move, score=best_score)
