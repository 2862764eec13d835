"""Stateless board logic for the 3x3x3 cube.

All functions are pure: same inputs -> same outputs.
No side effects, no mutations, no hidden state.

Board representation: read-only numpy int8 array of length 27
  - 0: empty
  - +1: first side
  - -1: second side

Because the values are symmetric around zero, a line is uniformly occupied
exactly when the absolute sum of its three cells is 3.

Usage:
    board = empty_board()
    board = place(board, 13, Side.FIRST)
    line = check_win(board, 13)
"""

from typing import List, Optional, Tuple

import numpy as np

from game.constants import EMPTY, Side
from game.winning_lines import (
    CELL_LINE_IDS,
    CELL_TO_LINES,
    LINES_ARRAY,
    WINNING_LINES,
    WinningLine,
)
from shared.constants import TOTAL_CELLS


def _freeze(board: np.ndarray) -> np.ndarray:
    board.flags.writeable = False
    return board


def empty_board() -> np.ndarray:
    """Create a read-only board with every cell empty."""
    return _freeze(np.zeros(TOTAL_CELLS, dtype=np.int8))


def board_from_cells(cells) -> np.ndarray:
    """Build a read-only board from any sequence of 27 cell values."""
    board = np.array(cells, dtype=np.int8)
    if board.shape != (TOTAL_CELLS,):
        raise ValueError(f"Board must have {TOTAL_CELLS} cells, got shape {board.shape}")
    if not np.isin(board, (EMPTY, Side.FIRST, Side.SECOND)).all():
        raise ValueError("Board cells must be 0, 1 or -1")
    return _freeze(board)


def place(board: np.ndarray, index: int, side: Side) -> np.ndarray:
    """Return a copy of the board with ``side`` placed at ``index``.

    The caller is responsible for validating the move.
    """
    new_board = board.copy()
    new_board[index] = side
    return _freeze(new_board)


def empty_cells(board: np.ndarray) -> List[int]:
    """Return the indices of all empty cells in ascending order."""
    return np.flatnonzero(board == EMPTY).tolist()


def is_board_full(board: np.ndarray) -> bool:
    return not (board == EMPTY).any()


def count_pieces(board: np.ndarray, side: Side) -> int:
    return int(np.count_nonzero(board == side))


def check_win(board: np.ndarray, last_move_index: int) -> Optional[WinningLine]:
    """Check whether the move at ``last_move_index`` completed a line.

    Only the lines passing through the last move are examined. When several
    lines are completed at once, the first one in table order is returned.

    Returns:
        The completed line, or None
    """
    line_ids = CELL_LINE_IDS[last_move_index]
    sums = board[LINES_ARRAY[line_ids]].sum(axis=1)
    hits = np.flatnonzero(np.abs(sums) == 3)
    if hits.size == 0:
        return None
    return WINNING_LINES[line_ids[hits[0]]]


def check_win_all_lines(board: np.ndarray) -> Optional[Tuple[WinningLine, Side]]:
    """Check every line for a win (less efficient, use for validation).

    Returns:
        (line, winning side) for the first completed line in table order, or None
    """
    sums = board[LINES_ARRAY].sum(axis=1)
    hits = np.flatnonzero(np.abs(sums) == 3)
    if hits.size == 0:
        return None
    line_id = int(hits[0])
    return WINNING_LINES[line_id], Side(int(np.sign(sums[line_id])))


def is_line_threatened(board: np.ndarray, line: WinningLine, side: Side) -> bool:
    """True if ``side`` holds two cells of the line and the third is empty."""
    values = board[list(line)]
    return int(np.count_nonzero(values == side)) == 2 and int(np.count_nonzero(values == EMPTY)) == 1


def find_empty_in_line(board: np.ndarray, line: WinningLine) -> int:
    """Return the first empty cell of a line, or -1 if the line is full."""
    for index in line:
        if board[index] == EMPTY:
            return index
    return -1


def find_immediate_move(board: np.ndarray, side: Side) -> Optional[int]:
    """Find a cell that completes a line for ``side`` in one move.

    Lines are scanned in table order; the first threatened line wins.
    Used both to win (own side) and to block (opponent side).
    """
    values = board[LINES_ARRAY]
    own = np.count_nonzero(values == side, axis=1)
    empty = np.count_nonzero(values == EMPTY, axis=1)
    hits = np.flatnonzero((own == 2) & (empty == 1))
    if hits.size == 0:
        return None
    return find_empty_in_line(board, WINNING_LINES[int(hits[0])])


def strategic_value(index: int) -> int:
    """Number of winning lines through a cell."""
    return len(CELL_TO_LINES[index])
