"""Static evaluation and move ordering for the minimax search."""

from typing import Dict, Iterable, List

import numpy as np

from game.constants import EMPTY, Side
from game.winning_lines import LINES_ARRAY
from shared.constants import CENTER_CELL, CORNER_CELLS, EDGE_CELLS, FACE_CENTER_CELLS

# Score of a line by the number of cells one side holds in it, given the
# other side holds none: started, one move from completion, complete.
LINE_SCORES = np.array([0, 1, 10, 1000], dtype=np.int64)
LINE_SCORES.flags.writeable = False

CENTER_BONUS = 5

# Static ordering weight per cell: center > face centers > corners > edges
POSITION_VALUES: Dict[int, int] = {CENTER_CELL: 100}
POSITION_VALUES.update({cell: 50 for cell in FACE_CENTER_CELLS})
POSITION_VALUES.update({cell: 40 for cell in CORNER_CELLS})
POSITION_VALUES.update({cell: 30 for cell in EDGE_CELLS})


def evaluate_board(board: np.ndarray, side: Side) -> int:
    """Score a position from ``side``'s perspective.

    Each line still open to exactly one side contributes that side's
    LINE_SCORES entry (positive for ``side``, negative for the opponent),
    plus a bonus for holding the center. The score is antisymmetric:
    evaluate_board(b, s) == -evaluate_board(b, s.opponent).
    """
    values = board[LINES_ARRAY]
    own = np.count_nonzero(values == side, axis=1)
    opp = np.count_nonzero(values == -side, axis=1)

    score = int(LINE_SCORES[own[opp == 0]].sum()) - int(LINE_SCORES[opp[own == 0]].sum())

    center = board[CENTER_CELL]
    if center == side:
        score += CENTER_BONUS
    elif center != EMPTY:
        score -= CENTER_BONUS
    return score


def order_moves(cells: Iterable[int]) -> List[int]:
    """Sort moves by POSITION_VALUES, highest first.

    The sort is stable, so cells of equal weight keep ascending index order.
    """
    return sorted(cells, key=lambda cell: -POSITION_VALUES[cell])
