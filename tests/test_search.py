"""
Tests for the minimax search.

Pruned results are cross-checked against a plain minimax without cutoffs.
"""

import math

import numpy as np
import pytest

from game.constants import EMPTY, Side
from game.cube_logic import (
    board_from_cells,
    check_win,
    check_win_all_lines,
    empty_cells,
    find_immediate_move,
    place,
)
from learner.minimax.evaluation import evaluate_board, order_moves
from learner.minimax.search import (
    HEURISTIC_SCALE,
    WIN_SCORE,
    SearchCancelled,
    SearchStats,
    minimax,
    search_best_move,
)

# Endgame with the six face centers, the center pillar cells and all corners
# empty. X's only threat is the center (three lines); O has none.
BLOCK_FIRST = (4, 5, 7, 10, 11, 12, 15, 17, 19, 21, 23, 25)
BLOCK_SECOND = (1, 3, 9, 14, 16, 22)


def make_board(first=(), second=()):
    cells = [EMPTY] * 27
    for index in first:
        cells[index] = Side.FIRST
    for index in second:
        cells[index] = Side.SECOND
    return board_from_cells(cells)


def plain_minimax(board, depth, maximizing, root_side, max_depth):
    """Reference minimax that visits every node."""
    found = check_win_all_lines(board)
    if found is not None:
        return WIN_SCORE - depth if found[1] == root_side else depth - WIN_SCORE
    moves = empty_cells(board)
    if not moves:
        return 0
    if depth >= max_depth:
        return evaluate_board(board, root_side) * HEURISTIC_SCALE

    mover = root_side if maximizing else root_side.opponent
    values = [
        plain_minimax(place(board, index, mover), depth + 1, not maximizing, root_side, max_depth)
        for index in order_moves(moves)
    ]
    return max(values) if maximizing else min(values)


def plain_best_move(board, side, max_depth):
    best_move, best_score = None, -math.inf
    for index in order_moves(empty_cells(board)):
        score = plain_minimax(place(board, index, side), 0, False, side, max_depth)
        if score > best_score:
            best_move, best_score = index, score
    return best_move, best_score


def random_position(rng, pieces):
    """Random position with no completed line."""
    while True:
        cells = np.zeros(27, dtype=np.int8)
        chosen = rng.choice(27, size=pieces, replace=False)
        cells[chosen[: (pieces + 1) // 2]] = Side.FIRST
        cells[chosen[(pieces + 1) // 2:]] = Side.SECOND
        board = board_from_cells(cells)
        if check_win_all_lines(board) is None:
            return board


def threat_cells(board, side):
    """Empty cells where ``side`` would complete a line."""
    return {
        index for index in empty_cells(board)
        if check_win(place(board, index, side), index) is not None
    }


def random_endgame(rng, base, empties_left):
    """Fill random empty cells of ``base`` until ``empties_left`` remain, with no completed line."""
    free = empty_cells(base)
    while True:
        cells = np.array(base, dtype=np.int8)
        chosen = rng.choice(free, size=len(free) - empties_left, replace=False)
        cells[chosen] = rng.choice(np.array([Side.FIRST, Side.SECOND], dtype=np.int8), size=len(chosen))
        board = board_from_cells(cells)
        if check_win_all_lines(board) is None:
            return board


# ============================================================================
# Terminal scoring
# ============================================================================


class TestTerminalScores:
    def test_immediate_win_scores_100(self):
        """Test that a one-move win scores the full win value."""
        board = make_board(first=[0, 1], second=[9, 22])
        result = search_best_move(board, Side.FIRST, max_depth=1)
        assert result.move == 2
        assert result.score == WIN_SCORE

    def test_loss_is_scored_by_depth(self):
        """Test that a loss one ply below the root scores 1 - WIN_SCORE."""
        board = make_board(first=[0, 5], second=[9, 10])
        # Any move other than 11 lets the opponent complete (9, 10, 11)
        score = minimax(place(board, 26, Side.FIRST), 0, False, -math.inf, math.inf, Side.FIRST, 2)
        assert score == 1 - WIN_SCORE

    def test_win_found_in_position_already_won(self):
        """Test that a won position is scored for the winner whoever is to move."""
        board = make_board(first=[0, 1, 2])
        assert minimax(board, 3, False, -math.inf, math.inf, Side.FIRST, 5) == WIN_SCORE - 3
        assert minimax(board, 3, True, -math.inf, math.inf, Side.SECOND, 5) == 3 - WIN_SCORE

    def test_depth_limit_uses_scaled_heuristic(self):
        """Test that the depth limit scores with the scaled heuristic."""
        board = make_board(first=[13], second=[0])
        score = minimax(board, 2, True, -math.inf, math.inf, Side.FIRST, 2)
        assert score == pytest.approx(evaluate_board(board, Side.FIRST) * HEURISTIC_SCALE)
        # 49 lines worth 10 each plus the center bonus, scaled
        assert abs(score) <= 4.95

    def test_no_moves_raises(self):
        """Test that searching a full board raises ValueError."""
        board = board_from_cells([1, -1] * 13 + [1])
        with pytest.raises(ValueError):
            search_best_move(board, Side.SECOND, max_depth=2)


# ============================================================================
# Move choice
# ============================================================================


class TestMoveChoice:
    def test_blocks_opponent_threat(self):
        """Test that the search blocks a one-move loss."""
        board = make_board(first=[0, 5], second=[9, 10])
        result = search_best_move(board, Side.FIRST, max_depth=2)
        assert result.move == 11
        assert result.score > 1 - WIN_SCORE

    def test_finds_fork(self):
        """Test that a depth-3 search finds a double threat."""
        # X at 1 and 3: playing 0 threatens both 2 and 6
        board = make_board(first=[1, 3], second=[26, 19])
        result = search_best_move(board, Side.FIRST, max_depth=3)
        assert result.score == WIN_SCORE - 2
        after = place(board, result.move, Side.FIRST)
        threats = set()
        for index in empty_cells(after):
            if find_immediate_move(place(after, index, Side.SECOND), Side.FIRST) is not None:
                threats.add(index)
        # Every reply leaves a win on the board
        assert threats == set(empty_cells(after))

    def test_prefers_quicker_win(self):
        """Test that an immediate win is preferred over slower ones."""
        board = make_board(first=[0, 1, 3], second=[9, 10, 22])
        result = search_best_move(board, Side.FIRST, max_depth=3)
        assert result.score == WIN_SCORE
        # Row (0, 1, 2) and column (0, 3, 6) both win at once; corners keep index order
        assert result.move == 2

    def test_stats_are_counted(self):
        """Test that node and cutoff counters fill during a search."""
        stats = SearchStats()
        search_best_move(make_board(first=[13], second=[0]), Side.FIRST, max_depth=2, stats=stats)
        assert stats.nodes > 0
        assert stats.cutoffs > 0
        stats.reset()
        assert stats.nodes == 0 and stats.cutoffs == 0

    def test_cancelled_stats_stop_the_search(self):
        """Test that a search with cancelled stats raises SearchCancelled."""
        stats = SearchStats()
        stats.cancel()
        with pytest.raises(SearchCancelled):
            search_best_move(make_board(first=[13], second=[0]), Side.FIRST, max_depth=2, stats=stats)
        assert stats.nodes == 0
        stats.reset()
        assert not stats.cancelled


# ============================================================================
# Full-depth endgames
# ============================================================================


class TestFullDepthEndgames:
    """Searches deep enough to reach the end of the game play perfectly."""

    def test_blocks_the_only_threat(self):
        """Test that a full-depth search blocks when every other move loses at once."""
        board = make_board(first=BLOCK_FIRST, second=BLOCK_SECOND)
        assert threat_cells(board, Side.FIRST) == {13}
        assert threat_cells(board, Side.SECOND) == set()

        result = search_best_move(board, Side.SECOND, max_depth=len(empty_cells(board)))

        assert result.move == 13
        # Blocking only delays the loss: X forks at once and wins two plies later
        assert result.score == 3 - WIN_SCORE
        assert result.score > 1 - WIN_SCORE

    def test_finds_forced_win(self):
        """Test that a full-depth search finds the fork in a won endgame."""
        board = make_board(first=BLOCK_FIRST, second=BLOCK_SECOND + (13,))
        assert threat_cells(board, Side.FIRST) == set()
        assert threat_cells(board, Side.SECOND) == set()

        result = search_best_move(board, Side.FIRST, max_depth=len(empty_cells(board)))

        assert result.score == WIN_SCORE - 2
        after = place(board, result.move, Side.FIRST)
        assert len(threat_cells(after, Side.FIRST)) >= 2
        assert threat_cells(after, Side.SECOND) == set()

    @pytest.mark.parametrize("seed", range(6))
    def test_chosen_move_has_best_exact_value(self, seed):
        """Test that the chosen move is worth as much as the best move by exhaustive minimax."""
        rng = np.random.default_rng(seed)
        base = make_board(first=BLOCK_FIRST, second=BLOCK_SECOND + (13,) * (seed % 2))
        board = random_endgame(rng, base, empties_left=5 + seed % 3)
        side = Side.FIRST if seed < 3 else Side.SECOND
        max_depth = len(empty_cells(board))

        values = {
            index: plain_minimax(place(board, index, side), 0, False, side, max_depth)
            for index in empty_cells(board)
        }
        result = search_best_move(board, side, max_depth=max_depth)

        assert values[result.move] == max(values.values())
        assert result.score == max(values.values())


# ============================================================================
# Pruning cross-check
# ============================================================================


class TestPruningMatchesPlainMinimax:
    @pytest.mark.parametrize("seed", range(4))
    def test_same_move_and_score(self, seed):
        """Test that alpha-beta picks the same move and score as plain minimax."""
        rng = np.random.default_rng(seed)
        board = random_position(rng, pieces=8)
        side = Side.FIRST

        expected_move, expected_score = plain_best_move(board, side, max_depth=2)
        result = search_best_move(board, side, max_depth=2)

        assert result.move == expected_move
        assert result.score == pytest.approx(expected_score)

    @pytest.mark.parametrize("seed", range(3))
    def test_ordering_does_not_change_score(self, seed):
        """Test that move ordering changes speed but not the score."""
        rng = np.random.default_rng(100 + seed)
        board = random_position(rng, pieces=10)
        ordered = search_best_move(board, Side.FIRST, max_depth=2, use_move_ordering=True)
        unordered = search_best_move(board, Side.FIRST, max_depth=2, use_move_ordering=False)
        assert ordered.score == pytest.approx(unordered.score)

    def test_pruning_visits_fewer_nodes(self):
        """Test that pruning visits fewer nodes than a full depth-2 tree."""
        board = make_board(first=[13], second=[0])
        stats = SearchStats()
        search_best_move(board, Side.FIRST, max_depth=2, stats=stats)
        unpruned_nodes = sum(1 + 24 * (1 + 23) for _ in range(25))
        assert stats.nodes < unpruned_nodes
