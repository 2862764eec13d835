import pytest

from game.constants import Phase, Side
from game.cube_game import GameState, apply_move, new_game, start_game
from game.cube_logic import board_from_cells, empty_cells
from game.move_result import MoveError
from game.players import ComputerCubePlayer, CubePlayer, HumanCubePlayer, RandomCubePlayer
from learner.minimax.difficulty import Difficulty
from learner.minimax.search import SearchStats


@pytest.fixture
def game():
    return start_game(new_game())


def test_base_player_names():
    """Test default names and the abstract get_action."""
    assert CubePlayer(Side.FIRST).name == "Player 1"
    assert CubePlayer(Side.SECOND).n == 2
    with pytest.raises(NotImplementedError):
        CubePlayer(Side.FIRST).get_action(None)


class TestRandomCubePlayer:
    def test_picks_empty_cell(self, game):
        """Test that random moves are empty cells."""
        state = apply_move(game, 13).unwrap()
        player = RandomCubePlayer(Side.SECOND, rng_seed=3)
        for _ in range(20):
            assert player.get_action(state) in empty_cells(state.board)

    def test_seeded_players_agree(self, game):
        """Test that equal seeds give equal random moves."""
        a = RandomCubePlayer(Side.FIRST, rng_seed=11)
        b = RandomCubePlayer(Side.FIRST, rng_seed=11)
        assert [a.get_action(game) for _ in range(10)] == [b.get_action(game) for _ in range(10)]

    def test_full_board_raises(self):
        """Test that a full board raises ValueError."""
        state = GameState(board=board_from_cells([1, -1] * 13 + [1]), phase=Phase.IN_PROGRESS)
        with pytest.raises(ValueError):
            RandomCubePlayer(Side.FIRST).get_action(state)

    def test_default_name(self):
        """Test the default random player name."""
        assert RandomCubePlayer(Side.SECOND).name == "Random 2"


class TestComputerCubePlayer:
    def test_default_name(self):
        """Test the default computer player name."""
        player = ComputerCubePlayer(Side.SECOND, Difficulty.HARD)
        assert player.name == "Computer 2 (hard)"
        assert player.n == 2

    def test_takes_winning_move(self, game):
        """Test that the computer takes a one-move win."""
        state = game
        for index in (0, 9, 1, 10):
            state = apply_move(state, index).unwrap()
        player = ComputerCubePlayer(Side.FIRST, Difficulty.EASY, rng_seed=0)
        assert player.get_action(state) == 2

    def test_full_board_raises_move_error(self):
        """Test that a full board raises MoveError."""
        state = GameState(board=board_from_cells([1, -1] * 13 + [1]), phase=Phase.IN_PROGRESS)
        with pytest.raises(MoveError):
            ComputerCubePlayer(Side.FIRST, Difficulty.EASY).get_action(state)

    def test_think_delay(self):
        """Test that the think delay is off unless requested."""
        assert ComputerCubePlayer(Side.FIRST, Difficulty.HARD).think_delay() == 0.0
        player = ComputerCubePlayer(Side.FIRST, Difficulty.HARD, rng_seed=1, think_time=True)
        assert 0.4 <= player.think_delay() <= 0.7

    def test_stats_reset_each_move(self, game):
        """Test that every move starts from fresh stats."""
        player = ComputerCubePlayer(Side.FIRST, Difficulty.IMPOSSIBLE, rng_seed=0)
        # Opening book move: no search runs
        assert player.get_action(game) == 13
        assert player.last_stats.nodes == 0

    def test_select_move_leaves_last_stats_alone(self, game):
        """Test that select_move counts into the given stats only."""
        state = game
        for index in (13, 0):
            state = apply_move(state, index).unwrap()
        player = ComputerCubePlayer(Side.FIRST, Difficulty.MEDIUM, rng_seed=0)
        before = player.last_stats
        stats = SearchStats()
        assert player.select_move(state, stats) in empty_cells(state.board)
        assert stats.nodes > 0
        assert player.last_stats is before
        assert before.nodes == 0
        player.record_stats(stats)
        assert player.last_stats is stats


class TestHumanCubePlayer:
    def test_queue(self, game):
        """Test queued human moves and cancelling them."""
        player = HumanCubePlayer(Side.FIRST, name="Alice")
        assert player.pending_actions_empty()
        player.submit_action(13)
        player.submit_action(4)
        assert player.get_action(game) == 13
        player.cancel_pending_action()
        assert player.pending_actions_empty()

    def test_rejection_context(self):
        """Test that a rejection is remembered until the turn ends."""
        player = HumanCubePlayer(Side.SECOND)
        player.on_move_rejected(13, "Cell 13 is already occupied")
        assert player.last_rejection == "Cell 13 is already occupied"
        player.clear_context()
        assert player.last_rejection is None
