"""Tests for GameSession functionality."""

import pytest

from controller.game_session import GameSession
from game.constants import Phase, Side
from game.move_result import MoveErrorKind
from game.player_config import PlayerConfig
from game.players import ComputerCubePlayer, HumanCubePlayer, RandomCubePlayer
from learner.minimax.difficulty import Difficulty


@pytest.fixture
def messages():
    return []


@pytest.fixture
def session(messages):
    return GameSession(seed=12345, status_reporter=messages.append)


class TestGameSession:
    """Test suite for GameSession class."""

    def test_default_initialization(self, session, messages):
        """Test default session initialization."""
        assert session.state.phase is Phase.IN_PROGRESS
        assert session.state.side_to_move is Side.FIRST
        assert isinstance(session.player1, RandomCubePlayer)
        assert isinstance(session.player2, RandomCubePlayer)
        assert session.player1.side is Side.FIRST
        assert session.player2.side is Side.SECOND
        assert session.games_played == 0
        assert messages[0] == "-- Setting Seed: 12345"

    def test_players_from_config(self, messages):
        """Test creating players from configs."""
        session = GameSession(
            seed=1,
            status_reporter=messages.append,
            player1_config=PlayerConfig.human(name="Alice"),
            player2_config=PlayerConfig.computer(Difficulty.HARD, seed=9),
        )
        assert isinstance(session.player1, HumanCubePlayer)
        assert session.player1.name == "Alice"
        assert isinstance(session.player2, ComputerCubePlayer)
        assert session.player2.difficulty is Difficulty.HARD
        assert session.player2.rng_seed == 9

    def test_unknown_player_type(self, messages):
        """Test that an unknown player type raises ValueError."""
        with pytest.raises(ValueError, match="Unknown player type"):
            GameSession(seed=1, status_reporter=messages.append, player1_config=PlayerConfig("robot"))

    def test_second_side_first(self, messages):
        """Test starting a session with O to move."""
        session = GameSession(seed=1, first_side=Side.SECOND, status_reporter=messages.append)
        assert session.state.side_to_move is Side.SECOND
        assert session.get_current_player() is session.player2

    def test_apply_move_replaces_state_on_success(self, session):
        """Test that a legal move replaces the session state."""
        before = session.state
        result = session.apply_move(13)
        assert result.ok
        assert session.state is result.state
        assert session.state is not before
        assert session.get_current_player() is session.player2

    def test_rejected_move_keeps_state(self, session):
        """Test that a rejected move keeps the session state."""
        session.apply_move(13)
        before = session.state
        result = session.apply_move(13)
        assert result.error.kind is MoveErrorKind.CELL_OCCUPIED
        assert session.state is before

    def test_game_over(self, session):
        """Test that a completed line ends the game."""
        for index in (0, 9, 1, 10, 2):
            session.apply_move(index)
        assert session.is_game_over()


class TestSeeds:
    def test_reset_derives_next_seed(self, session):
        """Test that reset derives the next seed from the current one."""
        session.reset_game()
        first_next = session.get_seed()
        assert first_next != 12345

        other = GameSession(seed=12345, status_reporter=lambda message: None)
        other.reset_game()
        assert other.get_seed() == first_next

    def test_reset_starts_fresh_game(self, session):
        """Test that reset starts a new empty game."""
        session.apply_move(13)
        session.reset_game()
        assert session.state.move_count == 0
        assert session.state.phase is Phase.IN_PROGRESS

    def test_alternate_first(self, messages):
        """Test alternating the first side between games."""
        session = GameSession(seed=5, alternate_first=True, status_reporter=messages.append)
        assert session.state.side_to_move is Side.FIRST
        session.reset_game()
        assert session.state.side_to_move is Side.SECOND
        session.reset_game()
        assert session.state.side_to_move is Side.FIRST

    def test_player_seeds_follow_session_seed(self, messages):
        """Test that equal session seeds give equal player moves."""
        a = GameSession(seed=77, status_reporter=messages.append)
        b = GameSession(seed=77, status_reporter=messages.append)
        moves_a = [a.player1.get_action(a.state) for _ in range(5)]
        moves_b = [b.player1.get_action(b.state) for _ in range(5)]
        assert moves_a == moves_b

    def test_auto_seed(self, messages):
        """Test that a seed is generated when none is given."""
        session = GameSession(status_reporter=messages.append)
        assert isinstance(session.get_seed(), int)

    def test_games_played_counter(self, session):
        """Test the games-played counter."""
        session.increment_games_played()
        session.increment_games_played()
        assert session.get_games_played() == 2
