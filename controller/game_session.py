"""Game session management for the cube game.

Manages a single game's lifecycle including game state, players, and seed management.
"""

import hashlib
import logging
import time
from typing import Callable

from game.constants import Side
from game.cube_game import GameState, apply_move, new_game, start_game
from game.move_result import MoveResult
from game.player_config import PlayerConfig
from game.players import ComputerCubePlayer, HumanCubePlayer, RandomCubePlayer

logger = logging.getLogger(__name__)


class GameSession:
    """Manages a single game's lifecycle (game state, players, current game).

    The session owns exactly one GameState at a time and replaces it only when
    a move is accepted.
    """

    def __init__(
        self,
        seed=None,
        first_side: Side = Side.FIRST,
        alternate_first: bool = False,
        status_reporter: Callable[[str], None] | None = None,
        player1_config: PlayerConfig | None = None,
        player2_config: PlayerConfig | None = None,
    ):
        """Initialize a game session.

        Args:
            seed: Random seed for reproducibility (auto-generated if None)
            first_side: Side that moves first in the first game
            alternate_first: Swap the first side after every game
            status_reporter: Optional callback for status messages
            player1_config: Configuration for player 1 (default: random)
            player2_config: Configuration for player 2 (default: random)
        """
        self._status_reporter: Callable[[str], None] | None = status_reporter
        self.player1_config = player1_config if player1_config is not None else PlayerConfig.random()
        self.player2_config = player2_config if player2_config is not None else PlayerConfig.random()
        self.first_side = Side(first_side)
        self.alternate_first = alternate_first

        if seed is None:
            seed = int(time.time())
        self.current_seed = seed
        self._report(f"-- Setting Seed: {seed}")

        self.state: GameState | None = None
        self.player1 = None
        self.player2 = None
        self.games_played = 0

        self.reset_game()

    def _generate_next_seed(self):
        """Generate the next seed deterministically from the current seed using hash.

        Returns:
            int: New seed value
        """
        hash_obj = hashlib.sha256(str(self.current_seed).encode())
        new_seed = int.from_bytes(hash_obj.digest()[:8], byteorder="big")
        return new_seed % (2**32)

    def _player_seed(self, player_num: int, config: PlayerConfig) -> int:
        """Seed for a player: the configured one, else derived from the session seed."""
        if config.rng_seed is not None:
            return config.rng_seed
        return (self.current_seed * 2 + player_num) % (2**32)

    def _create_player_from_config(self, player_num: int, config: PlayerConfig):
        """Create a player from a PlayerConfig.

        Args:
            player_num: Player number (1 or 2)
            config: PlayerConfig describing player type and parameters

        Returns:
            CubePlayer: Configured player instance
        """
        side = Side.FIRST if player_num == 1 else Side.SECOND
        if config.player_type == "human":
            return HumanCubePlayer(side, name=config.name)
        elif config.player_type == "random":
            return RandomCubePlayer(
                side, name=config.name, rng_seed=self._player_seed(player_num, config)
            )
        elif config.player_type == "computer":
            return ComputerCubePlayer(
                side,
                difficulty=config.difficulty,
                name=config.name,
                rng_seed=self._player_seed(player_num, config),
                think_time=config.think_time,
            )
        raise ValueError(f"Unknown player type: {config.player_type}")

    def reset_game(self):
        """Reset the game state for a new game.

        This creates a new game state and players.
        """
        self._report("** New game **")

        # New seed for every game after the first
        if self.state is not None:
            self.current_seed = self._generate_next_seed()
            logger.info("Session seed changed to %d", self.current_seed)
            if self.alternate_first:
                self.first_side = self.first_side.opponent

        self.state = start_game(new_game(), self.first_side)
        self.player1 = self._create_player_from_config(1, self.player1_config)
        self.player2 = self._create_player_from_config(2, self.player2_config)

    def get_current_player(self):
        """Get the player whose turn it is.

        Returns:
            CubePlayer: Current player (player1 or player2)
        """
        return self.player1 if self.state.side_to_move is Side.FIRST else self.player2

    def apply_move(self, index: int) -> MoveResult:
        """Apply a move for the side to move; the state changes only on success."""
        result = apply_move(self.state, index)
        if result.ok:
            self.state = result.state
        return result

    def is_game_over(self) -> bool:
        return self.state.is_finished

    def increment_games_played(self):
        self.games_played += 1

    def get_seed(self):
        return self.current_seed

    def get_games_played(self):
        return self.games_played

    def set_status_reporter(self, reporter: Callable[[str], None] | None) -> None:
        """Set or update the status reporter callback."""
        self._status_reporter = reporter

    def _report(self, message: str | None) -> None:
        if message is None:
            return
        if self._status_reporter is not None:
            self._status_reporter(message)
        else:
            print(message)
