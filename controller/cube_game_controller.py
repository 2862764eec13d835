"""Game controller for the cube game.

Manages the game loop, player turns, move logging and statistics.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from game.constants import DRAW, FIRST_WIN, SECOND_WIN, Side
from game.cube_position import CubePosition, parse_cell
from game.player_config import PlayerConfig
from game.players import HumanCubePlayer
from game.winning_lines import line_category
from controller.computer_turn import ComputerTurnRunner
from controller.game_logger import GameLogger
from controller.game_loop import GameLoop
from controller.game_session import GameSession

logger = logging.getLogger(__name__)


class CubeGameController:
    def __init__(
        self,
        seed=None,
        player1_config: PlayerConfig | None = None,
        player2_config: PlayerConfig | None = None,
        first_side: Side = Side.FIRST,
        alternate_first: bool = False,
        max_games=1,
        log_to_screen=True,
        output=None,
        input_fn: Callable[[str], str] = input,
        move_timeout: float | None = None,
        track_statistics=False,
    ):
        """
        Args:
            seed: Session seed (auto-generated if None)
            player1_config: Configuration for player 1 (X)
            player2_config: Configuration for player 2 (O)
            first_side: Side that moves first in the first game
            alternate_first: Swap the first side after every game
            max_games: Number of games to play (None means play indefinitely)
            log_to_screen: Write the transcript to ``output``
            output: Transcript stream (default: stdout)
            input_fn: Line reader used to prompt human players
            move_timeout: Seconds a computer player may think before a random move is played
            track_statistics: Record per-game timings and outcomes
        """
        self.max_games = max_games
        self.input_fn = input_fn

        # Statistics tracking
        self.track_statistics = track_statistics
        self.game_stats = []  # List of game durations in seconds
        self.win_loss_stats = {FIRST_WIN: 0, SECOND_WIN: 0, DRAW: 0}
        self.current_game_start_time = None
        self.total_start_time = None
        self._game_ending_processed = False

        self.session = GameSession(
            seed=seed,
            first_side=first_side,
            alternate_first=alternate_first,
            player1_config=player1_config,
            player2_config=player2_config,
        )
        self.logger = GameLogger(self.session, log_to_screen=log_to_screen, stream=output)
        self.session.set_status_reporter(self._report)

        self.turn_runner = ComputerTurnRunner(timeout=move_timeout, rng_seed=self.session.get_seed())
        self._game_loop = GameLoop(self)

        self.logger.start_log()

        if self.track_statistics:
            self.total_start_time = time.time()
            self.current_game_start_time = time.time()

    def run(self):
        try:
            self._game_loop.run()
        finally:
            self.turn_runner.close()
        self.logger.close()

    def _reset_board(self):
        """Reset the board for a new game."""
        self.logger.end_log(self.session.state)
        self._game_ending_processed = False
        self.session.reset_game()
        self.logger.start_log()

        if self.track_statistics:
            self.current_game_start_time = time.time()

    def _prompt_human(self, player: HumanCubePlayer) -> bool:
        """Ask for a cell and queue it for the player.

        Returns:
            False if input is exhausted, True otherwise
        """
        try:
            text = self.input_fn(f"{player.name} ({player.side.symbol}) move [INDEX or X,Y,Z]: ")
        except EOFError:
            return False
        try:
            player.submit_action(parse_cell(text))
        except ValueError as e:
            self._report(str(e))
        return True

    def update_game(self, task):
        status = self._check_game_status(task)
        if status == task.done:
            return task.done

        state = self.session.state
        player = self.session.get_current_player()
        player.on_turn_start(state)

        if isinstance(player, HumanCubePlayer):
            if player.pending_actions_empty() and not self._prompt_human(player):
                self._report("Input closed")
                self.logger.end_log(state)
                return task.done
            if player.pending_actions_empty():
                return task.again
            index = player.get_action(state)
        else:
            index = self.turn_runner.run(player, state)

        result = self.session.apply_move(index)
        if not result.ok:
            self._report(f"Move rejected: {result.error}")
            player.on_move_rejected(index, str(result.error))
            if not isinstance(player, HumanCubePlayer):
                # Automated players never recover by retrying the same position
                raise result.error
            return task.again

        player.clear_context()
        self.logger.log_move(player.n, index)
        return self._check_game_status(task)

    def _check_game_status(self, task):
        """Check if game is over and handle the ending if needed.

        Returns:
            task.done if game should stop, task.again if game should continue
        """
        if not self.session.is_game_over():
            return task.again
        return self._handle_game_ending(task)

    def _handle_game_ending(self, task):
        """Report the result, update counters and start the next game if any remain.

        Idempotent for a single game.
        """
        if self._game_ending_processed:
            return task.done
        self._game_ending_processed = True

        state = self.session.state
        if state.winner is not None:
            player_num = 1 if state.winner is Side.FIRST else 2
            cells = ", ".join(CubePosition.from_index(i).label for i in state.winning_line)
            self._report(
                f"Winner: Player {player_num} ({line_category(state.winning_line)} line: {cells})"
            )
        else:
            self._report("Game ended in a draw")

        if self.track_statistics and self.current_game_start_time is not None:
            self.game_stats.append(time.time() - self.current_game_start_time)
            self.win_loss_stats[state.outcome] += 1

        self.session.increment_games_played()
        logger.info("Game %d finished with outcome %s", self.session.get_games_played(), state.outcome)

        if self.max_games is not None and self.session.get_games_played() >= self.max_games:
            self._report(f"Completed {self.session.get_games_played()} game(s)")
            self.logger.end_log(state)
            return task.done

        self._reset_board()
        return task.again

    def _report(self, message: str | None) -> None:
        """Forward status messages to the logger, which writes them as comments."""
        if message is None:
            return
        self.logger.log_comment(str(message))

    def print_statistics(self) -> None:
        """Print timing and win/loss/draw statistics for all games played."""
        if not self.track_statistics or not self.game_stats:
            return

        import statistics

        total_time = time.time() - self.total_start_time if self.total_start_time else 0

        mean_time = statistics.mean(self.game_stats)
        min_time = min(self.game_stats)
        max_time = max(self.game_stats)
        std_time = statistics.stdev(self.game_stats) if len(self.game_stats) > 1 else 0.0

        total_games = len(self.game_stats)
        player1_wins = self.win_loss_stats[FIRST_WIN]
        player2_wins = self.win_loss_stats[SECOND_WIN]
        draws = self.win_loss_stats[DRAW]

        p1_pct = (player1_wins / total_games * 100) if total_games > 0 else 0
        p2_pct = (player2_wins / total_games * 100) if total_games > 0 else 0
        draw_pct = (draws / total_games * 100) if total_games > 0 else 0

        print("\n" + "=" * 60)
        print("STATISTICS")
        print("=" * 60)
        print(f"Games played: {total_games}")
        print()
        print("Win/Loss/Draw:")
        print(f"  Player 1 wins: {player1_wins} ({p1_pct:.1f}%)")
        print(f"  Player 2 wins: {player2_wins} ({p2_pct:.1f}%)")
        print(f"  Draws: {draws} ({draw_pct:.1f}%)")
        print()
        print("Timing:")
        print(f"  Mean time per game: {mean_time:.3f}s")
        print(f"  Min time: {min_time:.3f}s")
        print(f"  Max time: {max_time:.3f}s")
        print(f"  Std deviation: {std_time:.3f}s")
        print(f"  Total execution time: {total_time:.3f}s")
        print("=" * 60)
