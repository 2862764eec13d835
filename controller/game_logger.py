"""Game logging for the cube game.

Handles writing moves, comments and final states through pluggable writers.
"""

import sys
from typing import TextIO

from game.cube_game import GameState
from game.writers import GameWriter, TranscriptWriter


class GameLogger:
    """Manages multiple game move writers.

    Uses the Strategy pattern so several output formats and destinations can
    be active at once. Writers persist across games; each game gets a fresh
    header and footer.
    """

    def __init__(
        self,
        session,
        log_to_screen: bool = True,
        stream: TextIO | None = None,
    ):
        """Initialize the game logger.

        Args:
            session: GameSession instance (seed and player names for headers)
            log_to_screen: Whether to write the transcript to ``stream``
            stream: Output stream for the transcript (default: stdout)
        """
        self.session = session
        self._game_active = False

        self.writers: list[GameWriter] = []
        if log_to_screen:
            self.writers.append(TranscriptWriter(stream if stream is not None else sys.stdout))

    def add_writer(self, writer: GameWriter) -> None:
        self.writers.append(writer)

    def start_log(self) -> None:
        """Write headers for a new game."""
        for writer in self.writers:
            writer.write_header(
                self.session.get_seed(),
                self.session.player1.name,
                self.session.player2.name,
            )
        self._game_active = True

    def log_move(self, player_num: int, index: int) -> None:
        for writer in self.writers:
            writer.write_move(player_num, index)

    def log_comment(self, message: str) -> None:
        for writer in self.writers:
            writer.write_comment(message)

    def end_log(self, state: GameState | None = None) -> None:
        """Write footers for the current game (only once per game)."""
        if not self._game_active:
            return
        for writer in self.writers:
            writer.write_footer(state)
        self._game_active = False

    def close(self) -> None:
        for writer in self.writers:
            writer.close()
        self.writers = []
