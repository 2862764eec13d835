"""Game move writers for the cube game.

Provides pluggable writer classes that format game moves onto an output
stream (stdout, an in-memory buffer, ...).
"""

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from game.constants import EMPTY, Side
from game.cube_game import GameState
from game.cube_position import CubePosition
from game.winning_lines import line_category
from shared.constants import BOARD_SIZE


class GameWriter(ABC):
    """Abstract base class for game move writers.

    Subclasses implement format-specific headers and move formatting.
    """

    def __init__(self, output: TextIO):
        """Initialize the writer.

        Args:
            output: Output stream to write to
        """
        self.output = output
        self._game_started = False

    @abstractmethod
    def write_header(self, seed: int | None, player1_name: str | None = None, player2_name: str | None = None) -> None:
        """Write the header with game metadata.

        Args:
            seed: Random seed for this game
            player1_name: Optional name for player 1
            player2_name: Optional name for player 2
        """
        pass

    @abstractmethod
    def write_move(self, player_num: int, index: int) -> None:
        """Write a game move.

        Args:
            player_num: Player number (1 or 2)
            index: Cell index that was played
        """
        pass

    def write_comment(self, message: str) -> None:
        """Write a status/comment message (default: ignored)."""
        pass

    def write_footer(self, state: GameState | None = None) -> None:
        """Write the footer with the final game state (optional)."""
        pass

    def flush(self) -> None:
        self.output.flush()

    def close(self) -> None:
        """Close the output stream (but never close stdout/stderr)."""
        if self.output in (sys.stdout, sys.stderr):
            return
        if hasattr(self.output, "close"):
            self.output.close()


class TranscriptWriter(GameWriter):
    """Writes game moves in transcript format.

    Format:
        # Seed: 12345              # Header comments
        # Player 1: Computer 1 (hard)
        #
        Player 1: 13 (1,1,1)       # Move with player prefix, index and coordinates
        Player 2: 0 (0,0,0)
        #
        # Final board:             # Footer comments, one z layer per block
        # ...
    """

    def write_header(self, seed: int | None, player1_name: str | None = None, player2_name: str | None = None) -> None:
        self.output.write(f"# Seed: {seed}\n")
        if player1_name:
            self.output.write(f"# Player 1: {player1_name}\n")
        if player2_name:
            self.output.write(f"# Player 2: {player2_name}\n")
        self.output.write("#\n")
        self._game_started = True
        self.flush()

    def write_move(self, player_num: int, index: int) -> None:
        position = CubePosition.from_index(index)
        self.output.write(f"Player {player_num}: {index} ({position.label})\n")
        self.flush()

    def write_comment(self, message: str) -> None:
        self.output.write(f"# {message}\n")
        self.flush()

    def write_footer(self, state: GameState | None = None) -> None:
        if state is None:
            return

        self.output.write("#\n")
        self.output.write("# Final board:\n")
        for line in format_board(state):
            self.output.write(f"# {line}\n")
        if state.winning_line is not None:
            self.output.write(
                f"# Winning line: {list(state.winning_line)} ({line_category(state.winning_line)})\n"
            )
        self.flush()


def format_board(state: GameState) -> list[str]:
    """Format the board as text, one block of rows per z layer."""
    symbols = {EMPTY: ".", Side.FIRST: Side.FIRST.symbol, Side.SECOND: Side.SECOND.symbol}
    lines = []
    for z in range(BOARD_SIZE):
        lines.append(f"z={z}")
        for y in range(BOARD_SIZE):
            start = z * BOARD_SIZE * BOARD_SIZE + y * BOARD_SIZE
            cells = state.board[start:start + BOARD_SIZE]
            lines.append(" ".join(symbols[int(cell)] for cell in cells))
    return lines
