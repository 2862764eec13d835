"""Game state and state transitions for the 3x3x3 cube.

A GameState is never modified. ``apply_move`` returns a new state wrapped in
a MoveResult, or an error with the original state left untouched.

State machine:
    SETUP --start_game--> IN_PROGRESS --win / 27 cells filled--> FINISHED
    Any state --reset_game--> SETUP
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .constants import DRAW, FIRST_WIN, SECOND_WIN, EMPTY, Phase, Side
from .cube_logic import check_win, empty_board, place
from .move_result import MoveError, MoveErrorKind, MoveResult
from .winning_lines import WinningLine
from shared.constants import TOTAL_CELLS


@dataclass(frozen=True, eq=False)
class GameState:
    """Immutable snapshot of one game.

    Attributes:
        board: Read-only int8 array of 27 cells (0 empty, 1 first, -1 second)
        side_to_move: Side that makes the next move (the winner once won)
        phase: SETUP, IN_PROGRESS or FINISHED
        outcome: None while undecided, else FIRST_WIN, SECOND_WIN or DRAW
        winning_line: The completed line when the game was won
        move_count: Number of moves played so far
    """

    board: np.ndarray
    side_to_move: Side = Side.FIRST
    phase: Phase = Phase.SETUP
    outcome: Optional[int] = None
    winning_line: Optional[WinningLine] = None
    move_count: int = 0

    @property
    def winner(self) -> Optional[Side]:
        if self.outcome in (FIRST_WIN, SECOND_WIN):
            return Side(self.outcome)
        return None

    @property
    def is_draw(self) -> bool:
        return self.outcome == DRAW

    @property
    def is_finished(self) -> bool:
        return self.phase is Phase.FINISHED

    def __repr__(self):
        return (
            f"GameState(phase={self.phase.name}, to_move={self.side_to_move.name}, "
            f"outcome={self.outcome}, moves={self.move_count})"
        )


def new_game() -> GameState:
    """Create a fresh game in the SETUP phase."""
    return GameState(board=empty_board())


def start_game(state: GameState, first_side: Side = Side.FIRST) -> GameState:
    """Move a SETUP game to IN_PROGRESS with ``first_side`` to move.

    Raises:
        ValueError: If the game is not in the SETUP phase
    """
    if state.phase is not Phase.SETUP:
        raise ValueError(f"Cannot start a game in phase {state.phase.name}")
    return replace(state, side_to_move=Side(first_side), phase=Phase.IN_PROGRESS)


def reset_game() -> GameState:
    """Discard the current game and return to SETUP."""
    return new_game()


def _validate_move(state: GameState, index: int) -> Optional[MoveError]:
    """Check move preconditions in order and return the first failure."""
    if state.phase is not Phase.IN_PROGRESS:
        return MoveError(
            MoveErrorKind.GAME_NOT_IN_PROGRESS,
            f"Game is not in progress (phase {state.phase.name})",
            index,
        )
    if state.outcome is not None:
        return MoveError(
            MoveErrorKind.GAME_NOT_IN_PROGRESS, "Game outcome is already decided", index
        )
    if not 0 <= index < TOTAL_CELLS:
        return MoveError(
            MoveErrorKind.OUT_OF_RANGE, f"Cell index {index} is outside [0, {TOTAL_CELLS})", index
        )
    if state.board[index] != EMPTY:
        return MoveError(MoveErrorKind.CELL_OCCUPIED, f"Cell {index} is already occupied", index)
    return None


def can_make_move(state: GameState, index: int) -> bool:
    return _validate_move(state, index) is None


def apply_move(state: GameState, index: int) -> MoveResult:
    """Place the side to move at ``index`` and advance the game.

    Returns:
        MoveResult holding the new GameState, or the MoveError that rejected
        the move (the input state is never modified)
    """
    error = _validate_move(state, index)
    if error is not None:
        return MoveResult(error=error)

    mover = state.side_to_move
    board = place(state.board, index, mover)
    move_count = state.move_count + 1
    line = check_win(board, index)

    if line is not None:
        new_state = GameState(
            board=board,
            side_to_move=mover,
            phase=Phase.FINISHED,
            outcome=int(mover),
            winning_line=line,
            move_count=move_count,
        )
    elif move_count >= TOTAL_CELLS:
        new_state = GameState(
            board=board,
            side_to_move=mover,
            phase=Phase.FINISHED,
            outcome=DRAW,
            move_count=move_count,
        )
    else:
        new_state = GameState(
            board=board,
            side_to_move=mover.opponent,
            phase=Phase.IN_PROGRESS,
            move_count=move_count,
        )
    return MoveResult(state=new_state)
