"""Move result value objects for state transitions and move selection.

Rejected moves are returned rather than raised so that a caller (for example
a stale click arriving after the game ended) can ignore them safely. Callers
that prefer exceptions use ``unwrap()``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from game.cube_game import GameState


class MoveErrorKind(Enum):
    OUT_OF_RANGE = "out_of_range"
    CELL_OCCUPIED = "cell_occupied"
    GAME_NOT_IN_PROGRESS = "game_not_in_progress"
    NO_LEGAL_MOVES = "no_legal_moves"


class MoveError(ValueError):
    """A rejected move or move request.

    Attributes:
        kind: MoveErrorKind describing why the move was rejected
        index: The requested cell index, if any
    """

    def __init__(self, kind: MoveErrorKind, message: str, index: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.index = index

    def __repr__(self):
        return f"MoveError({self.kind.name}, index={self.index})"


class MoveResult:
    """Encapsulates the result of applying a move to a GameState.

    Exactly one of ``state`` and ``error`` is set.

    Attributes:
        state: The new GameState on success
        error: The MoveError on failure
    """

    def __init__(self, state: GameState | None = None, error: MoveError | None = None):
        if (state is None) == (error is None):
            raise ValueError("MoveResult needs exactly one of state or error")
        self.state = state
        self.error = error

    def __repr__(self):
        if self.error is not None:
            return f"MoveResult(error={self.error!r})"
        return f"MoveResult(move_count={self.state.move_count})"

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> GameState:
        """Return the new state or raise the MoveError."""
        if self.error is not None:
            raise self.error
        return self.state


class MoveChoice:
    """Encapsulates the cell chosen by a move-selection policy.

    Attributes:
        index: Chosen cell index on success
        error: The MoveError on failure (e.g. no legal moves remain)
    """

    def __init__(self, index: int | None = None, error: MoveError | None = None):
        if (index is None) == (error is None):
            raise ValueError("MoveChoice needs exactly one of index or error")
        self.index = index
        self.error = error

    def __repr__(self):
        if self.error is not None:
            return f"MoveChoice(error={self.error!r})"
        return f"MoveChoice(index={self.index})"

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> int:
        """Return the chosen index or raise the MoveError."""
        if self.error is not None:
            raise self.error
        return self.index
