"""Game constants shared across modules.

This module contains cell, side, phase and outcome values used by both the
stateless board logic (cube_logic) and the state transition (cube_game).
"""

from enum import Enum, IntEnum


class Side(IntEnum):
    """The two sides. Values double as the cell occupancy stored on the board."""

    FIRST = 1
    SECOND = -1

    @property
    def opponent(self) -> "Side":
        return Side(-self.value)

    @property
    def symbol(self) -> str:
        return "X" if self is Side.FIRST else "O"


class Phase(Enum):
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


# Board cell value for an unoccupied cell
EMPTY = 0

# Game outcome constants (None means undecided)
FIRST_WIN = 1
SECOND_WIN = -1
DRAW = 0
