"""Shared utility package for cross-layer constants."""

from .constants import (  # noqa: F401
    BOARD_SIZE,
    TOTAL_CELLS,
    CENTER_CELL,
    FACE_CENTER_CELLS,
    CORNER_CELLS,
    EDGE_CELLS,
    WINNING_LINE_COUNT,
)
