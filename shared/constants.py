"""Shared constants for cross-layer coordination."""

from __future__ import annotations

# Cube geometry: 3 cells per axis, 27 cells in total
BOARD_SIZE: int = 3
TOTAL_CELLS: int = BOARD_SIZE**3

# Cell classes by the number of winning lines passing through them
CENTER_CELL: int = 13
FACE_CENTER_CELLS: tuple[int, ...] = (4, 10, 12, 14, 16, 22)
CORNER_CELLS: tuple[int, ...] = (0, 2, 6, 8, 18, 20, 24, 26)
EDGE_CELLS: tuple[int, ...] = (1, 3, 5, 7, 9, 11, 15, 17, 19, 21, 23, 25)

# Expected size of the winning-line table
WINNING_LINE_COUNT: int = 49
