"""Winning-line table for the 3x3x3 cube.

The 49 lines are generated once at import time from the cube geometry,
verified (count, distinct cells, no duplicates, per-cell cardinalities) and
then frozen. Line identifiers are positions in ``WINNING_LINES``.

Families:
    rows             9   (vary x)
    columns          9   (vary y)
    layer diagonals  6   (diagonals of each z layer)
    pillars          9   (vary z)
    face diagonals  12   (diagonals of the x and y slices)
    space diagonals  4   (corner to corner through the center)
"""

from __future__ import annotations

from typing import Dict, List, Tuple

import numpy as np

from game.cube_position import to_index
from shared.constants import (
    BOARD_SIZE,
    TOTAL_CELLS,
    CENTER_CELL,
    CORNER_CELLS,
    EDGE_CELLS,
    FACE_CENTER_CELLS,
    WINNING_LINE_COUNT,
)

WinningLine = Tuple[int, int, int]

ROW = "row"
COLUMN = "column"
LAYER_DIAGONAL = "layer diagonal"
PILLAR = "pillar"
FACE_DIAGONAL = "face diagonal"
SPACE_DIAGONAL = "space diagonal"

# Expected number of lines per family
FAMILY_SIZES: Dict[str, int] = {
    ROW: 9,
    COLUMN: 9,
    LAYER_DIAGONAL: 6,
    PILLAR: 9,
    FACE_DIAGONAL: 12,
    SPACE_DIAGONAL: 4,
}

# Lines through each class of cell; 13 + 6*5 + 8*7 + 12*4 == 49 * 3
LINES_THROUGH_CENTER = 13
LINES_THROUGH_FACE_CENTER = 5
LINES_THROUGH_CORNER = 7
LINES_THROUGH_EDGE = 4


def generate_winning_lines() -> List[Tuple[str, WinningLine]]:
    """Enumerate every winning line together with its family name.

    Returns:
        List of (family, (a, b, c)) in table order
    """
    n = BOARD_SIZE
    r = range(n)
    lines: List[Tuple[str, WinningLine]] = []

    for z in r:
        for y in r:
            lines.append((ROW, tuple(to_index(x, y, z) for x in r)))
    for z in r:
        for x in r:
            lines.append((COLUMN, tuple(to_index(x, y, z) for y in r)))
    for z in r:
        lines.append((LAYER_DIAGONAL, tuple(to_index(i, i, z) for i in r)))
        lines.append((LAYER_DIAGONAL, tuple(to_index(n - 1 - i, i, z) for i in r)))
    for x in r:
        for y in r:
            lines.append((PILLAR, tuple(to_index(x, y, z) for z in r)))
    # Diagonals in the y = const slices (x and z vary)
    for y in r:
        lines.append((FACE_DIAGONAL, tuple(to_index(i, y, i) for i in r)))
        lines.append((FACE_DIAGONAL, tuple(to_index(n - 1 - i, y, i) for i in r)))
    # Diagonals in the x = const slices (y and z vary)
    for x in r:
        lines.append((FACE_DIAGONAL, tuple(to_index(x, i, i) for i in r)))
        lines.append((FACE_DIAGONAL, tuple(to_index(x, n - 1 - i, i) for i in r)))
    lines.append((SPACE_DIAGONAL, tuple(to_index(i, i, i) for i in r)))
    lines.append((SPACE_DIAGONAL, tuple(to_index(n - 1 - i, i, i) for i in r)))
    lines.append((SPACE_DIAGONAL, tuple(to_index(i, n - 1 - i, i) for i in r)))
    lines.append((SPACE_DIAGONAL, tuple(to_index(n - 1 - i, n - 1 - i, i) for i in r)))

    return lines


def build_cell_to_lines(lines: Tuple[WinningLine, ...]) -> Tuple[Tuple[int, ...], ...]:
    """For every cell, collect the identifiers of the lines that contain it."""
    return tuple(
        tuple(line_id for line_id, line in enumerate(lines) if cell in line)
        for cell in range(TOTAL_CELLS)
    )


def verify_winning_lines(
    lines: Tuple[WinningLine, ...],
    cell_to_lines: Tuple[Tuple[int, ...], ...],
    categories: Tuple[str, ...] | None = None,
) -> None:
    """Check the table for completeness and internal consistency.

    Raises:
        ValueError: On a wrong line count, an invalid or repeated cell within a
            line, a duplicated line, a wrong family size or a wrong number of
            lines through any cell
    """
    if len(lines) != WINNING_LINE_COUNT:
        raise ValueError(f"Expected {WINNING_LINE_COUNT} winning lines, found {len(lines)}")

    seen = set()
    for line in lines:
        if len(line) != 3 or len(set(line)) != 3:
            raise ValueError(f"Winning line {line} must contain 3 distinct cells")
        if any(not 0 <= cell < TOTAL_CELLS for cell in line):
            raise ValueError(f"Winning line {line} contains an invalid cell")
        key = frozenset(line)
        if key in seen:
            raise ValueError(f"Duplicate winning line {line}")
        seen.add(key)

    if categories is not None:
        for family, size in FAMILY_SIZES.items():
            count = categories.count(family)
            if count != size:
                raise ValueError(f"Expected {size} {family} lines, found {count}")

    expected = {CENTER_CELL: LINES_THROUGH_CENTER}
    expected.update({cell: LINES_THROUGH_FACE_CENTER for cell in FACE_CENTER_CELLS})
    expected.update({cell: LINES_THROUGH_CORNER for cell in CORNER_CELLS})
    expected.update({cell: LINES_THROUGH_EDGE for cell in EDGE_CELLS})
    for cell in range(TOTAL_CELLS):
        if len(cell_to_lines[cell]) != expected[cell]:
            raise ValueError(
                f"Cell {cell} lies on {len(cell_to_lines[cell])} lines, expected {expected[cell]}"
            )

    if sum(len(ids) for ids in cell_to_lines) != WINNING_LINE_COUNT * 3:
        raise ValueError("Cell-to-lines index does not cover every line exactly three times")


_GENERATED = generate_winning_lines()

LINE_CATEGORIES: Tuple[str, ...] = tuple(family for family, _ in _GENERATED)
WINNING_LINES: Tuple[WinningLine, ...] = tuple(line for _, line in _GENERATED)
CELL_TO_LINES: Tuple[Tuple[int, ...], ...] = build_cell_to_lines(WINNING_LINES)

verify_winning_lines(WINNING_LINES, CELL_TO_LINES, LINE_CATEGORIES)

# (49, 3) index array for gathering cell values of every line at once
LINES_ARRAY: np.ndarray = np.array(WINNING_LINES, dtype=np.intp)
LINES_ARRAY.flags.writeable = False

# Per-cell line id arrays, aligned with CELL_TO_LINES
CELL_LINE_IDS: Tuple[np.ndarray, ...] = tuple(
    np.array(ids, dtype=np.intp) for ids in CELL_TO_LINES
)
for _ids in CELL_LINE_IDS:
    _ids.flags.writeable = False
del _ids, _GENERATED

_LINE_LOOKUP: Dict[frozenset, int] = {
    frozenset(line): line_id for line_id, line in enumerate(WINNING_LINES)
}


def lines_for_cell(cell: int) -> List[WinningLine]:
    """Get all winning lines that pass through a cell."""
    return [WINNING_LINES[line_id] for line_id in CELL_TO_LINES[cell]]


def line_category(line) -> str:
    """Name the family of a winning line, e.g. "space diagonal".

    Raises:
        ValueError: If the cells do not form a winning line
    """
    line_id = _LINE_LOOKUP.get(frozenset(int(cell) for cell in line))
    if line_id is None:
        raise ValueError(f"{tuple(line)} is not a winning line")
    return LINE_CATEGORIES[line_id]
