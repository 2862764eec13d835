"""Coordinate mapping between linear cell indices and cube coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from shared.constants import BOARD_SIZE, TOTAL_CELLS


def to_index(x: int, y: int, z: int) -> int:
    """Convert (x, y, z) cube coordinates to a flat cell index.

    Raises:
        ValueError: If any coordinate lies outside [0, 3)
    """
    for axis, value in (("x", x), ("y", y), ("z", z)):
        if not 0 <= value < BOARD_SIZE:
            raise ValueError(f"Coordinate {axis}={value} is outside [0, {BOARD_SIZE})")
    return x + BOARD_SIZE * y + BOARD_SIZE * BOARD_SIZE * z


def to_coord(index: int) -> Tuple[int, int, int]:
    """Convert a flat cell index to (x, y, z) cube coordinates.

    Raises:
        ValueError: If index lies outside [0, 27)
    """
    if not 0 <= index < TOTAL_CELLS:
        raise ValueError(f"Cell index {index} is outside [0, {TOTAL_CELLS})")
    return (
        index % BOARD_SIZE,
        (index // BOARD_SIZE) % BOARD_SIZE,
        index // (BOARD_SIZE * BOARD_SIZE),
    )


@dataclass(frozen=True)
class CubePosition:
    """Represents a single cell across index and coordinate systems."""

    x: int
    y: int
    z: int

    def __post_init__(self) -> None:
        # Validates the coordinates
        to_index(self.x, self.y, self.z)

    @property
    def index(self) -> int:
        return to_index(self.x, self.y, self.z)

    @property
    def xyz(self) -> Tuple[int, int, int]:
        return self.x, self.y, self.z

    @property
    def label(self) -> str:
        return f"{self.x},{self.y},{self.z}"

    def __repr__(self) -> str:
        return f"CubePosition({self.index}, x={self.x}, y={self.y}, z={self.z})"

    @classmethod
    def from_index(cls, index: int) -> "CubePosition":
        return cls(*to_coord(index))


def parse_cell(text: str) -> int:
    """Parse a cell reference typed by a user into a flat index.

    Accepts either a flat index ("13") or comma/space separated
    coordinates ("1,1,1" or "1 1 1").

    Raises:
        ValueError: If the text is not a valid cell reference
    """
    cleaned = text.strip()
    if not cleaned:
        raise ValueError("Empty cell reference")

    parts = cleaned.replace(",", " ").split()
    try:
        values = [int(part) for part in parts]
    except ValueError:
        raise ValueError(f"Invalid cell reference: {text!r}") from None

    if len(values) == 1:
        index = values[0]
        to_coord(index)
        return index
    if len(values) == 3:
        return to_index(*values)
    raise ValueError(f"Invalid cell reference: {text!r}. Expected INDEX or X,Y,Z")
