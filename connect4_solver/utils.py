"""
utils.py - Constants, enumerations and board-geometry helpers

This module holds the board geometry (as a BoardConfig), the Player
enumeration, and the helpers that walk a grid: winning-line enumeration,
win detection and ASCII rendering.
"""

from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from typing import List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

EMPTY = 0  # Grid value of an empty cell


class Player(Enum):
    """The two players. Empty cells are not a player."""
    ONE = 1    # First player
    TWO = 2    # Second player

    def opponent(self) -> 'Player':
        """Get the other player."""
        return Player.TWO if self == Player.ONE else Player.ONE

    @classmethod
    def from_cell(cls, value: int) -> Optional['Player']:
        """Map a grid value to a player, or None for an empty cell."""
        if value == EMPTY:
            return None
        return cls(int(value))

    def __str__(self):
        return "X" if self == Player.ONE else "O"


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1)
}


@dataclass(frozen=True)
class BoardConfig:
    """
    Board geometry and winning-line length.

    Attributes:
        rows: Number of rows (row 0 is the top)
        cols: Number of columns
        connect_n: Pieces in a line needed to win
    """
    rows: int = ROWS
    cols: int = COLS
    connect_n: int = CONNECT_N

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Board must have at least one row and column, got {self.rows}x{self.cols}")
        if self.connect_n < 1:
            raise ValueError(f"connect_n must be positive, got {self.connect_n}")
        if self.connect_n > max(self.rows, self.cols):
            raise ValueError(
                f"connect_n={self.connect_n} does not fit on a {self.rows}x{self.cols} board")

    @property
    def num_cells(self) -> int:
        return self.rows * self.cols

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if a position is within the board boundaries."""
        return 0 <= row < self.rows and 0 <= col < self.cols


DEFAULT_CONFIG = BoardConfig()


@lru_cache(maxsize=None)
def get_win_lines(config: BoardConfig) -> Tuple[Tuple[Tuple[int, int], ...], ...]:
    """
    Enumerate every line of `connect_n` cells on the board.

    Lines are ordered horizontal, vertical, diagonal down-right, diagonal
    up-right, each scanned row by row from the top-left.

    Args:
        config: The board geometry

    Returns:
        Tuple of lines, each a tuple of (row, col) positions
    """
    n = config.connect_n
    lines = []
    for dr, dc in (DIRECTION_VECTORS[Direction.HORIZONTAL],
                   DIRECTION_VECTORS[Direction.VERTICAL],
                   DIRECTION_VECTORS[Direction.DIAGONAL_DOWN],
                   DIRECTION_VECTORS[Direction.DIAGONAL_UP]):
        for row in range(config.rows):
            for col in range(config.cols):
                end_row = row + (n - 1) * dr
                end_col = col + (n - 1) * dc
                if not config.is_valid_position(end_row, end_col):
                    continue
                lines.append(tuple((row + i * dr, col + i * dc) for i in range(n)))
    return tuple(lines)


def find_winner(grid: np.ndarray, config: BoardConfig) -> Optional[Player]:
    """
    Find a player with `connect_n` pieces in a line.

    Args:
        grid: The board grid
        config: The board geometry

    Returns:
        The winning player, or None if nobody has a line
    """
    for line in get_win_lines(config):
        first = grid[line[0]]
        if first == EMPTY:
            continue
        if all(grid[pos] == first for pos in line[1:]):
            return Player.from_cell(first)
    return None


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The game board

    Returns:
        ASCII representation of the board
    """
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"
    symbols = {EMPTY: " ", Player.ONE.value: "X", Player.TWO.value: "O"}

    result = [border]
    for row in range(rows):
        result.append("|" + " ".join(symbols[int(cell)] for cell in grid[row]) + "|")
    result.append(border)
    # Column numbers only line up for single-digit columns
    result.append("|" + " ".join(str(i % 10) for i in range(cols)) + "|")

    return "\n".join(result)


def parse_position(position: str) -> List[int]:
    """
    Parse a comma-separated position string ("0,0,1,2,...") into cell values.

    Raises:
        ValueError: If a value is not an integer
    """
    return [int(c) for c in position.split(',') if c.strip()]
