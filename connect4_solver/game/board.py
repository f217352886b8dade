"""
board.py - Immutable board representation for Connect Four

This module implements the Board value the solver searches over. A Board is
never changed after construction: applying a Move returns a new Board, so a
game tree can hold one board per node without copies leaking between them.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np

from connect4_solver.debug import debug
from connect4_solver.utils import (DEFAULT_CONFIG, EMPTY, BoardConfig, Player,
                                   find_winner, get_win_lines, render_board_ascii)


@dataclass(frozen=True)
class Move:
    """A piece dropped by `player` into `column`."""
    player: Player
    column: int

    def __str__(self):
        return f"{self.player} -> column {self.column}"


class Board:
    """
    Represents a Connect Four game board.

    The grid is a read-only numpy array of shape (rows, cols) where row 0 is
    the top of the board. Cells hold 0 (empty), 1 (Player.ONE) or
    2 (Player.TWO).
    """

    __slots__ = ('config', '_grid', '_winner', '_winner_checked')

    def __init__(self, config: BoardConfig = None):
        """
        Initialize an empty board.

        Args:
            config: Board geometry (defaults to the standard 6x7, four to win)
        """
        self.config = config or DEFAULT_CONFIG
        grid = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        grid.setflags(write=False)
        self._grid = grid
        self._winner = None
        self._winner_checked = False

    @classmethod
    def _wrap(cls, grid: np.ndarray, config: BoardConfig) -> 'Board':
        board = cls.__new__(cls)
        board.config = config
        grid.setflags(write=False)
        board._grid = grid
        board._winner = None
        board._winner_checked = False
        return board

    @classmethod
    def from_grid(cls, grid, config: BoardConfig = None) -> 'Board':
        """
        Create a board from a 2D array of cell values.

        Args:
            grid: 2D array-like of 0/1/2 values, row 0 at the top
            config: Board geometry; rows and cols must match the grid

        Returns:
            A new Board

        Raises:
            ValueError: If the shape or the cell values are invalid, or a
                piece sits above an empty cell
        """
        array = np.array(grid, dtype=np.int8)
        if config is None:
            if array.ndim != 2:
                raise ValueError(f"Grid must be 2D, got shape {array.shape}")
            config = BoardConfig(array.shape[0], array.shape[1], DEFAULT_CONFIG.connect_n)
        if array.shape != (config.rows, config.cols):
            raise ValueError(f"Grid shape {array.shape} does not match "
                             f"{config.rows}x{config.cols} board")
        if not np.isin(array, (EMPTY, Player.ONE.value, Player.TWO.value)).all():
            raise ValueError("Grid values must be 0 (empty), 1 or 2")
        # A piece must rest on the bottom row or on another piece
        floating = (array[:-1] != EMPTY) & (array[1:] == EMPTY)
        if floating.any():
            row, col = (int(i) for i in np.argwhere(floating)[0])
            raise ValueError(f"Piece at ({row}, {col}) floats above an empty cell")
        return cls._wrap(array, config)

    @classmethod
    def from_position(cls, values: Sequence[int], config: BoardConfig = None) -> 'Board':
        """
        Create a board from a flat, row-major list of cell values.

        Raises:
            ValueError: If the number of values does not fill the board
        """
        config = config or DEFAULT_CONFIG
        if len(values) != config.num_cells:
            raise ValueError(f"Position must have {config.num_cells} values, got {len(values)}")
        return cls.from_grid(np.array(values).reshape(config.rows, config.cols), config)

    @classmethod
    def from_moves(cls, columns: Iterable[int], config: BoardConfig = None,
                   first: Player = Player.ONE) -> 'Board':
        """Play `columns` in order from an empty board, alternating players."""
        board = cls(config)
        player = first
        for column in columns:
            board = board.apply_move(Move(player, column))
            player = player.opponent()
        return board

    @property
    def grid(self) -> np.ndarray:
        """The read-only grid."""
        return self._grid

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    def get_tile(self, row: int, col: int) -> Optional[Player]:
        """
        Get the occupant of a cell.

        Returns:
            The player holding the cell, or None if it is empty

        Raises:
            IndexError: If (row, col) is off the board
        """
        if not self.config.is_valid_position(row, col):
            raise IndexError(f"Position ({row}, {col}) is off the board")
        return Player.from_cell(self._grid[row, col])

    def has_connect_four(self) -> Optional[Player]:
        """
        Check the board for a winning line.

        Returns:
            The player with `connect_n` in a row, or None
        """
        if not self._winner_checked:
            self._winner = find_winner(self._grid, self.config)
            self._winner_checked = True
        return self._winner

    def win_locations(self) -> List[List[Optional[Player]]]:
        """
        Get the occupants of every winning line on the board.

        Every row, column and diagonal window of `connect_n` cells is returned,
        so a cell appears once for each line that passes through it.
        """
        grid = self._grid
        return [[Player.from_cell(grid[pos]) for pos in line]
                for line in get_win_lines(self.config)]

    def is_valid_move(self, column: int) -> bool:
        """Check that `column` is on the board and not full."""
        if not (0 <= column < self.cols):
            debug.trace(f"Invalid move: column {column} out of bounds", "board")
            return False
        if self._grid[0, column] != EMPTY:
            debug.trace(f"Invalid move: column {column} is full", "board")
            return False
        return True

    def is_full(self) -> bool:
        return bool((self._grid[0] != EMPTY).all())

    def num_empty(self) -> int:
        """Count the empty cells on the board."""
        return int(np.count_nonzero(self._grid == EMPTY))

    def get_possible_moves(self, player: Player) -> List[Move]:
        """
        Get every move `player` could make, left to right.

        Returns:
            One Move per open column, or an empty list if the game is already
            won or the board is full
        """
        if self.has_connect_four() is not None:
            return []
        return [Move(player, col) for col in range(self.cols) if self._grid[0, col] == EMPTY]

    def apply_move(self, move: Move) -> 'Board':
        """
        Drop a piece and return the resulting board.

        Args:
            move: The move to apply

        Returns:
            A new Board; this board is unchanged

        Raises:
            ValueError: If the column is out of range or full
        """
        column = move.column
        if not (0 <= column < self.cols):
            raise ValueError(f"Column {column} is out of range 0-{self.cols - 1}")

        if self._grid[0, column] != EMPTY:
            raise ValueError(f"Column {column} is full")

        empty_rows = np.flatnonzero(self._grid[:, column] == EMPTY)
        row = int(empty_rows[-1])
        grid = self._grid.copy()
        grid[row, column] = move.player.value
        return Board._wrap(grid, self.config)

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self._grid)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board({self._grid.tolist()!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.config == other.config and np.array_equal(self._grid, other._grid)

    def __hash__(self) -> int:
        return hash((self.config, self._grid.tobytes()))
