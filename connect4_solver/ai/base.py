"""Solver interface and a random baseline."""

import abc
from typing import List, Optional

import numpy as np

from connect4_solver.game.board import Board, Move
from connect4_solver.utils import Player


class Solver(abc.ABC):
    """Something that picks moves for a fixed player."""

    player: Player

    @abc.abstractmethod
    def get_moves(self, board: Board) -> List[Move]:
        """
        Get the moves this solver considers best on `board`.

        Returns:
            The preferred moves, or an empty list if there are none
        """
        raise NotImplementedError


class RandomSolver(Solver):
    """Picks one possible move uniformly at random."""

    def __init__(self, player: Player, seed: Optional[int] = None):
        self.player = player
        self._rng = np.random.default_rng(seed)

    def get_moves(self, board: Board) -> List[Move]:
        if board is None:
            raise ValueError("A board is required")
        moves = board.get_possible_moves(self.player)
        if not moves:
            return []
        return [moves[int(self._rng.integers(len(moves)))]]
