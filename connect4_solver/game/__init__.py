"""
connect4_solver.game - Board and game mechanics for Connect Four

This package contains the immutable board representation and the
turn-management and gymnasium wrappers around it.
"""

from connect4_solver.game.board import Board, Move
from connect4_solver.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['Board', 'Move', 'ConnectFourGame', 'ConnectFourEnv']
