"""
connect4_solver.ai - Game-tree search for Connect Four

This package provides the Solver interface, the game-tree State node and
the minimax AI that returns every optimal move.
"""

from connect4_solver.ai.base import RandomSolver, Solver
from connect4_solver.ai.minimax import AI, create_game_tree
from connect4_solver.ai.state import State

__all__ = ['AI', 'RandomSolver', 'Solver', 'State', 'create_game_tree']
