"""
connect4_solver - Minimax move search for Connect Four

This package provides an immutable Connect Four board, a minimax game-tree
solver that returns every equally optimal move, and a small game manager,
gymnasium environment and command-line interface built around them.
"""

# Version number
__version__ = '0.1.0'
