"""
connect4_solver.interfaces - User interfaces for the Connect Four solver
"""

# Don't import anything here to avoid circular imports
__all__ = []
