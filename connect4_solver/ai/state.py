"""
state.py - Game-tree node for the minimax search
"""

from typing import Iterator, List, Optional

from connect4_solver.game.board import Board, Move
from connect4_solver.utils import Player


class State:
    """
    A node of the game tree.

    Attributes:
        player: The player to move at this state
        board: The board at this state
        last_move: The move that produced this state (None for the root)
        children: Child states, one per possible move (empty until expanded)
        value: Minimax value (None until scored)
    """

    __slots__ = ('player', 'board', 'last_move', 'children', 'value')

    def __init__(self, player: Player, board: Board, last_move: Optional[Move] = None):
        self.player = player
        self.board = board
        self.last_move = last_move
        self.children: List['State'] = []
        self.value: Optional[int] = None

    def initialize_children(self) -> List['State']:
        """
        Create one child per possible move of `player`.

        Each child holds the board with the move applied and the opponent to
        move. A won or full board gets no children. Calling this again
        replaces any existing children.

        Returns:
            The new children
        """
        opponent = self.player.opponent()
        self.children = [State(opponent, self.board.apply_move(move), move)
                         for move in self.board.get_possible_moves(self.player)]
        return self.children

    def is_leaf(self) -> bool:
        return not self.children

    def depth(self) -> int:
        """Number of plies from this state to its deepest leaf."""
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children)

    def iter_leaves(self) -> Iterator['State']:
        """Yield every leaf below (or at) this state, depth-first."""
        stack = [self]
        while stack:
            state = stack.pop()
            if state.children:
                stack.extend(reversed(state.children))
            else:
                yield state

    def node_count(self) -> int:
        """Number of states in the subtree rooted here."""
        count = 0
        stack = [self]
        while stack:
            state = stack.pop()
            count += 1
            stack.extend(state.children)
        return count

    def __repr__(self) -> str:
        return (f"State(player={self.player}, last_move={self.last_move}, "
                f"children={len(self.children)}, value={self.value})")
