"""
minimax.py - Minimax game-tree search for Connect Four

This module provides the AI solver. Given a board, it builds the game tree
of every position reachable within `depth` plies, scores the leaves with a
static evaluation, propagates the scores up with minimax and returns every
root move that achieves the best value.

The static evaluation is deliberately simple:
1. A won board scores +/-WIN_SCORE per empty cell, so faster wins (and
   slower losses) are preferred
2. Otherwise every cell of every winning line counts +1 for the searching
   player and -1 for the opponent, which favours central cells because more
   lines pass through them
"""

import math
from typing import List, Optional

from connect4_solver.ai.base import Solver
from connect4_solver.ai.state import State
from connect4_solver.debug import debug, DebugLevel
from connect4_solver.game.board import Board, Move
from connect4_solver.utils import Player

WIN_SCORE = 10000
DEFAULT_DEPTH = 4


def create_game_tree(state: State, depth: int) -> None:
    """
    Expand `state` in place into a game tree of the given depth.

    The children of a state are all states reachable by one move of the
    player to move. A state whose board is won or full gets no children, so
    it stays a leaf whatever the remaining depth. The root is always
    expanded, so a depth of 0 or less behaves like a depth of 1.

    NOTE: this runs in time exponential in `depth`; depths around 5 or 6 are
    already slow.

    Args:
        state: Root of the tree to build
        depth: Number of plies to expand
    """
    state.initialize_children()
    if debug.is_enabled_for(DebugLevel.TRACE, "tree"):
        debug.trace(f"Expanded {state.last_move} into {len(state.children)} children "
                    f"({depth} plies left)", "tree")

    if not state.children or depth <= 1:
        return

    for child in state.children:
        create_game_tree(child, depth - 1)


class AI(Solver):
    """
    A Solver that determines moves with the minimax algorithm.

    The search always evaluates from the point of view of `player`: states
    where `player` is to move take the maximum of their children, the others
    the minimum.
    """

    def __init__(self, player: Player, depth: int = DEFAULT_DEPTH, prune: bool = False):
        """
        Initialize the minimax solver.

        Args:
            player: The player this solver finds moves for
            depth: Search depth in plies (higher = stronger but much slower)
            prune: Use alpha-beta pruning; the returned moves are the same,
                   fewer positions are visited
        """
        if not isinstance(player, Player):
            raise TypeError(f"player must be a Player, got {player!r}")
        if isinstance(depth, bool) or not isinstance(depth, int):
            raise TypeError(f"depth must be an int, got {depth!r}")

        self.player = player
        self.depth = depth
        self.prune = prune
        self.nodes_evaluated = 0  # For performance tracking

    def get_moves(self, board: Board) -> List[Move]:
        """
        Get every move that minimax considers optimal on `board`.

        Args:
            board: The current board (required)

        Returns:
            The last move of each root child whose value equals the root's
            value, in column order. Empty if there is no legal move.

        Raises:
            ValueError: If no board is given
        """
        if board is None:
            raise ValueError("A board is required")

        self.nodes_evaluated = 0
        root = State(self.player, board)

        debug.start_timer("get_moves")
        if self.prune:
            self.search_pruned(root)
        else:
            create_game_tree(root, self.depth)
            if debug.is_enabled_for(DebugLevel.DEBUG, "tree"):
                debug.debug(f"Built tree of {root.node_count()} states to depth {self.depth}", "tree")
            self.minimax(root)
        debug.end_timer("get_moves", "minimax")

        moves = [child.last_move for child in root.children if child.value == root.value]
        debug.debug(f"Root value {root.value}, {len(moves)} optimal move(s) "
                    f"from {len(root.children)}; {self.nodes_evaluated} leaves evaluated", "minimax")
        return moves

    def minimax(self, state: State) -> int:
        """
        Assign a minimax value to every state of the tree rooted at `state`.

        Leaves are scored with evaluate_board. An inner state takes the maximum
        of its children's values when `player` is to move there and the
        minimum otherwise.

        Returns:
            The value of `state`
        """
        if not state.children:
            state.value = self.evaluate_board(state.board)
            return state.value

        values = [self.minimax(child) for child in state.children]
        state.value = max(values) if state.player == self.player else min(values)
        return state.value

    def evaluate_board(self, board: Board) -> int:
        """
        Evaluate the desirability of `board` for `player`.

        Only meaningful at the leaves of a game tree: an inner state's value
        comes from its children.

        Returns:
            +/-WIN_SCORE * (number of empty cells) if the board is won, positive
            when `player` won. Otherwise the sum over all winning lines of
            +1 for each of `player`'s pieces and -1 for each opponent piece.
        """
        self.nodes_evaluated += 1
        winner = board.has_connect_four()
        if winner is None:
            total = 0
            for location in board.win_locations():
                for occupant in location:
                    if occupant == self.player:
                        total += 1
                    elif occupant is not None:
                        total -= 1
            return total

        sign = 1 if winner == self.player else -1
        return sign * WIN_SCORE * board.num_empty()

    def search_pruned(self, root: State) -> int:
        """
        Score `root` and its children with alpha-beta pruning.

        Only the root's children are kept; deeper states are created, scored
        and dropped depth-first. Each root child is searched with a window
        just below the best value found so far, so any child that ties the
        best gets its exact value and the set of optimal moves is the same
        as plain minimax. Children that cannot tie keep a bound strictly worse
        than the root value.

        Returns:
            The value of `root`
        """
        root.initialize_children()
        if not root.children:
            root.value = self.evaluate_board(root.board)
            return root.value

        remaining = max(self.depth, 1) - 1
        maximizing = root.player == self.player
        best = -math.inf if maximizing else math.inf

        for child in root.children:
            if maximizing:
                alpha, beta = (best - 1 if best != -math.inf else -math.inf), math.inf
            else:
                alpha, beta = -math.inf, (best + 1 if best != math.inf else math.inf)
            child.value = self._alphabeta(child.player, child.board, remaining, alpha, beta)
            best = max(best, child.value) if maximizing else min(best, child.value)

        root.value = best
        return root.value

    def _alphabeta(self, to_move: Player, board: Board, depth: int,
                   alpha: float, beta: float) -> int:
        """
        Fail-soft alpha-beta over the same tree create_game_tree would build.

        Args:
            to_move: The player to move on `board`
            board: Position to score
            depth: Plies still to expand below this position
            alpha: Best value the maximizer can already guarantee
            beta: Best value the minimizer can already guarantee
        """
        moves = board.get_possible_moves(to_move) if depth > 0 else []
        if not moves:
            return self.evaluate_board(board)

        opponent = to_move.opponent()
        if to_move == self.player:
            value = -math.inf
            for move in moves:
                value = max(value, self._alphabeta(opponent, board.apply_move(move),
                                                   depth - 1, alpha, beta))
                alpha = max(alpha, value)
                if alpha >= beta:
                    break  # beta cut-off
            return value

        value = math.inf
        for move in moves:
            value = min(value, self._alphabeta(opponent, board.apply_move(move),
                                               depth - 1, alpha, beta))
            beta = min(beta, value)
            if alpha >= beta:
                break  # alpha cut-off
        return value


def minimax(ai: AI, state: State) -> int:
    """Run `ai`'s minimax over the tree rooted at `state`."""
    return ai.minimax(state)


def best_move(solver: Solver, board: Board) -> Optional[Move]:
    """Get the first of `solver`'s preferred moves, or None if there is none."""
    moves = solver.get_moves(board)
    return moves[0] if moves else None
