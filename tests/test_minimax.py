"""Tests for the minimax solver."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from connect4_solver.ai.base import RandomSolver
from connect4_solver.ai.minimax import AI, WIN_SCORE, best_move, create_game_tree, minimax
from connect4_solver.ai.state import State
from connect4_solver.game.board import Board, Move
from connect4_solver.utils import BoardConfig, Player

POSITIONS = [
    [],
    [3],
    [3, 3, 2],
    [3, 2, 4, 4, 2],
    [0, 0, 1, 1, 2],
    [3, 3, 3, 3, 2, 4, 2, 4],
]


def draw_board():
    pattern = np.array([1, 1, 2, 2, 1, 1, 2])
    return Board.from_grid([pattern if row % 2 == 0 else 3 - pattern for row in range(6)])


def columns(moves):
    return [move.column for move in moves]


def test_evaluate_empty_board():
    """Test the empty board is neutral."""
    assert AI(Player.ONE).evaluate_board(Board()) == 0


def test_evaluate_counts_lines_through_each_piece():
    """Test a single piece scores once per winning line through it."""
    expected = [3, 4, 5, 7, 5, 4, 3]
    for col, score in enumerate(expected):
        board = Board().apply_move(Move(Player.ONE, col))
        assert AI(Player.ONE).evaluate_board(board) == score
        assert AI(Player.TWO).evaluate_board(board) == -score


@pytest.mark.parametrize("moves", POSITIONS)
def test_evaluate_is_antisymmetric(moves):
    """Test swapping the searching player negates a non-winning score."""
    board = Board.from_moves(moves)
    assert board.has_connect_four() is None
    assert AI(Player.ONE).evaluate_board(board) == -AI(Player.TWO).evaluate_board(board)


def test_evaluate_matches_win_locations_sum():
    """Test the score is the plain +1/-1 sum over all lines."""
    board = Board.from_moves([3, 2, 4, 4, 2, 5, 1])
    expected = 0
    for location in board.win_locations():
        for occupant in location:
            expected += {Player.TWO: 1, Player.ONE: -1, None: 0}[occupant]
    assert AI(Player.TWO).evaluate_board(board) == expected


def test_evaluate_won_board():
    """Test a win scores WIN_SCORE per empty cell with the winner's sign."""
    board = Board.from_moves([0, 0, 1, 1, 2, 2, 3])
    assert board.num_empty() == 35
    assert AI(Player.ONE).evaluate_board(board) == WIN_SCORE * 35
    assert AI(Player.TWO).evaluate_board(board) == -WIN_SCORE * 35


def test_faster_win_scores_higher():
    """Test an earlier win outscores a later one."""
    early = Board.from_moves([0, 6, 0, 6, 0, 6, 0])
    late = Board.from_moves([0, 6, 0, 6, 0, 5, 1, 5, 0])
    ai = AI(Player.ONE)
    assert early.has_connect_four() == late.has_connect_four() == Player.ONE
    assert ai.evaluate_board(early) > ai.evaluate_board(late) > 0


def test_empty_board_depth_one_prefers_center():
    """Test the center column wins on an empty board at depth 1."""
    ai = AI(Player.ONE, depth=1)
    assert ai.get_moves(Board()) == [Move(Player.ONE, 3)]


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_takes_winning_move(depth):
    """Test a win in one is the only move returned."""
    board = Board.from_moves([0, 0, 1, 1, 2, 2])
    for prune in (False, True):
        assert AI(Player.ONE, depth, prune=prune).get_moves(board) == [Move(Player.ONE, 3)]


def test_blocks_opponent_win():
    """Test the solver blocks a vertical three."""
    board = Board.from_moves([0, 6, 0, 6, 1, 6])
    assert AI(Player.ONE, depth=2).get_moves(board) == [Move(Player.ONE, 6)]


def test_returns_all_ties():
    """Test every tied root child is returned, in column order."""
    # Each bottom cell of a 2x2 board lies on three lines
    config = BoardConfig(rows=2, cols=2, connect_n=2)
    board = Board(config)
    moves = AI(Player.ONE, depth=1).get_moves(board)
    assert moves == [Move(Player.ONE, 0), Move(Player.ONE, 1)]


def test_no_moves_on_full_board():
    """Test a full board returns no moves rather than failing."""
    assert AI(Player.ONE, depth=3).get_moves(draw_board()) == []
    assert AI(Player.ONE, depth=3, prune=True).get_moves(draw_board()) == []


def test_no_moves_on_won_board():
    """Test an already won board returns no moves."""
    board = Board.from_moves([0, 0, 1, 1, 2, 2, 3])
    assert AI(Player.TWO, depth=2).get_moves(board) == []


def test_missing_board_raises():
    """Test the board is mandatory."""
    with pytest.raises(ValueError):
        AI(Player.ONE).get_moves(None)


def test_constructor_validation():
    """Test bad player or depth arguments are rejected."""
    with pytest.raises(TypeError):
        AI(1)
    with pytest.raises(TypeError):
        AI(Player.ONE, depth="3")


@pytest.mark.parametrize("moves", POSITIONS)
def test_moves_are_legal_and_nonempty(moves):
    """Test returned moves are legal moves of the searching player."""
    board = Board.from_moves(moves)
    player = Player.ONE if len(moves) % 2 == 0 else Player.TWO
    result = AI(player, depth=2).get_moves(board)
    assert result
    assert all(move in board.get_possible_moves(player) for move in result)


def test_depth_zero_matches_depth_one():
    """Test a non-positive depth still looks one ply ahead."""
    board = Board.from_moves([3, 2, 4])
    assert AI(Player.TWO, depth=0).get_moves(board) == AI(Player.TWO, depth=1).get_moves(board)


def test_idempotent():
    """Test repeated searches give the same moves."""
    board = Board.from_moves([3, 3, 2, 4])
    ai = AI(Player.ONE, depth=3)
    assert ai.get_moves(board) == ai.get_moves(board)


def test_minimax_propagates_max_and_min():
    """Test every inner state takes the max or min of its children."""
    ai = AI(Player.TWO)
    root = State(Player.TWO, Board.from_moves([3, 2, 4]))
    create_game_tree(root, 3)
    value = minimax(ai, root)
    assert value == root.value

    stack = [root]
    while stack:
        state = stack.pop()
        if not state.children:
            assert state.value == ai.evaluate_board(state.board)
            continue
        values = [child.value for child in state.children]
        if state.player == ai.player:
            assert state.value == max(values)
        else:
            assert state.value == min(values)
        stack.extend(state.children)


@pytest.mark.parametrize("moves", POSITIONS)
@pytest.mark.parametrize("depth", [1, 2, 3])
def test_pruning_returns_same_moves(moves, depth):
    """Test alpha-beta returns exactly the moves plain minimax returns."""
    board = Board.from_moves(moves)
    player = Player.ONE if len(moves) % 2 == 0 else Player.TWO
    plain = AI(player, depth)
    pruned = AI(player, depth, prune=True)
    assert pruned.get_moves(board) == plain.get_moves(board)
    assert pruned.nodes_evaluated <= plain.nodes_evaluated


def test_pruning_same_root_value():
    """Test alpha-beta and minimax agree on the root value."""
    board = Board.from_moves([3, 3, 2])
    ai = AI(Player.TWO, depth=3)

    full = State(Player.TWO, board)
    create_game_tree(full, 3)
    ai.minimax(full)

    pruned = State(Player.TWO, board)
    assert ai.search_pruned(pruned) == full.value


def test_other_geometry():
    """Test the search works unchanged on a smaller board."""
    config = BoardConfig(rows=4, cols=5, connect_n=3)
    board = Board.from_moves([0, 0, 1, 1], config=config)
    assert AI(Player.ONE, depth=2).get_moves(board) == [Move(Player.ONE, 2)]


def test_best_move_helper():
    """Test best_move picks the first preferred move or None."""
    assert best_move(AI(Player.ONE, depth=1), Board()) == Move(Player.ONE, 3)
    assert best_move(AI(Player.ONE, depth=1), draw_board()) is None


def test_random_solver():
    """Test the random solver returns one legal move."""
    board = Board.from_moves([0] * 6)
    solver = RandomSolver(Player.ONE, seed=7)
    for _ in range(20):
        moves = solver.get_moves(board)
        assert len(moves) == 1
        assert moves[0] in board.get_possible_moves(Player.ONE)
    assert solver.get_moves(draw_board()) == []
