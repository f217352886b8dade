"""
cli.py - Command-line interface for the Connect Four solver

This module provides a CLI for playing against the minimax solver,
asking it for the optimal moves in a given position, and benchmarking the
search.
"""

import argparse
import sys
import time
from typing import List, Optional

from connect4_solver.ai.base import RandomSolver, Solver
from connect4_solver.ai.minimax import AI, DEFAULT_DEPTH, create_game_tree
from connect4_solver.ai.state import State
from connect4_solver.debug import debug, DebugLevel
from connect4_solver.game.board import Board
from connect4_solver.game.rules import ConnectFourGame
from connect4_solver.utils import Player, parse_position

# Special return codes from get_human_move
QUIT = -1
UNDO = -2
RESTART = -3


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser shared by run.py and the module entry point."""
    parser = argparse.ArgumentParser(
        description='Connect Four minimax solver',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Play against the minimax solver searching 4 plies
    python run.py play --depth 4

    # Play against a random opponent, or two humans
    python run.py play --ai random
    python run.py play --ai none

    # Ask for the optimal moves of player X in a position (row-major, top row first)
    python run.py moves --player 1 --depth 3 --position 0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,1,1,1,0,2,2,2

    # Time tree building and search
    python run.py benchmark --depth 4 --iterations 3
    """
    )
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug mode (equivalent to --debug_level debug)')
    parser.add_argument('--debug_level',
                        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                        default='warning',
                        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
    parser.add_argument('--log_file', type=str, default=None,
                        help='Also write log messages to this file')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--ai', choices=['minimax', 'random', 'none'], default='minimax',
                             help='Opponent type: minimax solver, random moves, or a second human')
    play_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH,
                             help=f'Search depth of the minimax opponent (default: {DEFAULT_DEPTH})')
    play_parser.add_argument('--prune', action='store_true',
                             help='Use alpha-beta pruning (same moves, faster)')

    moves_parser = subparsers.add_parser('moves', help='Show the optimal moves in a position')
    moves_parser.add_argument('--position', type=str, required=True,
                              help='Comma-separated cell values (0 empty, 1 X, 2 O), row-major from the top row')
    moves_parser.add_argument('--player', type=int, choices=[1, 2], default=1,
                              help='Player to move (1 = X, 2 = O)')
    moves_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH,
                              help=f'Search depth in plies (default: {DEFAULT_DEPTH})')
    moves_parser.add_argument('--prune', action='store_true',
                              help='Use alpha-beta pruning (same moves, faster)')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark the search')
    benchmark_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH,
                                  help=f'Search depth in plies (default: {DEFAULT_DEPTH})')
    benchmark_parser.add_argument('--iterations', type=int, default=1,
                                  help='Number of searches to time')

    return parser


def configure_debug(args: argparse.Namespace) -> None:
    """Configure debug level based on args.debug or args.debug_level."""
    level = DebugLevel.DEBUG if args.debug else DebugLevel.from_string(args.debug_level)
    debug.configure(level=level, log_file=args.log_file)


class SimpleCLI:
    """Simple command-line interface for the solver."""

    def __init__(self, argv: Optional[List[str]] = None):
        """
        Initialize the CLI.

        Args:
            argv: Arguments to parse instead of sys.argv[1:]
        """
        self.argv = argv
        self.game = ConnectFourGame()
        self.args = None

    def parse_args(self) -> None:
        """Parse command-line arguments."""
        self.args = build_parser().parse_args(self.argv)
        configure_debug(self.args)

    def run(self) -> int:
        """
        Run the CLI based on the parsed arguments.

        Returns:
            Process exit code
        """
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'moves':
            return self.show_moves()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def make_opponent(self) -> Optional[Solver]:
        """Create the Player.TWO opponent selected by --ai."""
        if self.args.ai == 'minimax':
            return AI(Player.TWO, self.args.depth, prune=self.args.prune)
        if self.args.ai == 'random':
            return RandomSolver(Player.TWO)
        return None

    def play_game(self) -> None:
        """Play a Connect Four game interactively."""
        opponent = self.make_opponent()
        cols = self.game.board.cols
        print("Starting a new Connect Four game!")
        print(f"Enter column number (0-{cols - 1}) to make a move.")
        print("Other commands: 'q' to quit, 'u' to undo, 'r' to restart.")

        self.game.reset()
        print(self.game.render())

        while not self.game.is_game_over():
            if opponent is not None and self.game.get_current_player() == opponent.player:
                print("AI is thinking...")
                moves = opponent.get_moves(self.game.board)
                move = moves[0].column
                if len(moves) > 1:
                    print(f"Equally good columns: {[m.column for m in moves]}")
                print(f"AI plays column {move}")
            else:
                move = self.get_human_move()
                if move is None:
                    continue
                if move == QUIT:
                    print("Quitting game.")
                    return
                if move == UNDO:
                    self.undo(opponent)
                    continue
                if move == RESTART:
                    self.game.reset()
                    print("Game restarted.")
                    print(self.game.render())
                    continue

            if self.game.make_move(move):
                print(self.game.render())
            else:
                print(f"Invalid move: {move}")

        print("Game over!")
        winner = self.game.get_winner()
        if winner is None:
            print("It's a draw!")
        elif opponent is not None and winner == opponent.player:
            print("AI wins! Better luck next time.")
        else:
            print(f"{winner} wins! Congratulations!")

    def undo(self, opponent: Optional[Solver]) -> None:
        """Undo the last move, and the AI reply before it when playing the AI."""
        if not self.game.undo_move():
            print("No moves to undo.")
            return
        if opponent is not None and self.game.get_current_player() == opponent.player:
            self.game.undo_move()
        print("Move undone.")
        print(self.game.render())

    def get_human_move(self) -> Optional[int]:
        """
        Get a move from human player input.

        Returns:
            Column index, or special command code, or None if invalid input
        """
        cols = self.game.board.cols
        player = self.game.get_current_player()
        user_input = input(f"Player {player} move (columns 0-{cols - 1}, q/u/r): ").strip().lower()

        if user_input == 'q':
            return QUIT
        if user_input == 'u':
            return UNDO
        if user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or special command.")
            return None
        if not 0 <= move < cols:
            print(f"Column must be between 0 and {cols - 1}.")
            return None
        return move

    def show_moves(self) -> int:
        """Print a position and the solver's optimal moves for it."""
        try:
            board = Board.from_position(parse_position(self.args.position))
            solver = AI(Player(self.args.player), self.args.depth, prune=self.args.prune)
        except (ValueError, IndexError) as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        winner = board.has_connect_four()
        if winner is not None:
            print(f"{winner} has already won")
        print(f"Empty spaces: {board.num_empty()}")

        start = time.perf_counter()
        moves = solver.get_moves(board)
        elapsed = time.perf_counter() - start

        if not moves:
            print("No moves available")
        else:
            print(f"Optimal moves for {solver.player} at depth {solver.depth}: "
                  f"{[move.column for move in moves]}")
        print(f"Leaves evaluated: {solver.nodes_evaluated}, time: {elapsed:.3f} seconds")
        return 0

    def benchmark(self) -> None:
        """Benchmark tree building, minimax and alpha-beta on the empty board."""
        depth = self.args.depth
        iterations = max(1, self.args.iterations)
        board = Board()
        print(f"Running benchmark at depth {depth} with {iterations} iteration(s)...")

        debug.start_timer("tree_build")
        for _ in range(iterations):
            root = State(Player.ONE, board)
            create_game_tree(root, depth)
        build_time = debug.end_timer("tree_build", "cli")
        print(f"Tree building: {root.node_count()} states, "
              f"{build_time / iterations * 1000:.3f} ms per tree")

        for prune in (False, True):
            solver = AI(Player.ONE, depth, prune=prune)
            label = "alpha-beta" if prune else "minimax"
            debug.start_timer(label)
            for _ in range(iterations):
                moves = solver.get_moves(board)
            search_time = debug.end_timer(label, "cli")
            print(f"{label}: {solver.nodes_evaluated} leaves evaluated, "
                  f"{search_time / iterations * 1000:.3f} ms per search, "
                  f"moves {[move.column for move in moves]}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
