"""
rules.py - Game state management and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, which tracks whose turn it is over immutable boards
2. ConnectFourEnv, a gymnasium environment whose opponent is a Solver
"""

from typing import Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4_solver.debug import debug
from connect4_solver.game.board import Board, Move
from connect4_solver.utils import BoardConfig, Player


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    Boards are immutable, so the history is simply the list of boards seen
    so far and undo pops the last one.
    """

    def __init__(self, config: BoardConfig = None):
        """Initialize a new Connect Four game."""
        debug.debug("Initializing ConnectFourGame", "game")
        self.config = config
        self.reset()

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board = Board(self.config)
        self.current_player = Player.ONE
        self.history: List[Board] = []
        self.moves_made: List[Move] = []

    def make_move(self, column: int) -> bool:
        """
        Make a move for the current player.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            True if the move was made, False if the game is over or the
            column is not playable
        """
        if self.is_game_over():
            debug.debug(f"Invalid move {column}: game is over", "game")
            return False
        if not self.board.is_valid_move(column):
            debug.debug(f"Invalid move: column {column}", "game")
            return False

        move = Move(self.current_player, column)
        self.history.append(self.board)
        self.moves_made.append(move)
        self.board = self.board.apply_move(move)
        debug.debug(f"Game: {move}", "game")

        winner = self.board.has_connect_four()
        if winner is not None:
            debug.info(f"Player {winner} wins after {len(self.moves_made)} moves", "game")
        elif self.board.is_full():
            debug.info("Game ends in a draw", "game")
        else:
            self.current_player = self.current_player.opponent()
        return True

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False if there was nothing to undo
        """
        if not self.history:
            debug.debug("No moves to undo", "game")
            return False

        self.board = self.history.pop()
        move = self.moves_made.pop()
        self.current_player = move.player
        debug.debug(f"Undid {move}", "game")
        return True

    def is_game_over(self) -> bool:
        return self.board.has_connect_four() is not None or self.board.is_full()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        return self.board.has_connect_four()

    def get_current_player(self) -> Player:
        return self.current_player

    def get_valid_moves(self) -> List[int]:
        """Get the playable columns (empty once the game is over)."""
        return [move.column for move in self.board.get_possible_moves(self.current_player)]

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays Player.ONE. When an opponent Solver is given it answers
    every agent move as Player.TWO with the first of its preferred moves;
    without one the agent plays both sides.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, opponent=None, config: BoardConfig = None,
                 render_mode: Optional[str] = None):
        """
        Initialize the Connect Four environment.

        Args:
            opponent: Optional Solver replying as Player.TWO
            config: Board geometry
            render_mode: None, "ascii" or "human"
        """
        debug.debug("Initializing ConnectFourEnv", "env")
        if opponent is not None and opponent.player != Player.TWO:
            raise ValueError("The opponent must play Player.TWO")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.game = ConnectFourGame(config)
        self.opponent = opponent
        self.render_mode = render_mode

        rows, cols = self.game.board.rows, self.game.board.cols
        self.action_space = spaces.Discrete(cols)
        # Observation: board with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(low=0, high=2, shape=(rows, cols), dtype=np.int8)

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster solutions

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """Reset the environment to the empty board."""
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play `action` for the agent, then let the opponent reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        debug.debug(f"Environment step with action {action}", "env")

        if not self.game.make_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if not self.game.is_game_over() and self.opponent is not None:
            self._opponent_move()

        reward, terminated = self._outcome()
        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def _opponent_move(self) -> None:
        moves = self.opponent.get_moves(self.game.board)
        if not moves:
            return
        debug.debug(f"Opponent plays column {moves[0].column}", "env")
        self.game.make_move(moves[0].column)

    def _outcome(self) -> Tuple[float, bool]:
        winner = self.game.get_winner()
        if winner == Player.ONE:
            debug.info("Game over: Player ONE wins", "env")
            return self.reward_win, True
        if winner == Player.TWO:
            debug.info("Game over: Player TWO wins", "env")
            return self.reward_lose, True
        if self.game.board.is_full():
            debug.info("Game over: Draw", "env")
            return self.reward_draw, True
        return self.reward_step, False

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.grid.copy()

    def _get_info(self) -> Dict:
        return {
            'valid_moves': self.game.get_valid_moves(),
            'current_player': self.game.current_player.value,
            'moves_made': len(self.game.moves_made),
            'winner': self.game.get_winner(),
        }
