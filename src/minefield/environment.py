"""
Gymnasium environment wrapper for Minesweeper.

Drives a GameEngine through the standard RL interface so automated
players can be run and compared.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board
from .config import BoardConfig, MEDIUM
from .engine import GameEngine, GamePhase


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (i // width, i % width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: medium preset).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or MEDIUM
        self.render_mode = render_mode
        self.engine = GameEngine(Board(self.config))

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(
            self.config.height * self.config.width
        )

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        board_seed = int(self.np_random.integers(2**31))
        self.engine = GameEngine(Board(self.config, rng=random.Random(board_seed)))
        self._steps = 0

        return self.engine.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * width + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)
        observation = self.engine.board.get_observation()
        terminated = self.engine.is_over

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return divmod(int(action), self.config.width)

    def _calculate_reward(self, row: int, col: int) -> float:
        """Reveal a cell and score the outcome."""
        cell = self.engine.board.cell_at(row, col)
        if self.engine.is_over or not cell.is_hidden:
            return -0.1

        result = self.engine.reveal(row, col)

        if result.phase == GamePhase.WON:
            return 10.0
        if result.phase == GamePhase.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.engine.board
        return {
            "steps": self._steps,
            "revealed": self.engine.revealed_count,
            "total_safe": self.config.safe_cells,
            "game_state": self.engine.phase.name,
            "valid_actions": len(board.get_hidden_positions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.engine.board)
        if self.render_mode == "human":
            print(render_board(self.engine.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            int8 array where 1 = hidden cell that can be revealed.
        """
        mask = self.engine.board.get_observation().flatten() == -1
        return mask.astype(np.int8)


# ============================================================================
# Text Rendering
# ============================================================================

def render_board(board: Board, show_mines: bool = False) -> str:
    """
    Render board as ASCII string.

    Args:
        board: Board to draw.
        show_mines: Draw hidden mines as ``*`` (used after a loss).
    """
    lines = []
    obs = board.get_observation()

    for row in range(board.height):
        row_str = ""
        for col in range(board.width):
            val = obs[row, col]
            if val == 9 or (show_mines and board.cell_at(row, col).is_mine):
                row_str += "*"
            elif val == -1:
                row_str += "."
            elif val == -2:
                row_str += "F"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str)

    return "\n".join(lines)
