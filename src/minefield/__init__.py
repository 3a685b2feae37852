"""
Minesweeper game engine.

Provides board construction, lazy mine placement, reveal/flag/chord
commands with flood-fill opening, win/loss detection, and the
collaborators that observe a game (clock, best scores, sessions).
"""
from .cell import Cell, CellState
from .config import (
    BoardConfig,
    Difficulty,
    PRESETS,
    EASY,
    MEDIUM,
    HARD,
    resolve_config,
)
from .errors import (
    MinefieldError,
    InvalidConfiguration,
    OutOfBounds,
    AlreadyPlaced,
    ScoreStoreError,
)
from .board import Board
from .engine import GameEngine, GamePhase, CellChange, MoveResult
from .clock import GameClock
from .scores import BestScores
from .session import GameSession, SessionRegistry
from .environment import MinesweeperEnv, render_board

__all__ = [
    "Cell",
    "CellState",
    "BoardConfig",
    "Difficulty",
    "PRESETS",
    "EASY",
    "MEDIUM",
    "HARD",
    "resolve_config",
    "MinefieldError",
    "InvalidConfiguration",
    "OutOfBounds",
    "AlreadyPlaced",
    "ScoreStoreError",
    "Board",
    "GameEngine",
    "GamePhase",
    "CellChange",
    "MoveResult",
    "GameClock",
    "BestScores",
    "GameSession",
    "SessionRegistry",
    "MinesweeperEnv",
    "render_board",
]
