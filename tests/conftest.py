"""
Pytest configuration and shared fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, GameEngine, EASY, MEDIUM


# ============================================================================
# Known Layout
# ============================================================================

# 5x5 board, 7 mines. Adjacent counts:
#
#   0 0 1 M M
#   0 0 1 3 M
#   1 1 0 1 1
#   M 3 1 1 1
#   M M 1 1 M
KNOWN_MINES = [(0, 3), (0, 4), (1, 4), (3, 0), (4, 0), (4, 1), (4, 4)]

# Cells opened by revealing any cell of the top-left zero region
KNOWN_REGION = {
    (0, 0), (0, 1), (1, 0), (1, 1), (2, 2),
    (0, 2), (1, 2), (1, 3), (2, 0), (2, 1),
    (2, 3), (3, 1), (3, 2), (3, 3),
}


class FakeTime:
    """Manually advanced time source."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def medium_board() -> Board:
    """Create a medium 10x10 board with 15 mines, seeded."""
    return Board(MEDIUM, rng=random.Random(7))


@pytest.fixture
def known_board() -> Board:
    """Create the 5x5 board with the known mine layout."""
    board = Board(EASY)
    board.load_layout(KNOWN_MINES)
    return board


@pytest.fixture
def sparse_board() -> Board:
    """Create a 20x20 board with a single mine in the far corner."""
    board = Board(BoardConfig(20, 20, 1))
    board.load_layout([(19, 19)])
    return board


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def known_engine(known_board: Board) -> GameEngine:
    """Create an engine over the known layout."""
    return GameEngine(known_board)


@pytest.fixture
def fresh_engine() -> GameEngine:
    """Create an engine over a seeded medium board without mines yet."""
    return GameEngine(Board(MEDIUM, rng=random.Random(42)))


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(1, 1, is_mine=True)
