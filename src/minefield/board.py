"""
Board module for Minesweeper game.

Owns the cell grid, neighbor lookup and lazy mine placement. Cells
live in a flat list indexed by ``row * width + col``.
"""
import logging
import random
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState
from .config import BoardConfig
from .errors import AlreadyPlaced, InvalidConfiguration, OutOfBounds

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Top-left, top, top-right, left, right, bottom-left, bottom, bottom-right
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper game board.

    Starts without mines. Mines are placed exactly once, either by
    ``place_mines`` on the first reveal or by ``load_layout``.
    """

    def __init__(
        self,
        config: BoardConfig,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize an empty board.

        Args:
            config: Validated board configuration.
            rng: Random source for mine placement.
        """
        self.config = config
        self._rng = rng or random.Random()
        self._mines_placed = False
        self._cells: List[Cell] = [
            Cell(row, col)
            for row in range(config.height)
            for col in range(config.width)
        ]

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        num_mines: int,
        rng: Optional[random.Random] = None,
    ) -> "Board":
        """
        Build a board from raw dimensions.

        Raises:
            InvalidConfiguration: If the dimensions or mine count are
                out of bounds. No preset is substituted here.
        """
        return cls(BoardConfig(width, height, num_mines), rng=rng)

    # ========================================================================
    # Geometry (Low-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def num_mines(self) -> int:
        return self.config.num_mines

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    def index(self, row: int, col: int) -> int:
        """Flat index of an in-bounds position."""
        if not self.is_valid_position(row, col):
            raise OutOfBounds(row, col, self.height, self.width)
        return row * self.width + col

    def cell_at(self, row: int, col: int) -> Cell:
        """
        Get the cell at a position.

        Raises:
            OutOfBounds: If the position is outside the grid.
        """
        return self._cells[self.index(row, col)]

    def neighbors_of(self, row: int, col: int) -> List[Cell]:
        """
        Get the existing cells around a position.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            Up to 8 cells, in top-left to bottom-right scan order,
            clipped at edges and corners.
        """
        self.index(row, col)
        neighbors = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self.is_valid_position(new_row, new_col):
                neighbors.append(self._cells[new_row * self.width + new_col])
        return neighbors

    def cells(self) -> Iterator[Cell]:
        """Iterate over all cells in row-major order."""
        return iter(self._cells)

    # ========================================================================
    # Mine Placement (Mid-level)
    # ========================================================================

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    def place_mines(self, exclude: Tuple[int, int]) -> None:
        """
        Place mines randomly, keeping one cell mine-free.

        Shuffles every other cell and mines the first ``num_mines``,
        then counts adjacent mines for each unmined cell.

        Args:
            exclude: (row, col) position to keep mine-free.

        Raises:
            AlreadyPlaced: If mines were already placed on this board.
            OutOfBounds: If ``exclude`` is outside the grid.
        """
        self._check_not_placed()
        excluded = self.index(*exclude)
        candidates = [i for i in range(len(self._cells)) if i != excluded]
        self._rng.shuffle(candidates)
        self._lay_mines(candidates[:self.num_mines])
        logger.debug("Placed %d mines avoiding %s", self.num_mines, exclude)

    def load_layout(self, positions: Iterable[Tuple[int, int]]) -> None:
        """
        Place mines at known positions.

        Args:
            positions: (row, col) of every mine.

        Raises:
            AlreadyPlaced: If mines were already placed on this board.
            OutOfBounds: If a position is outside the grid.
            InvalidConfiguration: If the number of distinct positions
                does not match the configured mine count.
        """
        self._check_not_placed()
        indices = {self.index(row, col) for row, col in positions}
        if len(indices) != self.num_mines:
            raise InvalidConfiguration(
                f"Layout has {len(indices)} mines, board expects {self.num_mines}"
            )
        self._lay_mines(sorted(indices))

    def _check_not_placed(self) -> None:
        if self._mines_placed:
            raise AlreadyPlaced("Mines have already been placed on this board")

    def _lay_mines(self, indices: List[int]) -> None:
        """Mark mines, then compute adjacent counts in one pass."""
        for i in indices:
            self._cells[i].is_mine = True
        for cell in self._cells:
            if not cell.is_mine:
                cell.adjacent_mines = sum(
                    1 for neighbor in self.neighbors_of(cell.row, cell.col)
                    if neighbor.is_mine
                )
        self._mines_placed = True

    def mine_positions(self) -> List[Tuple[int, int]]:
        """Positions of all mines, in row-major order."""
        return [cell.position for cell in self._cells if cell.is_mine]

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def flagged_count(self) -> int:
        """Number of flagged cells."""
        return sum(1 for cell in self._cells if cell.is_flagged)

    @property
    def mines_remaining(self) -> int:
        """Mine count minus flags placed. Negative when over-flagged."""
        return self.num_mines - self.flagged_count

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.array(
            [cell.to_observation() for cell in self._cells], dtype=np.int8
        )
        return obs.reshape(self.height, self.width)

    def get_hidden_positions(self) -> List[Tuple[int, int]]:
        """Positions of cells still in the hidden state."""
        return [
            cell.position for cell in self._cells
            if cell.state == CellState.HIDDEN
        ]

    def __repr__(self) -> str:
        return (
            f"Board(width={self.width}, height={self.height}, "
            f"num_mines={self.num_mines}, mines_placed={self._mines_placed})"
        )
