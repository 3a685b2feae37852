"""
Game engine for Minesweeper.

Owns the game phase and runs reveal, flag and chord commands against
a Board. Every command runs to completion and reports the cells it
changed. Listeners registered on the engine receive the same changes
as notifications; the engine itself does no I/O and keeps no timers.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, List, Optional, Union

from .board import Board
from .cell import Cell, CellState
from .config import Difficulty, resolve_config

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Coarse lifecycle state of a game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


# ============================================================================
# Notifications
# ============================================================================

@dataclass(frozen=True)
class CellChange:
    """
    One cell as reported to listeners.

    Attributes:
        row: Row index.
        col: Column index.
        state: State of the cell after the command.
        adjacent_mines: Adjacent mine count, only for revealed safe cells.
        is_mine: True for the mine that ended the game and for every
            other mine exposed on loss.
    """

    row: int
    col: int
    state: CellState
    adjacent_mines: Optional[int] = None
    is_mine: bool = False

    @classmethod
    def of(cls, cell: Cell, exposed: bool = False) -> "CellChange":
        """Snapshot a cell."""
        count = None
        if cell.is_revealed and not cell.is_mine:
            count = cell.adjacent_mines
        return cls(
            row=cell.row,
            col=cell.col,
            state=cell.state,
            adjacent_mines=count,
            is_mine=cell.is_mine and (exposed or cell.is_revealed),
        )


@dataclass
class MoveResult:
    """
    Outcome of one command.

    Attributes:
        changes: Cells whose state changed, plus exposed mines on loss.
        phase: Phase after the command.
        transitions: Phases entered during the command, in order.
    """

    changes: List[CellChange] = field(default_factory=list)
    phase: GamePhase = GamePhase.NOT_STARTED
    transitions: List[GamePhase] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changes or self.transitions)


CellsChangedListener = Callable[[List[CellChange]], None]
PhaseChangedListener = Callable[[GamePhase], None]


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    One Minesweeper game.

    The engine is synchronous and keeps no shared state, so independent
    engines can be driven from different threads. Commands on a single
    engine must be serialized by the caller.

    Flagged cells are never revealed by a command, including a chord
    or a flood fill. ``Cell.reveal(force=True)`` is left for callers
    that drive cells directly; the engine does not use it.
    """

    def __init__(self, board: Board) -> None:
        """
        Wrap a board in a new game.

        Args:
            board: Fresh board. A board with a preloaded layout keeps it;
                otherwise mines are placed on the first reveal.
        """
        self._board = board
        self._phase = GamePhase.NOT_STARTED
        self._revealed_count = 0
        self._cells_listeners: List[CellsChangedListener] = []
        self._phase_listeners: List[PhaseChangedListener] = []
        # Buffers for the command in progress
        self._changes: List[CellChange] = []
        self._transitions: List[GamePhase] = []

    @classmethod
    def new_game(
        cls,
        difficulty: Union[str, Difficulty, None] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        num_mines: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "GameEngine":
        """
        Start a game from a preset or a custom size.

        An invalid custom size falls back to the preset silently.
        """
        config, _ = resolve_config(difficulty, width, height, num_mines)
        return cls(Board(config, rng=rng))

    # ========================================================================
    # Listeners
    # ========================================================================

    def on_cells_changed(self, listener: CellsChangedListener) -> None:
        """Register a callback receiving the cells changed by a command."""
        self._cells_listeners.append(listener)

    def on_phase_changed(self, listener: PhaseChangedListener) -> None:
        """Register a callback receiving each new phase."""
        self._phase_listeners.append(listener)

    def unsubscribe(self, listener: Callable) -> None:
        """Remove a listener of either kind. Unknown listeners are ignored."""
        for listeners in (self._cells_listeners, self._phase_listeners):
            while listener in listeners:
                listeners.remove(listener)

    # ========================================================================
    # Commands
    # ========================================================================

    def reveal(self, row: int, col: int) -> MoveResult:
        """
        Reveal a cell.

        The first reveal places the mines, never on the target cell.
        A zero-count cell opens its whole region. A mine loses the game.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        cell = self._board.cell_at(row, col)
        logger.debug("reveal(%d, %d) in %s", row, col, self._phase.name)
        self._reveal(cell)
        return self._finish()

    def flag(self, row: int, col: int) -> MoveResult:
        """
        Toggle a flag between hidden and flagged.

        No-op on revealed cells and after the game has ended.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        cell = self._board.cell_at(row, col)
        if not self._phase.is_terminal and cell.toggle_flag():
            self._changes.append(CellChange.of(cell))
        return self._finish()

    def chord_reveal(self, row: int, col: int) -> MoveResult:
        """
        Reveal every unflagged hidden neighbor of a satisfied number.

        Only acts on a revealed cell whose flagged-neighbor count equals
        its adjacent mine count. Each neighbor is revealed as if clicked,
        so a wrong flag can lose the game and a zero cell cascades.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        cell = self._board.cell_at(row, col)
        if self._can_chord(cell):
            logger.debug("chord_reveal(%d, %d)", row, col)
            for neighbor in self._board.neighbors_of(row, col):
                if neighbor.is_hidden:
                    self._reveal(neighbor)
        return self._finish()

    # ========================================================================
    # Reveal Logic (Low-level)
    # ========================================================================

    def _reveal(self, cell: Cell) -> None:
        """Reveal one cell and apply its consequences."""
        if self._phase.is_terminal or not cell.is_hidden:
            return

        if self._phase == GamePhase.NOT_STARTED:
            self._start(cell)

        if cell.is_mine:
            self._open(cell)
            self._expose_mines(cell)
            self._set_phase(GamePhase.LOST)
            return

        if cell.adjacent_mines == 0:
            self._flood_reveal(cell)
        else:
            self._open(cell)

        self._check_win_condition()

    def _start(self, cell: Cell) -> None:
        """Place mines avoiding the first click and start the game."""
        if not self._board.mines_placed:
            self._board.place_mines(cell.position)
        self._set_phase(GamePhase.IN_PROGRESS)

    def _open(self, cell: Cell) -> bool:
        """Mark a cell revealed and record the change."""
        if not cell.reveal():
            return False
        self._revealed_count += 1
        self._changes.append(CellChange.of(cell))
        return True

    def _flood_reveal(self, origin: Cell) -> None:
        """
        Open the zero-count region around ``origin`` and its numbered rim.

        Uses a worklist instead of recursion. A zero cell is queued at
        most once; numbered neighbors are revealed but never expanded.
        """
        pending = deque([origin])
        queued = {origin.position}
        opened = 0

        while pending:
            cell = pending.popleft()
            opened += self._open(cell)
            for neighbor in self._board.neighbors_of(cell.row, cell.col):
                if not neighbor.is_hidden or neighbor.is_mine:
                    continue
                if neighbor.adjacent_mines > 0:
                    opened += self._open(neighbor)
                elif neighbor.position not in queued:
                    queued.add(neighbor.position)
                    pending.append(neighbor)

        logger.debug("Flood fill from %s opened %d cells", origin.position, opened)

    def _expose_mines(self, trigger: Cell) -> None:
        """Report every other mine without changing its state."""
        for cell in self._board.cells():
            if cell.is_mine and cell is not trigger:
                self._changes.append(CellChange.of(cell, exposed=True))

    def _check_win_condition(self) -> None:
        """Win once every non-mine cell is revealed."""
        if self._revealed_count == self._board.config.safe_cells:
            self._set_phase(GamePhase.WON)

    def _can_chord(self, cell: Cell) -> bool:
        """Check if chord action is valid."""
        if self._phase != GamePhase.IN_PROGRESS:
            return False
        if not cell.is_revealed or cell.adjacent_mines == 0:
            return False
        flag_count = sum(
            1 for neighbor in self._board.neighbors_of(cell.row, cell.col)
            if neighbor.is_flagged
        )
        return flag_count == cell.adjacent_mines

    def _set_phase(self, phase: GamePhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        self._transitions.append(phase)
        if phase == GamePhase.IN_PROGRESS:
            logger.info("Game started on %r", self._board)
        elif phase.is_terminal:
            logger.info(
                "Game %s with %d cells revealed", phase.name.lower(),
                self._revealed_count,
            )

    def _finish(self) -> MoveResult:
        """Close the current command and notify listeners."""
        result = MoveResult(self._changes, self._phase, self._transitions)
        self._changes = []
        self._transitions = []
        if result.changes:
            for listener in list(self._cells_listeners):
                listener(result.changes)
        for phase in result.transitions:
            for listener in list(self._phase_listeners):
                listener(phase)
        return result

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def board(self) -> Board:
        return self._board

    @property
    def phase(self) -> GamePhase:
        """Get current game phase."""
        return self._phase

    @property
    def is_over(self) -> bool:
        """Check if the game has been won or lost."""
        return self._phase.is_terminal

    @property
    def revealed_count(self) -> int:
        """Cells revealed so far, including a triggered mine."""
        return self._revealed_count
