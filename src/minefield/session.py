"""
Game sessions and a registry for hosting many of them.

A session bundles one engine with its clock and optional score store
and survives restarts. The registry serializes commands per session
with one lock each, so independent sessions can run in parallel.
"""
import logging
import random
import threading
import uuid
from typing import Callable, Dict, List, Optional, Tuple, Union

from .board import Board
from .clock import GameClock
from .config import Difficulty, resolve_config
from .engine import (
    CellsChangedListener,
    GameEngine,
    GamePhase,
    MoveResult,
    PhaseChangedListener,
)
from .scores import BestScores

logger = logging.getLogger(__name__)


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    A player's sequence of games.

    Listeners registered here are carried over to every new game.
    """

    def __init__(
        self,
        difficulty: Union[str, Difficulty, None] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        num_mines: Optional[int] = None,
        scores: Optional[BestScores] = None,
        rng: Optional[random.Random] = None,
        time_source: Optional[Callable[[], float]] = None,
    ) -> None:
        """
        Create a session and its first game.

        Args:
            difficulty: Preset name, medium if unknown.
            width: Custom columns, used only with valid height and mines.
            height: Custom rows.
            num_mines: Custom mine count.
            scores: Store for best times; None disables recording.
            rng: Random source shared by every game of the session.
            time_source: Clock function for elapsed time.
        """
        self.scores = scores
        self._rng = rng
        self._time_source = time_source
        self._cells_listeners: List[CellsChangedListener] = []
        self._phase_listeners: List[PhaseChangedListener] = []
        self.engine: Optional[GameEngine] = None
        self.new_game(difficulty, width, height, num_mines)

    def new_game(
        self,
        difficulty: Union[str, Difficulty, None] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        num_mines: Optional[int] = None,
    ) -> GameEngine:
        """
        Discard the current game and start a fresh one.

        The old engine is detached first, so a command still finishing
        on it reaches neither the new clock nor the score store.
        """
        config, self.difficulty = resolve_config(difficulty, width, height, num_mines)
        if self.engine is not None:
            self._detach()
        self.engine = GameEngine(Board(config, rng=self._rng))
        if self._time_source is None:
            self.clock = GameClock()
        else:
            self.clock = GameClock(self._time_source)
        self.clock.attach(self.engine)
        self._score_hook = self._make_score_hook(self.difficulty, self.clock)
        self.engine.on_phase_changed(self._score_hook)
        for listener in self._cells_listeners:
            self.engine.on_cells_changed(listener)
        for listener in self._phase_listeners:
            self.engine.on_phase_changed(listener)
        self.last_record = False
        logger.debug("New %dx%d game with %d mines", config.width, config.height, config.num_mines)
        return self.engine

    def _detach(self) -> None:
        """Remove every session and caller listener from the current engine."""
        self.engine.unsubscribe(self.clock.on_phase_changed)
        self.engine.unsubscribe(self._score_hook)
        for listener in self._cells_listeners + self._phase_listeners:
            self.engine.unsubscribe(listener)

    def on_cells_changed(self, listener: CellsChangedListener) -> None:
        self._cells_listeners.append(listener)
        self.engine.on_cells_changed(listener)

    def on_phase_changed(self, listener: PhaseChangedListener) -> None:
        self._phase_listeners.append(listener)
        self.engine.on_phase_changed(listener)

    def _make_score_hook(
        self, difficulty: Optional[Difficulty], clock: GameClock
    ) -> PhaseChangedListener:
        """Record a win of this game under its own difficulty and clock."""
        def on_phase_changed(phase: GamePhase) -> None:
            if phase != GamePhase.WON or self.scores is None or difficulty is None:
                return
            self.last_record = self.scores.record(difficulty, clock.elapsed_seconds)
        return on_phase_changed

    # ========================================================================
    # Commands
    # ========================================================================

    def reveal(self, row: int, col: int) -> MoveResult:
        return self.engine.reveal(row, col)

    def flag(self, row: int, col: int) -> MoveResult:
        return self.engine.flag(row, col)

    def chord_reveal(self, row: int, col: int) -> MoveResult:
        return self.engine.chord_reveal(row, col)

    @property
    def phase(self) -> GamePhase:
        return self.engine.phase


# ============================================================================
# Session Registry
# ============================================================================

class SessionRegistry:
    """
    Thread-safe map of session id to session.

    Commands and restarts on one session run under that session's lock; different
    sessions share nothing and do not block each other.
    """

    def __init__(self, scores: Optional[BestScores] = None) -> None:
        self.scores = scores
        self._lock = threading.Lock()
        self._sessions: Dict[str, Tuple[GameSession, threading.Lock]] = {}

    def create(self, **kwargs) -> str:
        """
        Start a new session.

        Keyword arguments are passed to GameSession. The registry's
        score store is used unless one is given.

        Returns:
            The new session id.
        """
        kwargs.setdefault("scores", self.scores)
        session = GameSession(**kwargs)
        session_id = uuid.uuid4().hex
        with self._lock:
            self._sessions[session_id] = (session, threading.Lock())
        logger.info("Created session %s", session_id)
        return session_id

    def get(self, session_id: str) -> GameSession:
        """
        Look up a session.

        Raises:
            KeyError: If no session has this id.
        """
        with self._lock:
            return self._sessions[session_id][0]

    def remove(self, session_id: str) -> None:
        """Forget a session. Unknown ids are ignored."""
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def command(self, session_id: str, action: str, row: int, col: int) -> MoveResult:
        """
        Run one command on a session.

        Args:
            session_id: Target session.
            action: One of "reveal", "flag" or "chord".
            row: Row index.
            col: Column index.

        Raises:
            KeyError: If no session has this id.
            ValueError: If the action is unknown.
            OutOfBounds: If the position is outside the board.
        """
        with self._lock:
            session, session_lock = self._sessions[session_id]
        handlers = {
            "reveal": session.reveal,
            "flag": session.flag,
            "chord": session.chord_reveal,
        }
        if action not in handlers:
            raise ValueError(f"Unknown action: {action}")
        with session_lock:
            return handlers[action](row, col)

    def new_game(self, session_id: str, **kwargs) -> GameEngine:
        """
        Restart a session under its lock.

        Keyword arguments are passed to GameSession.new_game, so the
        restart waits for any command in flight on the same session.

        Raises:
            KeyError: If no session has this id.
        """
        with self._lock:
            session, session_lock = self._sessions[session_id]
        with session_lock:
            return session.new_game(**kwargs)
