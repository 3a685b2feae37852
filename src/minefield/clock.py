"""
Elapsed-time tracking for a game.

The clock never schedules anything. It records start and stop times
from engine phase notifications and computes elapsed time on demand.
"""
import time
from typing import Callable, Optional

from .engine import GameEngine, GamePhase


class GameClock:
    """Stopwatch driven by an engine's phase changes."""

    def __init__(self, time_source: Callable[[], float] = time.monotonic) -> None:
        self._time_source = time_source
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    def attach(self, engine: GameEngine) -> "GameClock":
        """Subscribe to an engine and return self."""
        engine.on_phase_changed(self.on_phase_changed)
        return self

    def on_phase_changed(self, phase: GamePhase) -> None:
        if phase == GamePhase.IN_PROGRESS and self._started_at is None:
            self._started_at = self._time_source()
        elif phase.is_terminal and self._stopped_at is None:
            self._stopped_at = self._time_source()

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds since the game started, frozen once it ends."""
        if self._started_at is None:
            return 0
        end = self._stopped_at
        if end is None:
            end = self._time_source()
        return max(0, int(end - self._started_at))

    def display(self) -> str:
        """Elapsed time as MM:SS."""
        minutes, seconds = divmod(self.elapsed_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"
