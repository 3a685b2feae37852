"""
Best-score persistence.

Stores the fastest winning time per difficulty in a JSON file.
"""
import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .config import Difficulty
from .errors import ScoreStoreError

logger = logging.getLogger(__name__)


# ============================================================================
# Best Scores
# ============================================================================

class BestScores:
    """
    Fastest win, in seconds, for each difficulty.

    The file is read once on creation and rewritten on every new best.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        """
        Load scores from a JSON file.

        Args:
            path: Score file. A missing file means no scores yet.

        Raises:
            ScoreStoreError: If the file exists but is not a valid
                score mapping.
        """
        self.path = Path(path)
        self._scores: Dict[str, int] = self._load()

    def _load(self) -> Dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as error:
            raise ScoreStoreError(f"Cannot read scores from {self.path}: {error}") from error
        if not isinstance(data, dict) or not all(
            isinstance(value, int) and not isinstance(value, bool)
            for value in data.values()
        ):
            raise ScoreStoreError(f"Malformed score file {self.path}")
        return {str(key): value for key, value in data.items()}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self._scores, f, indent=2, sort_keys=True)

    def best(self, difficulty: Union[str, Difficulty]) -> Optional[int]:
        """Best time for a difficulty, or None if never won."""
        return self._scores.get(Difficulty(difficulty).value)

    def record(self, difficulty: Union[str, Difficulty], seconds: int) -> bool:
        """
        Record a winning time.

        Args:
            difficulty: Preset the game was played on.
            seconds: Elapsed time of the win.

        Returns:
            True if this is a new best and was saved.
        """
        key = Difficulty(difficulty).value
        current = self._scores.get(key)
        if current is not None and current <= seconds:
            return False
        self._scores[key] = int(seconds)
        self._save()
        logger.info("New best score for %s: %ds", key, seconds)
        return True

    def all(self) -> Dict[str, int]:
        """Copy of all recorded scores keyed by difficulty name."""
        return dict(self._scores)
