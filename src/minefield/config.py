"""
Board configuration and difficulty presets.

A custom size only replaces a preset when it passes validation;
otherwise the named preset is used.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MIN_SIDE = 5
MAX_SIDE = 20


class Difficulty(str, Enum):
    """Named difficulty presets."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int
    height: int
    num_mines: int

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("width", "height", "num_mines"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(f"{name} must be an integer")
        for name in ("width", "height"):
            value = getattr(self, name)
            if not MIN_SIDE <= value <= MAX_SIDE:
                raise InvalidConfiguration(
                    f"{name} must be between {MIN_SIDE} and {MAX_SIDE}"
                )
        total_cells = self.width * self.height
        if self.num_mines < 1:
            raise InvalidConfiguration("Board needs at least one mine")
        if self.num_mines >= total_cells:
            raise InvalidConfiguration(
                f"Too many mines (max {total_cells - 1})"
            )

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.total_cells - self.num_mines


# Preset difficulty levels
EASY = BoardConfig(5, 5, 7)
MEDIUM = BoardConfig(10, 10, 15)
HARD = BoardConfig(20, 20, 30)

PRESETS: Dict[Difficulty, BoardConfig] = {
    Difficulty.EASY: EASY,
    Difficulty.MEDIUM: MEDIUM,
    Difficulty.HARD: HARD,
}

DEFAULT_DIFFICULTY = Difficulty.MEDIUM


# ============================================================================
# Resolution
# ============================================================================

def parse_difficulty(value: Union[str, Difficulty, None]) -> Difficulty:
    """Map a difficulty name to a preset key, defaulting to medium."""
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(value)
    except ValueError:
        logger.debug("Unknown difficulty %r, using %s", value, DEFAULT_DIFFICULTY.value)
        return DEFAULT_DIFFICULTY


def resolve_config(
    difficulty: Union[str, Difficulty, None] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    num_mines: Optional[int] = None,
) -> Tuple[BoardConfig, Optional[Difficulty]]:
    """
    Pick the board configuration for a new game.

    Args:
        difficulty: Preset name used when no valid custom size is given.
        width: Custom number of columns.
        height: Custom number of rows.
        num_mines: Custom mine count.

    Returns:
        Tuple of (config, difficulty). The difficulty is None when the
        custom size was accepted.
    """
    preset = parse_difficulty(difficulty)
    custom = (width, height, num_mines)
    if all(value is not None for value in custom):
        try:
            return BoardConfig(width, height, num_mines), None
        except InvalidConfiguration as error:
            logger.debug(
                "Custom board %s rejected (%s), using %s preset",
                custom, error, preset.value,
            )
    return PRESETS[preset], preset
