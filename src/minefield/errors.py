"""
Exceptions raised by the Minesweeper engine and its collaborators.

Only programming errors and bad configuration raise. Ordinary player
input that has no effect (re-revealing, flagging a revealed cell, an
unsatisfied chord) is a silent no-op instead.
"""


class MinefieldError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(MinefieldError, ValueError):
    """Board dimensions or mine count are outside the allowed bounds."""


class OutOfBounds(MinefieldError, IndexError):
    """A coordinate lies outside the board."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside a {height}x{width} board"
        )
        self.row = row
        self.col = col


class AlreadyPlaced(MinefieldError, RuntimeError):
    """Mines were placed a second time on the same board."""


class ScoreStoreError(MinefieldError):
    """The best-score file could not be read."""
