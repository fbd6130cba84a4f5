"""Exception types raised by the puzzle engine."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for all engine errors."""


class InvalidBoardError(PuzzleError, ValueError):
    """A board size or cell sequence does not describe a valid puzzle."""


class InvalidConfigError(PuzzleError, ValueError):
    """A configuration value is out of range."""


class ShuffleExhaustedError(PuzzleError):
    """The shuffler kept landing on the solved board past its retry budget."""

    def __init__(self, size: int, retries: int) -> None:
        super().__init__(
            f"Could not scramble a {size}×{size} board after {retries} retries."
        )
        self.size = size
        self.retries = retries


class ReplayInconsistencyError(PuzzleError):
    """Recorded history asks for a move the current board cannot make."""

    def __init__(self, label: int, index: int | None, empty_index: int) -> None:
        if index is None:
            message = f"Tile {label} is not on the board."
        else:
            message = (
                f"Tile {label} at cell {index} is not adjacent to the "
                f"empty cell {empty_index}."
            )
        super().__init__(message)
        self.label = label
        self.index = index
        self.empty_index = empty_index
