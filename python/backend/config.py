"""Game configuration shared by the engine and the frontends."""

from __future__ import annotations

from dataclasses import dataclass, replace

from backend.errors import InvalidConfigError

MIN_SIZE = 2
MAX_SIZE = 8


@dataclass(frozen=True)
class GameConfig:
    """Tunable parameters of a game session.

    ``shuffle_factor`` scales the shuffle length with the number of cells
    (``shuffle_factor * size * size`` random moves).  ``retry_step`` is added
    to that length every time a shuffle lands back on the solved board.
    """

    size: int = 4
    shuffle_factor: int = 30
    retry_step: int = 20
    max_shuffle_retries: int = 1000
    replay_delay: float = 0.12
    seed: int | None = None

    # -- derived --------------------------------------------------------------

    @property
    def shuffle_steps(self) -> int:
        return self.shuffle_factor * self.size * self.size

    def with_size(self, size: int) -> GameConfig:
        return replace(self, size=size).validate()

    # -- validation -----------------------------------------------------------

    def validate(self) -> GameConfig:
        """Return ``self`` if every field is in range, else raise."""
        if not MIN_SIZE <= self.size <= MAX_SIZE:
            raise InvalidConfigError(
                f"size must be between {MIN_SIZE} and {MAX_SIZE}, got {self.size}."
            )
        if self.shuffle_factor < 1:
            raise InvalidConfigError("shuffle_factor must be at least 1.")
        if self.retry_step < 1:
            raise InvalidConfigError("retry_step must be at least 1.")
        if self.max_shuffle_retries < 0:
            raise InvalidConfigError("max_shuffle_retries cannot be negative.")
        if self.replay_delay < 0:
            raise InvalidConfigError("replay_delay cannot be negative.")
        return self
