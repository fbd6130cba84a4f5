"""Tracks the counters and status of a game in progress."""

from __future__ import annotations

import time
from collections.abc import Callable
from enum import StrEnum


class Status(StrEnum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    SOLVING = "solving"
    SOLVED = "solved"
    SOLVE_FAILED = "solve_failed"


class GameState:
    """Holds the move counter, elapsed time, and status of one game.

    The clock only runs between the first move and the win. *clock* is any
    monotonic seconds source.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.reset()

    def reset(self) -> None:
        self.moves: int = 0
        self.status: Status = Status.IDLE
        self.started: bool = False
        self._start_time: float = 0.0
        self._elapsed_banked: float = 0.0
        self._running: bool = False

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (self._clock() - self._start_time)
        return self._elapsed_banked

    @property
    def elapsed_seconds(self) -> int:
        return int(self.elapsed_time)

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start the clock. Only the first call of a game has any effect."""
        if self.started:
            return
        self.started = True
        self._start_time = self._clock()
        self._running = True

    def stop(self) -> None:
        if self._running:
            self._elapsed_banked += self._clock() - self._start_time
            self._running = False

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1
