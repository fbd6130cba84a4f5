"""Auto-solve by replaying the move history backwards.

This is not a puzzle solver. It only undoes a known sequence of moves
(the shuffle trace plus any manual moves since), one tile at a time,
which is enough to return a board scrambled by :class:`Shuffler` to its
solved state. It cannot solve an arbitrary scramble.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable

from backend.errors import ReplayInconsistencyError
from backend.models.board import Board
from backend.models.history import MoveHistory

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class SolverState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class SolveOutcome(enum.Enum):
    """Result of an auto-solve request as seen by the session."""

    REFUSED = "refused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


# -- cancellation -------------------------------------------------------------


class RunCounter:
    """Monotonic run id shared by every replay of one session.

    Bumping the counter makes every previously issued token stale.
    """

    def __init__(self) -> None:
        self.current = 0

    def issue(self) -> RunToken:
        self.current += 1
        return RunToken(self, self.current)

    def invalidate(self) -> None:
        self.current += 1


class RunToken:
    __slots__ = ("_counter", "run_id")

    def __init__(self, counter: RunCounter, run_id: int) -> None:
        self._counter = counter
        self.run_id = run_id

    @property
    def cancelled(self) -> bool:
        return self._counter.current != self.run_id


# -- replay -------------------------------------------------------------------


class AutoSolver:
    """One replay run over a snapshot of *history*.

    Instances are single-use. ``on_move`` is called with the label after
    every replayed move; replayed moves are never appended to *history*.
    """

    def __init__(
        self,
        board: Board,
        history: MoveHistory,
        token: RunToken,
        *,
        delay: float = 0.12,
        sleep: Sleep = asyncio.sleep,
        on_move: Callable[[int], None] | None = None,
    ) -> None:
        self.board = board
        self.history = history
        self.token = token
        self.delay = delay
        self._sleep = sleep
        self._on_move = on_move
        self.state = SolverState.IDLE
        self.replayed = 0

    async def run(self) -> SolverState:
        if self.state is not SolverState.IDLE:
            raise RuntimeError("AutoSolver instances can only be run once.")
        self.state = SolverState.RUNNING
        labels = self.history.reversed_labels()
        logger.debug("Replay %d started: %d moves", self.token.run_id, len(labels))

        try:
            for i, label in enumerate(labels):
                if i:
                    await self._sleep(self.delay)
                if self.token.cancelled:
                    logger.debug(
                        "Replay %d cancelled after %d moves",
                        self.token.run_id, self.replayed,
                    )
                    self.state = SolverState.CANCELLED
                    return self.state
                self._step(label)
        except ReplayInconsistencyError as exc:
            logger.warning("Replay %d aborted: %s", self.token.run_id, exc)
            self.state = SolverState.FAILED
            return self.state

        self.history.clear()
        self.state = SolverState.COMPLETED
        logger.debug("Replay %d completed in %d moves", self.token.run_id, self.replayed)
        return self.state

    def _step(self, label: int) -> None:
        if label not in self.board.tiles:
            raise ReplayInconsistencyError(label, None, self.board.empty_index())
        index = self.board.index_of(label)
        if not self.board.move(index):
            raise ReplayInconsistencyError(label, index, self.board.empty_index())
        self.replayed += 1
        if self._on_move is not None:
            self._on_move(label)
