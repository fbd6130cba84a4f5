"""Core gameplay logic — owns one puzzle session and its lifecycle."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Callable, Iterable

from backend.config import GameConfig
from backend.engine.gamegenerator import Shuffler
from backend.engine.gamesolver import AutoSolver, RunCounter, SolveOutcome, SolverState
from backend.engine.gamesolver.solver import Sleep
from backend.engine.gamestate import GameState, Status
from backend.models.board import Board, Direction
from backend.models.history import MoveHistory

logger = logging.getLogger(__name__)


class GameSession:
    """Orchestrates a single game: board, history, counters and auto-solve.

    Every operation is reduced to a status the frontend can render; none
    of them raise during normal play. ``on_change`` is called after each
    state change (moves, lifecycle transitions, replay steps).
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Sleep = asyncio.sleep,
        on_change: Callable[[GameSession], None] | None = None,
        shuffle: bool = True,
    ) -> None:
        self.config = (config or GameConfig()).validate()
        self.shuffler = Shuffler(
            rng or random.Random(self.config.seed),
            retry_step=self.config.retry_step,
            max_retries=self.config.max_shuffle_retries,
        )
        self.state = GameState(clock)
        self.history = MoveHistory()
        self.board = Board.solved(self.config.size)
        self.on_change = on_change
        self._sleep = sleep
        self._runs = RunCounter()
        self._solver: AutoSolver | None = None
        self._initial: tuple[int, ...] | None = None
        self._trace: tuple[int, ...] = ()
        if shuffle:
            self.new_game()

    @classmethod
    def from_board(
        cls,
        board: Board,
        trace: Iterable[int] = (),
        config: GameConfig | None = None,
        **kwargs,
    ) -> GameSession:
        """Create a session around an existing board.

        *trace* is the move sequence that produced *board* from the solved
        state; it becomes the history that auto-solve replays.
        """
        config = (config or GameConfig()).with_size(board.size)
        obj = cls(config, shuffle=False, **kwargs)
        obj._install(board.copy(), tuple(trace))
        obj._notify()
        return obj

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def moves(self) -> int:
        return self.state.moves

    @property
    def elapsed_seconds(self) -> int:
        return self.state.elapsed_seconds

    @property
    def status(self) -> Status:
        return self.state.status

    @property
    def solving(self) -> bool:
        return self._solver is not None

    @property
    def controls_enabled(self) -> bool:
        return not self.solving

    @property
    def is_won(self) -> bool:
        return self.board.is_solved()

    @property
    def initial_cells(self) -> tuple[int, ...] | None:
        return self._initial

    @property
    def status_message(self) -> str:
        status = self.state.status
        if status is Status.SOLVED:
            moves = self.state.moves
            return f"Solved in {moves} move{'' if moves == 1 else 's'}!"
        if status is Status.SOLVING:
            return "Solving…"
        if status is Status.SOLVE_FAILED:
            return "Auto-solve failed: the move history no longer matches the board."
        return ""

    # -- lifecycle ------------------------------------------------------------

    def new_game(self, size: int | None = None) -> None:
        """Shuffle a fresh board, cancelling any auto-solve in flight."""
        if size is not None and size != self.config.size:
            self.config = self.config.with_size(size)
        self._cancel_solve()
        self.state.reset()
        result = self.shuffler.shuffle(self.config.size, self.config.shuffle_steps)
        self._install(result.board, tuple(result.trace))
        logger.info(
            "New %d×%d game (%d shuffle moves)",
            self.size, self.size, len(result.trace),
        )
        self._notify()

    def reset_to_shuffle(self) -> None:
        """Put the last shuffled board back and restart the counters."""
        if self._initial is None:
            return
        self._cancel_solve()
        self.state.reset()
        self._install(Board(size=self.size, tiles=list(self._initial)), self._trace)
        logger.info("Reset to last shuffle")
        self._notify()

    # -- movement -------------------------------------------------------------

    def apply_manual_move(self, index: int) -> bool:
        """Move the tile at *index* into the blank.

        Returns True if the move was applied. Rejected while auto-solving.
        """
        if self.solving:
            logger.debug("Manual move to %d rejected: auto-solve running", index)
            return False
        if not self.board.can_move(index):
            return False

        label = self.board.tiles[index]
        self.board.move(index)
        self.history.append(label)
        self.state.increment_moves()
        self.state.start()

        if self.board.is_solved():
            self.state.stop()
            self.state.status = Status.SOLVED
            logger.info("Solved in %d moves", self.state.moves)
        else:
            self.state.status = Status.IN_PROGRESS
        self._notify()
        return True

    def apply_direction(self, direction: Direction) -> bool:
        """Slide the tile next to the blank in *direction* (keyboard input)."""
        index = self.board.tile_for(direction)
        if index is None:
            return False
        return self.apply_manual_move(index)

    # -- auto-solve -----------------------------------------------------------

    async def auto_solve(self) -> SolveOutcome:
        """Replay the move history backwards until the board is solved.

        Refused (without side effects) if a replay is already running, the
        board is solved, or there is nothing to replay.
        """
        if self.solving:
            logger.debug("Auto-solve refused: already running")
            return SolveOutcome.REFUSED
        if self.board.is_solved():
            logger.debug("Auto-solve refused: board already solved")
            return SolveOutcome.REFUSED
        if not self.history:
            logger.debug("Auto-solve refused: empty history")
            return SolveOutcome.REFUSED

        solver = AutoSolver(
            self.board,
            self.history,
            self._runs.issue(),
            delay=self.config.replay_delay,
            sleep=self._sleep,
            on_move=self._on_replayed_move,
        )
        self._solver = solver
        self.state.status = Status.SOLVING
        self._notify()

        try:
            result = await solver.run()
        except (asyncio.CancelledError, Exception):
            if self._solver is solver:
                self._runs.invalidate()
                self.state.status = Status.IN_PROGRESS
            raise
        finally:
            superseded = self._solver is not solver
            if not superseded:
                self._solver = None
        if superseded:
            return SolveOutcome.CANCELLED

        if result is SolverState.CANCELLED:
            return SolveOutcome.CANCELLED
        if result is SolverState.FAILED:
            self.state.status = Status.SOLVE_FAILED
            self._notify()
            return SolveOutcome.FAILED

        self.state.stop()
        self.state.status = Status.SOLVED
        logger.info("Auto-solve finished after %d replayed moves", solver.replayed)
        self._notify()
        return SolveOutcome.COMPLETED

    # -- helpers --------------------------------------------------------------

    def _install(self, board: Board, trace: tuple[int, ...]) -> None:
        self.board = board
        self._initial = board.cells
        self._trace = trace
        self.history.reseed(trace)

    def _cancel_solve(self) -> None:
        self._runs.invalidate()
        self._solver = None

    def _on_replayed_move(self, label: int) -> None:
        self.state.increment_moves()
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
