"""AutoSolver — reverse replay of a recorded move history.

The replay is driven through ``asyncio.run`` with an instant ``sleep`` so
the suite never waits on the real inter-move delay.
"""

from __future__ import annotations

import asyncio
import random

import pytest

from backend.engine.gamegenerator import Shuffler
from backend.engine.gamesolver import AutoSolver, RunCounter, SolverState
from backend.models.board import Board
from backend.models.history import MoveHistory


# -- helpers ------------------------------------------------------------------


async def _no_wait(_: float) -> None:
    await asyncio.sleep(0)


def _board_after(size: int, labels: list[int]) -> Board:
    board = Board.solved(size)
    for label in labels:
        assert board.move(board.index_of(label))
    return board


def _solver(board: Board, history: MoveHistory, **kwargs) -> AutoSolver:
    kwargs.setdefault("sleep", _no_wait)
    return AutoSolver(board, history, RunCounter().issue(), **kwargs)


# -- replay -------------------------------------------------------------------


@pytest.mark.parametrize("seed", [0, 1, 7, 42, 2024])
@pytest.mark.parametrize("size", [3, 4, 5])
def test_shuffle_then_replay_restores_solved_board(size: int, seed: int) -> None:
    result = Shuffler(random.Random(seed)).shuffle(size, 30 * size * size)
    history = MoveHistory(result.trace)
    solver = _solver(result.board, history)

    state = asyncio.run(solver.run())

    assert state is SolverState.COMPLETED
    assert result.board.is_solved()
    assert solver.replayed == len(result.trace)
    assert not history


def test_replays_labels_most_recent_first() -> None:
    trace = [6, 5, 2]
    board = _board_after(3, trace)
    history = MoveHistory(trace)
    replayed: list[int] = []
    solver = _solver(board, history, on_move=replayed.append)

    state = asyncio.run(solver.run())

    assert state is SolverState.COMPLETED
    assert replayed == [2, 5, 6]
    assert solver.replayed == 3
    assert board.is_solved()
    assert not history


def test_waits_between_moves_only() -> None:
    delays: list[float] = []

    async def _record(delay: float) -> None:
        delays.append(delay)

    board = _board_after(3, [6, 5, 2])
    solver = _solver(board, MoveHistory([6, 5, 2]), delay=0.12, sleep=_record)

    asyncio.run(solver.run())

    assert delays == [0.12, 0.12]


def test_replay_does_not_extend_history() -> None:
    history = MoveHistory([8, 7])
    solver = _solver(_board_after(3, [8, 7]), history, on_move=lambda _: None)

    asyncio.run(solver.run())

    assert history.labels == ()


# -- cancellation -------------------------------------------------------------


def test_stale_token_stops_replay_at_next_checkpoint() -> None:
    counter = RunCounter()
    trace = [6, 5, 2, 1]
    board = _board_after(3, trace)
    history = MoveHistory(trace)
    sleeps = 0

    async def _cancel_on_second_wait(_: float) -> None:
        nonlocal sleeps
        sleeps += 1
        if sleeps == 2:
            counter.invalidate()

    solver = AutoSolver(board, history, counter.issue(), sleep=_cancel_on_second_wait)
    state = asyncio.run(solver.run())

    assert state is SolverState.CANCELLED
    assert solver.replayed == 2
    assert board.cells == _board_after(3, [6, 5]).cells
    assert history.labels == tuple(trace)


def test_new_token_invalidates_older_ones() -> None:
    counter = RunCounter()
    first = counter.issue()
    second = counter.issue()

    assert first.cancelled
    assert not second.cancelled
    assert second.run_id > first.run_id


def test_token_issued_after_invalidate_is_live() -> None:
    counter = RunCounter()
    counter.invalidate()
    assert not counter.issue().cancelled


# -- failure ------------------------------------------------------------------


def test_inconsistent_history_fails_without_moving() -> None:
    board = Board.solved(3)
    history = MoveHistory([1])
    solver = _solver(board, history)

    state = asyncio.run(solver.run())

    assert state is SolverState.FAILED
    assert board.is_solved()
    assert history.labels == (1,)


def test_label_missing_from_board_fails() -> None:
    board = Board.solved(3)
    history = MoveHistory([99])

    state = asyncio.run(_solver(board, history).run())

    assert state is SolverState.FAILED
    assert board.is_solved()
    assert history.labels == (99,)


def test_failure_mid_replay_keeps_completed_moves() -> None:
    # Last label undoes fine; the next one (1) is nowhere near the blank.
    board = _board_after(3, [6])
    history = MoveHistory([1, 6])
    solver = _solver(board, history)

    state = asyncio.run(solver.run())

    assert state is SolverState.FAILED
    assert solver.replayed == 1
    assert board.is_solved()


def test_solver_runs_only_once() -> None:
    solver = _solver(_board_after(3, [6]), MoveHistory([6]))
    asyncio.run(solver.run())

    with pytest.raises(RuntimeError):
        asyncio.run(solver.run())
