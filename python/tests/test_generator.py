"""Shuffler — scrambled boards are reachable, traced, and never solved."""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import Shuffler
from backend.errors import ShuffleExhaustedError
from backend.models.board import Board

SEEDS = [0, 1, 7, 42, 2024]


# -- helpers ------------------------------------------------------------------


def _shuffler(seed: int, **kwargs) -> Shuffler:
    return Shuffler(random.Random(seed), **kwargs)


def _replay_forward(size: int, trace: list[int]) -> Board:
    """Apply *trace* to a solved board, checking every move is legal."""
    board = Board.solved(size)
    for i, label in enumerate(trace):
        assert board.move(board.index_of(label)), f"Move {i} (tile {label}) was illegal"
    return board


# -- tests --------------------------------------------------------------------


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("size", [2, 3, 4, 5, 6])
def test_shuffled_board_is_never_solved(size: int, seed: int) -> None:
    result = _shuffler(seed).shuffle(size, 30 * size * size)
    assert not result.board.is_solved()


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("size", [3, 4, 5])
def test_trace_reproduces_shuffled_board(size: int, seed: int) -> None:
    result = _shuffler(seed).shuffle(size, 30 * size * size)

    board = _replay_forward(size, result.trace)

    assert board.cells == result.board.cells


@pytest.mark.parametrize("seed", SEEDS)
def test_trace_length_counts_final_attempt_only(seed: int) -> None:
    result = _shuffler(seed, retry_step=20).shuffle(4, 200)
    assert len(result.trace) == 200 + 20 * result.retries


@pytest.mark.parametrize("seed", SEEDS)
def test_walk_never_undoes_previous_move(seed: int) -> None:
    result = _shuffler(seed).shuffle(4, 480)
    trace = result.trace
    assert all(a != b for a, b in zip(trace, trace[1:]))


def test_same_seed_same_shuffle() -> None:
    a = _shuffler(99).shuffle(4, 480)
    b = _shuffler(99).shuffle(4, 480)
    assert a.trace == b.trace
    assert a.board.cells == b.board.cells


@pytest.mark.parametrize("seed", SEEDS)
def test_two_by_two_terminates_within_retry_budget(seed: int) -> None:
    # On 2×2 the blank can only circle the board; 120 moves is a whole
    # number of 12-move cycles and lands back on solved.
    result = _shuffler(seed, max_retries=50).shuffle(2, 120)

    assert result.retries == 1
    assert len(result.trace) == 140
    assert not result.board.is_solved()


def test_exhausted_retry_budget_raises() -> None:
    with pytest.raises(ShuffleExhaustedError) as info:
        _shuffler(0, max_retries=0).shuffle(2, 120)
    assert info.value.size == 2
