"""Board model — geometry, legal moves, and solved-state checks."""

from __future__ import annotations

import pytest

from backend.errors import InvalidBoardError
from backend.models.board import Board, Direction, build_solved_state, tile_image_cell

# -- solved state -------------------------------------------------------------


@pytest.mark.parametrize("size", range(2, 9))
def test_solved_state_is_a_solved_permutation(size: int) -> None:
    state = build_solved_state(size)

    assert sorted(state) == list(range(size * size))
    assert state[-1] == 0
    assert Board(size=size, tiles=state).is_solved()


def test_solved_state_rejects_size_one() -> None:
    with pytest.raises(InvalidBoardError):
        build_solved_state(1)


# -- construction -------------------------------------------------------------


@pytest.mark.parametrize(
    "size, flat",
    [
        (3, [1, 2, 3, 4, 5, 6, 7, 8]),
        (3, [1, 1, 3, 4, 5, 6, 7, 8, 0]),
        (2, [1, 2, 3, 4]),
        (1, [0]),
    ],
    ids=["short", "duplicate", "no-blank", "too-small"],
)
def test_from_flat_rejects_invalid_boards(size: int, flat: list[int]) -> None:
    with pytest.raises(InvalidBoardError):
        Board.from_flat(size, flat)


def test_from_flat_finds_blank() -> None:
    board = Board.from_flat(3, [1, 2, 3, 4, 0, 6, 7, 5, 8])
    assert board.empty_index() == 4
    assert board.position(4) == (1, 1)
    assert not board.is_solved()


def test_copy_is_independent() -> None:
    board = Board.solved(3)
    clone = board.copy()
    clone.move(7)
    assert board.is_solved()
    assert clone.empty_index() == 7


# -- geometry -----------------------------------------------------------------


@pytest.mark.parametrize(
    "index, expected",
    [
        (0, {1, 3}),
        (2, {1, 5}),
        (3, {0, 4, 6}),
        (4, {1, 3, 5, 7}),
        (5, {2, 4, 8}),
        (8, {5, 7}),
    ],
)
def test_neighbors_never_wrap_rows(index: int, expected: set[int]) -> None:
    assert Board.solved(3).neighbors(index) == expected


@pytest.mark.parametrize("size", [2, 3, 4, 5])
def test_can_move_matches_neighbors_of_blank(size: int) -> None:
    board = Board.solved(size)
    board.move(size * size - 2)
    board.move(size * size - 2 - size)
    blank = board.empty_index()
    adjacent = board.neighbors(blank)

    for index in range(size * size):
        assert board.can_move(index) == (index in adjacent)
    assert not board.can_move(blank)


def test_can_move_rejects_out_of_range() -> None:
    board = Board.solved(3)
    assert not board.can_move(-1)
    assert not board.can_move(9)


def test_tile_for_follows_tile_direction() -> None:
    board = Board.from_flat(3, [1, 2, 3, 4, 0, 5, 6, 7, 8])

    assert board.tile_for(Direction.UP) == 7
    assert board.tile_for(Direction.DOWN) == 1
    assert board.tile_for(Direction.LEFT) == 5
    assert board.tile_for(Direction.RIGHT) == 3


def test_tile_for_at_border() -> None:
    board = Board.solved(3)  # blank bottom-right
    assert board.tile_for(Direction.UP) is None
    assert board.tile_for(Direction.LEFT) is None
    assert board.tile_for(Direction.DOWN) == 5
    assert board.tile_for(Direction.RIGHT) == 7


# -- moves --------------------------------------------------------------------


def test_illegal_move_leaves_board_untouched() -> None:
    board = Board.solved(3)
    before = board.cells

    assert not board.move(0)
    assert not board.move(8)
    assert board.cells == before
    assert board.empty_index() == 8


def test_legal_move_swaps_with_blank() -> None:
    board = Board.solved(3)

    assert board.move(5)
    assert board.tiles == [1, 2, 3, 4, 5, 0, 7, 8, 6]
    assert board.empty_index() == 5
    assert board.index_of(6) == 8
    assert not board.is_solved()


def test_rows_view() -> None:
    assert Board.solved(2).rows() == [[1, 2], [3, 0]]


def test_is_tile_correct() -> None:
    board = Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
    assert board.is_tile_correct(0)
    assert not board.is_tile_correct(7)
    assert not board.is_tile_correct(8)


# -- image mapping ------------------------------------------------------------


def test_tile_image_cell_is_solved_position() -> None:
    assert tile_image_cell(1, 3) == (0, 0)
    assert tile_image_cell(3, 3) == (0, 2)
    assert tile_image_cell(4, 3) == (1, 0)
    assert tile_image_cell(15, 4) == (3, 2)


@pytest.mark.parametrize("label", [0, 9])
def test_tile_image_cell_rejects_blank_and_unknown(label: int) -> None:
    with pytest.raises(InvalidBoardError):
        tile_image_cell(label, 3)
