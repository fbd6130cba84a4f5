"""Board model for the sliding puzzle game."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from backend.errors import InvalidBoardError


class Direction(StrEnum):
    """Direction a *tile* slides into the empty cell."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


def build_solved_state(size: int) -> list[int]:
    """Return the goal sequence: ``1 .. size*size-1`` followed by the blank."""
    if size < 2:
        raise InvalidBoardError(f"Board size must be at least 2, got {size}.")
    return [*range(1, size * size), 0]


def tile_image_cell(label: int, size: int) -> tuple[int, int]:
    """Return the (row, col) of the image piece shown on tile *label*.

    A tile shows the part of the picture that sits at its solved position.
    """
    if not 1 <= label < size * size:
        raise InvalidBoardError(f"No image piece for tile {label} on a {size}×{size} board.")
    return divmod(label - 1, size)


@dataclass
class Board:
    """Represents the sliding puzzle board.

    Tiles are stored row-major in a flat list. 0 represents the blank space;
    its index is cached and kept in sync by :meth:`move`.
    """

    size: int
    tiles: list[int]
    blank_index: int = field(init=False)

    def __post_init__(self) -> None:
        if self.size < 2:
            raise InvalidBoardError(f"Board size must be at least 2, got {self.size}.")
        if len(self.tiles) != self.size * self.size:
            raise InvalidBoardError(
                f"Expected {self.size * self.size} tiles for a "
                f"{self.size}×{self.size} board, got {len(self.tiles)}."
            )
        if sorted(self.tiles) != list(range(self.size * self.size)):
            raise InvalidBoardError(
                f"Tiles must be a permutation of 0..{self.size * self.size - 1}."
            )
        self.blank_index = self.tiles.index(0)

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, size: int) -> Board:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        return cls(size=size, tiles=build_solved_state(size))

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> Board:
        """Create a board from a flat row-major tile list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        return cls(size=size, tiles=list(flat))

    def copy(self) -> Board:
        return Board(size=self.size, tiles=self.tiles[:])

    # -- geometry -------------------------------------------------------------

    def position(self, index: int) -> tuple[int, int]:
        return divmod(index, self.size)

    def neighbors(self, index: int) -> set[int]:
        """Return the orthogonally adjacent cell indices of *index*."""
        row, col = self.position(index)
        result: set[int] = set()
        if row > 0:
            result.add(index - self.size)
        if row < self.size - 1:
            result.add(index + self.size)
        if col > 0:
            result.add(index - 1)
        if col < self.size - 1:
            result.add(index + 1)
        return result

    def tile_for(self, direction: Direction) -> int | None:
        """Return the index of the tile that would slide in *direction*.

        ``Direction.UP`` picks the tile **below** the blank, and so on.
        Returns None when the blank sits on the matching border.
        """
        row, col = self.position(self.blank_index)
        offsets = {
            Direction.UP: (1, 0),
            Direction.DOWN: (-1, 0),
            Direction.LEFT: (0, 1),
            Direction.RIGHT: (0, -1),
        }
        dr, dc = offsets[direction]
        tr, tc = row + dr, col + dc
        if not (0 <= tr < self.size and 0 <= tc < self.size):
            return None
        return tr * self.size + tc

    # -- queries --------------------------------------------------------------

    @property
    def cells(self) -> tuple[int, ...]:
        return tuple(self.tiles)

    def empty_index(self) -> int:
        return self.blank_index

    def index_of(self, label: int) -> int:
        return self.tiles.index(label)

    def rows(self) -> list[list[int]]:
        """Return the tiles as a list of rows (for rendering)."""
        n = self.size
        return [self.tiles[r * n : (r + 1) * n] for r in range(n)]

    def can_move(self, index: int) -> bool:
        if not 0 <= index < len(self.tiles):
            return False
        return self.blank_index in self.neighbors(index)

    def is_solved(self) -> bool:
        """Check if all tiles are in their goal positions."""
        return self.tiles == build_solved_state(self.size)

    def is_tile_correct(self, index: int) -> bool:
        """Check if the tile at *index* is in its goal position."""
        val = self.tiles[index]
        if val == 0:
            return index == len(self.tiles) - 1
        return index == val - 1

    # -- mutation -------------------------------------------------------------

    def move(self, index: int) -> bool:
        """Slide the tile at *index* into the blank.

        Returns False (and leaves the board untouched) if the tile is not
        adjacent to the blank.
        """
        if not self.can_move(index):
            return False
        blank = self.blank_index
        self.tiles[blank], self.tiles[index] = self.tiles[index], self.tiles[blank]
        self.blank_index = index
        return True
