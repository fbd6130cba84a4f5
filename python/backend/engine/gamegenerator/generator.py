"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from backend.errors import ShuffleExhaustedError
from backend.models.board import Board

logger = logging.getLogger(__name__)


@dataclass
class ShuffleResult:
    """A scrambled board and the labels moved to reach it, in order."""

    board: Board
    trace: list[int]
    retries: int = 0


class Shuffler:
    """Creates solvable puzzles by walking random legal moves from the solved state."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        retry_step: int = 20,
        max_retries: int = 1000,
    ) -> None:
        self.rng = rng or random.Random()
        self.retry_step = retry_step
        self.max_retries = max_retries

    def walk(self, board: Board, steps: int) -> list[int]:
        """Apply *steps* random legal moves to *board* in place.

        Never steps straight back to the cell the blank just left, unless
        that is the only option. Returns the label of every tile moved.
        """
        trace: list[int] = []
        prev_index: int | None = None

        for _ in range(steps):
            blank = board.empty_index()
            choices = board.neighbors(blank)
            if prev_index in choices and len(choices) > 1:
                choices.discard(prev_index)
            target = self.rng.choice(sorted(choices))
            trace.append(board.tiles[target])
            board.move(target)
            prev_index = blank

        return trace

    def shuffle(self, size: int, steps: int) -> ShuffleResult:
        """Return a random board of *size* that is not already solved.

        A walk that lands back on the solved board is thrown away and the
        whole shuffle restarts with ``retry_step`` more moves.
        """
        retries = 0
        while True:
            board = Board.solved(size)
            trace = self.walk(board, steps)
            if not board.is_solved():
                logger.debug(
                    "Shuffled %d×%d board in %d moves (%d retries)",
                    size, size, steps, retries,
                )
                return ShuffleResult(board=board, trace=trace, retries=retries)

            if retries >= self.max_retries:
                raise ShuffleExhaustedError(size, retries)
            retries += 1
            steps += self.retry_step
            logger.debug("Shuffle returned to solved; retrying with %d moves", steps)
