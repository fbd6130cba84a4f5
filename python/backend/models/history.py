"""Move history — the record auto-solve replays backwards."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class MoveHistory:
    """Ordered log of tile labels moved since the last shuffle or reset.

    Labels are stored rather than cell indices because indices change
    after every swap.
    """

    def __init__(self, labels: Iterable[int] = ()) -> None:
        self._labels: list[int] = list(labels)

    # -- mutation -------------------------------------------------------------

    def append(self, label: int) -> None:
        self._labels.append(label)

    def reseed(self, trace: Iterable[int]) -> None:
        """Replace the whole history with *trace*."""
        self._labels = list(trace)

    def clear(self) -> None:
        self._labels.clear()

    # -- queries --------------------------------------------------------------

    @property
    def labels(self) -> tuple[int, ...]:
        return tuple(self._labels)

    def reversed_labels(self) -> list[int]:
        """Snapshot of the history, most recent move first."""
        return self._labels[::-1]

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[int]:
        return iter(self._labels)

    def __bool__(self) -> bool:
        return bool(self._labels)

    def __repr__(self) -> str:
        return f"MoveHistory({self._labels!r})"
