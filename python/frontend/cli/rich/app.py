"""Rich terminal frontend — tables, colours, and panels.

Runs the game session on an asyncio loop so the auto-solve replay and the
clock keep updating while the input handler waits for keys in a worker
thread.
"""

from __future__ import annotations

import asyncio

import rich.box
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import MAX_SIZE, MIN_SIZE, GameConfig
from backend.engine.gameplay import GameSession
from backend.engine.gamestate import Status
from backend.models.board import Board, Direction
from frontend.cli.input_handler import read_key

console = Console()

_POLL = 0.05  # seconds to wait for a key before redrawing

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

_STATUS_STYLE = {
    Status.SOLVED: "bold green",
    Status.SOLVING: "bold cyan",
    Status.SOLVE_FAILED: "bold red",
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: int) -> str:
    m, s = divmod(seconds, 60)
    return f"{m:02d}:{s:02d}"


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.size * board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.rows()):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif board.is_tile_correct(r * board.size + c):
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def _controls(enabled: bool) -> Text:
    key_style = "bold cyan" if enabled else "dim"
    controls = Text()
    controls.append("  ↑↓←→", style=key_style)
    controls.append(" / ", style="dim")
    controls.append("WASD", style=key_style)
    controls.append("  move   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  shuffle   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  reset   ", style="dim")
    controls.append("V", style=key_style)
    controls.append("  solve   ", style="dim")
    controls.append("+/-", style="bold cyan")
    controls.append("  size   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")
    return controls


def _draw(session: GameSession) -> None:
    console.clear()

    size = session.size
    border = "green" if session.status is Status.SOLVED else "bright_blue"
    panel = Panel(
        Align.center(_render_board(session.board)),
        title=f"[bold cyan]Sliding Puzzle  {size}×{size}[/bold cyan]",
        border_style=border,
        padding=(1, 2),
    )

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(session.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(session.elapsed_seconds), style="bold yellow")

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    message = session.status_message
    if message:
        style = _STATUS_STYLE.get(session.status, "yellow")
        console.print(Align.center(Text(f"  {message}", style=style)))
    console.print(Align.center(_controls(session.controls_enabled)))


# -- game loop ----------------------------------------------------------------


async def _game_loop(config: GameConfig) -> None:
    dirty = True

    def _mark_dirty(_: GameSession) -> None:
        nonlocal dirty
        dirty = True

    session = GameSession(config, on_change=_mark_dirty)
    solve_task: asyncio.Task | None = None
    shown_seconds = -1

    try:
        while True:
            if dirty or session.elapsed_seconds != shown_seconds:
                _draw(session)
                dirty = False
                shown_seconds = session.elapsed_seconds

            key = await asyncio.to_thread(read_key, _POLL)
            if not key:
                continue

            if key in _DIRECTIONS:
                session.apply_direction(_DIRECTIONS[key])
            elif key == "shuffle":
                session.new_game()
            elif key == "reset":
                session.reset_to_shuffle()
            elif key == "solve" and session.controls_enabled:
                solve_task = asyncio.create_task(session.auto_solve())
            elif key == "bigger":
                session.new_game(min(MAX_SIZE, session.size + 1))
            elif key == "smaller":
                session.new_game(max(MIN_SIZE, session.size - 1))
            elif key == "quit":
                break
    finally:
        if solve_task is not None and not solve_task.done():
            solve_task.cancel()

    console.clear()
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))


# -- public entry point -------------------------------------------------------


def run(config: GameConfig) -> None:
    """Launch the Rich terminal frontend."""
    asyncio.run(_game_loop(config))
