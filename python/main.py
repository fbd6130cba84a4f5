#!/usr/bin/env python3
"""Sliding Puzzle Game.

Usage::

    python main.py                    # Rich terminal, 4×4
    python main.py -f rich -s 3       # Rich terminal, 3×3
    python main.py -f pygame --image cat.png
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
ASSETS_DIR = PROJECT_ROOT / "assets"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import MAX_SIZE, MIN_SIZE, GameConfig  # noqa: E402
from backend.errors import InvalidConfigError  # noqa: E402


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


class LogLevel(StrEnum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.value.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Frontend = typer.Option(
        Frontend.rich, "-f", "--frontend",
        help="Frontend to launch.",
    ),
    size: int = typer.Option(
        4, "-s", "--size",
        min=MIN_SIZE, max=MAX_SIZE,
        help=f"Grid size ({MIN_SIZE}-{MAX_SIZE}).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for the shuffler (repeatable games).",
    ),
    delay: float = typer.Option(
        0.12, "--delay",
        min=0.0,
        help="Seconds between auto-solve moves.",
    ),
    image: Optional[Path] = typer.Option(
        None, "--image",
        exists=True, dir_okay=False,
        help="Picture to cut into tiles (pygame only).",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Logging verbosity.",
    ),
) -> None:
    """Sliding Puzzle Game."""
    _configure_logging(log_level)

    try:
        config = GameConfig(size=size, seed=seed, replay_delay=delay).validate()
    except InvalidConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    mod = importlib.import_module(_RUNNERS[frontend])
    if frontend is Frontend.pygame:
        mod.run(config=config, image=image, assets_dir=ASSETS_DIR)
    else:
        mod.run(config=config)


if __name__ == "__main__":
    app()
