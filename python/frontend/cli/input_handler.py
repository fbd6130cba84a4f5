"""Cross-platform single-keypress reader for the terminal frontend.

Handles arrow keys, WASD, and the game's command keys without requiring
Enter. Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys

# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "W": "up",
    "s": "down",
    "S": "down",
    "a": "left",
    "A": "left",
    "d": "right",
    "D": "right",
    "q": "quit",
    "Q": "quit",
    "\x03": "quit",  # Ctrl-C
    "n": "shuffle",
    "N": "shuffle",
    "r": "reset",
    "R": "reset",
    "v": "solve",
    "V": "solve",
    "+": "bigger",
    "=": "bigger",
    "-": "smaller",
    "_": "smaller",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    return _KEY_MAP.get(ch, "")


# -- readers -------------------------------------------------------------------


def _read_key_windows(timeout: float) -> str | None:
    import msvcrt  # type: ignore[import-not-found]
    import time as _time

    end = _time.monotonic() + timeout
    while _time.monotonic() < end:
        if msvcrt.kbhit():
            ch = msvcrt.getwch()
            if ch in ("\x00", "\xe0"):
                code = msvcrt.getwch()
                return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(code, "")
            if ch == "\x1b":
                return "quit"
            return _resolve(ch)
        _time.sleep(0.02)
    return None


def _read_key_unix(timeout: float) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        # os.read is unbuffered, so select() still sees the remaining bytes
        # of a multi-byte escape sequence.
        ch = os.read(fd, 1).decode("utf-8", errors="ignore")

        # Arrow keys: ESC [ A/B/C/D
        if ch == "\x1b":
            r2, _, _ = select.select([fd], [], [], 0.1)
            if not r2:
                return "quit"  # bare Escape
            if os.read(fd, 1).decode("utf-8", errors="ignore") != "[":
                return "quit"
            r3, _, _ = select.select([fd], [], [], 0.1)
            if not r3:
                return ""
            return _ARROW_MAP.get(os.read(fd, 1).decode("utf-8", errors="ignore"), "")

        return _resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def read_key(timeout: float) -> str | None:
    """Wait up to *timeout* seconds for a keypress.

    Returns a normalised action string or ``None`` if nothing was pressed.

    Possible return values:
        "up", "down", "left", "right"  — movement
        "shuffle"                      — n (new shuffled game)
        "reset"                        — r (back to the last shuffle)
        "solve"                        — v (auto-solve)
        "bigger", "smaller"            — + / - (board size)
        "quit"                         — q / Ctrl-C / Escape
        ""                             — unrecognised key
    """
    if os.name == "nt":
        return _read_key_windows(timeout)
    return _read_key_unix(timeout)
