"""Single-keypress reader for the terminal frontend.

Maps arrow keys, WASD, and the game's command letters to action names
without requiring Enter.  Unix terminals use tty+termios, Windows uses
msvcrt.
"""

from __future__ import annotations

import os
import sys

# Raw key → action.  Letters are matched case-insensitively.
_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "n": "hint",
    "r": "restart",
    "x": "shuffle",
    "v": "solve",
    "h": "help",
    "?": "help",
    "\r": "enter",
    "\n": "enter",
}

# Final byte of the ESC [ A/B/C/D arrow sequences.
_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    action = _KEY_MAP.get(ch.lower() if ch.isalpha() else ch)
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


# -- platform readers ----------------------------------------------------------


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]
    import time

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        # Extended key: H/P/M/K for up/down/right/left.
        return {"H": "up", "P": "down", "M": "right", "K": "left"}.get(
            msvcrt.getwch(), ""
        )
    return _resolve(ch)


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def _next(wait: float | None) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        # os.read is unbuffered, so select() still sees the rest of a
        # multi-byte escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        ch = _next(timeout)
        if ch is None:
            return None
        if ch != "\x1b":
            return _resolve(ch)

        if _next(0.1) != "[":
            return "quit"  # bare Escape
        return _ARROW_MAP.get(_next(0.1) or "", "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its action name.

    Actions: ``up``/``down``/``left``/``right``, ``quit``, ``hint``,
    ``restart``, ``shuffle``, ``solve``, ``help``, ``enter``; any other
    printable character is returned as-is, anything else as ``""``.
    """
    return _read(None) or ""


def get_key_timeout(timeout: float) -> str | None:
    """Like ``get_key`` but return ``None`` after *timeout* seconds."""
    return _read(timeout)
