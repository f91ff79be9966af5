"""Keypress reader for the Rich screens.

One call to :func:`get_key` returns one action name.  On POSIX terminals
the whole escape sequence of an arrow key is read inside a single raw-mode
session; on Windows ``msvcrt`` delivers arrows as a prefix plus scan code.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager

_LETTERS: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "r": "restart",
    "m": "menu",
}

_CONTROL: dict[str, str] = {
    "\r": "enter",
    "\n": "enter",
    " ": "enter",
    "\x7f": "back",
    "\x08": "back",
    "\x03": "quit",
    "\x1b": "quit",
}

# Final byte of ``ESC [ x`` on POSIX, scan code after the prefix on Windows.
_POSIX_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}
_WINDOWS_ARROWS = {"H": "up", "P": "down", "M": "right", "K": "left"}


def _action(ch: str) -> str:
    if ch.lower() in _LETTERS:
        return _LETTERS[ch.lower()]
    if ch in _CONTROL:
        return _CONTROL[ch]
    return ch if ch.isprintable() else ""


@contextmanager
def _raw_stdin() -> Iterator[int]:
    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    tty.setraw(fd)
    try:
        yield fd
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _read_posix() -> str:
    with _raw_stdin() as fd:
        ch = os.read(fd, 1).decode(errors="ignore")
        if ch != "\x1b":
            return _action(ch)
        if os.read(fd, 1) != b"[":
            return "quit"
        return _POSIX_ARROWS.get(os.read(fd, 1).decode(errors="ignore"), "")


def _read_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return _WINDOWS_ARROWS.get(msvcrt.getwch(), "")
    return _action(ch)


def get_key() -> str:
    """Block for one keypress and return its action.

    Arrows and WASD give a direction; Enter or Space give ``"enter"``;
    Backspace gives ``"back"``; q, Escape and Ctrl-C give ``"quit"``;
    r and m give ``"restart"`` and ``"menu"``.  Any other printable key
    is returned as typed (the menu reads digits this way), anything else
    as ``""``.
    """
    return _read_windows() if os.name == "nt" else _read_posix()
