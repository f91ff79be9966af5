"""Keypress to action mapping."""

from __future__ import annotations

import pytest

from frontend.cli.input_handler import _action


@pytest.mark.parametrize(
    "ch, expected",
    [
        ("w", "up"),
        ("S", "down"),
        ("a", "left"),
        ("D", "right"),
        ("r", "restart"),
        ("m", "menu"),
        ("q", "quit"),
        ("\x03", "quit"),
        ("\r", "enter"),
        (" ", "enter"),
        ("\x7f", "back"),
        ("1", "1"),
        ("\x01", ""),
    ],
    ids=repr,
)
def test_action(ch: str, expected: str) -> None:
    assert _action(ch) == expected
