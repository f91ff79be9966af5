"""Rich frontend screens driven with canned keypresses."""

from __future__ import annotations

import io
import random
from pathlib import Path

import pytest
from rich.console import Console

from backend.engine.gameplay import GamePlay
from backend.engine.navigation import Navigator, Screen
from backend.models import PuzzleState
from frontend.cli.rich import app


def _solved_deal_seed() -> int:
    """First seed whose 2×2 deal comes out already solved."""
    pieces = [(p, None) for p in range(3)]
    return next(
        s for s in range(200) if GamePlay(pieces, 2, rng=random.Random(s)).is_won
    )


def _session(tmp_path: Path, seed: int) -> app._Session:
    return app._Session(
        sizes=[2, 3],
        sel_size=2,
        images_dir=tmp_path,
        ensure_solvable=True,
        rng=random.Random(seed),
    )


@pytest.fixture(autouse=True)
def quiet_console(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app, "console", Console(file=io.StringIO(), width=120))


def _press(monkeypatch: pytest.MonkeyPatch, key: str) -> None:
    monkeypatch.setattr(app, "get_key", lambda: key)


def test_solved_deal_goes_straight_to_win(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    session = _session(tmp_path, _solved_deal_seed())
    nav = Navigator(Screen.IMAGE_PICKER)
    _press(monkeypatch, "enter")

    app._picker_screen(nav, session)

    assert session.game is not None and session.game.is_won
    assert nav.screen is Screen.WIN


def test_scrambled_deal_opens_the_game(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    pieces = [(p, None) for p in range(3)]
    seed = next(
        s for s in range(200) if not GamePlay(pieces, 2, rng=random.Random(s)).is_won
    )
    session = _session(tmp_path, seed)
    nav = Navigator(Screen.IMAGE_PICKER)
    _press(monkeypatch, "enter")

    app._picker_screen(nav, session)

    assert nav.screen is Screen.GAME


def test_rescramble_into_solved_board_wins(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    session = _session(tmp_path, _solved_deal_seed())
    puzzle = PuzzleState.numbered(2)
    puzzle.place(2, 3)
    session.game = GamePlay.from_puzzle(puzzle)
    session.picture = app.sample_image(40)
    nav = Navigator(Screen.GAME)
    _press(monkeypatch, "restart")

    app._game_screen(nav, session)

    assert session.game.is_won
    assert nav.screen is Screen.WIN


def test_move_that_solves_the_board_wins(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    session = _session(tmp_path, 0)
    puzzle = PuzzleState.numbered(2)
    puzzle.place(2, 3)
    session.game = GamePlay.from_puzzle(puzzle)
    session.picture = app.sample_image(40)
    nav = Navigator(Screen.GAME)
    _press(monkeypatch, "left")

    app._game_screen(nav, session)

    assert session.game.state.moves == 1
    assert nav.screen is Screen.WIN
