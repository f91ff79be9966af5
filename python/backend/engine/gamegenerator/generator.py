"""Builds and scrambles picture puzzles."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from typing import Any

from backend.engine.gamesolver import Solver
from backend.models.grid import GridIndex, empty_index
from backend.models.puzzle import PuzzleState

logger = logging.getLogger(__name__)


class GameGenerator:
    """Creates puzzles by shuffling tiles over every cell but the last."""

    @staticmethod
    def solved(pieces: Iterable[tuple[GridIndex, Any]], size: int) -> PuzzleState:
        """Return the unscrambled state (every tile on its own cell)."""
        return PuzzleState.from_pieces(pieces, size)

    @staticmethod
    def scramble(
        state: PuzzleState,
        rng: random.Random | None = None,
        *,
        ensure_solvable: bool = True,
    ) -> None:
        """Scramble *state* in-place.

        The tiles are shuffled and dealt, in shuffled order, onto cells
        ``0 .. N²-2``; the bottom-right cell is left empty.  Half of all
        such deals cannot be solved.  With *ensure_solvable* the tiles on
        cells 0 and 1 trade places when needed, which flips the parity and
        keeps the empty cell where it is.
        """
        rng = rng or random.Random()
        order = list(range(len(state.tiles)))
        rng.shuffle(order)

        positions = [0] * len(order)
        for cell, tile_index in enumerate(order):
            positions[tile_index] = cell
        state.assign(positions)

        if not Solver.is_solvable(state):
            if ensure_solvable:
                GameGenerator._swap_first_cells(state)
                logger.debug("Fixed scramble parity by swapping cells 0 and 1")
            else:
                logger.info("Scrambled %dx%d board is not solvable", state.size, state.size)

        assert state.empty_position() == empty_index(state.size)

    @staticmethod
    def generate(
        pieces: Iterable[tuple[GridIndex, Any]],
        size: int,
        *,
        rng: random.Random | None = None,
        ensure_solvable: bool = True,
    ) -> PuzzleState:
        """Return a scrambled puzzle built from ``(correct_position, image)`` pairs."""
        state = GameGenerator.solved(pieces, size)
        GameGenerator.scramble(state, rng, ensure_solvable=ensure_solvable)
        logger.info(
            "New %dx%d game (%d tiles, solvable=%s)",
            size,
            size,
            len(state.tiles),
            Solver.is_solvable(state),
        )
        return state

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _swap_first_cells(state: PuzzleState) -> None:
        positions = state.positions()
        a = positions.index(0)
        b = positions.index(1)
        positions[a], positions[b] = 1, 0
        state.assign(positions)
