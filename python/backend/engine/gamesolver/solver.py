"""Solvability analysis for sliding picture puzzles."""

from __future__ import annotations

from collections.abc import Sequence

from backend.models.grid import empty_index, to_row_col
from backend.models.puzzle import PuzzleState


class Solver:
    """Stateless helpers — all methods are static."""

    @staticmethod
    def is_solvable(state: PuzzleState) -> bool:
        """Return True if legal moves can bring *state* back to solved.

        Each legal move is one transposition with the empty cell and shifts
        the empty cell by one step, so the permutation parity must match
        the parity of the empty cell's distance from the bottom-right corner.
        """
        size = state.size
        gap = empty_index(size)
        cells = [gap] * state.cell_count
        for tile in state.tiles:
            cells[tile.current_position] = tile.correct_position

        er, ec = to_row_col(state.empty_position(), size)
        distance = (size - 1 - er) + (size - 1 - ec)
        return Solver.permutation_parity(cells) == distance % 2

    @staticmethod
    def permutation_parity(perm: Sequence[int]) -> int:
        """Return 0 for an even permutation of ``range(len(perm))``, 1 for odd."""
        seen = [False] * len(perm)
        cycles = 0
        for start in range(len(perm)):
            if seen[start]:
                continue
            cycles += 1
            i = start
            while not seen[i]:
                seen[i] = True
                i = perm[i]
        return (len(perm) - cycles) % 2
