"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

from enum import StrEnum

from backend.models.puzzle import PuzzleState


class Phase(StrEnum):
    UNSCRAMBLED = "unscrambled"
    SCRAMBLED = "scrambled"
    SOLVED = "solved"


class GameState:
    """Holds the puzzle and the move counter of one session."""

    def __init__(self, puzzle: PuzzleState, *, scrambled: bool = True) -> None:
        self.puzzle = puzzle
        self.moves: int = 0
        self._scrambled = scrambled

    # -- lifecycle ------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        if not self._scrambled:
            return Phase.UNSCRAMBLED
        if self.puzzle.is_solved():
            return Phase.SOLVED
        return Phase.SCRAMBLED

    def mark_scrambled(self) -> None:
        self._scrambled = True
        self.moves = 0

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def is_solved(self) -> bool:
        return self.puzzle.is_solved()
