"""Difficulty presets for the grid dimension."""

from __future__ import annotations

from enum import StrEnum


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def size(self) -> int:
        return _SIZES[self]

    @classmethod
    def from_size(cls, size: int) -> Difficulty | None:
        """Return the preset for *size*, or ``None`` for a custom size."""
        for difficulty, preset in _SIZES.items():
            if preset == size:
                return difficulty
        return None


_SIZES: dict[Difficulty, int] = {
    Difficulty.EASY: 3,
    Difficulty.MEDIUM: 4,
    Difficulty.HARD: 5,
}
