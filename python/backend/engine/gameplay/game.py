"""Core gameplay logic — validates and applies moves, checks the win condition."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from typing import Any

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamestate import GameState
from backend.models.grid import (
    GridIndex,
    are_positions_adjacent,
    to_index,
    to_row_col,
)
from backend.models.move import Direction, MoveResult, RejectReason
from backend.models.puzzle import PuzzleState

logger = logging.getLogger(__name__)

# Offset from the empty cell to the tile that slides in *direction*.
# UP   → tile below the empty cell moves up
# DOWN → tile above moves down
# LEFT → tile to the right moves left
# RIGHT→ tile to the left moves right
_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


class GamePlay:
    """Orchestrates a single game session."""

    def __init__(
        self,
        pieces: Iterable[tuple[GridIndex, Any]],
        size: int,
        *,
        rng: random.Random | None = None,
        ensure_solvable: bool = True,
    ) -> None:
        self.size = size
        self.ensure_solvable = ensure_solvable
        puzzle = GameGenerator.generate(
            pieces, size, rng=rng, ensure_solvable=ensure_solvable
        )
        self.state = GameState(puzzle)

    @classmethod
    def from_puzzle(
        cls,
        puzzle: PuzzleState,
        *,
        scrambled: bool = True,
        ensure_solvable: bool = True,
    ) -> GamePlay:
        """Create a session around an existing puzzle state."""
        obj = object.__new__(cls)
        obj.size = puzzle.size
        obj.ensure_solvable = ensure_solvable
        obj.state = GameState(puzzle, scrambled=scrambled)
        return obj

    @property
    def puzzle(self) -> PuzzleState:
        return self.state.puzzle

    def rescramble(self, rng: random.Random | None = None) -> None:
        """Deal the same tiles again and reset the move counter."""
        GameGenerator.scramble(self.puzzle, rng, ensure_solvable=self.ensure_solvable)
        self.state.mark_scrambled()

    # -- movement -------------------------------------------------------------

    def attempt_move(self, tile_index: int) -> MoveResult:
        """Slide tile *tile_index* into the empty cell if they share an edge.

        A tile that is not next to the empty cell is rejected and nothing
        changes.
        """
        puzzle = self.puzzle
        if not 0 <= tile_index < len(puzzle.tiles):
            raise IndexError(
                f"Tile index {tile_index} out of range (0..{len(puzzle.tiles) - 1})."
            )

        target = puzzle.tiles[tile_index].current_position
        empty = puzzle.empty_position()

        if not are_positions_adjacent(target, empty, self.size):
            logger.debug(
                "Rejected tile %d at %d: not adjacent to empty cell %d",
                tile_index,
                target,
                empty,
            )
            return MoveResult.rejected(RejectReason.NOT_ADJACENT, tile_index, target)

        puzzle.place(tile_index, empty)
        self.state.increment_moves()
        logger.debug("Moved tile %d from %d to %d", tile_index, target, empty)
        return MoveResult.applied_move(tile_index, target, empty)

    def move_tile_at(self, position: GridIndex) -> MoveResult:
        """Attempt to move whichever tile occupies *position*."""
        tile = self.puzzle.tile_at(position)
        if tile is None:
            return MoveResult.rejected(RejectReason.NO_TILE, from_position=position)
        return self.attempt_move(self.puzzle.tiles.index(tile))

    def move(self, direction: Direction) -> MoveResult:
        """Slide the tile bordering the empty cell in *direction*.

        E.g. ``Direction.UP`` moves the tile **below** the empty cell upward.
        """
        er, ec = to_row_col(self.puzzle.empty_position(), self.size)
        dr, dc = _OFFSETS[direction]
        tr, tc = er + dr, ec + dc

        if not (0 <= tr < self.size and 0 <= tc < self.size):
            return MoveResult.rejected(RejectReason.NO_TILE)

        return self.move_tile_at(to_index(tr, tc, self.size))

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved
