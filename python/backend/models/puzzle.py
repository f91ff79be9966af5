"""Puzzle state model for the picture slide puzzle."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from backend.models.errors import InternalInconsistencyError
from backend.models.grid import (
    GridIndex,
    check_index,
    check_size,
    empty_index,
)
from backend.models.tile import Tile

logger = logging.getLogger(__name__)


class PuzzleState:
    """The tiles of one game and the cell each of them occupies.

    Tiles are kept in correct-position order, so ``tiles[i]`` is always the
    tile that belongs in cell ``i``.  The empty cell is derived from the
    occupied positions and cached; the cache is refreshed after every
    mutation.
    """

    def __init__(self, size: int, tiles: list[Tile]) -> None:
        check_size(size)
        self.size = size
        self.tiles = tiles
        self._empty: GridIndex = self._empty_of(self.positions())

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_pieces(
        cls, pieces: Iterable[tuple[GridIndex, Any]], size: int
    ) -> PuzzleState:
        """Create an unscrambled state from ``(correct_position, image)`` pairs.

        Example::

            PuzzleState.from_pieces(partition(image, 3), 3)
        """
        check_size(size)
        by_position: dict[GridIndex, Any] = {}
        for position, image in pieces:
            check_index(position, size)
            if position == empty_index(size):
                raise ValueError(
                    f"Position {position} is the empty cell and cannot hold a tile."
                )
            if position in by_position:
                raise ValueError(f"Duplicate tile for position {position}.")
            by_position[position] = image

        expected = size * size - 1
        if len(by_position) != expected:
            raise ValueError(
                f"Expected {expected} tiles for a {size}×{size} puzzle, "
                f"got {len(by_position)}."
            )
        tiles = [Tile(p, by_position[p]) for p in range(expected)]
        return cls(size, tiles)

    @classmethod
    def numbered(cls, size: int) -> PuzzleState:
        """Unscrambled state whose tiles carry no picture."""
        return cls.from_pieces(((p, None) for p in range(size * size - 1)), size)

    # -- queries --------------------------------------------------------------

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def empty_position(self) -> GridIndex:
        """Return the single cell no tile occupies."""
        return self._empty

    def is_solved(self) -> bool:
        """Check if every tile sits in its correct cell."""
        return all(tile.is_correct for tile in self.tiles)

    def tile_at(self, position: GridIndex) -> Tile | None:
        check_index(position, self.size)
        for tile in self.tiles:
            if tile.current_position == position:
                return tile
        return None

    def positions(self) -> list[GridIndex]:
        """Current positions, in tile order."""
        return [tile.current_position for tile in self.tiles]

    # -- mutation (engine only) -----------------------------------------------

    def place(self, tile_index: int, position: GridIndex) -> None:
        """Move one tile to *position* and refresh the empty cell.

        The resulting grid is checked before the tile moves, so a rejected
        placement leaves the state untouched.
        """
        check_index(position, self.size)
        positions = self.positions()
        positions[tile_index] = position
        self._empty = self._empty_of(positions)
        self.tiles[tile_index].current_position = position

    def assign(self, positions: Sequence[GridIndex]) -> None:
        """Set every tile's position at once, in tile order."""
        if len(positions) != len(self.tiles):
            raise ValueError(
                f"Expected {len(self.tiles)} positions, got {len(positions)}."
            )
        for position in positions:
            check_index(position, self.size)
        self._empty = self._empty_of(positions)
        for tile, position in zip(self.tiles, positions):
            tile.current_position = position

    # -- helpers --------------------------------------------------------------

    def _empty_of(self, occupied: Sequence[GridIndex]) -> GridIndex:
        free = set(range(self.cell_count)).difference(occupied)
        if len(free) != 1 or len(set(occupied)) != len(occupied):
            logger.error(
                "Invalid %dx%d grid: occupied=%s free=%s",
                self.size,
                self.size,
                list(occupied),
                sorted(free),
            )
            raise InternalInconsistencyError(
                f"Expected exactly one empty cell, found {len(free)} "
                f"among {self.cell_count} cells."
            )
        return next(iter(free))
