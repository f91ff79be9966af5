"""A single picture tile."""

from __future__ import annotations

from typing import Any

from backend.models.grid import GridIndex


class Tile:
    """One piece of the partitioned picture.

    ``correct_position`` and ``image`` are fixed when the tile is created.
    Only the engine changes ``current_position``.
    """

    __slots__ = ("_correct_position", "_image", "current_position")

    def __init__(
        self,
        correct_position: GridIndex,
        image: Any = None,
        current_position: GridIndex | None = None,
    ) -> None:
        self._correct_position = correct_position
        self._image = image
        self.current_position = (
            correct_position if current_position is None else current_position
        )

    @property
    def correct_position(self) -> GridIndex:
        return self._correct_position

    @property
    def image(self) -> Any:
        return self._image

    @property
    def is_correct(self) -> bool:
        return self.current_position == self._correct_position

    @property
    def label(self) -> int:
        """1-based number shown when a tile is drawn without its picture."""
        return self._correct_position + 1

    def __repr__(self) -> str:
        return (
            f"Tile(correct_position={self._correct_position}, "
            f"current_position={self.current_position})"
        )
