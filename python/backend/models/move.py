"""Move requests and their outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from backend.models.grid import GridIndex


class Direction(StrEnum):
    """Direction in which a *tile* slides into the empty cell."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class MoveStatus(StrEnum):
    APPLIED = "applied"
    REJECTED = "rejected"


class RejectReason(StrEnum):
    NOT_ADJACENT = "not_adjacent"
    NO_TILE = "no_tile"


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a single move attempt.

    A rejected move leaves the puzzle untouched; ``to_position`` is then
    ``None``.
    """

    status: MoveStatus
    tile_index: int | None = None
    from_position: GridIndex | None = None
    to_position: GridIndex | None = None
    reason: RejectReason | None = None

    @classmethod
    def applied_move(
        cls, tile_index: int, from_position: GridIndex, to_position: GridIndex
    ) -> MoveResult:
        return cls(
            status=MoveStatus.APPLIED,
            tile_index=tile_index,
            from_position=from_position,
            to_position=to_position,
        )

    @classmethod
    def rejected(
        cls,
        reason: RejectReason,
        tile_index: int | None = None,
        from_position: GridIndex | None = None,
    ) -> MoveResult:
        return cls(
            status=MoveStatus.REJECTED,
            tile_index=tile_index,
            from_position=from_position,
            reason=reason,
        )

    @property
    def applied(self) -> bool:
        return self.status is MoveStatus.APPLIED
